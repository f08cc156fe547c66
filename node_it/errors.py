"""
Exception types raised by the static build and icon pipelines.

All of them derive from :class:`BuildError` so command-line entry points
can report any build failure with a single ``except`` clause.
"""


class BuildError(RuntimeError):
    """Base class for fatal build failures."""


class TemplateError(BuildError):
    """Raised when a page template cannot be loaded or rendered."""

    def __init__(self, template_name, message):
        self.template_name = template_name
        super().__init__(f"Template {template_name!r} failed: {message}")


class AssetCopyError(BuildError):
    """Raised when the shared assets directory cannot be mirrored."""

    def __init__(self, path, message):
        self.path = str(path)
        super().__init__(f"Asset copy failed at {self.path}: {message}")


class IconGenerationError(BuildError):
    """Raised when one icon target cannot be rasterized or written."""

    def __init__(self, size, output_file_name, message):
        self.size = size
        self.output_file_name = output_file_name
        super().__init__(
            f"Icon {output_file_name} ({size}x{size}) failed: {message}"
        )


class PageWriteError(BuildError):
    """Raised when a rendered page cannot be written to the output tree."""

    def __init__(self, template_name, path, message):
        self.template_name = template_name
        self.path = str(path)
        target = f" for {template_name!r}" if template_name else ""
        super().__init__(f"Writing {self.path}{target} failed: {message}")
