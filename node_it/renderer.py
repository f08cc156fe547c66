"""
Jinja2 rendering helpers for the site templates.

Templates are rendered with :class:`jinja2.StrictUndefined`, so a page that
references a value missing from its data fails loudly instead of producing
an empty fragment. Every engine failure is re-raised as
:class:`node_it.errors.TemplateError` naming the template.
"""

import functools
import os
from pathlib import Path

import jinja2

from .errors import TemplateError

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
TEMPLATE_DIR = os.path.abspath(os.path.join(BASE_DIR, "templates"))
TEMPLATE_PATH_KEY = "template_path"
RENDER_ERRORS = (
    jinja2.TemplateError,
    TypeError,
    ValueError,
    AttributeError,
    LookupError,
)


@functools.lru_cache(maxsize=None)
def get_environment(search_path=(TEMPLATE_DIR,)) -> jinja2.Environment:
    """
    Return a cached Jinja2 environment for a template search path.

    :param search_path: Tuple of directories used to resolve includes.
    :returns: Environment with strict undefined handling and HTML autoescape.
    """

    return jinja2.Environment(
        loader=jinja2.FileSystemLoader(list(search_path)),
        undefined=jinja2.StrictUndefined,
        autoescape=jinja2.select_autoescape(["html"], default_for_string=True),
        keep_trailing_newline=True,
    )


def _search_path_for(template_path) -> tuple:
    """Directories used to resolve includes for one template file."""

    if not template_path:
        return (TEMPLATE_DIR,)
    template_dir = os.path.dirname(os.path.abspath(template_path))
    if template_dir == TEMPLATE_DIR:
        return (TEMPLATE_DIR,)
    return (template_dir, TEMPLATE_DIR)


def render(template_source: str, data: dict) -> str:
    """
    Render template source with a data record.

    ``data`` may carry ``template_path``, the resolved path of the file the
    source came from; includes are then looked up next to that file before
    the package template directory. The key itself is not exposed to the
    template.

    :param template_source: Template text.
    :param data: Values available to the template.
    :raises TemplateError: On undefined variables, missing includes,
        syntax errors, or errors raised by filters on bad data.
    :returns: Rendered HTML.
    """

    context = dict(data)
    template_path = context.pop(TEMPLATE_PATH_KEY, None)
    template_name = os.path.basename(template_path) if template_path else "<string>"

    env = get_environment(_search_path_for(template_path))
    try:
        template = env.from_string(template_source)
        return template.render(context)
    except RENDER_ERRORS as exc:
        message = getattr(exc, "message", None) or str(exc) or repr(exc)
        raise TemplateError(template_name, message) from exc


def load_template_source(template_name: str, template_dir=TEMPLATE_DIR):
    """
    Read a template file.

    :param template_name: File name relative to ``template_dir``.
    :param template_dir: Directory holding the page templates.
    :raises TemplateError: If the file cannot be read.
    :returns: Tuple of (source text, resolved Path).
    """

    path = Path(template_dir, template_name).resolve()
    try:
        return path.read_text(encoding="utf-8"), path
    except OSError as exc:
        raise TemplateError(template_name, f"cannot read {path}: {exc.strerror}") from exc


def render_template_file(template_name: str, data: dict, template_dir=TEMPLATE_DIR) -> str:
    """Load ``template_name`` from ``template_dir`` and render it with ``data``."""

    source, path = load_template_source(template_name, template_dir)
    return render(source, {**data, TEMPLATE_PATH_KEY: str(path)})
