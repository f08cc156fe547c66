"""Setuptools configuration for node-it."""

from pathlib import Path

from setuptools import find_packages, setup


ROOT = Path(__file__).resolve().parent


def read_requirements(relative_path: str):
    """Read dependency lines from a requirements file."""

    requirements_path = ROOT / relative_path
    if not requirements_path.exists():
        return []

    requirements = []
    for line in requirements_path.read_text(encoding="utf-8").splitlines():
        item = line.strip()
        if not item or item.startswith("#"):
            continue
        requirements.append(item)
    return requirements


setup(
    name="node-it",
    version="0.1.10",
    description="Personal site starter kit with a Flask dev server and static build",
    long_description=(ROOT / "README.md").read_text(encoding="utf-8"),
    long_description_content_type="text/markdown",
    packages=find_packages(include=["node_it", "node_it.*"]),
    include_package_data=True,
    package_data={
        "node_it": [
            "templates/*.html",
            "templates/partials/*.html",
            "public/css/*.css",
            "public/icons/*.svg",
            "public/icons/*.png",
        ]
    },
    install_requires=read_requirements("requirements.txt"),
    extras_require={
        "test": read_requirements("requirements-test.txt"),
        "docs": ["sphinx"],
    },
    entry_points={
        "console_scripts": [
            "node-it-build=node_it.static_build:main",
            "node-it-icons=node_it.icons:main",
        ]
    },
    python_requires=">=3.10",
)
