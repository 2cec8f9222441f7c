"""Component stylesheets, compiled with libsass."""

from pathlib import Path

import sass

from ..logging import get_logger
from .base import GeneratedFile

logger = get_logger("generators.styles")

SASS_EXTENSIONS = (".scss", ".sass")


def compile_stylesheet(path):
    """CSS text for ``path``; SCSS and indented Sass are compiled, plain CSS passes through.

    Returns None (with a warning) when the file cannot be read or compiled.
    """
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        logger.warning("Could not read styling at %s", path)
        return None

    extension = path.suffix.lower()
    if extension not in SASS_EXTENSIONS:
        return content
    try:
        return sass.compile(
            string=content,
            output_style="compressed",
            indented=extension == ".sass",
            include_paths=[str(path.parent)],
        )
    except sass.CompileError as exc:
        logger.warning("SCSS compilation failed for %s: %s", path, exc)
        return None


def style_output_path(component):
    folder = "islands" if component.is_island else "components"
    return f"static/css/{folder}/{component.class_name}.css"


def compile_component_style(component):
    """GeneratedFile with the component's compiled CSS, or None when it has no usable stylesheet."""
    styles = component.metadata.styles
    if not styles:
        return None
    css = compile_stylesheet(Path(component.path).parent / styles)
    if css is None:
        return None
    return GeneratedFile(style_output_path(component), css)


def style_import_path(generated):
    return "/" + generated.output_path
