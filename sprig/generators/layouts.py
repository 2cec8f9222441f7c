"""Root layout generation."""

from ..transpiler import as_return_expression, transform
from .base import GeneratedFile, transform_import_lines

LAYOUT_PATH = "routes/_layout.tsx"


def generate_layout(template, name="RootLayout", known_components=(), directive_registry=None,
                    pipe_registry=None, import_alias="@", helpers_import=None):
    """``define.layout`` module; ``<outlet />`` or ``<slot />`` renders the page ``Component``."""
    result = transform(template, known_components, directive_registry, pipe_registry, import_alias,
                       slot_context="layout")
    import_lines = [f'import {{ define }} from "{import_alias}/utils.ts";']
    import_lines.extend(transform_import_lines(result, helpers_import or f"{import_alias}/pipes/helpers.ts"))
    content = "\n".join(import_lines) + f"""

export default define.layout(function {name}({{ Component }}) {{
  return (
    {as_return_expression(result.jsx)}
  );
}});
"""
    return GeneratedFile(LAYOUT_PATH, content, result.warnings)
