"""Wrapper modules for ``@Directive`` classes and their index."""

from ..metadata import get_directive_name
from .base import GeneratedFile, source_import_path

EMPTY_INDEX = "// No custom directives\nexport {};\n"


def generate_directive(directive, output_dir="directives", import_alias="@"):
    selector = get_directive_name(directive.metadata.selector)
    class_name = directive.metadata.class_name
    relative_source = directive.relative_source
    content = f'''/**
 * Generated wrapper for {class_name}
 * Source: {relative_source}
 */

import {{ {class_name} }} from "{source_import_path(relative_source, import_alias)}";

const _{selector}Instance = new {class_name}();

export function apply{class_name}(
  props: Record<string, unknown>,
  value: unknown,
): Record<string, unknown> {{
  const result = _{selector}Instance.transform(null, value);
  return {{ ...props, ...result }};
}}
'''
    return GeneratedFile(f"{output_dir}/{selector}.ts", content)


def generate_directives_index(directives, output_dir="directives"):
    """``mod.ts`` re-exporting every wrapper. Written even when there are none."""
    if not directives:
        return GeneratedFile(f"{output_dir}/mod.ts", EMPTY_INDEX)
    lines = []
    for directive in directives:
        selector = get_directive_name(directive.metadata.selector)
        lines.append(f'export {{ apply{directive.metadata.class_name} }} from "./{selector}.ts";')
    return GeneratedFile(f"{output_dir}/mod.ts", "\n".join(lines) + "\n")
