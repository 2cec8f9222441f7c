"""Shared pieces of the code generators."""

import re
from dataclasses import dataclass, field
from typing import List

from ..metadata.source import indent
from ..naming import lower_first, safe_var_name
from ..registry import generate_directive_imports, generate_pipe_imports
from ..transpiler.attributes import strip_bind_this


@dataclass
class GeneratedFile:
    """One output module, relative to the output directory."""

    output_path: str
    content: str
    warnings: List = field(default_factory=list)


def collapse_slashes(path):
    return re.sub(r"/+", "/", path)


def source_import_path(relative_source, import_alias="@"):
    """Import specifier for an original source file, e.g. ``@/src/directives/highlight.ts``."""
    return f"{import_alias}/src/{relative_source}".replace("\\", "/")


def service_var_name(dependency_type):
    return lower_first(dependency_type)


def transform_import_lines(result, helpers_import=None):
    """Import lines a transformed template needs: pipe helpers, pipes, directives, child components."""
    lines = []
    if result.pipe_helpers and helpers_import:
        lines.append(f'import {{ {", ".join(result.pipe_helpers)} }} from "{helpers_import}";')
    lines.extend(generate_pipe_imports(result.used_pipes))
    lines.extend(generate_directive_imports(result.used_directives))
    lines.extend(tag.statement for tag in result.imports)
    return lines


def plain_resolver(inputs=(), dependencies=()):
    """``this.x`` rewriting for server-rendered output: members become plain locals."""
    names = {item.property_name: safe_var_name(item.property_name) for item in inputs}
    for dependency in dependencies:
        names[dependency.name] = service_var_name(dependency.type)

    def resolve(member):
        return names.get(member, member)

    return resolve


def arrow_expression(expression):
    """An object literal after ``=>`` must be parenthesised."""
    return f"({expression})" if expression.startswith("{") else expression


def block(body_text, prefix="    "):
    return indent(body_text, prefix)


def plain_getter(getter, resolve):
    """``const name = expr;`` or an immediately-invoked block for multi-statement getters."""
    body = getter.body
    if body.is_single_expression:
        return f"  const {getter.name} = {strip_bind_this(body.expression(resolve))};"
    return f"  const {getter.name} = (() => {{\n{block(strip_bind_this(body.text(resolve)))}\n  }})();"


def plain_method(method, resolve):
    body = method.body
    params = ", ".join(method.params)
    prefix = "async " if method.is_async else ""
    if body.is_single_expression and not method.is_async:
        expression = arrow_expression(strip_bind_this(body.expression(resolve)))
        return f"  const {method.name} = ({params}) => {expression};"
    if body.is_empty:
        return f"  const {method.name} = {prefix}({params}) => {{}};"
    return f"  const {method.name} = {prefix}({params}) => {{\n{block(strip_bind_this(body.text(resolve)))}\n  }};"
