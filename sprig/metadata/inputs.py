"""@Input property metadata."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional

from ..naming import safe_var_name
from .classes import ParsedClass, parse_class

_NULLABLE_UNION = re.compile(r"\|\s*(undefined|null)\b")


@dataclass
class InputMetadata:
    name: str
    property_name: str
    type: Optional[str] = None
    default_value: Optional[str] = None
    required: bool = True

    @property
    def var_name(self) -> str:
        return safe_var_name(self.property_name)


def parse_inputs(source, decorator_name: Optional[str] = None) -> List[InputMetadata]:
    """Every ``@Input(...)`` field of the module's component class, in declaration order."""
    parsed = source if isinstance(source, ParsedClass) else parse_class(source, decorator_name)
    if parsed is None:
        return []

    inputs = []
    for prop in parsed.properties:
        decorator = prop.decorator("Input")
        if decorator is None:
            continue

        type_text = prop.type
        optional = prop.optional
        if type_text and type_text.endswith("?"):
            type_text = type_text[:-1].strip()
            optional = True
        if type_text and _NULLABLE_UNION.search(type_text):
            optional = True

        default_value = prop.initial_value
        has_default = default_value is not None

        explicit = decorator.options.get("required")
        if isinstance(explicit, bool):
            required = explicit
        else:
            required = prop.definite or (not has_default and not optional)

        alias = decorator.options.get("alias")
        inputs.append(
            InputMetadata(
                name=alias if isinstance(alias, str) and alias else prop.name,
                property_name=prop.name,
                type=type_text,
                default_value=default_value,
                required=required,
            )
        )
    return inputs


def generate_props_interface(component_name: str, inputs: List[InputMetadata], extra_lines=()) -> str:
    """``interface XProps { ... }`` for a component's inputs."""
    lines = [f"interface {component_name}Props {{"]
    for item in inputs:
        optional = "" if item.required else "?"
        lines.append(f"  {item.name}{optional}: {item.type or 'unknown'};")
    lines.extend(extra_lines)
    lines.append("}")
    return "\n".join(lines)


def generate_props_destructuring(inputs: List[InputMetadata], source_name: str = "props") -> str:
    lines = []
    for item in inputs:
        if item.default_value:
            default = item.default_value
            if default.startswith("(") and "=>" in default:
                default = f"({default})"
            lines.append(f"  const {item.var_name} = {source_name}.{item.name} ?? {default};")
        else:
            lines.append(f"  const {item.var_name} = {source_name}.{item.name};")
    return "\n".join(lines)


__all__ = [
    "InputMetadata",
    "generate_props_destructuring",
    "generate_props_interface",
    "parse_inputs",
]
