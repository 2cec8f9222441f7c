from .source import Decorator, Expression, SourceFile
from .classes import (
    ClassGetter,
    ClassMethod,
    ClassProperty,
    Dependency,
    FunctionBody,
    ParsedClass,
    parse_class,
)
from .inputs import (
    InputMetadata,
    generate_props_destructuring,
    generate_props_interface,
    parse_inputs,
)
from .decorators import (
    ComponentMetadata,
    DirectiveMetadata,
    LayoutMetadata,
    PipeMetadata,
    RouteMetadata,
    ServiceMetadata,
    get_directive_name,
    parse_component,
    parse_directive,
    parse_layout,
    parse_pipe,
    parse_route,
    parse_service,
)
from .dev_props import DevProps, generate_default_props, merge_dev_props, parse_dev_props, resolve_dev_props

__all__ = [
    "Decorator", "Expression", "SourceFile",
    "ClassGetter", "ClassMethod", "ClassProperty", "Dependency", "FunctionBody", "ParsedClass", "parse_class",
    "InputMetadata", "generate_props_destructuring", "generate_props_interface", "parse_inputs",
    "ComponentMetadata", "DirectiveMetadata", "LayoutMetadata", "PipeMetadata", "RouteMetadata",
    "ServiceMetadata", "get_directive_name", "parse_component", "parse_directive", "parse_layout",
    "parse_pipe", "parse_route", "parse_service",
    "DevProps", "generate_default_props", "merge_dev_props", "parse_dev_props", "resolve_dev_props",
]
