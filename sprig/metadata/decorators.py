"""Class-level decorator metadata: @Pipe, @Directive, @Component, @Route, @Layout, @Service.

Every parser returns ``None`` when its decorator (or a field it cannot do
without) is absent. That is a "not applicable" answer, not a failure; callers
log it if they care.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .source import SourceFile

DEFAULT_TEMPLATE = "./mod.html"


@dataclass
class PipeMetadata:
    name: str
    class_name: str
    pure: bool = True


@dataclass
class DirectiveMetadata:
    selector: str
    class_name: str

    @property
    def bare_selector(self) -> str:
        return get_directive_name(self.selector)


@dataclass
class ComponentMetadata:
    class_name: str
    template: str = DEFAULT_TEMPLATE
    island: bool = False
    island_explicit: bool = False
    styles: Optional[str] = None


@dataclass
class RouteMetadata:
    class_name: str
    template: str = DEFAULT_TEMPLATE
    path: Optional[str] = None
    layout: Optional[str] = None


@dataclass
class LayoutMetadata:
    class_name: str
    template: str = DEFAULT_TEMPLATE


@dataclass
class ServiceMetadata:
    class_name: str
    scope: str = "singleton"
    on_startup: List[str] = field(default_factory=list)


def _source(source) -> SourceFile:
    return source if isinstance(source, SourceFile) else SourceFile(source)


def _decorated(source, decorator_name, fallback_name):
    source = _source(source)
    declaration = source.find_class(decorator_name)
    if declaration is None:
        return None, None
    class_name = declaration.name or source.exported_class_name() or fallback_name
    return declaration.decorator(decorator_name), class_name


def _string(options, *keys):
    for key in keys:
        value = options.get(key)
        if isinstance(value, str) and value:
            return value
    return None


def get_directive_name(selector: str) -> str:
    return selector[1:] if selector.startswith("*") else selector


def parse_pipe(source) -> Optional[PipeMetadata]:
    decorator, class_name = _decorated(source, "Pipe", "UnknownPipe")
    if decorator is None:
        return None
    name = _string(decorator.options, "name")
    if name is None:
        return None
    pure = decorator.options.get("pure")
    return PipeMetadata(name=name, class_name=class_name, pure=pure if isinstance(pure, bool) else True)


def parse_directive(source) -> Optional[DirectiveMetadata]:
    decorator, class_name = _decorated(source, "Directive", "UnknownDirective")
    if decorator is None:
        return None
    selector = _string(decorator.options, "selector")
    if selector is None:
        return None
    return DirectiveMetadata(selector=selector, class_name=class_name)


def parse_component(source) -> Optional[ComponentMetadata]:
    decorator, class_name = _decorated(source, "Component", "UnknownComponent")
    if decorator is None:
        return None
    options = decorator.options
    island = options.get("island")
    return ComponentMetadata(
        class_name=class_name,
        template=_string(options, "template") or DEFAULT_TEMPLATE,
        island=island if isinstance(island, bool) else False,
        island_explicit=isinstance(island, bool),
        styles=_string(options, "styles", "styling"),
    )


def parse_route(source) -> Optional[RouteMetadata]:
    decorator, class_name = _decorated(source, "Route", "UnknownRoute")
    if decorator is None:
        return None
    options = decorator.options
    layout = options.get("layout")
    return RouteMetadata(
        class_name=class_name,
        template=_string(options, "template") or DEFAULT_TEMPLATE,
        path=_string(options, "path"),
        layout=str(layout) if layout else None,
    )


def parse_layout(source) -> Optional[LayoutMetadata]:
    decorator, class_name = _decorated(source, "Layout", "UnknownLayout")
    if decorator is None:
        return None
    return LayoutMetadata(
        class_name=class_name,
        template=_string(decorator.options, "template") or DEFAULT_TEMPLATE,
    )


def parse_service(source) -> Optional[ServiceMetadata]:
    decorator, class_name = _decorated(source, "Service", "UnknownService")
    if decorator is None:
        return None
    options = decorator.options
    startup = options.get("onStartup")
    return ServiceMetadata(
        class_name=class_name,
        scope=_string(options, "scope") or "singleton",
        on_startup=[item for item in startup if isinstance(item, str)] if isinstance(startup, list) else [],
    )
