"""Compilation units: decorated classes read from one source file each."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from .compiler import has_interactive_bindings, parse_template
from .logging import get_logger
from .metadata import (
    ComponentMetadata,
    DirectiveMetadata,
    InputMetadata,
    LayoutMetadata,
    ParsedClass,
    PipeMetadata,
    RouteMetadata,
    ServiceMetadata,
    SourceFile,
    parse_class,
    parse_component,
    parse_directive,
    parse_inputs,
    parse_layout,
    parse_pipe,
    parse_route,
    parse_service,
)

logger = get_logger("project")

DYNAMIC_SEGMENT = re.compile(r"^\[([^\]]+)\]\.ts$")

COMPONENT = "component"
ROUTE = "route"
LAYOUT = "layout"


@dataclass
class SprigComponent:
    """A @Component, @Route or @Layout class together with its template."""

    path: Path
    relative_path: str
    metadata: Union[ComponentMetadata, RouteMetadata, LayoutMetadata]
    source: str
    template: str
    kind: str = COMPONENT
    inputs: List[InputMetadata] = field(default_factory=list)
    original_filename: str = "mod.ts"
    _parsed: Optional[ParsedClass] = field(default=None, init=False, repr=False)
    _parsed_loaded: bool = field(default=False, init=False, repr=False)

    @classmethod
    def from_source(cls, source, template, relative_path, kind=COMPONENT, path=None, original_filename="mod.ts"):
        parsers = {COMPONENT: parse_component, ROUTE: parse_route, LAYOUT: parse_layout}
        source_file = SourceFile(source)
        metadata = parsers[kind](source_file)
        if metadata is None:
            raise ValueError(f"No @{kind.capitalize()} decorator found in {relative_path}")
        return cls(
            path=Path(path) if path is not None else Path(relative_path),
            relative_path=relative_path,
            metadata=metadata,
            source=source,
            template=template,
            kind=kind,
            inputs=parse_inputs(source_file, kind.capitalize()),
            original_filename=original_filename,
        )

    @property
    def class_name(self) -> str:
        return self.metadata.class_name

    @property
    def parsed_class(self) -> Optional[ParsedClass]:
        if not self._parsed_loaded:
            self._parsed = parse_class(self.source, self.kind.capitalize())
            self._parsed_loaded = True
        return self._parsed

    @property
    def is_island(self) -> bool:
        """Explicit ``island`` flag, otherwise inferred from interactivity or injected services."""
        if self.kind != COMPONENT:
            return False
        if self.metadata.island_explicit:
            return self.metadata.island
        if has_interactive_bindings(parse_template(self.template).document):
            return True
        parsed = self.parsed_class
        return bool(parsed and parsed.dependencies)

    @property
    def dynamic_segment(self) -> Optional[str]:
        match = DYNAMIC_SEGMENT.match(self.original_filename)
        return match.group(1) if match else None


@dataclass
class _SourceUnit:
    path: Path
    relative_path: str
    metadata: object
    source: str = ""
    relative_source: str = ""

    def __post_init__(self):
        if not self.relative_source:
            self.relative_source = Path(self.path).name


@dataclass
class SprigDirective(_SourceUnit):
    metadata: DirectiveMetadata


@dataclass
class SprigPipe(_SourceUnit):
    metadata: PipeMetadata


@dataclass
class SprigService(_SourceUnit):
    metadata: ServiceMetadata


@dataclass
class SprigProject:
    """Everything discovered for one compilation run."""

    components: List[SprigComponent] = field(default_factory=list)
    routes: List[SprigComponent] = field(default_factory=list)
    layouts: List[SprigComponent] = field(default_factory=list)
    directives: List[SprigDirective] = field(default_factory=list)
    pipes: List[SprigPipe] = field(default_factory=list)
    services: List[SprigService] = field(default_factory=list)

    def add(self, unit) -> None:
        if isinstance(unit, SprigDirective):
            self.directives.append(unit)
        elif isinstance(unit, SprigPipe):
            self.pipes.append(unit)
        elif isinstance(unit, SprigService):
            self.services.append(unit)
        elif unit.kind == ROUTE:
            self.routes.append(unit)
        elif unit.kind == LAYOUT:
            self.layouts.append(unit)
        else:
            self.components.append(unit)


def _relative_source(path: Path, src_dir: Path) -> str:
    try:
        return path.relative_to(src_dir).as_posix()
    except ValueError:
        return path.name


def _relative_path(path: Path, src_dir: Path) -> str:
    relative = Path(_relative_source(path, src_dir))
    if path.name == "mod.ts" or DYNAMIC_SEGMENT.match(path.name):
        relative = relative.parent
    else:
        relative = relative.with_suffix("")
    return relative.as_posix()


def _read_template(path: Path, template: str) -> str:
    template_path = (path.parent / template).resolve()
    try:
        return template_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        logger.warning("Could not read template %s for %s", template_path, path)
        return ""


def load_source_file(path, src_dir):
    """Read one decorated source file and return the matching compilation unit, or None."""
    path = Path(path)
    src_dir = Path(src_dir)
    try:
        source = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Could not read %s; skipped: %s", path, exc)
        return None
    source_file = SourceFile(source)
    relative = _relative_path(path, src_dir)
    relative_source = _relative_source(path, src_dir)

    if source_file.find_class("Directive") is not None:
        metadata = parse_directive(source_file)
        if metadata is None:
            logger.warning("@Directive in %s has no selector; skipped", path)
            return None
        if not metadata.selector.startswith("*"):
            logger.warning("Directive selector '%s' in %s should start with '*'", metadata.selector, path)
        return SprigDirective(path=path, relative_path=relative, metadata=metadata, source=source,
                            relative_source=relative_source)

    if source_file.find_class("Pipe") is not None:
        metadata = parse_pipe(source_file)
        if metadata is None:
            logger.warning("@Pipe in %s has no name; skipped", path)
            return None
        return SprigPipe(path=path, relative_path=relative, metadata=metadata, source=source,
                            relative_source=relative_source)

    if source_file.find_class("Service") is not None:
        metadata = parse_service(source_file)
        return SprigService(path=path, relative_path=relative, metadata=metadata, source=source,
                            relative_source=relative_source)

    for kind, parser in ((ROUTE, parse_route), (LAYOUT, parse_layout), (COMPONENT, parse_component)):
        metadata = parser(source_file)
        if metadata is None:
            continue
        return SprigComponent(
            path=path,
            relative_path=relative,
            metadata=metadata,
            source=source,
            template=_read_template(path, metadata.template),
            kind=kind,
            inputs=parse_inputs(source_file, kind.capitalize()),
            original_filename=path.name,
        )

    logger.debug("No sprig decorator in %s", path)
    return None
