"""Phased compilation driver.

Discovery, registry construction, template transformation and output
generation run strictly in that order. Each compile() builds fresh registries
and freezes them before the first template is transformed, so every unit sees
the same read-only lookups.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Tuple

from .compiler import parse_template
from .config import CompilerConfig
from .exceptions import SprigError, TemplateSyntaxError
from .generators import (
    GeneratedFile,
    compile_component_style,
    generate_component,
    generate_directive,
    generate_directives_index,
    generate_layout,
    generate_pipe,
    generate_pipe_helpers,
    generate_pipes_index,
    generate_route,
    generate_service_container,
    style_import_path,
)
from .logging import configure_logging, get_logger
from .project import SprigProject, load_source_file
from .registry import DirectiveRegistry, PipeRegistry

logger = get_logger("build")

BOOTSTRAP_TEMPLATE = "bootstrap.html"
SKIPPED_DIRS = {"node_modules", ".git"}


@dataclass
class CompilationResult:
    files: List[GeneratedFile] = field(default_factory=list)
    errors: List[Tuple[str, SprigError]] = field(default_factory=list)
    warnings: List[Tuple[str, object]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def get(self, output_path):
        for generated in self.files:
            if generated.output_path == output_path:
                return generated
        return None

    def write(self, out_dir) -> List[Path]:
        """Write every generated file under ``out_dir``; returns the written paths."""
        out_dir = Path(out_dir)
        written = []
        for generated in self.files:
            target = out_dir / generated.output_path
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(generated.content, encoding="utf-8")
            written.append(target)
        return written


def discover(src_dir) -> SprigProject:
    """Load every decorated ``.ts`` module under ``src_dir``."""
    src_dir = Path(src_dir)
    project = SprigProject()
    for root, dirs, files in os.walk(src_dir):
        dirs[:] = sorted(d for d in dirs if d not in SKIPPED_DIRS and not d.startswith("."))
        for file in sorted(files):
            if not file.endswith(".ts") or file.endswith(".d.ts") or file.endswith("_test.ts"):
                continue
            unit = load_source_file(Path(root) / file, src_dir)
            if unit is not None:
                project.add(unit)
    logger.info(
        "Discovered %d components, %d routes, %d directives, %d pipes, %d services",
        len(project.components), len(project.routes), len(project.directives),
        len(project.pipes), len(project.services),
    )
    return project


class SprigCompiler:
    def __init__(self, config: CompilerConfig):
        self.config = config
        self.directive_registry = DirectiveRegistry()
        self.pipe_registry = PipeRegistry()

    def build(self) -> CompilationResult:
        """Discover, compile and write the configured source tree."""
        result = self.compile(discover(self.config.src_dir))
        result.write(self.config.out_dir)
        logger.info("Wrote %d files to %s", len(result.files), self.config.out_dir)
        return result

    def compile(self, project: SprigProject) -> CompilationResult:
        result = CompilationResult()
        self.directive_registry = DirectiveRegistry()
        self.pipe_registry = PipeRegistry()
        self.build_registries(project)
        self.generate_wrappers(project, result)

        known_components = list(project.components)
        for component in project.components:
            self.run_unit(result, component.relative_path, component.template,
                          lambda unit=component: self.component_files(unit, known_components))
        for route in project.routes:
            self.run_unit(result, route.relative_path, route.template,
                          lambda unit=route: [self.route_file(unit, known_components)])
        self.generate_layout(project, known_components, result)

        for path, error in result.errors:
            logger.error("%s: %s", path, error)
        return result

    def build_registries(self, project: SprigProject) -> None:
        config = self.config
        for directive in project.directives:
            self.directive_registry.register(directive, config.directives_dir, config.import_alias)
        for pipe in project.pipes:
            self.pipe_registry.register(pipe, config.pipes_dir, config.import_alias)
        self.directive_registry.freeze()
        self.pipe_registry.freeze()

    def generate_wrappers(self, project: SprigProject, result: CompilationResult) -> None:
        config = self.config
        for directive in project.directives:
            result.files.append(generate_directive(directive, config.directives_dir, config.import_alias))
        result.files.append(generate_directives_index(project.directives, config.directives_dir))
        for pipe in project.pipes:
            result.files.append(generate_pipe(pipe, config.pipes_dir, config.import_alias))
        result.files.append(generate_pipes_index(project.pipes, config.pipes_dir))
        result.files.append(generate_pipe_helpers(config.pipes_dir))
        if project.services:
            result.files.append(generate_service_container(project.services, config.import_alias))

    def run_unit(self, result, path, template, produce) -> None:
        errors = parse_template(template).errors
        if errors:
            if self.config.strict:
                raise TemplateSyntaxError(path, errors)
            for error in errors:
                logger.warning("%s: %s", path, error)
        try:
            files = produce()
        except SprigError as exc:
            result.errors.append((path, exc))
            return
        for generated in files:
            result.files.append(generated)
            result.warnings.extend((path, warning) for warning in generated.warnings)

    def helpers_import(self) -> str:
        return self.config.alias_path(self.config.pipes_dir, "helpers.ts")

    def component_files(self, component, known_components) -> List[GeneratedFile]:
        files = []
        style = compile_component_style(component)
        if style is not None:
            files.append(style)
        files.insert(0, generate_component(
            component,
            known_components,
            self.directive_registry,
            self.pipe_registry,
            import_alias=self.config.import_alias,
            style_path=style_import_path(style) if style is not None else None,
            helpers_import=self.helpers_import(),
        ))
        return files

    def route_file(self, route, known_components) -> GeneratedFile:
        return generate_route(
            route,
            known_components,
            self.directive_registry,
            self.pipe_registry,
            import_alias=self.config.import_alias,
            helpers_import=self.helpers_import(),
        )

    def generate_layout(self, project, known_components, result) -> None:
        if project.layouts:
            layout = project.layouts[0]
            for extra in project.layouts[1:]:
                logger.warning("Ignoring additional @Layout %s; %s is the root layout", extra.class_name, layout.class_name)
            name, path, template = layout.class_name, layout.relative_path, layout.template
        else:
            bootstrap = Path(self.config.src_dir) / BOOTSTRAP_TEMPLATE
            if not bootstrap.exists():
                return
            try:
                template = bootstrap.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                logger.warning("Could not read %s: %s", bootstrap, exc)
                return
            name, path = "RootLayout", BOOTSTRAP_TEMPLATE

        self.run_unit(result, path, template, lambda: [generate_layout(
            template,
            name=name,
            known_components=known_components,
            directive_registry=self.directive_registry,
            pipe_registry=self.pipe_registry,
            import_alias=self.config.import_alias,
            helpers_import=self.helpers_import(),
        )])


def compile_project(config: CompilerConfig) -> CompilationResult:
    """Configure logging from ``config`` and build the project."""
    configure_logging(verbose=config.verbose)
    return SprigCompiler(config).build()
