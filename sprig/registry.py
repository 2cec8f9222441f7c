"""Per-compilation registries of custom directives and pipes.

A registry is built once, before any template is transformed, and is only
read afterwards. ``freeze()`` makes that ordering explicit.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

from .compiler.nodes import ElementNode, walk
from .exceptions import SprigError
from .metadata.decorators import get_directive_name


@dataclass(frozen=True)
class RegisteredDirective:
    selector: str
    class_name: str
    transform_fn: str
    import_path: str
    source_path: Optional[str] = None


@dataclass(frozen=True)
class RegisteredPipe:
    name: str
    class_name: str
    function_name: str
    import_path: str
    source_path: Optional[str] = None
    pure: bool = True


class RegistryFrozenError(SprigError):
    pass


class _Registry:
    kind = "entry"

    def __init__(self):
        self._entries = {}
        self._frozen = False

    def freeze(self):
        self._frozen = True
        return self

    @property
    def frozen(self):
        return self._frozen

    def _store(self, key, entry):
        if self._frozen:
            raise RegistryFrozenError(f"Cannot register {self.kind} '{key}' after transformation started")
        self._entries[key] = entry
        return entry

    def get(self, key):
        return self._entries.get(key)

    def has(self, key):
        return key in self._entries

    def get_all(self):
        return list(self._entries.values())

    def __contains__(self, key):
        return self.has(key)

    def __len__(self):
        return len(self._entries)

    def __iter__(self):
        return iter(self.get_all())


class DirectiveRegistry(_Registry):
    kind = "directive"

    def register(self, directive, output_dir: str = "directives", import_alias: str = "@") -> RegisteredDirective:
        metadata = getattr(directive, "metadata", directive)
        selector = get_directive_name(metadata.selector)
        source_path = getattr(directive, "path", None)
        entry = RegisteredDirective(
            selector=selector,
            class_name=metadata.class_name,
            transform_fn=f"apply{metadata.class_name}",
            import_path=f"{import_alias}/{output_dir}/{selector}.ts",
            source_path=str(source_path) if source_path is not None else None,
        )
        return self._store(selector, entry)


class PipeRegistry(_Registry):
    kind = "pipe"

    def register(self, pipe, output_dir: str = "pipes", import_alias: str = "@") -> RegisteredPipe:
        metadata = getattr(pipe, "metadata", pipe)
        source_path = getattr(pipe, "path", None)
        entry = RegisteredPipe(
            name=metadata.name,
            class_name=metadata.class_name,
            function_name=metadata.name,
            import_path=f"{import_alias}/{output_dir}/{metadata.name}.ts",
            source_path=str(source_path) if source_path is not None else None,
            pure=metadata.pure,
        )
        return self._store(metadata.name, entry)


def collect_directive_usages(document) -> List[str]:
    """Custom (non built-in) directive names used anywhere in a parsed template, in order."""
    names: Dict[str, None] = {}
    for node in walk(document):
        if isinstance(node, ElementNode):
            for directive in node.directives:
                if not directive.is_built_in:
                    names.setdefault(directive.name, None)
    return list(names)


def generate_directive_imports(directives) -> List[str]:
    return [f'import {{ {entry.transform_fn} }} from "{entry.import_path}";' for entry in directives]


def generate_pipe_imports(pipes) -> List[str]:
    return [f'import {{ {entry.function_name} }} from "{entry.import_path}";' for entry in pipes]


def transform_custom_directive(name, expression, registry):
    """Spread expression for a registered directive, or None when ``name`` is unknown."""
    entry = registry.get(name) if registry is not None else None
    if entry is None:
        return None
    value = expression.strip() if expression and expression.strip() else "undefined"
    return f"{{...{entry.transform_fn}({{}}, {value})}}"
