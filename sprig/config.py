"""Compiler configuration loading (sprig.json)."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from .exceptions import ConfigError

CONFIG_FILENAME = "sprig.json"


@dataclass
class CompilerConfig:
    """Settings shared by every phase of one compilation run."""

    root: Path
    src_dir: Path
    out_dir: Path
    import_alias: str = "@"
    directives_dir: str = "directives"
    pipes_dir: str = "pipes"
    strict: bool = False
    verbose: bool = False

    @classmethod
    def default(cls, root: Optional[Path] = None) -> "CompilerConfig":
        root = Path(root or ".").resolve()
        return cls(root=root, src_dir=root / "src", out_dir=root / "dist")

    def alias_path(self, *parts: str) -> str:
        """Build an aliased import specifier such as ``@/directives/x.ts``."""
        return "/".join([self.import_alias, *parts])


def load_config(config_path: Path) -> CompilerConfig:
    """Load configuration from disk, falling back to defaults when the file is absent."""
    config_path = Path(config_path)
    config_file = config_path / CONFIG_FILENAME if config_path.is_dir() else config_path
    root = config_file.parent.resolve()

    if not config_file.exists():
        return CompilerConfig.default(root)

    try:
        data = json.loads(config_file.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Failed to parse {config_file.name}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"{config_file.name} must contain an object at the root")

    config = CompilerConfig.default(root)
    src_dir = _as_str(data.get("srcDir"), "srcDir")
    out_dir = _as_str(data.get("outDir"), "outDir")
    if src_dir:
        config.src_dir = root / src_dir
    if out_dir:
        config.out_dir = root / out_dir

    config.import_alias = _as_str(data.get("importAlias"), "importAlias") or config.import_alias
    config.directives_dir = _as_str(data.get("directivesDir"), "directivesDir") or config.directives_dir
    config.pipes_dir = _as_str(data.get("pipesDir"), "pipesDir") or config.pipes_dir

    strict = _as_bool(data.get("strict"), "strict")
    if strict is not None:
        config.strict = strict
    verbose = _as_bool(data.get("verbose"), "verbose")
    if verbose is not None:
        config.verbose = verbose

    return config


def _as_str(value: Any, key: str) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigError(f"'{key}' must be a string")
    value = value.strip()
    return value or None


def _as_bool(value: Any, key: str) -> Optional[bool]:
    if value is None:
        return None
    if not isinstance(value, bool):
        raise ConfigError(f"'{key}' must be true or false")
    return value


__all__ = ["CONFIG_FILENAME", "CompilerConfig", "load_config"]
