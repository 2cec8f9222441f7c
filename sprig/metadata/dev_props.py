"""Default property values for development previews of a component."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..logging import get_logger
from .inputs import InputMetadata

logger = get_logger("dev_props")

DEV_PROPS_FILENAME = "mod.json"

_INTEGER = re.compile(r"^-?\d+$")
_FLOAT = re.compile(r"^-?\d+\.\d+$")


@dataclass
class DevProps:
    props: Dict[str, Any] = field(default_factory=dict)
    scenarios: Optional[Dict[str, Dict[str, Any]]] = None


def parse_dev_props(path: Path) -> Optional[DevProps]:
    """Read a JSON sidecar. Missing or unreadable files yield ``None``."""
    path = Path(path)
    if not path.exists():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        logger.warning("Could not parse dev props file %s: %s", path, exc)
        return None
    return dev_props_from_data(data, str(path))


def dev_props_from_data(data: Any, origin: str = "<dev props>") -> Optional[DevProps]:
    if not isinstance(data, dict):
        logger.warning("Dev props in %s must be a JSON object", origin)
        return None

    scenarios = data.get("scenarios")
    if scenarios is not None and not isinstance(scenarios, dict):
        logger.warning("Ignoring non-object 'scenarios' in %s", origin)
        scenarios = None

    props = data.get("props")
    if not isinstance(props, dict):
        logger.warning("Missing or invalid 'props' in %s; using an empty object", origin)
        props = {}

    return DevProps(props=props, scenarios=scenarios)


def parse_default_value(raw: str) -> Any:
    text = raw.strip()
    if text == "true":
        return True
    if text == "false":
        return False
    if text == "null":
        return None
    if _INTEGER.match(text):
        return int(text)
    if _FLOAT.match(text):
        return float(text)
    if len(text) >= 2 and text[0] == text[-1] and text[0] in "\"'`":
        return text[1:-1]
    if text.startswith(("[", "{")):
        try:
            return json.loads(text)
        except json.JSONDecodeError:
            return text
    return text


def placeholder_for(item: InputMetadata) -> Any:
    kind = (item.type or "").strip().lower()
    if kind == "string":
        return f"Sample {item.name}"
    if kind == "number":
        return 42
    if kind == "boolean":
        return True
    if kind == "string[]":
        return ["Item 1", "Item 2", "Item 3"]
    if kind == "number[]":
        return [1, 2, 3]
    return f"[{item.name}]"


def generate_default_props(inputs: List[InputMetadata]) -> Dict[str, Any]:
    props: Dict[str, Any] = {}
    for item in inputs:
        if item.default_value is not None:
            props[item.name] = parse_default_value(item.default_value)
        else:
            props[item.name] = placeholder_for(item)
    return props


def merge_dev_props(inputs: List[InputMetadata], supplied: Optional[DevProps] = None) -> DevProps:
    """Decorator-derived defaults overlaid with file-supplied values; file values win."""
    props = generate_default_props(inputs)
    if supplied is None:
        return DevProps(props=props)
    props.update(supplied.props)
    return DevProps(props=props, scenarios=supplied.scenarios)


def resolve_dev_props(inputs: List[InputMetadata], component_dir: Path) -> DevProps:
    return merge_dev_props(inputs, parse_dev_props(Path(component_dir) / DEV_PROPS_FILENAME))
