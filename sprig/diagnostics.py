"""Non-fatal diagnostics collected while transforming templates."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import List

from .logging import get_logger

logger = get_logger("diagnostics")


class WarningCode(enum.Enum):
    # *for
    INVALID_FOR_SYNTAX = "INVALID_FOR_SYNTAX"
    EMPTY_FOR_EXPRESSION = "EMPTY_FOR_EXPRESSION"
    # *if / *else
    ORPHAN_ELSE = "ORPHAN_ELSE"
    EMPTY_IF_CONDITION = "EMPTY_IF_CONDITION"
    UNKNOWN_DIRECTIVE = "UNKNOWN_DIRECTIVE"
    # bindings
    EMPTY_BINDING_EXPRESSION = "EMPTY_BINDING_EXPRESSION"
    INVALID_TWO_WAY_BINDING = "INVALID_TWO_WAY_BINDING"
    DANGEROUS_BINDING = "DANGEROUS_BINDING"
    # pipes
    UNKNOWN_PIPE = "UNKNOWN_PIPE"
    EMPTY_PIPE_NAME = "EMPTY_PIPE_NAME"
    # markup
    UNCLOSED_TAG = "UNCLOSED_TAG"
    MALFORMED_ATTRIBUTE = "MALFORMED_ATTRIBUTE"


DANGEROUS_BINDINGS = {"innerHTML", "outerHTML", "dangerouslySetInnerHTML"}


def is_dangerous_binding(name):
    return name in DANGEROUS_BINDINGS


@dataclass(frozen=True)
class TranspilerWarning:
    code: WarningCode
    message: str
    level: str = "warning"

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"


class WarningCollector:
    """Accumulates warnings for one compilation unit."""

    def __init__(self) -> None:
        self._warnings: List[TranspilerWarning] = []

    def warn(self, code: WarningCode, message: str) -> None:
        self._add(TranspilerWarning(code, message, "warning"))

    def info(self, code: WarningCode, message: str) -> None:
        self._add(TranspilerWarning(code, message, "info"))

    def _add(self, warning: TranspilerWarning) -> None:
        logger.debug("%s", warning)
        self._warnings.append(warning)

    def has_warnings(self) -> bool:
        return bool(self._warnings)

    def get_warnings(self) -> List[TranspilerWarning]:
        return list(self._warnings)

    def codes(self) -> List[WarningCode]:
        return [warning.code for warning in self._warnings]

    def clear(self) -> None:
        self._warnings.clear()
