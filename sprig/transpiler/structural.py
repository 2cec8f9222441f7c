"""Built-in structural directives: ``*if`` / ``*else`` and ``*for``."""

import re
from dataclasses import dataclass
from typing import Optional

from ..diagnostics import WarningCode
from .pipes import needs_parens

FOR_WITH_LET = re.compile(r"^\s*let\s+(\w+)\s+of\s+([^;]*)")
FOR_WITHOUT_LET = re.compile(r"^\s*(\w+)\s+of\s+([^;]*)")
FOR_IN = re.compile(r"^\s*(?:let\s+)?(\w+)\s+in\s+")
FOR_MISSING_OF = re.compile(r"^\s*let\s+(\w+)\s*$")
INDEX_AS = re.compile(r"^index\s+as\s+(\w+)$")
LET_INDEX = re.compile(r"^let\s+(\w+)\s*=\s*index$")
TRACK_BY = re.compile(r"^trackBy\s*:\s*(.+)$")


@dataclass
class ForDirectiveInfo:
    item_var: str
    iterable_expr: str
    index_var: Optional[str] = None
    track_by: Optional[str] = None


def _warn(warnings, code, message):
    if warnings is not None:
        warnings.warn(code, message)


def parse_for_expression(expression, warnings=None):
    """Parse ``let item of items; index as i; trackBy: item.id``. Returns None when unusable."""
    trimmed = expression.strip()
    if not trimmed:
        _warn(warnings, WarningCode.EMPTY_FOR_EXPRESSION, "*for directive has empty expression")
        return None

    match = FOR_WITH_LET.match(trimmed)
    if match is None:
        match = FOR_WITHOUT_LET.match(trimmed)
        if match is None:
            if FOR_IN.match(trimmed):
                message = f"*for directive uses 'in' instead of 'of'. Expected: *for=\"let item of items\", got: *for=\"{trimmed}\""
            elif FOR_MISSING_OF.match(trimmed):
                message = f"*for directive missing 'of' clause. Expected: *for=\"let item of items\", got: *for=\"{trimmed}\""
            else:
                message = f"*for directive has invalid syntax. Expected: *for=\"let item of items\", got: *for=\"{trimmed}\""
            _warn(warnings, WarningCode.INVALID_FOR_SYNTAX, message)
            return None
        _warn(
            warnings,
            WarningCode.INVALID_FOR_SYNTAX,
            f"*for directive is missing 'let' keyword. Expected: *for=\"let {match.group(1)} of {match.group(2).strip()}\"",
        )

    item_var = match.group(1)
    iterable_expr = match.group(2).strip()
    if not iterable_expr:
        _warn(warnings, WarningCode.INVALID_FOR_SYNTAX, "*for directive has empty iterable expression")
        return None

    info = ForDirectiveInfo(item_var=item_var, iterable_expr=iterable_expr)
    clauses = [clause.strip() for clause in trimmed[match.end():].split(";")]
    for clause in filter(None, clauses):
        index_match = INDEX_AS.match(clause) or LET_INDEX.match(clause)
        if index_match:
            info.index_var = index_match.group(1)
            continue
        track_match = TRACK_BY.match(clause)
        if track_match:
            info.track_by = track_match.group(1).strip()
            continue
        _warn(
            warnings,
            WarningCode.INVALID_FOR_SYNTAX,
            f"*for directive has unknown clause: \"{clause}\". "
            "Valid clauses: \"index as <var>\", \"let <var> = index\", \"trackBy: <expr>\"",
        )
    return info


def generate_key_expression(info):
    return info.track_by or info.index_var or info.item_var


def map_expression(element_jsx, info):
    """``items.map((item) => <li />)``, without the surrounding JSX braces."""
    if info.index_var:
        params = f"({info.item_var}, {info.index_var}: number)"
    else:
        params = f"({info.item_var})"
    iterable = f"({info.iterable_expr})" if needs_parens(info.iterable_expr) else info.iterable_expr
    return f"{iterable}.map({params} => {element_jsx})"


def conditional_expression(element_jsx, condition, else_component=None):
    """``cond && <el />`` or ``cond ? <el /> : <Else />``, without the surrounding braces."""
    condition = condition.strip()
    if needs_parens(condition):
        condition = f"({condition})"
    if else_component:
        return f"{condition} ? {element_jsx} : <{else_component.strip()} />"
    return f"{condition} && {element_jsx}"
