"""Pipe chains: ``value | name:arg1:arg2 | other`` to nested JavaScript calls."""

import re
from typing import List, NamedTuple

from ..diagnostics import WarningCode

SIMPLE_VALUE = re.compile(r"^[\w$][\w$.\[\]()]*$")
PAREN_WRAPPED = re.compile(r"^\([^)]+\)$")
OPERATORS = ("+", "-", "*", "/", "%", "&&", "||", "?", ":", "<", ">", "=", "!")


def _slice(value, args):
    return f"{value}.slice({', '.join(args[:2])})"


def _optional_arg(fn):
    def render(value, args):
        if args:
            return f"{fn}({value}, {args[0]})"
        return f"{fn}({value})"
    return render


def _number(value, args):
    if args:
        return f"formatNumber({value}, {args[0]})"
    return f"Number({value})"


def _default(value, args):
    fallback = args[0] if args else "''"
    return f"({value} ?? {fallback})"


BUILT_IN_PIPES = {
    "uppercase": lambda value, args: f"{value}.toUpperCase()",
    "lowercase": lambda value, args: f"{value}.toLowerCase()",
    "titlecase": lambda value, args: f"toTitleCase({value})",
    "json": lambda value, args: f"JSON.stringify({value})",
    "async": lambda value, args: f"asyncPipe({value})",
    "slice": _slice,
    "currency": _optional_arg("formatCurrency"),
    "date": _optional_arg("formatDate"),
    "number": _number,
    "percent": lambda value, args: f"formatPercent({value})",
    "default": _default,
}

# Runtime helpers a built-in pipe depends on
PIPE_HELPERS = {
    "titlecase": "toTitleCase",
    "async": "asyncPipe",
    "currency": "formatCurrency",
    "date": "formatDate",
    "percent": "formatPercent",
}


class PipeCall(NamedTuple):
    name: str
    args: List[str]


def split_pipes(expression):
    """Split on ``|`` outside quotes, leaving ``||`` intact."""
    parts = []
    current = []
    quote = None
    i = 0
    while i < len(expression):
        char = expression[i]
        if char in "\"'" and (i == 0 or expression[i - 1] != "\\"):
            if quote == char:
                quote = None
            elif quote is None:
                quote = char
        if char == "|" and quote is None:
            if expression[i + 1:i + 2] == "|":
                current.append("||")
                i += 2
                continue
            parts.append("".join(current).strip())
            current = []
        else:
            current.append(char)
        i += 1
    parts.append("".join(current).strip())
    return parts


def parse_pipe_args(segment):
    """``slice:0:'a:b'`` -> ``['slice', '0', "'a:b'"]``"""
    args = []
    current = []
    quote = None
    for i, char in enumerate(segment):
        if char in "\"'" and (i == 0 or segment[i - 1] != "\\"):
            if quote == char:
                quote = None
            elif quote is None:
                quote = char
            current.append(char)
        elif char == ":" and quote is None:
            if "".join(current).strip():
                args.append("".join(current).strip())
            current = []
        else:
            current.append(char)
    if "".join(current).strip():
        args.append("".join(current).strip())
    return args


def parse_pipe_expression(expression):
    """Return ``(value, [PipeCall, ...])``. An empty segment yields a call with an empty name."""
    parts = split_pipes(expression)
    value = parts[0]
    pipes = []
    for segment in parts[1:]:
        args = parse_pipe_args(segment)
        if args:
            pipes.append(PipeCall(args[0], args[1:]))
        else:
            pipes.append(PipeCall("", []))
    return value, pipes


def needs_parens(value):
    if SIMPLE_VALUE.match(value) or PAREN_WRAPPED.match(value):
        return False
    return any(op in value for op in OPERATORS)


def _call(name, value, args):
    if args:
        return f"{name}({value}, {', '.join(args)})"
    return f"{name}({value})"


def transform_pipe_expression(expression, pipe_registry=None, warnings=None, used_pipes=None, helpers=None):
    """Compile a pipe chain.

    Built-in pipes win over registered ones. Registered pipe names are added to
    ``used_pipes`` and runtime helpers to ``helpers`` (both dict-as-ordered-set).
    Unknown names still compile to a call of the same name.
    """
    value, pipes = parse_pipe_expression(expression.strip())
    result = value
    for pipe in pipes:
        if not pipe.name:
            if warnings is not None:
                warnings.warn(WarningCode.EMPTY_PIPE_NAME, f"Empty pipe name in expression '{expression.strip()}'")
            continue
        handler = BUILT_IN_PIPES.get(pipe.name)
        if handler is not None:
            wrapped = f"({result})" if needs_parens(result) else result
            result = handler(wrapped, pipe.args)
            helper = PIPE_HELPERS.get(pipe.name)
            if pipe.name == "number" and pipe.args:
                helper = "formatNumber"
            if helper and helpers is not None:
                helpers.setdefault(helper, None)
            continue
        entry = pipe_registry.get(pipe.name) if pipe_registry is not None else None
        if entry is not None:
            if used_pipes is not None:
                used_pipes.setdefault(pipe.name, None)
            result = _call(entry.function_name, result, pipe.args)
            continue
        if warnings is not None:
            warnings.warn(WarningCode.UNKNOWN_PIPE, f"Unknown pipe '{pipe.name}'; emitted as a call to {pipe.name}()")
        result = _call(pipe.name, result, pipe.args)
    return result
