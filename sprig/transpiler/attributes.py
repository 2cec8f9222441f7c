"""Attribute and binding emission helpers for JSX elements."""

import json
import re

from ..naming import kebab_to_camel, safe_var_name

EVENT_MAP = {
    "click": "onClick",
    "dblclick": "onDblClick",
    "mousedown": "onMouseDown",
    "mouseup": "onMouseUp",
    "mousemove": "onMouseMove",
    "mouseenter": "onMouseEnter",
    "mouseleave": "onMouseLeave",
    "mouseover": "onMouseOver",
    "mouseout": "onMouseOut",
    "keydown": "onKeyDown",
    "keyup": "onKeyUp",
    "keypress": "onKeyPress",
    "focus": "onFocus",
    "blur": "onBlur",
    "input": "onInput",
    "change": "onChange",
    "submit": "onSubmit",
    "scroll": "onScroll",
    "touchstart": "onTouchStart",
    "touchend": "onTouchEnd",
    "touchmove": "onTouchMove",
    "drag": "onDrag",
    "dragstart": "onDragStart",
    "dragend": "onDragEnd",
    "dragover": "onDragOver",
    "dragenter": "onDragEnter",
    "dragleave": "onDragLeave",
    "drop": "onDrop",
    "contextmenu": "onContextMenu",
    "wheel": "onWheel",
    "copy": "onCopy",
    "cut": "onCut",
    "paste": "onPaste",
}

HTML_ATTR_TO_JSX = {
    "class": "className",
    "for": "htmlFor",
    "tabindex": "tabIndex",
    "readonly": "readOnly",
    "maxlength": "maxLength",
    "minlength": "minLength",
    "colspan": "colSpan",
    "rowspan": "rowSpan",
    "cellpadding": "cellPadding",
    "cellspacing": "cellSpacing",
    "usemap": "useMap",
    "frameborder": "frameBorder",
    "contenteditable": "contentEditable",
    "crossorigin": "crossOrigin",
    "datetime": "dateTime",
    "enctype": "encType",
    "formaction": "formAction",
    "formenctype": "formEncType",
    "formmethod": "formMethod",
    "formnovalidate": "formNoValidate",
    "formtarget": "formTarget",
    "hreflang": "hrefLang",
    "inputmode": "inputMode",
    "novalidate": "noValidate",
    "srcset": "srcSet",
    "srclang": "srcLang",
    "srcdoc": "srcDoc",
    "accesskey": "accessKey",
    "autocomplete": "autoComplete",
    "autofocus": "autoFocus",
    "autoplay": "autoPlay",
}

NUMERIC_ATTRIBUTES = {
    "colSpan", "rowSpan", "tabIndex", "cols", "rows", "size",
    "span", "start", "height", "width", "maxLength", "minLength",
}

STYLE_UNITS = ("px", "em", "rem", "%", "vh", "vw", "vmin", "vmax", "s", "ms", "deg", "rad", "turn")

RESERVED_IDENTIFIER = re.compile(r"(?<![\w$.])\b(class)\b(?!\s*[:.])")
SIMPLE_HANDLER = re.compile(r"^[\w$][\w$.]*$")
INTERPOLATION = re.compile(r"\{\{(.*?)\}\}", re.S)


def map_event_name(name):
    return EVENT_MAP.get(name.lower()) or f"on{name[:1].upper()}{name[1:]}"


def html_attr_to_jsx(name):
    return HTML_ATTR_TO_JSX.get(name.lower(), name)


def is_numeric_attribute(name):
    return name in NUMERIC_ATTRIBUTES


def parse_style_prop(name):
    """``width.px`` -> ``("width", "px")``; ``color`` -> ``("color", None)``"""
    for unit in STYLE_UNITS:
        if name.endswith(f".{unit}"):
            return name[:-(len(unit) + 1)], unit
    return name, None


def transform_reserved_words(expression):
    """Rename bare reserved identifiers (``class`` -> ``className``), leaving keys and members alone."""
    return RESERVED_IDENTIFIER.sub(lambda m: safe_var_name(m.group(1)), expression)


def strip_bind_this(expression):
    expression = expression.replace(".bind(this)", "")
    return re.sub(r"\.bind\(this,\s*", ".bind(null, ", expression)


def quote(value):
    """A JSX attribute value: ``"text"`` when safe, ``{"escaped"}`` otherwise."""
    if '"' in value or "\\" in value:
        return "{" + json.dumps(value) + "}"
    return f'"{value}"'


def event_handler(name, handler):
    """``(click)="save()"`` -> ``onClick={() => save()}``; ``$event`` becomes ``e``."""
    jsx_event = map_event_name(name)
    handler = handler.strip()
    if "$event" in handler:
        return f"{jsx_event}={{(e) => {handler.replace('$event', 'e')}}}"
    if SIMPLE_HANDLER.match(handler):
        return f"{jsx_event}={{{handler}}}"
    return f"{jsx_event}={{() => {handler}}}"


def two_way_binding(prop, variable, tag_name):
    """Value attribute plus change handler for ``[(prop)]="variable"``."""
    if prop == "checked":
        return [f"checked={{{variable}}}", f"onChange={{(e) => {variable}.value = e.target.checked}}"]
    if tag_name.lower() == "select":
        return [f"value={{{variable}}}", f"onChange={{(e) => {variable}.value = e.target.value}}"]
    return [f"{prop}={{{variable}}}", f"onInput={{(e) => {variable}.value = e.target.{prop}}}"]


def class_name_attribute(static_class=None, conditionals=(), dynamic_class=None):
    if not static_class and not dynamic_class and not conditionals:
        return None
    if dynamic_class and not static_class and not conditionals:
        return f"className={{{dynamic_class}}}"
    if static_class and not dynamic_class and not conditionals:
        return f"className={quote(static_class)}"

    parts = []
    if static_class:
        parts.append(json.dumps(static_class))
    if dynamic_class:
        parts.append(f'" " + ({dynamic_class})' if parts else f"({dynamic_class})")
    for name, condition in conditionals:
        prefix = " " if parts else ""
        if condition.strip() == "true":
            parts.append(f'"{prefix}{name}"')
        else:
            parts.append(f'({condition} ? "{prefix}{name}" : "")')
    if len(parts) == 1 and parts[0].startswith('"'):
        return f"className={parts[0]}"
    return f"className={{{' + '.join(parts)}}}"


def parse_static_style(style):
    """``"font-size: 12px; color: red"`` -> ``[("fontSize", "12px"), ("color", "red")]``"""
    props = []
    for declaration in style.split(";"):
        name, sep, value = declaration.partition(":")
        if sep and name.strip():
            props.append((kebab_to_camel(name.strip()), value.strip()))
    return props


def style_binding_value(prop, expression):
    """Property name and value for ``[style.prop]``; a unit suffix produces a template literal."""
    name, unit = parse_style_prop(prop)
    if unit:
        return kebab_to_camel(name), f"`${{{expression}}}{unit}`"
    return kebab_to_camel(name), expression


def style_attribute(static_style=None, bindings=()):
    props = {}
    if static_style:
        for name, value in parse_static_style(static_style):
            props[name] = json.dumps(value)
    for name, value in bindings:
        props[name] = value
    if not props:
        return None
    return "style={{" + ", ".join(f"{name}: {value}" for name, value in props.items()) + "}}"


def standard_attribute(name, value, compile_expression=None):
    jsx_name = html_attr_to_jsx(name)
    if value is None or value == "true":
        return jsx_name
    if is_numeric_attribute(jsx_name) and value.isdigit():
        return f"{jsx_name}={{{value}}}"
    if "{{" in value:
        return f"{jsx_name}={{{interpolated_string(value, compile_expression)}}}"
    return f"{jsx_name}={quote(value)}"


def interpolated_string(value, compile_expression=None):
    """``"Hello {{ name }}"`` -> ```Hello ${name}```

    ``compile_expression`` rewrites each interpolated expression, e.g. to apply pipes.
    """
    out = []
    cursor = 0
    for match in INTERPOLATION.finditer(value):
        expression = match.group(1).strip()
        if compile_expression is not None:
            expression = compile_expression(expression)
        out.append(value[cursor:match.start()].replace("`", "\\`").replace("${", "\\${"))
        out.append("${" + expression + "}")
        cursor = match.end()
    out.append(value[cursor:].replace("`", "\\`").replace("${", "\\${"))
    return "`" + "".join(out) + "`"
