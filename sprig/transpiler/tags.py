"""Custom tag resolution: ``<status-badge>`` -> ``<StatusBadge>`` plus its import."""

import re
from dataclasses import dataclass

from ..compiler import ElementNode, walk
from ..logging import get_logger
from ..naming import kebab_to_camel, kebab_to_pascal

logger = get_logger("transpiler.tags")

SPECIAL_TAGS = {"outlet"}
SLOT_TAGS = {"slot", "ng-content"}
SLOT_ATTRIBUTE_SELECTOR = re.compile(r"""\[slot=['"]?([^'"\]]+)""")

STANDARD_HTML_TAGS = frozenset({
    # HTML
    "a", "abbr", "address", "area", "article", "aside", "audio",
    "b", "base", "bdi", "bdo", "blockquote", "body", "br", "button",
    "canvas", "caption", "cite", "code", "col", "colgroup",
    "data", "datalist", "dd", "del", "details", "dfn", "dialog", "div", "dl", "dt",
    "em", "embed",
    "fieldset", "figcaption", "figure", "footer", "form",
    "h1", "h2", "h3", "h4", "h5", "h6", "head", "header", "hgroup", "hr", "html",
    "i", "iframe", "img", "input", "ins",
    "kbd",
    "label", "legend", "li", "link",
    "main", "map", "mark", "menu", "meta", "meter",
    "nav", "noscript",
    "object", "ol", "optgroup", "option", "output",
    "p", "param", "picture", "pre", "progress",
    "q",
    "rp", "rt", "ruby",
    "s", "samp", "script", "search", "section", "select", "slot", "small", "source", "span",
    "strong", "style", "sub", "summary", "sup",
    "table", "tbody", "td", "template", "textarea", "tfoot", "th", "thead", "time", "title", "tr", "track",
    "u", "ul",
    "var", "video",
    "wbr",
    # SVG
    "svg", "path", "circle", "ellipse", "line", "polygon", "polyline", "rect",
    "g", "defs", "symbol", "use", "clippath", "mask",
    "text", "tspan", "textpath",
    "image", "switch", "foreignobject",
    "desc", "metadata",
    "lineargradient", "radialgradient", "stop",
    "filter", "fegaussianblur", "feoffset", "feblend", "fecolormatrix", "fecomponenttransfer",
    "fecomposite", "feconvolvematrix", "fediffuselighting", "fedisplacementmap", "fedropshadow",
    "feflood", "fefunca", "fefuncb", "fefuncg", "fefuncr", "feimage", "femerge", "femergenode",
    "femorphology", "fepointlight", "fespecularlighting", "fespotlight", "fetile", "feturbulence",
    "animate", "animatemotion", "animatetransform", "set",
    "marker", "pattern",
})


@dataclass(frozen=True)
class TagImport:
    component_name: str
    import_path: str
    is_island: bool = False

    @property
    def statement(self):
        return f'import {self.component_name} from "{self.import_path}";'


def is_standard_html_tag(tag_name):
    return tag_name.lower() in STANDARD_HTML_TAGS


def is_special_tag(tag_name):
    return tag_name.lower() in SPECIAL_TAGS


def is_slot_tag(tag_name):
    return tag_name.lower() in SLOT_TAGS


def slot_name(node):
    """Prop projected by a slot element, or None for the default slot.

    ``<slot name="header">`` and ``<ng-content select=".header">`` both project ``header``;
    ``select="[slot=footer]"`` projects ``footer``.
    """
    if node.tag_name.lower() == "slot":
        attribute = node.get_attribute("name")
        name = attribute.value if attribute is not None else None
    else:
        attribute = node.get_attribute("select")
        name = attribute.value if attribute is not None else None
        if name:
            match = SLOT_ATTRIBUTE_SELECTOR.search(name)
            if name.startswith("."):
                name = name[1:]
            elif match:
                name = match.group(1)
    if not name:
        return None
    return kebab_to_camel(name.strip())


def is_custom_tag(tag_name):
    if is_special_tag(tag_name) or is_slot_tag(tag_name):
        return False
    return "-" in tag_name or not is_standard_html_tag(tag_name)


def jsx_tag_name(tag_name):
    if not is_custom_tag(tag_name):
        return tag_name
    if tag_name[:1].isupper():
        return tag_name
    return kebab_to_pascal(tag_name)


def collect_custom_tags(document):
    """Custom tag names in first-use order."""
    tags = {}
    for node in walk(document):
        if isinstance(node, ElementNode) and is_custom_tag(node.tag_name):
            tags.setdefault(node.tag_name, None)
    return list(tags)


def resolve_tag(tag_name, known_components, import_alias="@"):
    """Import for a custom tag, or None (logged) when no known component matches."""
    if not is_custom_tag(tag_name):
        return None
    component_name = jsx_tag_name(tag_name)
    for component in known_components:
        if component.class_name == component_name:
            folder = "islands" if component.is_island else "components"
            return TagImport(
                component_name=component_name,
                import_path=f"{import_alias}/{folder}/{component_name}.tsx",
                is_island=component.is_island,
            )
    logger.warning("Could not resolve tag <%s>", tag_name)
    return None
