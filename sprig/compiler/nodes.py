from .bindings import BindingType


class Node:
    type = "node"

    def __init__(self, location):
        self.location = location


class DocumentNode(Node):
    type = "document"

    def __init__(self, children, location):
        super().__init__(location)
        self.children = children

    def __repr__(self):
        return f"DocumentNode(children={len(self.children)})"


class ElementNode(Node):
    type = "element"

    def __init__(self, tag_name, location, attributes=None, directives=None, bindings=None,
                 events=None, two_way_bindings=None, children=None, self_closing=False):
        super().__init__(location)
        self.tag_name = tag_name
        self.attributes = attributes or []
        self.directives = directives or []
        self.bindings = bindings or []
        self.events = events or []
        self.two_way_bindings = two_way_bindings or []
        self.children = children or []
        self.self_closing = self_closing

    def get_directive(self, name):
        for directive in self.directives:
            if directive.name == name:
                return directive
        return None

    def get_attribute(self, name):
        for attribute in self.attributes:
            if attribute.name == name:
                return attribute
        return None

    def ordered_attributes(self):
        """All attribute-like nodes in source order."""
        nodes = self.attributes + self.directives + self.bindings + self.events + self.two_way_bindings
        return sorted(nodes, key=lambda node: node.location.start)

    def __repr__(self):
        return f"ElementNode(<{self.tag_name}>, children={len(self.children)})"


class TextNode(Node):
    type = "text"

    def __init__(self, content, location):
        super().__init__(location)
        self.content = content

    def __repr__(self):
        return f"TextNode({self.content!r})"


class InterpolationNode(Node):
    type = "interpolation"

    def __init__(self, expression, location):
        super().__init__(location)
        self.expression = expression

    def __repr__(self):
        return f"InterpolationNode({self.expression!r})"


class CommentNode(Node):
    type = "comment"

    def __init__(self, content, location):
        super().__init__(location)
        self.content = content

    def __repr__(self):
        return f"CommentNode({self.content!r})"


class AttributeNode(Node):
    type = "attribute"

    def __init__(self, name, value, location):
        super().__init__(location)
        self.name = name
        self.value = value

    @property
    def raw_name(self):
        return self.name

    @property
    def raw_value(self):
        return self.value

    def __repr__(self):
        return f"AttributeNode({self.name}={self.value!r})"


class DirectiveNode(Node):
    type = "directive"

    def __init__(self, name, expression, is_built_in, location):
        super().__init__(location)
        self.name = name
        self.expression = expression
        self.is_built_in = is_built_in

    @property
    def raw_name(self):
        return f"*{self.name}"

    @property
    def raw_value(self):
        return self.expression

    def __repr__(self):
        return f"DirectiveNode(*{self.name}={self.expression!r})"


class BindingNode(Node):
    type = "binding"

    PREFIXES = {
        BindingType.PROPERTY: "",
        BindingType.CLASS: "class.",
        BindingType.STYLE: "style.",
        BindingType.ATTRIBUTE: "attr.",
    }

    def __init__(self, kind, name, expression, location):
        super().__init__(location)
        self.kind = kind
        self.name = name
        self.expression = expression

    @property
    def raw_name(self):
        return f"[{self.PREFIXES[self.kind]}{self.name}]"

    @property
    def raw_value(self):
        return self.expression

    def __repr__(self):
        return f"BindingNode({self.kind.value}, {self.name}={self.expression!r})"


class EventNode(Node):
    type = "event"

    def __init__(self, name, handler, location):
        super().__init__(location)
        self.name = name
        self.handler = handler

    @property
    def raw_name(self):
        return f"({self.name})"

    @property
    def raw_value(self):
        return self.handler

    def __repr__(self):
        return f"EventNode(({self.name})={self.handler!r})"


class TwoWayBindingNode(Node):
    type = "twoWayBinding"

    def __init__(self, name, expression, location):
        super().__init__(location)
        self.name = name
        self.expression = expression

    @property
    def raw_name(self):
        return f"[({self.name})]"

    @property
    def raw_value(self):
        return self.expression

    def __repr__(self):
        return f"TwoWayBindingNode([({self.name})]={self.expression!r})"


def walk(node):
    """Depth-first iteration over a node and its descendants."""
    yield node
    for child in getattr(node, "children", ()):
        yield from walk(child)


def serialize(node):
    """Render a tree back to markup. Attribute order follows the source."""
    if isinstance(node, DocumentNode):
        return "".join(serialize(child) for child in node.children)
    if isinstance(node, TextNode):
        return node.content
    if isinstance(node, InterpolationNode):
        return "{{ " + node.expression + " }}"
    if isinstance(node, CommentNode):
        return f"<!-- {node.content} -->"

    parts = [node.tag_name]
    for attribute in node.ordered_attributes():
        if attribute.raw_value is None:
            parts.append(attribute.raw_name)
        else:
            parts.append(f'{attribute.raw_name}="{attribute.raw_value}"')
    opening = " ".join(parts)
    if node.self_closing:
        return f"<{opening} />"
    children = "".join(serialize(child) for child in node.children)
    if not children and node.tag_name.lower() in VOID_ELEMENTS:
        return f"<{opening}>"
    return f"<{opening}>{children}</{node.tag_name}>"


VOID_ELEMENTS = frozenset({
    "area", "base", "br", "col", "embed", "hr", "img", "input",
    "link", "meta", "param", "source", "track", "wbr",
})


def has_interactive_bindings(node):
    """True when any element under ``node`` has an event or two-way binding."""
    for current in walk(node):
        if isinstance(current, ElementNode) and (current.events or current.two_way_bindings):
            return True
    return False
