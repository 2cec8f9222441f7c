"""Tree-sitter access to TypeScript class source.

Decorators are never executed; everything here reads the syntax tree of the
source text and hands back plain values.
"""

from __future__ import annotations

import textwrap
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

import tree_sitter_typescript
from tree_sitter import Language, Node, Parser

TS_LANGUAGE = Language(tree_sitter_typescript.language_typescript())

CLASS_NODE_TYPES = ("class_declaration", "abstract_class_declaration", "class")


class Expression(str):
    """Raw source text of a decorator option that is not a plain literal."""


@dataclass
class Decorator:
    name: str
    options: Dict[str, Any] = field(default_factory=dict)
    called: bool = False


@dataclass
class ClassDeclaration:
    name: Optional[str]
    node: Node
    decorators: List[Decorator]
    exported: bool = False

    def decorator(self, name: str) -> Optional[Decorator]:
        for decorator in self.decorators:
            if decorator.name == name:
                return decorator
        return None


class SourceFile:
    """A parsed TypeScript module."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.data = text.encode("utf-8")
        self.tree = Parser(TS_LANGUAGE).parse(self.data)
        self.root = self.tree.root_node
        self._classes: Optional[List[ClassDeclaration]] = None

    def node_text(self, node: Optional[Node]) -> str:
        if node is None:
            return ""
        return self.data[node.start_byte:node.end_byte].decode("utf-8")

    def classes(self) -> List[ClassDeclaration]:
        if self._classes is None:
            self._classes = list(self._collect_classes())
        return self._classes

    def find_class(self, decorator_name: str) -> Optional[ClassDeclaration]:
        """First class carrying ``@decorator_name``; exported classes win."""
        matches = [cls for cls in self.classes() if cls.decorator(decorator_name)]
        for cls in matches:
            if cls.exported:
                return cls
        return matches[0] if matches else None

    def exported_class_name(self) -> Optional[str]:
        for cls in self.classes():
            if cls.exported and cls.name:
                return cls.name
        return None

    def _collect_classes(self):
        for node in self.root.named_children:
            if node.type == "export_statement":
                declaration = node.child_by_field_name("declaration")
                if declaration is not None and declaration.type in CLASS_NODE_TYPES:
                    decorators = self._decorators_of(node) + self._decorators_of(declaration)
                    yield self._class(declaration, decorators, exported=True)
            elif node.type in CLASS_NODE_TYPES:
                yield self._class(node, self._decorators_of(node), exported=False)

    def _class(self, node: Node, decorators: List[Decorator], exported: bool) -> ClassDeclaration:
        name_node = node.child_by_field_name("name")
        return ClassDeclaration(
            name=self.node_text(name_node) if name_node is not None else None,
            node=node,
            decorators=decorators,
            exported=exported,
        )

    def _decorators_of(self, node: Node) -> List[Decorator]:
        return [self.read_decorator(child) for child in node.children if child.type == "decorator"]

    def read_decorator(self, node: Node) -> Decorator:
        expression = node.named_children[0] if node.named_children else None
        if expression is None:
            return Decorator(name="")
        if expression.type == "call_expression":
            function = expression.child_by_field_name("function")
            arguments = expression.child_by_field_name("arguments")
            args = arguments.named_children if arguments is not None else []
            options: Dict[str, Any] = {}
            if args and args[0].type == "object":
                options = self.read_object(args[0])
            return Decorator(name=self._callee_name(function), options=options, called=True)
        return Decorator(name=self._callee_name(expression))

    def _callee_name(self, node: Optional[Node]) -> str:
        text = self.node_text(node)
        return text.rsplit(".", 1)[-1]

    def read_object(self, node: Node) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        for child in node.named_children:
            if child.type == "pair":
                key = self.read_key(child.child_by_field_name("key"))
                result[key] = self.literal_value(child.child_by_field_name("value"))
            elif child.type == "shorthand_property_identifier":
                name = self.node_text(child)
                result[name] = Expression(name)
        return result

    def read_key(self, node: Optional[Node]) -> str:
        if node is not None and node.type == "string":
            return self.string_value(node)
        return self.node_text(node)

    def literal_value(self, node: Optional[Node]) -> Any:
        if node is None:
            return None
        if node.type == "string":
            return self.string_value(node)
        if node.type == "template_string" and not any(
            child.type == "template_substitution" for child in node.named_children
        ):
            return self.node_text(node)[1:-1]
        if node.type == "true":
            return True
        if node.type == "false":
            return False
        if node.type == "null":
            return None
        if node.type == "array":
            return [self.literal_value(child) for child in node.named_children]
        if node.type == "object":
            return self.read_object(node)
        return Expression(self.node_text(node))

    def string_value(self, node: Node) -> str:
        return self.node_text(node)[1:-1]

    def render(self, node: Node, resolve_this: Optional[Callable[[str], str]] = None) -> str:
        """Source text of ``node`` with every ``this.member`` rewritten by ``resolve_this``."""
        if resolve_this is None:
            return self.node_text(node)

        edits = []
        for member in _this_members(node):
            prop = member.child_by_field_name("property")
            edits.append((member.start_byte, member.end_byte, resolve_this(self.node_text(prop))))

        out = []
        cursor = node.start_byte
        for start, end, replacement in sorted(edits):
            out.append(self.data[cursor:start].decode("utf-8"))
            out.append(replacement)
            cursor = end
        out.append(self.data[cursor:node.end_byte].decode("utf-8"))
        return "".join(out)


def _this_members(node: Node):
    if node.type == "member_expression":
        obj = node.child_by_field_name("object")
        if obj is not None and obj.type == "this":
            yield node
            return
    for child in node.children:
        yield from _this_members(child)


def dedent_block(text: str) -> str:
    """Inner text of a ``{ ... }`` block, dedented and trimmed."""
    inner = text.strip()
    if inner.startswith("{") and inner.endswith("}"):
        inner = inner[1:-1]
    inner = inner.strip("\n")
    return textwrap.dedent(inner).strip()


def indent(text: str, prefix: str) -> str:
    return "\n".join(prefix + line if line.strip() else line for line in text.splitlines())
