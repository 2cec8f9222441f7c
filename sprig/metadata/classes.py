"""Class-body extraction: properties, methods, getters and constructor dependencies."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional

from tree_sitter import Node

from .source import ClassDeclaration, Decorator, SourceFile, dedent_block

LIFECYCLE_METHODS = ("ngOnInit", "onInit", "onMount", "ngOnDestroy", "onDestroy")
INIT_METHODS = ("ngOnInit", "onInit", "onMount")
DESTROY_METHODS = ("ngOnDestroy", "onDestroy")

_DECLARATION_TYPES = ("lexical_declaration", "variable_declaration")
_CONTROL_FLOW_TYPES = (
    "if_statement", "for_statement", "for_in_statement", "while_statement",
    "do_statement", "switch_statement", "try_statement",
)


@dataclass
class Statement:
    kind: str
    node: Node


@dataclass
class FunctionBody:
    """A method or getter body parsed once into its top-level statements."""

    source: SourceFile
    node: Optional[Node]
    statements: List[Statement] = field(default_factory=list)

    @classmethod
    def from_block(cls, source: SourceFile, block: Optional[Node]) -> "FunctionBody":
        statements = []
        if block is not None:
            for child in block.named_children:
                if child.type == "comment":
                    continue
                statements.append(Statement(child.type, child))
        return cls(source=source, node=block, statements=statements)

    @property
    def is_empty(self) -> bool:
        return not self.statements

    @property
    def return_count(self) -> int:
        return sum(1 for stmt in self.statements if stmt.kind == "return_statement")

    @property
    def has_declarations(self) -> bool:
        return any(stmt.kind in _DECLARATION_TYPES for stmt in self.statements)

    @property
    def has_control_flow(self) -> bool:
        return any(stmt.kind in _CONTROL_FLOW_TYPES for stmt in self.statements)

    @property
    def is_single_expression(self) -> bool:
        """True for a body made of exactly one ``return <expr>;``."""
        return (
            len(self.statements) == 1
            and self.statements[0].kind == "return_statement"
            and self._returned_expression() is not None
        )

    def _returned_expression(self) -> Optional[Node]:
        stmt = self.statements[0].node
        for child in stmt.named_children:
            if child.type != "comment":
                return child
        return None

    def expression(self, resolve_this: Optional[Callable[[str], str]] = None) -> str:
        node = self._returned_expression()
        return self.source.render(node, resolve_this)

    def text(self, resolve_this: Optional[Callable[[str], str]] = None) -> str:
        if self.node is None:
            return ""
        return dedent_block(self.source.render(self.node, resolve_this))

    def this_members(self) -> List[str]:
        names: List[str] = []
        if self.node is None:
            return names

        def visit(node: Node) -> None:
            if node.type == "member_expression":
                obj = node.child_by_field_name("object")
                if obj is not None and obj.type == "this":
                    names.append(self.source.node_text(node.child_by_field_name("property")))
            for child in node.children:
                visit(child)

        visit(self.node)
        return names

    def assigned_this_members(self) -> List[str]:
        """Names of ``this.x`` members that appear on the left of an assignment."""
        names: List[str] = []
        if self.node is None:
            return names

        def visit(node: Node) -> None:
            if node.type in ("assignment_expression", "augmented_assignment_expression"):
                left = node.child_by_field_name("left")
                if left is not None and left.type == "member_expression":
                    obj = left.child_by_field_name("object")
                    if obj is not None and obj.type == "this":
                        names.append(self.source.node_text(left.child_by_field_name("property")))
            elif node.type == "update_expression":
                argument = node.child_by_field_name("argument")
                if argument is not None and argument.type == "member_expression":
                    obj = argument.child_by_field_name("object")
                    if obj is not None and obj.type == "this":
                        names.append(self.source.node_text(argument.child_by_field_name("property")))
            for child in node.children:
                visit(child)

        visit(self.node)
        return names


@dataclass
class ClassProperty:
    name: str
    type: Optional[str] = None
    initial_value: Optional[str] = None
    optional: bool = False
    definite: bool = False
    decorators: List[Decorator] = field(default_factory=list)
    value_node: Optional[Node] = None

    def decorator(self, name: str) -> Optional[Decorator]:
        for decorator in self.decorators:
            if decorator.name == name:
                return decorator
        return None


@dataclass
class ClassMethod:
    name: str
    params: List[str]
    body: FunctionBody
    is_async: bool = False
    decorators: List[Decorator] = field(default_factory=list)

    @property
    def is_lifecycle(self) -> bool:
        return self.name in LIFECYCLE_METHODS


@dataclass
class ClassGetter:
    name: str
    body: FunctionBody
    return_type: Optional[str] = None


@dataclass
class Dependency:
    visibility: str
    name: str
    type: str


@dataclass
class ParsedClass:
    class_name: Optional[str]
    properties: List[ClassProperty] = field(default_factory=list)
    methods: List[ClassMethod] = field(default_factory=list)
    getters: List[ClassGetter] = field(default_factory=list)
    dependencies: List[Dependency] = field(default_factory=list)
    constructor: Optional[ClassMethod] = None

    @property
    def state_properties(self) -> List[ClassProperty]:
        """Plain (undecorated) fields, i.e. component-local state."""
        return [prop for prop in self.properties if not prop.decorators]


def parse_class(source, decorator_name: Optional[str] = None) -> Optional[ParsedClass]:
    """Parse the exported (or ``@decorator_name``-decorated) class of a module."""
    if not isinstance(source, SourceFile):
        source = SourceFile(source)

    declaration: Optional[ClassDeclaration] = None
    if decorator_name:
        declaration = source.find_class(decorator_name)
    if declaration is None:
        exported = [cls for cls in source.classes() if cls.exported]
        candidates = exported or source.classes()
        declaration = candidates[0] if candidates else None
    if declaration is None:
        return None

    parsed = ParsedClass(class_name=declaration.name)
    body = declaration.node.child_by_field_name("body")
    if body is None:
        return parsed

    pending: List[Decorator] = []
    for member in body.children:
        if member.type == "decorator":
            pending.append(source.read_decorator(member))
        elif member.type == "public_field_definition":
            parsed.properties.append(_read_property(source, member, pending))
            pending = []
        elif member.type == "method_definition":
            _read_method(source, member, pending, parsed)
            pending = []
    return parsed


def _read_property(source: SourceFile, node: Node, pending: List[Decorator]) -> ClassProperty:
    decorators = list(pending)
    optional = definite = False
    for child in node.children:
        if child.type == "decorator":
            decorators.append(source.read_decorator(child))
        elif child.type == "?":
            optional = True
        elif child.type == "!":
            definite = True

    type_node = node.child_by_field_name("type")
    value_node = node.child_by_field_name("value")
    return ClassProperty(
        name=source.node_text(node.child_by_field_name("name")),
        type=_annotation_text(source, type_node),
        initial_value=source.node_text(value_node) if value_node is not None else None,
        optional=optional,
        definite=definite,
        decorators=decorators,
        value_node=value_node,
    )


def _annotation_text(source: SourceFile, node: Optional[Node]) -> Optional[str]:
    if node is None:
        return None
    text = source.node_text(node).strip()
    if text.startswith(":"):
        text = text[1:].strip()
    return text or None


def _read_method(source: SourceFile, node: Node, decorators: List[Decorator], parsed: ParsedClass) -> None:
    name = source.node_text(node.child_by_field_name("name"))
    keywords = {child.type for child in node.children if not child.is_named}
    body = FunctionBody.from_block(source, node.child_by_field_name("body"))

    if "get" in keywords:
        parsed.getters.append(
            ClassGetter(
                name=name,
                body=body,
                return_type=_annotation_text(source, node.child_by_field_name("return_type")),
            )
        )
        return
    if "set" in keywords:
        return

    params_node = node.child_by_field_name("parameters")
    params = [
        source.node_text(param)
        for param in (params_node.named_children if params_node is not None else [])
        if param.type != "comment"
    ]
    method = ClassMethod(
        name=name,
        params=params,
        body=body,
        is_async="async" in keywords,
        decorators=list(decorators),
    )

    if name == "constructor":
        parsed.constructor = method
        parsed.dependencies.extend(_read_dependencies(source, params_node))
        return
    parsed.methods.append(method)


def _read_dependencies(source: SourceFile, params_node: Optional[Node]) -> List[Dependency]:
    dependencies: List[Dependency] = []
    if params_node is None:
        return dependencies
    for param in params_node.named_children:
        if param.type not in ("required_parameter", "optional_parameter"):
            continue
        visibility = None
        for child in param.children:
            if child.type == "accessibility_modifier":
                visibility = source.node_text(child)
            elif child.type == "readonly" and visibility is None:
                visibility = "readonly"
        type_text = _annotation_text(source, param.child_by_field_name("type"))
        if visibility is None or not type_text:
            continue
        dependencies.append(
            Dependency(
                visibility=visibility,
                name=source.node_text(param.child_by_field_name("pattern")),
                type=type_text,
            )
        )
    return dependencies
