from .tokenizer import SourceLocation, Token, TokenType, Tokenizer, tokenize
from .bindings import (
    BUILT_IN_DIRECTIVES,
    BindingType,
    classify_attribute,
    extract_binding_name,
    get_binding_type,
    is_built_in_directive,
)
from .nodes import (
    AttributeNode,
    BindingNode,
    CommentNode,
    DirectiveNode,
    DocumentNode,
    ElementNode,
    EventNode,
    InterpolationNode,
    TextNode,
    TwoWayBindingNode,
    VOID_ELEMENTS,
    has_interactive_bindings,
    serialize,
    walk,
)
from .parser import AstParser, ParseError, ParseResult, parse_template

__all__ = [
    "SourceLocation", "Token", "TokenType", "Tokenizer", "tokenize",
    "BUILT_IN_DIRECTIVES", "BindingType", "classify_attribute", "extract_binding_name",
    "get_binding_type", "is_built_in_directive",
    "AttributeNode", "BindingNode", "CommentNode", "DirectiveNode", "DocumentNode",
    "ElementNode", "EventNode", "InterpolationNode", "TextNode", "TwoWayBindingNode",
    "VOID_ELEMENTS", "has_interactive_bindings", "serialize", "walk",
    "AstParser", "ParseError", "ParseResult", "parse_template",
]
