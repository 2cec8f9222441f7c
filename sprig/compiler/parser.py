from ..diagnostics import WarningCode
from .bindings import BindingType, classify_attribute, is_built_in_directive
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
)
from .tokenizer import SourceLocation, TokenType, tokenize


class ParseError:
    """A recoverable syntax problem. Recorded, never raised."""

    def __init__(self, message, location, code=WarningCode.UNCLOSED_TAG):
        self.message = message
        self.location = location
        self.code = code

    def __str__(self):
        return f"Parse error at line {self.location.line}, column {self.location.column}: {self.message}"

    def __repr__(self):
        return f"ParseError({self.message!r}, line={self.location.line}, column={self.location.column})"


class ParseResult:
    def __init__(self, document, errors, tokens):
        self.document = document
        self.errors = errors
        self.tokens = tokens

    @property
    def ok(self):
        return not self.errors


class AstParser:
    """Recursive-descent parser over the token stream.

    Parsing never stops on malformed markup: problems are appended to
    ``errors`` and the best-effort tree is returned.
    """

    def __init__(self, tokens):
        self.tokens = tokens
        self.pos = 0
        self.errors = []
        self.open_tags = []

    def current_token(self):
        return self.tokens[min(self.pos, len(self.tokens) - 1)]

    def peek(self, offset=1):
        index = self.pos + offset
        if index < len(self.tokens):
            return self.tokens[index]
        return self.tokens[-1]

    def previous_token(self):
        if self.pos > 0:
            return self.tokens[self.pos - 1]
        return None

    def advance(self):
        token = self.current_token()
        if token.type != TokenType.EOF:
            self.pos += 1
        return token

    def match(self, *types):
        return self.current_token().type in types

    def is_at_end(self):
        return self.current_token().type == TokenType.EOF

    def expect(self, token_type):
        token = self.current_token()
        if token.type == token_type:
            return self.advance()
        self.errors.append(
            ParseError(f"Expected {token_type.name} but got {token.type.name}", token.location)
        )
        return None

    def parse(self):
        start = self.current_token()
        children = []
        while not self.is_at_end():
            node = self.parse_node()
            if node is not None:
                children.append(node)
        return DocumentNode(children, self._span(start))

    def _span(self, start_token):
        previous = self.previous_token()
        end = previous.location.end if previous else start_token.location.end
        location = start_token.location
        return SourceLocation(location.line, location.column, location.start, max(end, location.start))

    def parse_node(self):
        token = self.current_token()

        if token.type == TokenType.TEXT:
            self.advance()
            return TextNode(token.value, token.location)
        if token.type == TokenType.INTERPOLATION:
            self.advance()
            return InterpolationNode(token.value, token.location)
        if token.type == TokenType.COMMENT:
            self.advance()
            return CommentNode(token.value, token.location)
        if token.type == TokenType.TAG_OPEN:
            return self.parse_element()
        if token.type == TokenType.TAG_END_OPEN:
            # stray closing tag
            self.skip_to_end_of_tag()
            return None

        self.advance()
        return None

    def skip_to_end_of_tag(self):
        while not self.is_at_end():
            token = self.advance()
            if token.type in (TokenType.TAG_CLOSE, TokenType.TAG_SELF_CLOSE):
                return
            if self.match(TokenType.TAG_OPEN, TokenType.TAG_END_OPEN):
                return

    def parse_element(self):
        start_token = self.advance()

        tag_name_token = self.expect(TokenType.TAG_NAME)
        if tag_name_token is None:
            self.skip_to_end_of_tag()
            return None

        tag_name = tag_name_token.value
        element = ElementNode(tag_name, start_token.location)
        self.parse_attributes(element)

        if self.match(TokenType.TAG_SELF_CLOSE):
            element.self_closing = True
            self.advance()
        elif self.match(TokenType.TAG_CLOSE):
            self.advance()
        else:
            self.errors.append(
                ParseError(f"Expected > or /> to close tag <{tag_name}>", tag_name_token.location)
            )

        if not element.self_closing and tag_name.lower() not in VOID_ELEMENTS:
            self.parse_children(element)

        element.location = self._span(start_token)
        return element

    def parse_children(self, element):
        self.open_tags.append(element.tag_name)
        try:
            while not self.is_at_end():
                if self.match(TokenType.TAG_END_OPEN):
                    name_token = self.peek()
                    closing_name = name_token.value if name_token.type == TokenType.TAG_NAME else None
                    if closing_name == element.tag_name:
                        self.advance()
                        self.advance()
                        if self.match(TokenType.TAG_CLOSE):
                            self.advance()
                        return
                    if closing_name in self.open_tags[:-1]:
                        # closes an ancestor: implicitly close this element
                        return

                child = self.parse_node()
                if child is not None:
                    element.children.append(child)
        finally:
            self.open_tags.pop()

    def parse_attributes(self, element):
        while self.match(TokenType.ATTR_NAME):
            name_token = self.advance()
            raw_name = name_token.value
            value = None

            if self.match(TokenType.ATTR_EQUALS):
                self.advance()
                if self.match(TokenType.ATTR_VALUE):
                    value = self.advance().value
                else:
                    self.errors.append(ParseError(
                        f"Attribute {raw_name} has no value after =",
                        name_token.location,
                        WarningCode.MALFORMED_ATTRIBUTE,
                    ))

            location = self._span(name_token)
            binding_type, name = classify_attribute(raw_name)
            expression = value if value is not None else ""

            if binding_type is BindingType.DIRECTIVE:
                element.directives.append(
                    DirectiveNode(name, expression, is_built_in_directive(name), location)
                )
            elif binding_type is BindingType.EVENT:
                element.events.append(EventNode(name, expression, location))
            elif binding_type is BindingType.TWO_WAY:
                element.two_way_bindings.append(TwoWayBindingNode(name, expression, location))
            elif binding_type is BindingType.STANDARD:
                element.attributes.append(AttributeNode(raw_name, value, location))
            else:
                element.bindings.append(BindingNode(binding_type, name, expression, location))


def parse_template(source):
    """Tokenize and parse template text into a ParseResult."""
    tokens = tokenize(source)
    parser = AstParser(tokens)
    document = parser.parse()
    return ParseResult(document, parser.errors, tokens)
