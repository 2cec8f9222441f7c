import enum
from typing import NamedTuple


class TokenType(enum.Enum):
    TAG_OPEN = "TAG_OPEN"               # <
    TAG_NAME = "TAG_NAME"               # div, user-card
    ATTR_NAME = "ATTR_NAME"             # class, [value], (click), *if
    ATTR_EQUALS = "ATTR_EQUALS"         # =
    ATTR_VALUE = "ATTR_VALUE"           # value without its quotes
    TAG_CLOSE = "TAG_CLOSE"             # >
    TAG_SELF_CLOSE = "TAG_SELF_CLOSE"   # />
    TAG_END_OPEN = "TAG_END_OPEN"       # </
    TEXT = "TEXT"                       # text content
    INTERPOLATION = "INTERPOLATION"     # expression inside {{ }}
    COMMENT = "COMMENT"                 # <!-- ... -->
    EOF = "EOF"


class SourceLocation(NamedTuple):
    line: int
    column: int
    start: int
    end: int


class Token(NamedTuple):
    type: TokenType
    value: str
    location: SourceLocation

    def __repr__(self):
        return f"Token({self.type.name}, {self.value!r}, {self.location.line}:{self.location.column})"


class State(enum.Enum):
    DATA = enum.auto()
    TAG_NAME = enum.auto()
    BEFORE_ATTR_NAME = enum.auto()
    ATTR_NAME = enum.auto()
    AFTER_ATTR_NAME = enum.auto()
    BEFORE_ATTR_VALUE = enum.auto()
    ATTR_VALUE_QUOTED = enum.auto()
    ATTR_VALUE_UNQUOTED = enum.auto()
    END_TAG_NAME = enum.auto()


WHITESPACE = " \t\n\r"
QUOTES = "\"'"


class Tokenizer:
    """State machine over template markup.

    Never raises: malformed markup degrades to TEXT tokens or to a best-effort
    token sequence, and the output always ends with a single EOF token.
    """

    def __init__(self, source):
        self.source = source
        self.length = len(source)
        self.pos = 0
        self.line = 1
        self.column = 1
        self.state = State.DATA
        self.tokens = []
        self.quote_char = ""
        self._mark_pos = 0
        self._mark_line = 1
        self._mark_column = 1
        self._handlers = {
            State.DATA: self.read_data,
            State.TAG_NAME: self.read_tag_name,
            State.BEFORE_ATTR_NAME: self.read_before_attr_name,
            State.ATTR_NAME: self.read_attr_name,
            State.AFTER_ATTR_NAME: self.read_after_attr_name,
            State.BEFORE_ATTR_VALUE: self.read_before_attr_value,
            State.ATTR_VALUE_QUOTED: self.read_attr_value_quoted,
            State.ATTR_VALUE_UNQUOTED: self.read_attr_value_unquoted,
            State.END_TAG_NAME: self.read_end_tag_name,
        }

    def tokenize(self):
        while self.pos < self.length:
            self._handlers[self.state]()
        self.mark()
        self.add_token(TokenType.EOF, "")
        return self.tokens

    def peek(self, offset=1):
        if self.pos + offset < self.length:
            return self.source[self.pos + offset]
        return ""

    def current(self):
        if self.pos < self.length:
            return self.source[self.pos]
        return ""

    def startswith(self, text):
        return self.source.startswith(text, self.pos)

    def advance(self, n=1):
        for _ in range(n):
            if self.pos < self.length:
                if self.source[self.pos] == "\n":
                    self.line += 1
                    self.column = 1
                else:
                    self.column += 1
                self.pos += 1

    def mark(self):
        self._mark_pos = self.pos
        self._mark_line = self.line
        self._mark_column = self.column

    def add_token(self, type, value):
        location = SourceLocation(self._mark_line, self._mark_column, self._mark_pos, self.pos)
        self.tokens.append(Token(type, value, location))

    def skip_whitespace(self):
        while self.pos < self.length and self.source[self.pos] in WHITESPACE:
            self.advance()

    # Text content

    def read_data(self):
        self.mark()
        while self.pos < self.length:
            if self.startswith("{{") or self.startswith("<!--") or self._starts_tag():
                break
            self.advance()

        if self.pos > self._mark_pos:
            self.add_token(TokenType.TEXT, self.source[self._mark_pos:self.pos])
            return

        if self.startswith("{{"):
            self.read_interpolation()
        elif self.startswith("<!--"):
            self.read_comment()
        elif self.startswith("</"):
            self.mark()
            self.advance(2)
            self.add_token(TokenType.TAG_END_OPEN, "</")
            self.state = State.END_TAG_NAME
        elif self.current() == "<":
            self.mark()
            self.advance()
            self.add_token(TokenType.TAG_OPEN, "<")
            self.state = State.TAG_NAME

    def _starts_tag(self):
        # A lone "<" that cannot start a tag stays text
        if self.current() != "<":
            return False
        next_char = self.peek()
        return next_char == "/" or next_char.isalpha()

    def read_interpolation(self):
        self.mark()
        self.advance(2)
        depth = 1
        value = []
        while self.pos < self.length and depth > 0:
            if self.startswith("{{"):
                depth += 1
                value.append("{{")
                self.advance(2)
            elif self.startswith("}}"):
                depth -= 1
                if depth > 0:
                    value.append("}}")
                self.advance(2)
            else:
                value.append(self.source[self.pos])
                self.advance()
        self.add_token(TokenType.INTERPOLATION, "".join(value).strip())

    def read_comment(self):
        self.mark()
        self.advance(4)
        end = self.source.find("-->", self.pos)
        if end == -1:
            end = self.length
        value = self.source[self.pos:end]
        self.advance(end - self.pos)
        self.advance(3)
        self.add_token(TokenType.COMMENT, value.strip())

    # Opening tags

    def read_tag_name(self):
        self.mark()
        while self.pos < self.length:
            char = self.source[self.pos]
            if char in WHITESPACE or char in ">/":
                break
            self.advance()
        self.add_token(TokenType.TAG_NAME, self.source[self._mark_pos:self.pos])
        self.state = State.BEFORE_ATTR_NAME

    def close_tag(self):
        """Emit TAG_CLOSE or TAG_SELF_CLOSE when positioned on one. Returns True if emitted."""
        if self.current() == ">":
            self.mark()
            self.advance()
            self.add_token(TokenType.TAG_CLOSE, ">")
            self.state = State.DATA
            return True
        if self.startswith("/>"):
            self.mark()
            self.advance(2)
            self.add_token(TokenType.TAG_SELF_CLOSE, "/>")
            self.state = State.DATA
            return True
        return False

    def read_before_attr_name(self):
        self.skip_whitespace()
        if self.pos >= self.length or self.close_tag():
            return
        if self.current() == "/":
            # stray slash inside a tag
            self.advance()
            return
        self.state = State.ATTR_NAME

    def read_attr_name(self):
        self.mark()
        bracket_depth = 0
        paren_depth = 0
        while self.pos < self.length:
            char = self.source[self.pos]
            if char in QUOTES or char in "<>":
                break
            if bracket_depth <= 0 and paren_depth <= 0 and (char in WHITESPACE or char in "=/>"):
                break
            if char == "[":
                bracket_depth += 1
            elif char == "]":
                bracket_depth -= 1
            elif char == "(":
                paren_depth += 1
            elif char == ")":
                paren_depth -= 1
            self.advance()

        if self.pos == self._mark_pos:
            # always make progress on junk such as a bare quote
            self.advance()
        self.add_token(TokenType.ATTR_NAME, self.source[self._mark_pos:self.pos])

        char = self.current()
        if char == "=":
            self.read_equals()
        elif char and char in WHITESPACE:
            self.state = State.AFTER_ATTR_NAME
        else:
            self.state = State.BEFORE_ATTR_NAME

    def read_equals(self):
        self.mark()
        self.advance()
        self.add_token(TokenType.ATTR_EQUALS, "=")
        self.state = State.BEFORE_ATTR_VALUE

    def read_after_attr_name(self):
        self.skip_whitespace()
        if self.current() == "=":
            self.read_equals()
        else:
            self.state = State.BEFORE_ATTR_NAME

    def read_before_attr_value(self):
        self.skip_whitespace()
        char = self.current()
        if char and char in QUOTES:
            self.quote_char = char
            self.advance()
            self.state = State.ATTR_VALUE_QUOTED
        elif char == ">" or self.startswith("/>"):
            self.state = State.BEFORE_ATTR_NAME
        elif char:
            self.state = State.ATTR_VALUE_UNQUOTED

    def read_attr_value_quoted(self):
        self.mark()
        end = self.source.find(self.quote_char, self.pos)
        if end == -1:
            end = self.length
        self.advance(end - self.pos)
        self.add_token(TokenType.ATTR_VALUE, self.source[self._mark_pos:end])
        self.advance()
        self.state = State.BEFORE_ATTR_NAME

    def read_attr_value_unquoted(self):
        self.mark()
        while self.pos < self.length:
            char = self.source[self.pos]
            if char in WHITESPACE or char == ">" or self.startswith("/>"):
                break
            self.advance()
        self.add_token(TokenType.ATTR_VALUE, self.source[self._mark_pos:self.pos])
        self.state = State.BEFORE_ATTR_NAME

    # Closing tags

    def read_end_tag_name(self):
        self.skip_whitespace()
        self.mark()
        while self.pos < self.length:
            char = self.source[self.pos]
            if char in WHITESPACE or char in "<>":
                break
            self.advance()
        self.add_token(TokenType.TAG_NAME, self.source[self._mark_pos:self.pos])
        self.skip_whitespace()
        if self.current() == ">":
            self.mark()
            self.advance()
            self.add_token(TokenType.TAG_CLOSE, ">")
        self.state = State.DATA


def tokenize(source):
    return Tokenizer(source).tokenize()
