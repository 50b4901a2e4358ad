"""
Lexical analyzer (tokenizer) for streamed JSON documents.

The lexer pulls text lazily from an iterable of chunks, so a response body
is never held in memory as a whole.
"""

import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, Iterator

from search_bridge.errors import DocumentMalformedError


class TokenType(Enum):
    """Token types for JSON documents."""

    # Structure
    START_OBJECT = auto()  # {
    END_OBJECT = auto()  # }
    START_ARRAY = auto()  # [
    END_ARRAY = auto()  # ]
    COLON = auto()
    COMMA = auto()

    # Object keys (assigned by the cursor, never by the lexer)
    FIELD_NAME = auto()

    # Scalars
    STRING = auto()
    NUMBER = auto()
    BOOLEAN = auto()
    NULL = auto()

    # Special
    EOF = auto()


SCALAR_TOKENS = frozenset({TokenType.STRING, TokenType.NUMBER, TokenType.BOOLEAN, TokenType.NULL})


@dataclass
class Token:
    """A token in a JSON document."""

    type: TokenType
    value: str
    line: int
    column: int

    @property
    def location(self) -> tuple[int, int]:
        return self.line, self.column

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"


class JsonLexer:
    """Incremental tokenizer for JSON text."""

    KEYWORDS = {
        "true": TokenType.BOOLEAN,
        "false": TokenType.BOOLEAN,
        "null": TokenType.NULL,
    }

    PUNCTUATION = {
        "{": TokenType.START_OBJECT,
        "}": TokenType.END_OBJECT,
        "[": TokenType.START_ARRAY,
        "]": TokenType.END_ARRAY,
        ":": TokenType.COLON,
        ",": TokenType.COMMA,
    }

    ESCAPES = {
        '"': '"',
        "\\": "\\",
        "/": "/",
        "b": "\b",
        "f": "\f",
        "n": "\n",
        "r": "\r",
        "t": "\t",
    }

    NUMBER_PATTERN = re.compile(r"-?(?:0|[1-9][0-9]*)(?:\.[0-9]+)?(?:[eE][+-]?[0-9]+)?")
    NUMBER_CHARS = frozenset("0123456789+-.eE")
    DIGITS = frozenset("0123456789")
    HEX_PATTERN = re.compile(r"[0-9a-fA-F]{4}")
    WHITESPACE = frozenset(" \t\r\n")

    def __init__(self, chunks: Iterable[str]):
        self._chunks = iter(chunks)
        self._exhausted = False
        self.text = ""
        self.pos = 0
        self.line = 1
        self.column = 1

    def tokens(self) -> Iterator[Token]:
        """Yield tokens until (and including) EOF."""
        while True:
            token = self.next_token()
            yield token
            if token.type == TokenType.EOF:
                return

    def next_token(self) -> Token:
        """Read the next token from the input."""
        self._skip_whitespace()
        char = self._peek()
        line, column = self.line, self.column

        if char == "":
            return Token(TokenType.EOF, "", line, column)

        token_type = self.PUNCTUATION.get(char)
        if token_type is not None:
            self._advance()
            return Token(token_type, char, line, column)

        if char == '"':
            return Token(TokenType.STRING, self._read_string(), line, column)

        if char == "-" or char in self.DIGITS:
            return Token(TokenType.NUMBER, self._read_number(), line, column)

        if char.isalpha():
            word = self._read_word()
            token_type = self.KEYWORDS.get(word)
            if token_type is None:
                raise DocumentMalformedError("value", word, (line, column))
            return Token(token_type, word, line, column)

        raise DocumentMalformedError("value", char, (line, column))

    # --- Input buffering ---

    def _fill(self) -> bool:
        """Pull the next non-empty chunk, dropping consumed text. False at end of input."""
        while not self._exhausted:
            try:
                chunk = next(self._chunks, None)
            except UnicodeDecodeError as exc:
                raise DocumentMalformedError(
                    "UTF-8 text", f"undecodable bytes ({exc.reason})", (self.line, self.column)
                ) from exc
            if chunk is None:
                self._exhausted = True
                return False
            if chunk:
                self.text = self.text[self.pos :] + chunk
                self.pos = 0
                return True
        return False

    def _peek(self) -> str:
        """Return the current character, or an empty string at end of input."""
        if self.pos >= len(self.text) and not self._fill():
            return ""
        return self.text[self.pos]

    def _advance(self) -> str:
        char = self._peek()
        if char:
            self.pos += 1
            if char == "\n":
                self.line += 1
                self.column = 1
            else:
                self.column += 1
        return char

    def _skip_whitespace(self):
        while self._peek() in self.WHITESPACE:
            self._advance()

    # --- Token readers ---

    def _read_string(self) -> str:
        """Read a string literal; the cursor sits on the opening quote."""
        start = (self.line, self.column)
        self._advance()

        parts: list[str] = []
        has_unicode_escape = False
        while True:
            position = (self.line, self.column)
            char = self._advance()
            if char == "":
                raise DocumentMalformedError("end of string", "EOF", start)
            if char == '"':
                break
            if char < " ":
                raise DocumentMalformedError("escaped control character", repr(char), position)
            if char != "\\":
                parts.append(char)
                continue

            escape = self._advance()
            if escape == "u":
                digits = "".join(self._advance() for _ in range(4))
                if not self.HEX_PATTERN.fullmatch(digits):
                    raise DocumentMalformedError(
                        "unicode escape", f"\\u{digits}", (self.line, self.column)
                    )
                parts.append(chr(int(digits, 16)))
                has_unicode_escape = True
            elif escape in self.ESCAPES:
                parts.append(self.ESCAPES[escape])
            else:
                raise DocumentMalformedError("escape sequence", f"\\{escape}", (self.line, self.column))

        value = "".join(parts)
        if has_unicode_escape:
            # Recombine surrogate pairs written as two \u escapes
            value = value.encode("utf-16-le", "surrogatepass").decode("utf-16-le", "surrogatepass")
        return value

    def _read_number(self) -> str:
        start = (self.line, self.column)
        chars = []
        while self._peek() in self.NUMBER_CHARS:
            chars.append(self._advance())

        value = "".join(chars)
        if not self.NUMBER_PATTERN.fullmatch(value):
            raise DocumentMalformedError("number", value, start)
        return value

    def _read_word(self) -> str:
        chars = []
        while self._peek() != "" and self._peek().isalnum():
            chars.append(self._advance())
        return "".join(chars)
