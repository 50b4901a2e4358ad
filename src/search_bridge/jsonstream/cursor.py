"""
Positioned token cursor over a streamed JSON document.

The cursor turns lexer output into a structural token stream (object keys
become FIELD_NAME tokens, colons and commas are checked and dropped) and
offers the positioned lookups the response decoders rely on.
"""

import codecs
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Callable, Iterable, Iterator, TypeVar

from search_bridge.errors import DocumentMalformedError, RequiredFieldMissingError
from search_bridge.jsonstream.lexer import SCALAR_TOKENS, JsonLexer, Token, TokenType

T = TypeVar("T")

DEFAULT_CHUNK_SIZE = 8192


class _Expect(Enum):
    """What the innermost open container accepts next."""

    KEY_OR_END = auto()
    VALUE = auto()
    VALUE_OR_END = auto()
    COMMA_OR_END = auto()


@dataclass
class _Frame:
    kind: TokenType  # START_OBJECT or START_ARRAY
    expect: _Expect


def iter_text_chunks(source: Any, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Iterator[str]:
    """Normalize a response body into an iterator of text chunks.

    Accepts str, bytes-like objects, file objects opened in text or binary
    mode, and iterables of str or bytes chunks. Bytes are decoded as UTF-8
    incrementally, so multi-byte characters may straddle chunk boundaries.
    """
    if isinstance(source, str):
        yield source
        return

    if isinstance(source, (bytes, bytearray, memoryview)):
        chunks: Iterable[Any] = [bytes(source)]
    elif hasattr(source, "read"):
        chunks = iter(lambda: source.read(chunk_size), source.read(0))
    else:
        chunks = source

    decoder = codecs.getincrementaldecoder("utf-8-sig")()
    for chunk in chunks:
        if isinstance(chunk, str):
            yield chunk
        else:
            yield decoder.decode(bytes(chunk))
    yield decoder.decode(b"", final=True)


class JsonTokenCursor:
    """Streaming cursor over one JSON document.

    ``current_token`` is the token most recently read by ``next_token()``.
    The cursor owns its source: ``close()`` (or leaving the ``with`` block)
    closes it when the source supports closing.
    """

    def __init__(self, source: Any, chunk_size: int = DEFAULT_CHUNK_SIZE):
        self._source = source
        self._lexer = JsonLexer(iter_text_chunks(source, chunk_size))
        self._stack: list[_Frame] = []
        self._root_started = False
        self._current: Token | None = None
        self._closed = False

    def __enter__(self) -> "JsonTokenCursor":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def close(self) -> None:
        """Release the underlying source. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        close = getattr(self._source, "close", None)
        if callable(close):
            close()

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def current_token(self) -> Token | None:
        return self._current

    @property
    def depth(self) -> int:
        """Number of containers currently open."""
        return len(self._stack)

    # --- Token stream ---

    def next_token(self) -> Token:
        """Advance to the next structural token and return it.

        At the end of input an EOF token is returned rather than raised, so
        callers can decide whether a truncated document means a missing field
        or a malformed one.
        """
        raw = self._lexer.next_token()
        if raw.type == TokenType.EOF:
            return self._set_current(raw)

        if not self._stack:
            if self._root_started:
                raise DocumentMalformedError(TokenType.EOF.name, raw.type.name, raw.location)
            self._root_started = True
            return self._begin_value(raw)

        frame = self._stack[-1]
        if frame.kind == TokenType.START_OBJECT:
            return self._next_in_object(frame, raw)
        return self._next_in_array(frame, raw)

    def _next_in_object(self, frame: _Frame, raw: Token) -> Token:
        if frame.expect == _Expect.VALUE:
            frame.expect = _Expect.COMMA_OR_END
            return self._begin_value(raw)

        if raw.type == TokenType.END_OBJECT:
            return self._end_container(raw)

        if frame.expect == _Expect.COMMA_OR_END:
            if raw.type != TokenType.COMMA:
                raise DocumentMalformedError("COMMA or END_OBJECT", raw.type.name, raw.location)
            raw = self._lexer.next_token()

        if raw.type != TokenType.STRING:
            raise DocumentMalformedError(TokenType.FIELD_NAME.name, raw.type.name, raw.location)

        colon = self._lexer.next_token()
        if colon.type != TokenType.COLON:
            raise DocumentMalformedError(TokenType.COLON.name, colon.type.name, colon.location)

        frame.expect = _Expect.VALUE
        return self._set_current(Token(TokenType.FIELD_NAME, raw.value, raw.line, raw.column))

    def _next_in_array(self, frame: _Frame, raw: Token) -> Token:
        if raw.type == TokenType.END_ARRAY:
            return self._end_container(raw)

        if frame.expect == _Expect.COMMA_OR_END:
            if raw.type != TokenType.COMMA:
                raise DocumentMalformedError("COMMA or END_ARRAY", raw.type.name, raw.location)
            raw = self._lexer.next_token()

        frame.expect = _Expect.COMMA_OR_END
        return self._begin_value(raw)

    def _begin_value(self, raw: Token) -> Token:
        if raw.type == TokenType.START_OBJECT:
            self._stack.append(_Frame(TokenType.START_OBJECT, _Expect.KEY_OR_END))
        elif raw.type == TokenType.START_ARRAY:
            self._stack.append(_Frame(TokenType.START_ARRAY, _Expect.VALUE_OR_END))
        elif raw.type not in SCALAR_TOKENS:
            raise DocumentMalformedError("value", raw.type.name, raw.location)
        return self._set_current(raw)

    def _end_container(self, raw: Token) -> Token:
        self._stack.pop()
        return self._set_current(raw)

    def _set_current(self, token: Token) -> Token:
        self._current = token
        return token

    # --- Positioned operations ---

    def expect(self, expected: TokenType, token: Token | None = None) -> Token:
        """Require ``token`` (default: the current token) to be of type ``expected``."""
        token = token if token is not None else self._current
        if token is None:
            raise DocumentMalformedError(expected.name, "nothing (cursor not started)")
        if token.type != expected:
            raise DocumentMalformedError(expected.name, token.type.name, token.location)
        return token

    def move_to_first_token(self) -> Token:
        """Advance to the first token of the document if not already there."""
        if self._current is None:
            return self.next_token()
        return self._current

    def skip_value(self) -> None:
        """Skip exactly one value of unknown shape starting at the current token.

        Afterwards the current token is the value's last token (the value
        itself for scalars, the closing token for containers), so the next
        call to ``next_token()`` returns whatever follows the value.
        """
        token = self._current
        if token is None or token.type not in SCALAR_TOKENS | {
            TokenType.START_OBJECT,
            TokenType.START_ARRAY,
        }:
            raise DocumentMalformedError(
                "value",
                token.type.name if token else "nothing",
                token.location if token else None,
            )

        if token.type == TokenType.START_OBJECT:
            while True:
                inner = self.next_token()
                if inner.type == TokenType.END_OBJECT:
                    return
                self._require_not_eof(inner, TokenType.END_OBJECT.name)
                self.next_token()
                self.skip_value()
        elif token.type == TokenType.START_ARRAY:
            while True:
                inner = self.next_token()
                if inner.type == TokenType.END_ARRAY:
                    return
                self._require_not_eof(inner, TokenType.END_ARRAY.name)
                self.skip_value()

    def position_after_field(self, field: str, provider: str = "OpenAI-compatible") -> Token:
        """Scan the current object for ``field`` and stop on the first token of its value.

        Sibling fields and their values are skipped without being
        materialized. Raises RequiredFieldMissingError when the object closes
        or the document ends first.
        """
        while True:
            token = self.next_token()
            if token.type in (TokenType.END_OBJECT, TokenType.EOF):
                raise RequiredFieldMissingError(field, provider)
            self.expect(TokenType.FIELD_NAME, token)
            value = self.next_token()
            if token.value == field:
                self._require_not_eof(value, "value")
                return value
            self.skip_value()

    def consume_until_object_end(self) -> None:
        """Skip the remaining fields of the current object, stopping on its END_OBJECT."""
        while True:
            token = self.next_token()
            if token.type == TokenType.END_OBJECT:
                return
            self._require_not_eof(token, TokenType.END_OBJECT.name)
            self.expect(TokenType.FIELD_NAME, token)
            self.next_token()
            self.skip_value()

    def parse_list(self, item_parser: Callable[["JsonTokenCursor"], T]) -> list[T]:
        """Parse the array starting at the current token, one ``item_parser`` call per element.

        ``item_parser`` is called with the cursor on the element's first
        token and must leave it on the element's last token.
        """
        self.expect(TokenType.START_ARRAY)
        items: list[T] = []
        while True:
            token = self.next_token()
            if token.type == TokenType.END_ARRAY:
                return items
            self._require_not_eof(token, TokenType.END_ARRAY.name)
            items.append(item_parser(self))

    def _require_not_eof(self, token: Token, expected: str) -> None:
        if token.type == TokenType.EOF:
            raise DocumentMalformedError(expected, TokenType.EOF.name, token.location)
