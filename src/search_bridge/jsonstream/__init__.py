"""
Streaming JSON tokenizer and positioned token cursor.
"""

from search_bridge.jsonstream.cursor import JsonTokenCursor, iter_text_chunks
from search_bridge.jsonstream.lexer import JsonLexer, Token, TokenType

__all__ = [
    "JsonLexer",
    "JsonTokenCursor",
    "Token",
    "TokenType",
    "iter_text_chunks",
]
