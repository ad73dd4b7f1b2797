## kari — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import io
from typing import Iterator

from . import tokenizer as T
from .span import Span
from .types import Expression, Number, List, String, Word, Symbol
from .errors import KariUnexpectedToken, KariIncompleteParse


_LITERALS = {T.NUMBER: Number, T.STRING: String, T.SYMBOL: Symbol, T.WORD: Word}


class Parser:
    """Lazy sequence of expressions, pulling as many tokens as each one needs.  Nested
    brackets are resolved recursively into `List` expressions.
    """

    def __init__(self, tokens: Iterator[T.Token]):
        self.tokens = tokens

    def __iter__(self):
        return self

    def __next__(self) -> Expression:
        token = next(self.tokens)
        if token.kind == T.LIST_CLOSE:
            raise KariUnexpectedToken(f"Unexpected token: `{token}`.", token=token)
        return self._convert(token)

    def _convert(self, token: T.Token) -> Expression:
        if token.kind == T.LIST_OPEN:
            items, span = self._parse_list(token.span)
            return List(items, span)
        return _LITERALS[token.kind](token.value, token.span)

    def _parse_list(self, opening: Span) -> tuple[list[Expression], Span]:
        items, span = [], opening
        while True:
            try:
                token = next(self.tokens)
            except StopIteration:
                raise KariIncompleteParse("Unterminated list: input ended before the closing `]`.", span=opening) from None

            span = span.merge(token.span)
            if token.kind == T.LIST_CLOSE:
                return items, span
            item = self._convert(token)
            span = span.merge(item.span)
            items.append(item)


def parse(source: str, filename: str | None = None) -> Parser:
    return Parser(T.Tokenizer(io.StringIO(source), filename))
