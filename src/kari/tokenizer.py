## kari — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import ast
import re
from dataclasses import dataclass
from typing import TextIO

import lark

from .span import Position, Span
from .types import NUMBER_MAX
from .errors import KariTokenizerError


GRAMMAR = r"""start: (LSQB | RSQB | STRING | BAD_STRING | SYMBOL | WORD)*

// TOKENS
LSQB: "["
RSQB: "]"
STRING.3: /"(?:[^"\\\n]|\\.)*"/
BAD_STRING.2: /"(?:[^"\\\n]|\\.)*\\?/
SYMBOL.1: /:[^\s\[\]"]+/
WORD: /[^\s\[\]"]+/

// WHITESPACE
WS: /\s+/
%ignore WS
"""

_LEXER = lark.Lark(GRAMMAR, parser="lalr", lexer="basic")
_NUMBER = re.compile(r'\+?[0-9]+')


LIST_OPEN, LIST_CLOSE, NUMBER, STRING, SYMBOL, WORD = 'ListOpen', 'ListClose', 'Number', 'String', 'Symbol', 'Word'


@dataclass
class Token:
    kind: str
    value: object
    span: Span

    def __str__(self):
        match self.kind:
            case 'ListOpen': return '['
            case 'ListClose': return ']'
            case 'Symbol': return f":{self.value}"
            case _: return str(self.value)


def classify_word(word: str) -> tuple[str, object]:
    """Numeric literals are recognized here, at the lexical level: `42` is a number, `42x` a word.
    Only words that fit a 32-bit unsigned number qualify, so `4294967296` stays a word.
    """
    if _NUMBER.fullmatch(word) and (value := int(word)) <= NUMBER_MAX:
        return NUMBER, value
    return WORD, word


class Tokenizer:
    """Lazy sequence of tokens scanned from a text stream.  The stream is pulled one line at a
    time, since no token can span a newline, and exhausting the tokens is the normal
    end-of-stream signal.  Positions carry the byte offset of the UTF-8 encoded source.
    """

    def __init__(self, stream: TextIO, name: str | None = None):
        self.stream = stream
        self.name = name
        self._tokens = iter(())
        self._text = ""
        self._line = -1
        self._line_index = 0
        self._next_line_index = 0

    def __iter__(self):
        return self

    def __next__(self) -> Token:
        while True:
            try:
                tok = next(self._tokens)
            except StopIteration:
                self._read_line()
                continue
            except lark.exceptions.UnexpectedCharacters as exc:
                position = self._position(exc.pos_in_stream)
                raise KariTokenizerError(f"Unexpected character `{exc.char}`.", span=Span.at(position, self.name)) from None
            return self._convert(tok)

    def _read_line(self) -> None:
        line = self.stream.readline()
        if not line:
            raise StopIteration
        self._text, self._line = line, self._line + 1
        self._line_index = self._next_line_index
        self._next_line_index += len(line.encode('utf-8'))
        self._tokens = _LEXER.lex(line)

    def _position(self, column: int) -> Position:
        return Position(self._line, column, self._line_index + len(self._text[:column].encode('utf-8')))

    def _convert(self, tok: lark.Token) -> Token:
        # Tokens end on the line they start, the end position is their last character.
        span = Span(self._position(tok.start_pos), self._position(tok.start_pos + len(tok.value) - 1), self.name)
        match tok.type:
            case 'LSQB':
                return Token(LIST_OPEN, None, span)
            case 'RSQB':
                return Token(LIST_CLOSE, None, span)
            case 'STRING':
                return Token(STRING, self._decode_string(tok.value, span), span)
            case 'BAD_STRING':
                raise KariTokenizerError("Unterminated string literal.", span=span)
            case 'SYMBOL':
                return Token(SYMBOL, tok.value[1:], span)
            case 'WORD':
                return Token(*classify_word(tok.value), span)
        raise NotImplementedError(f"Unexpected token type `{tok.type}` from lexer.")

    def _decode_string(self, literal: str, span: Span) -> str:
        try:
            return ast.literal_eval(literal)
        except (SyntaxError, ValueError) as exc:
            raise KariTokenizerError(f"Malformed string literal {literal}.", span=span) from exc


def tokenize(stream: TextIO, name: str | None = None) -> Tokenizer:
    return Tokenizer(stream, name)
