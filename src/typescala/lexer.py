## typescala — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import re
import functools
from dataclasses import dataclass

import lark
from .errors import TypescalaSyntaxError, TypescalaIncompleteParse


# The rule only exists so that lark keeps every terminal; tokenizing goes through `Lark.lex`.
GRAMMAR = r"""
start: _token*
_token: NUMBER | STRING | NAME | NEWLINE
      | ELLIPSIS | RANGE | DOT | ARROW | EQUALS | ASSIGN
      | LTE | GTE | LT | GT | PLUS | MINUS | STAR | SLASH
      | COMMA | LPAREN | RPAREN | LBRACE | RBRACE

// COMMENTS
COMMENT: /\/\/[^\n]*/

// TOKENS
NEWLINE: /\n/
NUMBER: /\d+(?:\.\d+)?/
STRING: /"(?:[^"\\]|\\.)*"/s
NAME: /[A-Za-z_][A-Za-z0-9_]*/
ELLIPSIS: "..."
RANGE: ".."
DOT: "."
ARROW: "=>"
EQUALS: "=="
ASSIGN: "="
LTE: "<="
GTE: ">="
LT: "<"
GT: ">"
PLUS: "+"
MINUS: "-"
STAR: "*"
SLASH: "/"
COMMA: ","
LPAREN: "("
RPAREN: ")"
LBRACE: "{"
RBRACE: "}"

// WHITESPACE
SPACE: /[ \t\r]+/
%ignore SPACE
%ignore COMMENT
"""


KEYWORDS = frozenset({'let', 'if', 'else', 'true', 'false', 'null', 'for', 'in'})

# Punctuation operators become identifier tokens carrying the method name they dispatch to.
OPERATOR_METHODS: dict[str, str] = {
    'PLUS': 'plus', 'MINUS': 'minus', 'STAR': 'times', 'SLASH': 'dividedBy',
    'LT': 'lessThan', 'LTE': 'lessThanOrEqual', 'GT': 'greaterThan', 'GTE': 'greaterThanOrEqual',
    'EQUALS': 'equals', 'RANGE': 'rangeExclusive', 'ELLIPSIS': 'rangeInclusive',
}

PUNCTUATION: dict[str, str] = {
    'LPAREN': 'lparen', 'RPAREN': 'rparen', 'LBRACE': 'lbrace', 'RBRACE': 'rbrace',
    'COMMA': 'comma', 'ASSIGN': 'assign', 'ARROW': 'arrow', 'DOT': 'dot', 'NEWLINE': 'newline',
}

_ESCAPES = {'n': '\n', 't': '\t'}
_ESCAPE_RE = re.compile(r'\\(.)', re.S)


@dataclass(frozen=True)
class Token:
    kind: str                   # number, string, identifier, newline, eof, a keyword, or a punctuation name
    value: str | None
    position: int
    end: int
    line: int = 1
    column: int = 1

    def describe(self) -> str:
        if self.kind in ('identifier', 'number'):
            return f"{self.kind} `{self.value}`"
        if self.kind == 'string':
            return 'string literal'
        return f"`{self.kind}`"


@functools.cache
def _build_lexer() -> lark.Lark:
    return lark.Lark(GRAMMAR, parser='lalr', lexer='basic')


def _unescape(body: str) -> str:
    return _ESCAPE_RE.sub(lambda m: _ESCAPES.get(m.group(1), m.group(1)), body)


def _convert(tok: lark.Token) -> Token:
    start = tok.start_pos
    where = dict(position=start, end=start + len(tok.value), line=tok.line, column=tok.column)
    match tok.type:
        case 'NAME':
            kind = tok.value if tok.value in KEYWORDS else 'identifier'
            return Token(kind, str(tok.value), **where)
        case 'NUMBER':
            return Token('number', str(tok.value), **where)
        case 'STRING':
            return Token('string', _unescape(tok.value[1:-1]), **where)
        case op if op in OPERATOR_METHODS:
            return Token('identifier', OPERATOR_METHODS[op], **where)
        case punct:
            return Token(PUNCTUATION[punct], None, **where)


def tokenize(source: str, filename: str | None = None) -> list[Token]:
    """Turn source text into a flat token list that always ends with an `eof` token."""
    tokens: list[Token] = []
    try:
        for tok in _build_lexer().lex(source):
            tokens.append(_convert(tok))
    except lark.exceptions.UnexpectedCharacters as exc:
        char = source[exc.pos_in_stream]
        where = dict(kind='character', token=char, position=exc.pos_in_stream, end=exc.pos_in_stream + 1,
                     line=exc.line, column=exc.column, filename=filename)
        if char == '"':
            raise TypescalaIncompleteParse(f"Unterminated string literal at line {exc.line}, column {exc.column}.", **where) from None
        raise TypescalaSyntaxError(f"Unexpected character `{char}` at line {exc.line}, column {exc.column}.", **where) from None

    line = source.count('\n') + 1
    column = len(source) - (source.rfind('\n') + 1) + 1
    tokens.append(Token('eof', None, len(source), len(source), line, column))
    return tokens
