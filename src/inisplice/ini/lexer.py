# -*- encoding: utf-8 -*-
# @File   : lexer.py
# @Time   : 2026/10/12 22:17:45
# @Author : Kariko Lin

"""Splits INI text into tokens, *every* character included.

Joining `Token.text` of the whole stream gives the input back unchanged,
which is what lets `IniDocument` patch values in place.
"""

from re import compile as regex
from typing import Iterator, NamedTuple

from .consts import TokenKind

__all__ = ['Token', 'tokenize']

# one alternation, tried in order at each position.
# non-blank tokens must start and end on non-whitespace (the lookahead and
# the lookbehind), so trailing blanks fall to the next whitespace token.
_BLANK = r'[^\S\r\n]'
_TOKEN_PATTERN = regex(
    r'(?=\S)(?:'
    rf'(?P<comment>(?P<marker>[#;]+){_BLANK}*(?P<body>[^\r\n]+))|'
    rf'(?P<section>\[{_BLANK}*(?P<name>[^\]\r\n]*[^\s\]]){_BLANK}*\])|'
    rf'(?P<entry>(?P<key>[^=:\r\n\[\]]*[^\s=:\[\]]){_BLANK}*'
    rf'(?P<delimiter>[:=]){_BLANK}*(?P<value>[^#;\r\n]*))|'
    r'(?P<undefined>[^\r\n]+)'
    r')(?<=\S)|'
    r'(?P<linebreak>\r\n|\n|\r)|'
    rf'(?P<whitespace>{_BLANK}+)'
)


class Token(NamedTuple):
    kind: TokenKind
    start: int
    end: int
    text: str
    # section name, or entry key.
    name: str | None = None
    value: str | None = None
    value_start: int = -1

    @property
    def value_span(self) -> tuple[int, int]:
        """(offset, length) of an entry value in the scanned text."""
        if self.kind is not TokenKind.ENTRY:
            raise ValueError(f'{self.kind.value} token carries no value')
        return self.value_start, len(self.value or '')


def tokenize(text: str) -> Iterator[Token]:
    for m in _TOKEN_PATTERN.finditer(text):
        start, end = m.span()
        if m['comment'] is not None:
            yield Token(TokenKind.COMMENT, start, end, m[0],
                        name=m['marker'], value=m['body'])
        elif m['section'] is not None:
            yield Token(TokenKind.SECTION, start, end, m[0], name=m['name'])
        elif m['entry'] is not None:
            yield Token(TokenKind.ENTRY, start, end, m[0],
                        name=m['key'], value=m['value'],
                        value_start=m.start('value'))
        elif m['undefined'] is not None:
            yield Token(TokenKind.UNDEFINED, start, end, m[0])
        elif m['linebreak'] is not None:
            yield Token(TokenKind.LINE_BREAK, start, end, m[0])
        else:
            yield Token(TokenKind.WHITESPACE, start, end, m[0])
