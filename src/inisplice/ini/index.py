# -*- encoding: utf-8 -*-
# @File   : index.py
# @Time   : 2026/10/13 01:12:50
# @Author : Kariko Lin

"""Lookup tables derived from one scan of INI text.

Nothing here is ever patched: once the text changes, drop the index and
build a new one.
"""

import logging
from typing import Iterator

from .consts import Comparison, TokenKind
from .escapes import unescape
from .lexer import tokenize

__all__ = ['IniIndex', 'Span']

Span = tuple[int, int]


class IniIndex:
    """Sections, keys, values and value spans of a scanned text.

    All tables are keyed by *normalized* names (see `Comparison`),
    while the first spelling met in the text is kept for listing.
    The global section `""` is always present.
    """

    def __init__(self, comparison: Comparison) -> None:
        self._cmp = comparison
        # normalized -> original
        self.__sections: dict[str, str] = {'': ''}
        self.__keys: dict[str, dict[str, str]] = {}
        self.__values: dict[str, dict[str, list[str]]] = {}
        self.__spans: dict[str, dict[str, list[Span]]] = {}

    @classmethod
    def build(
        cls, text: str,
        comparison: Comparison,
        allow_escapes: bool = False
    ) -> 'IniIndex':
        ret = cls(comparison)
        section = ''
        undefined = 0
        for tok in tokenize(text):
            match tok.kind:
                case TokenKind.SECTION:
                    section = tok.name
                    ret.__sections.setdefault(comparison.normalize(section),
                                              section)
                case TokenKind.ENTRY:
                    value = unescape(tok.value) if allow_escapes else tok.value
                    ret._add(section, tok.name, value, tok.value_span)
                case TokenKind.UNDEFINED:
                    undefined += 1
        if undefined:
            logging.debug(f'{undefined} unrecognized line(s) left unindexed.')
        return ret

    def _add(self, section: str, key: str, value: str, span: Span) -> None:
        sect, k = self._cmp.normalize(section), self._cmp.normalize(key)
        self.__keys.setdefault(sect, {}).setdefault(k, key)
        self.__values.setdefault(sect, {}).setdefault(k, []).append(value)
        self.__spans.setdefault(sect, {}).setdefault(k, []).append(span)

    def has_section(self, section: str) -> bool:
        return self._cmp.normalize(section) in self.__sections

    def has_key(self, section: str, key: str) -> bool:
        keys = self.__keys.get(self._cmp.normalize(section), {})
        return self._cmp.normalize(key) in keys

    def sections(self) -> Iterator[str]:
        return iter(self.__sections.values())

    def keys(self, section: str) -> list[str]:
        return list(self.__keys.get(self._cmp.normalize(section), {}).values())

    def values(self, section: str, key: str) -> list[str]:
        """Every value of `key` in the order they appear."""
        sect = self.__values.get(self._cmp.normalize(section), {})
        return list(sect.get(self._cmp.normalize(key), ()))

    def spans(self, section: str, key: str) -> list[Span]:
        sect = self.__spans.get(self._cmp.normalize(section), {})
        return list(sect.get(self._cmp.normalize(key), ()))

    def last_span(self, section: str, key: str) -> Span | None:
        spans = self.spans(section, key)
        return spans[-1] if spans else None

    def __repr__(self) -> str:
        return 'IniIndex { .sections = %d, .entries = %d }' % (
            len(self.__sections),
            sum(len(i) for s in self.__spans.values() for i in s.values()))
