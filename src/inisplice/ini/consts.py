# -*- encoding: utf-8 -*-
# @File   : consts.py
# @Time   : 2026/10/12 21:52:03
# @Author : Kariko Lin

from enum import Enum


class TokenKind(str, Enum):
    COMMENT = 'comment'
    SECTION = 'section'
    ENTRY = 'entry'
    UNDEFINED = 'undefined'
    LINE_BREAK = 'linebreak'
    WHITESPACE = 'whitespace'


class Comparison(str, Enum):
    """How section and key names are compared."""
    ORDINAL = 'ordinal'
    IGNORE_CASE = 'ignore_case'

    def normalize(self, name: str) -> str:
        if self is Comparison.IGNORE_CASE:
            return name.casefold()
        return name

    def equals(self, a: str, b: str) -> bool:
        return self.normalize(a) == self.normalize(b)


class CacheState(str, Enum):
    FRESH = 'fresh'
    STALE = 'stale'


# longer signatures first, `FF FE 00 00` would otherwise pass for UTF-16.
BOM_SIGNATURES: tuple[tuple[bytes, str], ...] = (
    (b'\xff\xfe\x00\x00', 'utf-32'),
    (b'\x00\x00\xfe\xff', 'utf-32'),
    (b'\x2b\x2f\x76', 'utf-7'),
    (b'\xef\xbb\xbf', 'utf-8-sig'),
    (b'\xff\xfe', 'utf-16'),
    (b'\xfe\xff', 'utf-16'),
)

DEFAULT_COMPARISON = Comparison.IGNORE_CASE
DEFAULT_ENCODING = 'utf-8'
DEFAULT_FILENAME = 'inisplice.ini'
CHARDET_CONFIDENCE = 0.8
