# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2026/10/13 02:25:44
# @Author : Kariko Lin

"""INI document kept as *text*, not as a tree of dicts.

The raw text is the only truth. An `IniIndex` is derived from it for
lookups, and dropped whenever the text changes. Writes patch the text:

- an existing key gets its (last) value spliced in place;
- a new key is inserted as a `key=value` line right after the last entry of
  its section, and a new section is appended to the end of the document.

So comments, blank lines and the order of everything else survive editing.
"""

import logging
import os
from collections.abc import MutableMapping
from os import PathLike, fspath
from typing import IO, Any, Iterator

from .consts import (
    CacheState,
    Comparison,
    DEFAULT_COMPARISON,
    DEFAULT_FILENAME,
    TokenKind
)
from .escapes import escape
from .index import IniIndex
from .lexer import Token, tokenize
from .storage import write_text

__all__ = ['IniDocument', 'IniSectionProxy', 'detect_line_break']


def detect_line_break(text: str) -> str:
    r"""`\r\n` if both `\r` and `\n` show up, else whichever does.

    Falls back to `os.linesep` for single-line (or empty) text.
    """
    cr, lf = '\r' in text, '\n' in text
    if cr and lf:
        return '\r\n'
    if lf:
        return '\n'
    if cr:
        return '\r'
    return os.linesep


_BAD_KEY_CHARS = frozenset('=:[]\r\n')
_BAD_SECTION_CHARS = frozenset(']\r\n')


def _names(
    section: str | None, key: str | None, strict: bool = False
) -> tuple[str, str]:
    """Trims names the way the lexer does; `strict` rejects unwritable ones."""
    if key is None:
        raise TypeError('key must not be None')
    section, key = (section or '').strip(), key.strip()
    if not strict:
        return section, key
    if not key:
        raise ValueError('key must not be blank')
    if any(c in _BAD_KEY_CHARS for c in key):
        raise ValueError(f'key {key!r} contains one of "=:[]" or a line break')
    if any(c in _BAD_SECTION_CHARS for c in section):
        raise ValueError(
            f'section {section!r} contains "]" or a line break')
    return section, key


def _line_cut(text: str, tok: Token) -> tuple[int, int]:
    """Span to drop when removing entry `tok`: its whole line if it owns it."""
    start = tok.start
    while start > 0 and text[start - 1] in ' \t\f\v':
        start -= 1
    owns_line = start == 0 or text[start - 1] in '\r\n'
    if not owns_line:
        start = tok.start
    end = tok.end
    while end < len(text) and text[end] not in '\r\n':
        end += 1
    if owns_line:
        if text.startswith('\r\n', end):
            end += 2
        elif end < len(text):
            end += 1
    return start, end


def _insert_line(text: str, index: int, line: str, line_break: str) -> str:
    """Inserts `line` at the start of the line following `index`."""
    length = len(text)
    if index <= 0:
        index = 0
    elif index >= length:
        index = length
    else:
        while index < length and text[index] not in '\r\n':
            index += 1
        # step over exactly one line break.
        if text.startswith('\r\n', index):
            index += 2
        elif index < length:
            index += 1
    if index == length and text and text[-1] not in '\r\n':
        line = line_break + line
    return text[:index] + line + line_break + text[index:]


class IniDocument:
    """可原地修改的 INI 文本。

    读操作走索引（`IniIndex`），写操作直接改文本；
    文本每改一次，索引就作废，等下次读时再重建。

    ```python
    doc = IniDocument('[Section1]\\nKey1=Value1\\n')
    doc['Section1', 'Key1']             # 'Value1'
    doc['Section1', 'Nope', 'default']  # 'default'
    doc['Section1', 'Key2'] = 'Value2'  # inserted after Key1
    ```
    """

    def __init__(
        self,
        content: str | None = '',
        comparison: Comparison = DEFAULT_COMPARISON,
        allow_escapes: bool = False,
        filename: str | PathLike[str] | None = None
    ) -> None:
        self.__content = content or ''
        self._comparison = Comparison(comparison)
        self._allow_escapes = allow_escapes
        self._line_break = detect_line_break(self.__content)
        self._fn = fspath(filename) if filename else DEFAULT_FILENAME
        self.__state = CacheState.STALE
        self.__index: IniIndex | None = None

    @property
    def content(self) -> str:
        return self.__content

    @content.setter
    def content(self, value: str | None) -> None:
        self.__content = value or ''
        self.__state = CacheState.STALE

    @property
    def comparison(self) -> Comparison:
        return self._comparison

    @property
    def allow_escapes(self) -> bool:
        return self._allow_escapes

    @property
    def line_break(self) -> str:
        """Detected once at construction, used for every inserted line."""
        return self._line_break

    @property
    def filename(self) -> str:
        """Where `save()` goes."""
        return self._fn

    @property
    def cache_state(self) -> CacheState:
        return self.__state

    def _ensure_index(self) -> IniIndex:
        if self.__state is CacheState.FRESH and self.__index is not None:
            return self.__index
        self.__index = IniIndex.build(
            self.__content, self._comparison, self._allow_escapes)
        self.__state = CacheState.FRESH
        logging.debug(f'Rebuilt {self.__index!r}.')
        return self.__index

    # ---------- read ----------

    def get_value(
        self, section: str | None, key: str, default: str | None = None
    ) -> str | None:
        """Value of the *last* `key` in `section` (`None` for global)."""
        section, key = _names(section, key)
        values = self._ensure_index().values(section, key)
        return values[-1] if values else default

    def get_all_values(self, section: str | None, key: str) -> list[str]:
        """Every value of duplicated `key`s, in text order."""
        section, key = _names(section, key)
        return self._ensure_index().values(section, key)

    def get_keys(self, section: str | None) -> list[str]:
        return self._ensure_index().keys((section or '').strip())

    def get_sections(self) -> list[str]:
        """All section names. The global one only shows when it has keys."""
        index = self._ensure_index()
        return [
            i for i in index.sections()
            if i or index.keys(i)
        ]

    def has_section(self, section: str | None) -> bool:
        return self._ensure_index().has_section((section or '').strip())

    def section(self, name: str | None) -> 'IniSectionProxy':
        return IniSectionProxy(self, (name or '').strip())

    # ---------- write ----------

    def set_value(
        self, section: str | None, key: str, value: str | None
    ) -> None:
        """Writes `value` as the last `key` of `section`.

        Names are trimmed; a blank key, or names the lexer could not read
        back (`=:[]` in keys, `]` in sections, line breaks), raise
        `ValueError`.

        Unless the document allows escapes, the value goes in raw: a `#` or
        `;` starts a comment (the value reads back cut short there) and a
        line break splits it into lines of their own.
        """
        section, key = _names(section, key, strict=True)
        value = value or ''
        if self._allow_escapes:
            value = escape(value)

        span = self._ensure_index().last_span(section, key)
        if span is not None:
            offset, length = span
            if self.__content[offset:offset + length] == value:
                return
            logging.debug(f'[{section}] {key}: patching span {span}.')
            self.content = (
                self.__content[:offset]
                + value
                + self.__content[offset + length:])
            return

        logging.debug(f'[{section}] {key}: not indexed, scanning text.')
        self.content = self.__write_slow(section, key, value)

    def __write_slow(self, section: str, key: str, value: str) -> str:
        text = self.__content
        is_global = section == ''
        in_section = is_global
        last_entry: Token | None = None
        last_header: Token | None = None

        for tok in tokenize(text):
            if tok.kind is TokenKind.SECTION:
                # global entries can only precede the first header.
                if is_global:
                    break
                in_section = self._comparison.equals(tok.name, section)
                if in_section:
                    last_header = tok
                continue
            if not in_section or tok.kind is not TokenKind.ENTRY:
                continue
            last_entry = tok
            if self._comparison.equals(tok.name, key):
                offset, length = tok.value_span
                return text[:offset] + value + text[offset + length:]

        if last_entry is not None:
            index = last_entry.end
        elif last_header is not None:
            index = last_header.end
        elif not is_global:
            if text and text[-1] not in '\r\n':
                text += self._line_break
            if text:
                text += self._line_break
            text += f'[{section}]{self._line_break}'
            index = len(text)
        else:
            index = 0
        return _insert_line(text, index, f'{key}={value}', self._line_break)

    def remove_key(self, section: str | None, key: str) -> bool:
        """Deletes every `key` line of `section`. `False` if there was none."""
        section, key = _names(section, key)
        text = self.__content
        in_section = section == ''
        cuts: list[tuple[int, int]] = []
        for tok in tokenize(text):
            if tok.kind is TokenKind.SECTION:
                if section == '':
                    break
                in_section = self._comparison.equals(tok.name, section)
            elif (in_section and tok.kind is TokenKind.ENTRY
                    and self._comparison.equals(tok.name, key)):
                cuts.append(_line_cut(text, tok))
        if not cuts:
            return False
        for start, end in reversed(cuts):
            text = text[:start] + text[end:]
        logging.debug(f'[{section}] {key}: removed {len(cuts)} line(s).')
        self.content = text
        return True

    # ---------- persistence ----------

    def save(self, encoding: str | None = None) -> None:
        """Writes the text back to `self.filename`."""
        write_text(self._fn, self.__content, encoding)

    def save_as(
        self,
        target: str | PathLike[str] | IO[Any],
        encoding: str | None = None
    ) -> None:
        """Writes the text to another path, or a (text/binary) stream."""
        write_text(target, self.__content, encoding)

    # ---------- sugar ----------

    def __getitem__(self, item: tuple[str | None, ...]) -> str | None:
        match item:
            case (section, key):
                return self.get_value(section, key, '')
            case (section, key, default):
                return self.get_value(section, key, default)
        raise TypeError(
            'expected doc[section, key] or doc[section, key, default]')

    def __setitem__(
        self, item: tuple[str | None, str], value: str | None
    ) -> None:
        match item:
            case (section, key):
                self.set_value(section, key, value)
                return
        raise TypeError('expected doc[section, key] = value')

    def __contains__(self, item: object) -> bool:
        match item:
            case (section, str() as key):
                return self._ensure_index().has_key(*_names(section, key))
            case str() | None:
                return self.has_section(item)
        return False

    def __iter__(self) -> Iterator[str]:
        return iter(self.get_sections())

    def __str__(self) -> str:
        return self.__content

    def __repr__(self) -> str:
        return '<IniDocument "%s" { .sections = %d, .cmp = %s }>' % (
            self._fn, len(self.get_sections()), self._comparison.value)


class IniSectionProxy(MutableMapping[str, str]):
    """单个小节的字典视图。

    读写都直接落到所属的 `IniDocument` 上，本身不存任何数据。
    """

    def __init__(self, document: IniDocument, name: str) -> None:
        self._doc = document
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def __getitem__(self, key: str) -> str:
        value = self._doc.get_value(self._name, key)
        if value is None:
            raise KeyError(key)
        return value

    def __setitem__(self, key: str, value: str) -> None:
        self._doc.set_value(self._name, key, value)

    def __delitem__(self, key: str) -> None:
        if not self._doc.remove_key(self._name, key):
            raise KeyError(key)

    def __contains__(self, key: object) -> bool:
        return (self._name, key) in self._doc

    def __len__(self) -> int:
        return len(self._doc.get_keys(self._name))

    def __iter__(self) -> Iterator[str]:
        return iter(self._doc.get_keys(self._name))

    def __str__(self) -> str:
        return f'[{self._name}]'

    def __repr__(self) -> str:
        return '[%s] { .cnt = %d }' % (self._name, len(self))
