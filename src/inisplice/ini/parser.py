# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2026/10/13 20:04:57
# @Author : Kariko Lin

"""Getting an `IniDocument` out of files, streams and strings.

A path gets its codec from the BOM (UTF-7/8/16/32), then from the caller,
then from the platform. If that still fails to decode, `chardet` guesses.
Streams are read as they are: text streams as text, binary ones through
their BOM or the given `encoding` (UTF-8 by default).
"""

import logging
from os import PathLike
from typing import IO, Any

from ..abstract import FileHandler
from .consts import Comparison, DEFAULT_COMPARISON
from .model import IniDocument
from .storage import (
    decode_bytes,
    detect_encoding,
    read_text,
    validate_path,
    write_text
)

__all__ = ['IniParser', 'load', 'loads', 'load_or_create']


class IniParser(FileHandler[IniDocument]):
    def __init__(
        self,
        filename: str | PathLike[str],
        encoding: str | None = None,
        *,
        comparison: Comparison = DEFAULT_COMPARISON,
        allow_escapes: bool = False
    ) -> None:
        super().__init__(validate_path(filename))
        self._codec = encoding
        self._cmp = comparison
        self._escapes = allow_escapes

    @property
    def encoding(self) -> str | None:
        """BOM 优先；没有 BOM 时才用构造时给的编码。"""
        return detect_encoding(self._fn, self._codec)

    def read(self) -> IniDocument:
        """读取`IniParser`实例指定的文件。

        文件不存在时抛`FileNotFoundError`，需要自动创建请用`load_or_create()`。
        """
        validate_path(self._fn, check_exists=True)
        return IniDocument(
            read_text(self._fn, self.encoding),
            self._cmp, self._escapes, self._fn)

    def touch(self) -> None:
        """Creates an empty file if there's none yet."""
        try:
            with open(self._fn, 'x', encoding=self._codec):
                logging.debug(f'Created empty INI "{self._fn}".')
        except FileExistsError:
            pass

    def write(self, instance: IniDocument) -> None:
        """原样写出文档文本，不做任何重新格式化。"""
        write_text(self._fn, instance.content, self._codec)

    def __str__(self) -> str:
        return "INI file: " + super().__str__() + f"({self._codec})"


def loads(
    content: str,
    comparison: Comparison = DEFAULT_COMPARISON,
    allow_escapes: bool = False
) -> IniDocument:
    return IniDocument(content, comparison, allow_escapes)


def load(
    source: str | PathLike[str] | IO[Any],
    encoding: str | None = None,
    *,
    comparison: Comparison = DEFAULT_COMPARISON,
    allow_escapes: bool = False
) -> IniDocument:
    """Loads from a file path, or from an opened text/binary stream."""
    if source is None:
        raise TypeError('source must not be None')
    if isinstance(source, (str, PathLike)):
        return IniParser(
            source, encoding,
            comparison=comparison, allow_escapes=allow_escapes
        ).read()
    if not hasattr(source, 'read'):
        raise TypeError(f'cannot read from {type(source).__name__}')
    data = source.read()
    if isinstance(data, (bytes, bytearray)):
        data = decode_bytes(bytes(data), encoding)
    return IniDocument(data, comparison, allow_escapes)


def load_or_create(
    filename: str | PathLike[str],
    encoding: str | None = None,
    *,
    comparison: Comparison = DEFAULT_COMPARISON,
    allow_escapes: bool = False
) -> IniDocument:
    """Like `load()`, but a missing file is created (empty) first."""
    parser = IniParser(
        filename, encoding,
        comparison=comparison, allow_escapes=allow_escapes)
    parser.touch()
    return parser.read()
