# -*- encoding: utf-8 -*-
# @File   : storage.py
# @Time   : 2026/10/13 19:33:08
# @Author : Kariko Lin

"""Raw text in and out of files and streams.

Line breaks are never translated (`newline=''`), so what gets saved is
exactly what `IniDocument.content` holds.
"""

import errno
import logging
from io import BufferedIOBase, RawIOBase
from os import PathLike, fspath, name as os_name
from os.path import abspath, isfile
from typing import IO, Any

from chardet import detect as guess_codec

from .consts import BOM_SIGNATURES, CHARDET_CONFIDENCE, DEFAULT_ENCODING

__all__ = [
    'InvalidIniPath',
    'validate_path', 'sniff_bom', 'detect_encoding',
    'read_text', 'decode_bytes', 'write_text'
]

_INVALID_PATH_CHARS = frozenset(
    '\0' if os_name != 'nt'
    else '"<>|\0' + ''.join(chr(i) for i in range(1, 32)))


class InvalidIniPath(ValueError):
    """Blank file name, or one with characters the OS rejects."""
    pass


def validate_path(
    filename: str | PathLike[str] | None,
    check_exists: bool = False
) -> str:
    """Returns the absolute path, or raises on a bad file name."""
    if filename is None:
        raise TypeError('filename must not be None')
    path = fspath(filename)
    if not path or path.isspace():
        raise InvalidIniPath(f'blank file name: {path!r}')
    if any(c in _INVALID_PATH_CHARS for c in path):
        raise InvalidIniPath(f'invalid characters in file name: {path!r}')
    if check_exists and not isfile(path):
        raise FileNotFoundError(errno.ENOENT, 'INI file not found', path)
    return abspath(path)


def sniff_bom(head: bytes) -> str | None:
    for signature, codec in BOM_SIGNATURES:
        if head.startswith(signature):
            return codec
    return None


def detect_encoding(path: str, default: str | None = None) -> str | None:
    """Picks a codec from the byte order mark of `path`.

    Without BOM, `default` is returned; `None` means the platform default.
    """
    with open(path, 'rb') as fp:
        head = fp.read(4)
    return sniff_bom(head) or default


def _strip_bom(text: str) -> str:
    # UTF-7 (and plain `utf-8` on a signed file) leave the mark in place.
    return text[1:] if text.startswith('\ufeff') else text


def _decode_guessed(raw: bytes) -> str:
    codec = guess_codec(raw)
    if (codec is None or codec['encoding'] is None
            or codec['confidence'] < CHARDET_CONFIDENCE):
        codec = {'encoding': DEFAULT_ENCODING}
    try:
        return raw.decode(codec['encoding'])
    except (UnicodeDecodeError, LookupError):
        # latin-1 maps every byte, so this one always goes through.
        return raw.decode('latin-1')


def decode_bytes(raw: bytes, encoding: str | None = None) -> str:
    """Decodes a stream's bytes: BOM first, then `encoding`, then UTF-8."""
    codec = sniff_bom(raw[:4]) or encoding or DEFAULT_ENCODING
    return _strip_bom(raw.decode(codec))


def read_text(path: str, encoding: str | None = None) -> str:
    """Reads a whole file verbatim.

    When the chosen codec (`None` for the platform default) fails,
    `chardet` gets a try on the raw bytes.
    """
    codec = encoding or detect_encoding(path)
    try:
        with open(path, 'r', encoding=codec, newline='') as fp:
            text = fp.read()
    except UnicodeDecodeError as e:
        logging.warning(
            f'Failed to decode "{path}" as {codec or "platform default"}, '
            f'guessing with chardet instead.\n  {e}')
        with open(path, 'rb') as fp:
            text = _decode_guessed(fp.read())
    logging.debug(f'Read {len(text)} chars from "{path}" ({codec}).')
    return _strip_bom(text)


def _is_binary(stream: Any) -> bool:
    return (isinstance(stream, (RawIOBase, BufferedIOBase))
            or 'b' in str(getattr(stream, 'mode', '')))


def write_text(
    target: str | PathLike[str] | IO[Any],
    content: str,
    encoding: str | None = None
) -> None:
    """Writes `content` to a path, a binary stream or a text stream.

    Streams are flushed but left open for the caller.
    """
    if target is None:
        raise TypeError('target must not be None')
    codec = encoding or DEFAULT_ENCODING
    if isinstance(target, (str, PathLike)):
        path = validate_path(target)
        with open(path, 'w', encoding=codec, newline='') as fp:
            fp.write(content)
        logging.debug(f'Saved {len(content)} chars to "{path}" ({codec}).')
        return
    if not hasattr(target, 'write'):
        raise TypeError(f'cannot write to {type(target).__name__}')
    if _is_binary(target):
        target.write(content.encode(codec))
    else:
        target.write(content)
    if hasattr(target, 'flush'):
        target.flush()
