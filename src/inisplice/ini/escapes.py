# -*- encoding: utf-8 -*-
# @File   : escapes.py
# @Time   : 2026/10/13 00:06:31
# @Author : Kariko Lin

"""Backslash escapes for INI values (only when a document allows them).

`escape()` writes `\\\\ \\0 \\a \\b \\n \\r \\f \\t \\v`.
`unescape()` reads those, plus `\\xHH`, `\\uHHHH` and `\\cX`.
Unknown sequences are kept as is.
"""

from string import hexdigits

__all__ = ['escape', 'unescape']

_ESCAPES = {
    '\\': '\\\\',
    '\0': '\\0',
    '\a': '\\a',
    '\b': '\\b',
    '\n': '\\n',
    '\r': '\\r',
    '\f': '\\f',
    '\t': '\\t',
    '\v': '\\v',
}
_UNESCAPES = {v[1]: k for k, v in _ESCAPES.items()}


def escape(text: str) -> str:
    return ''.join(_ESCAPES.get(c, c) for c in text)


def _unhex(digits: str) -> str:
    if not all(c in hexdigits for c in digits):
        return '?'
    return chr(int(digits, 16))


def _control(letter: str) -> str:
    # `\cA` -> 0x01, ..., `\c[` -> 0x1B.
    code = ord(letter.upper() if 'a' <= letter <= 'z' else letter) - 0x40
    return chr(code) if 0 <= code < 0x20 else '?'


def unescape(text: str) -> str:
    if '\\' not in text:
        return text
    ret: list[str] = []
    i, length = 0, len(text)
    while i < length:
        c = text[i]
        if c != '\\':
            ret.append(c)
            i += 1
            continue
        if i + 1 == length:  # dangling backslash
            ret.append(c)
            break
        c = text[i + 1]
        if c in _UNESCAPES:
            ret.append(_UNESCAPES[c])
            i += 2
        elif c == 'x' and i + 4 <= length:
            ret.append(_unhex(text[i + 2:i + 4]))
            i += 4
        elif c == 'u' and i + 6 <= length:
            ret.append(_unhex(text[i + 2:i + 6]))
            i += 6
        elif c == 'c' and i + 3 <= length:
            ret.append(_control(text[i + 2]))
            i += 3
        else:
            ret.append('\\' + c)
            i += 2
    return ''.join(ret)
