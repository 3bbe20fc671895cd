# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2026/10/13 20:31:16
# @Author : Kariko Lin

from .consts import CacheState, Comparison, TokenKind
from .escapes import escape, unescape
from .index import IniIndex
from .lexer import Token, tokenize
from .model import IniDocument, IniSectionProxy, detect_line_break
from .parser import IniParser, load, load_or_create, loads
from .storage import InvalidIniPath, detect_encoding
