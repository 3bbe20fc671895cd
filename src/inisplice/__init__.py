# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2026/10/13 20:33:40
# @Author : Kariko Lin

import logging

from .ini import (
    Comparison,
    IniDocument,
    IniParser,
    IniSectionProxy,
    InvalidIniPath,
    load,
    load_or_create,
    loads
)

__all__ = [
    'IniDocument', 'IniSectionProxy', 'IniParser', 'Comparison',
    'InvalidIniPath', 'load', 'loads', 'load_or_create'
]

logging.basicConfig(level=logging.INFO,
                    format='[%(asctime)s] %(levelname)s: %(message)s')
