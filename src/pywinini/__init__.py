# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/11/02 21:05:44
# @Author : Kariko Lin

import logging

from .ini import (
    IniFile, IniSection, IniProperty, LineTerminator,
    IniParseError, IniParser, loads, dumps,
    IniPathProxy, IniSettings, IniNotLoadedError
)

__all__ = [
    'IniFile', 'IniSection', 'IniProperty', 'LineTerminator',
    'IniParseError', 'IniParser', 'loads', 'dumps',
    'IniPathProxy', 'IniSettings', 'IniNotLoadedError'
]

logging.basicConfig(level=logging.INFO,
                    format='[%(asctime)s] %(levelname)s: %(message)s')
