# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/11/02 21:20:09
# @Author : Kariko Lin

from .consts import LineTerminator, TokenKind, TriviaKind
from .lexer import IniLexer, IniToken, IniTrivia
from .model import IniFile, IniProperty, IniSection
from .parser import IniParseError, IniParser, dumps, loads
from .proxy import IniPathProxy, join_path, split_path
from .settings import IniNotLoadedError, IniSettings
