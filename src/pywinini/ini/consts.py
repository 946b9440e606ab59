# -*- encoding: utf-8 -*-
# @File   : consts.py
# @Time   : 2024/11/02 21:26:05
# @Author : Kariko Lin

from enum import Enum

# DOS-era hard end of file (Ctrl+Z).
EOF_MARKER = '\x1a'

COMMENT_PREFIX = ';'
BLANKS = ' \t'


class LineTerminator(str, Enum):
    NONE = ''  # last line of input, nothing follows
    CR = '\r'
    LF = '\n'
    CRLF = '\r\n'


class TriviaKind(str, Enum):
    COMMENT = 'comment'
    WHITESPACE = 'whitespace'


class TokenKind(str, Enum):
    SECTION = 'section'
    PROPERTY = 'property'
    INVALID = 'invalid'
    END_OF_FILE = 'eof'
