# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2024/11/03 01:05:29
# @Author : Kariko Lin

"""Parse INI text into an `IniFile`, and print it back.

The law this module keeps:

    ```python
    dumps(loads(text)) == text  # for any text without an invalid line
    ```

That means *nothing* gets normalized: spaces around `=`, the line break
style of every single line, comments, blank lines, and even the
`\\x1a` at the very end of some old files.
"""

import logging
from io import StringIO, TextIOBase
from os import PathLike
from os.path import exists
from warnings import warn

import chardet

from ..abstract import FileHandler
from .consts import LineTerminator, TokenKind
from .lexer import IniLexer, IniTrivia
from .model import IniFile, IniProperty, IniSection

__all__ = ['IniParseError', 'loads', 'dumps', 'IniParser']

_BOM = '\ufeff'


class IniParseError(ValueError):
    """A line is neither trivia, a `[section]` header nor a `key=value`."""

    def __init__(self, lineno: int, lexeme: str) -> None:
        super().__init__(f'line {lineno}: unable to parse {lexeme!r}')
        self.lineno = lineno
        self.lexeme = lexeme


def loads(text: str) -> IniFile:
    """Parse decoded INI text. All or nothing: raises `IniParseError`
    on the first bad line, and no partial document is returned."""
    ret = IniFile()
    # INI is a Windows format after all.
    default_lt = LineTerminator.CRLF
    this_sect: IniSection | None = None
    for token in IniLexer(text):
        match token.kind:
            case TokenKind.END_OF_FILE:
                ret.eof_trivia = token.leading_trivia
                ret.eof_lexeme = token.lexeme
                break
            case TokenKind.INVALID:
                raise IniParseError(token.lineno, token.lexeme)
            case TokenKind.SECTION:
                this_sect = IniSection.from_lexeme(
                    token.lexeme, token.line_terminator,
                    token.leading_trivia)
                if this_sect.name in ret:
                    # not merged, see DESIGN.md.
                    warn(f'第 {token.lineno} 行：小节 {this_sect} 重复出现，'
                         '将作为独立的小节保留。')
                ret.sections.append(this_sect)
            case TokenKind.PROPERTY:
                prop = IniProperty.from_lexeme(
                    token.lexeme, token.line_terminator,
                    token.leading_trivia)
                if this_sect is None:
                    ret.properties.append(prop)
                else:
                    this_sect.properties.append(prop)
        # the last explicit one wins.
        if token.line_terminator != LineTerminator.NONE:
            default_lt = token.line_terminator
    ret.default_line_terminator = default_lt
    return ret


def _dump_trivia(buf: list[str], trivia: list[IniTrivia]) -> None:
    buf.extend(str(i) for i in trivia)


def _dump_property(buf: list[str], doc: IniFile, prop: IniProperty) -> None:
    _dump_trivia(buf, prop.leading_trivia)
    buf.append(str(prop))
    buf.append(doc.resolve(prop.line_terminator).value)
    _dump_trivia(buf, prop.trailing_trivia)


def dumps(doc: IniFile) -> str:
    """Serialize `doc`. Line terminators left as `None` are resolved to
    `doc.default_line_terminator` right here."""
    buf: list[str] = []
    for prop in doc.properties:
        _dump_property(buf, doc, prop)
    for sect in doc.sections:
        _dump_trivia(buf, sect.leading_trivia)
        buf.append(sect.header)
        buf.append(doc.resolve(sect.line_terminator).value)
        for prop in sect.properties:
            _dump_property(buf, doc, prop)
        _dump_trivia(buf, sect.trailing_trivia)
    _dump_trivia(buf, doc.eof_trivia)
    buf.append(doc.eof_lexeme)
    return ''.join(buf)


class IniParser(FileHandler[IniFile]):
    """Reads and writes one INI file on disk.

    Line breaks are never translated (`newline=''` both ways),
    or the round trip would be lost at the disk boundary.
    """

    def __init__(
        self, filename: str | PathLike[str], encoding: str | None = None
    ) -> None:
        super().__init__(filename)
        self._codec = encoding

    @property
    def encoding(self) -> str | None:
        """The codec in use; may be updated by `read()` after guessing."""
        return self._codec

    @staticmethod
    def readstream(buf: TextIOBase) -> IniFile:
        """读取解码好的字符串流。

        Make sure the stream was opened with `newline=''`.
        """
        return loads(buf.read())

    def _decode_file(self) -> StringIO:
        with open(self._fn, 'rb') as fp:
            raw = fp.read()

        codec = chardet.detect(raw)
        if (codec is None or codec['encoding'] is None
                or codec['confidence'] < 0.8):
            codec = {'encoding': 'utf-8'}

        # fallbacks
        try:
            buf = raw.decode(codec['encoding'])
        except UnicodeDecodeError:
            codec = {'encoding': 'gbk'}
            buf = raw.decode('gbk')
        logging.debug(f'{self._fn}: decoded as {codec["encoding"]}.')
        self._codec = codec['encoding']
        return StringIO(buf, newline='')

    def read(self) -> IniFile:
        """读取`IniParser`实例指定的文件。

        A missing file is *not* an error: an empty `IniFile` is returned,
        so that the first `write()` creates it.
        """
        if not exists(self._fn):
            logging.info(f'{self._fn} not found, starting from empty INI.')
            return IniFile()
        try:
            # when encoding is None, `open()` would fallback to system default.
            # and when encoding got wrong,
            # just `UnicodeDecodeError` and fallback to `chardet`.
            with open(self._fn, 'r', encoding=self._codec, newline='') as fp:
                text = fp.read()
        except UnicodeDecodeError:
            return self.readstream(self._decode_file())
        if text.startswith(_BOM) and self._codec is None:
            # keep the BOM on the way back, but out of the first key.
            self._codec = 'utf-8-sig'
            text = text[len(_BOM):]
        return loads(text)

    def write(self, instance: IniFile) -> None:
        with open(self._fn, 'w', encoding=self._codec, newline='') as fp:
            fp.write(dumps(instance))

    def __str__(self) -> str:
        return "INI file: " + super().__str__() + f"({self._codec})"
