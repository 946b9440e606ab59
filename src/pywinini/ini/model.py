# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2024/11/03 00:12:44
# @Author : Kariko Lin

"""
Lossless INI structure.

Unlike a plain `dict` tree, every node here remembers the comments and blank
lines (trivia) in front of it, and the exact line break after it.
So writing back an untouched document gives the very same text.

    ```ini
    top=level       ; IniFile.properties
    ; a comment     ; leading trivia of [section]
    [section]       ; IniFile.sections[0]
    key=value       ; IniFile.sections[0].properties[0]
    ```
"""

from dataclasses import dataclass, field
from typing import Iterator

from .consts import LineTerminator
from .lexer import IniTrivia


@dataclass
class IniProperty:
    key: str
    value: str
    # None: follow `IniFile.default_line_terminator` when serializing.
    line_terminator: LineTerminator | None = None
    leading_trivia: list[IniTrivia] = field(default_factory=list)
    trailing_trivia: list[IniTrivia] = field(default_factory=list)

    @classmethod
    def from_lexeme(
        cls, lexeme: str,
        line_terminator: LineTerminator | None = None,
        leading_trivia: list[IniTrivia] | None = None,
        trailing_trivia: list[IniTrivia] | None = None
    ) -> 'IniProperty':
        if '=' not in lexeme:
            # lexer never passes such lines here.
            raise ValueError(f'not a property line: {lexeme!r}')
        # nothing stripped: spaces around `=` belong to key and value.
        key, value = lexeme.split('=', 1)
        return cls(
            key, value, line_terminator,
            leading_trivia or [], trailing_trivia or [])

    def __str__(self) -> str:
        return f'{self.key}={self.value}'


@dataclass
class IniSection:
    name: str
    properties: list[IniProperty] = field(default_factory=list)
    line_terminator: LineTerminator | None = None
    leading_trivia: list[IniTrivia] = field(default_factory=list)
    trailing_trivia: list[IniTrivia] = field(default_factory=list)
    # blanks around the brackets, like `  [name]\t`.
    indent: str = ''
    suffix: str = ''

    def __post_init__(self) -> None:
        if ']' in self.name:
            raise ValueError(
                f'section name may not contain "]": {self.name!r}')

    @classmethod
    def from_lexeme(
        cls, lexeme: str,
        line_terminator: LineTerminator | None = None,
        leading_trivia: list[IniTrivia] | None = None,
        trailing_trivia: list[IniTrivia] | None = None
    ) -> 'IniSection':
        left = lexeme.find('[')
        right = lexeme.find(']', left + 1)
        if left < 0 or right < 0:
            raise ValueError(f'not a section header: {lexeme!r}')
        return cls(
            lexeme[left + 1:right],
            line_terminator=line_terminator,
            leading_trivia=leading_trivia or [],
            trailing_trivia=trailing_trivia or [],
            indent=lexeme[:left],
            suffix=lexeme[right + 1:])

    @property
    def header(self) -> str:
        return f'{self.indent}[{self.name}]{self.suffix}'

    def find(self, key: str) -> IniProperty | None:
        """The first property named `key`, or `None`."""
        for i in self.properties:
            if i.key == key:
                return i
        return None

    def __iter__(self) -> Iterator[IniProperty]:
        return iter(self.properties)

    def __len__(self) -> int:
        return len(self.properties)

    def __str__(self) -> str:
        return f'[{self.name}]'


class IniFile:
    """INI 文件表示：游离键值对 + 有序小节 + 文件尾。

    Sections are a list, not a dict: a header may appear more than once,
    and each appearance is kept as is.
    """

    def __init__(
        self,
        properties: list[IniProperty] | None = None,
        sections: list[IniSection] | None = None, *,
        default_line_terminator: LineTerminator = LineTerminator.CRLF
    ) -> None:
        # top-level pairs, which appear before any section header.
        self.properties: list[IniProperty] = properties or []
        self.sections: list[IniSection] = sections or []
        self.default_line_terminator = default_line_terminator
        # trailing trivia with no section after them, and maybe a `\x1a`.
        self.eof_trivia: list[IniTrivia] = []
        self.eof_lexeme = ''

    @property
    def default_line_terminator(self) -> LineTerminator:
        return self.__default_lt

    @default_line_terminator.setter
    def default_line_terminator(self, value: LineTerminator) -> None:
        value = LineTerminator(value)
        if value == LineTerminator.NONE:
            raise ValueError('default line terminator must be CR, LF or CRLF.')
        self.__default_lt = value

    def resolve(self, line_terminator: LineTerminator | None) -> LineTerminator:
        return (self.default_line_terminator
                if line_terminator is None else line_terminator)

    def find_sections(self, name: str) -> list[IniSection]:
        return [i for i in self.sections if i.name == name]

    def find_section(self, name: str) -> IniSection | None:
        for i in self.sections:
            if i.name == name:
                return i
        return None

    def add_section(self, name: str) -> IniSection:
        """Append a new, empty section to the end of the document."""
        ret = IniSection(name)
        self.sections.append(ret)
        return ret

    def __contains__(self, name: object) -> bool:
        return any(i.name == name for i in self.sections)

    def __iter__(self) -> Iterator[IniSection]:
        return iter(self.sections)

    def __len__(self) -> int:
        return len(self.sections)

    def __repr__(self) -> str:
        return '<IniFile { .props = %d, .sections = %d }>' % (
            len(self.properties), len(self.sections))
