# -*- encoding: utf-8 -*-
# @File   : lexer.py
# @Time   : 2024/11/02 21:40:18
# @Author : Kariko Lin

"""Line based INI lexer.

It does not split a line into keys, `=` and values: a whole line is one
lexeme, and the lexer only classifies it. Blank lines and `;` comments are
not tokens at all, they're *trivia* stuck onto the next real token, so that
the parser could give every byte back when serializing.
"""

import re
from dataclasses import dataclass, field
from typing import Iterator, NamedTuple

from ..abstract import TokenStream
from .consts import (
    BLANKS, COMMENT_PREFIX, EOF_MARKER,
    LineTerminator, TokenKind, TriviaKind
)

# one physical line, and what ended it.
_LINE = re.compile(r'([^\r\n\x1a]*)(\r\n|\r|\n|\x1a|\Z)')


class IniTrivia(NamedTuple):
    kind: TriviaKind
    lexeme: str
    line_terminator: LineTerminator

    def __str__(self) -> str:
        return self.lexeme + self.line_terminator.value


@dataclass(kw_only=True)
class IniToken:
    kind: TokenKind
    lexeme: str
    line_terminator: LineTerminator = LineTerminator.NONE
    leading_trivia: list[IniTrivia] = field(default_factory=list)
    lineno: int = 0


class IniLexer(TokenStream[IniToken]):
    """Turns INI text into `IniToken`s, until `TokenKind.END_OF_FILE`.

    Either call `get_next_token()` repeatedly, or just iterate it:

        ```python
        for token in IniLexer(text):
            ...  # the last one is always END_OF_FILE
        ```
    """

    def __init__(self, contents: str) -> None:
        self.__raw = contents
        self.reset_seek()

    def reset_seek(self) -> None:
        self._pos = 0
        self._lineno = 0
        self._current: IniToken | None = None

    @property
    def seekable(self) -> bool:
        return (self._current is None
                or self._current.kind != TokenKind.END_OF_FILE)

    @property
    def current(self) -> IniToken:
        if self._current is None:
            raise LookupError('no token read yet, call `next()` first.')
        return self._current

    def next(self) -> None:
        if not self.seekable:
            return
        self._current = self.__lex()

    def get_next_token(self) -> IniToken:
        self.next()
        return self.current

    def __iter__(self) -> Iterator[IniToken]:
        while self.seekable:
            yield self.get_next_token()

    def __read_line(self) -> tuple[str, LineTerminator] | None:
        if self._pos >= len(self.__raw):
            return None
        match = _LINE.match(self.__raw, self._pos)
        assert match is not None  # the pattern always matches
        text, ending = match.groups()
        self._lineno += 1
        if ending == EOF_MARKER:
            # hard EOF: keep the marker, drop whatever follows it.
            self._pos = len(self.__raw)
            return text + EOF_MARKER, LineTerminator.NONE
        self._pos = match.end()
        return text, LineTerminator(ending)

    def __lex(self) -> IniToken:
        leading: list[IniTrivia] = []
        while True:
            line = self.__read_line()
            if line is None:
                return IniToken(
                    kind=TokenKind.END_OF_FILE, lexeme='',
                    leading_trivia=leading, lineno=self._lineno)
            lexeme, ending = line

            if lexeme.strip(BLANKS) == '':
                leading.append(
                    IniTrivia(TriviaKind.WHITESPACE, lexeme, ending))
                continue
            if lexeme.startswith(COMMENT_PREFIX):
                leading.append(IniTrivia(TriviaKind.COMMENT, lexeme, ending))
                continue

            return IniToken(
                kind=self.classify(lexeme), lexeme=lexeme,
                line_terminator=ending, leading_trivia=leading,
                lineno=self._lineno)

    @staticmethod
    def classify(lexeme: str) -> TokenKind:
        """Classify a single non-trivia line."""
        if lexeme == EOF_MARKER:
            return TokenKind.END_OF_FILE
        if lexeme.lstrip(BLANKS).startswith('['):
            right = lexeme.find(']')
            if right < 0 or lexeme[right + 1:].strip(BLANKS):
                return TokenKind.INVALID
            return TokenKind.SECTION
        if '=' in lexeme:
            return TokenKind.PROPERTY
        return TokenKind.INVALID
