# -*- encoding: utf-8 -*-
# @File   : proxy.py
# @Time   : 2024/11/04 22:47:51
# @Author : Kariko Lin

"""Flat, dotted-path view over an `IniFile`.

    ```ini
    a=1         ; "a"
    [s]
    b=2         ; "s.b"
    [x.y]
    c=3         ; "x.y.c", section name is "x.y", no real nesting.
    d.e=4       ; "x.y.d\\.e", dots in keys are escaped.
    ```

Writes go straight into the tree, node by node,
so whatever is not written keeps its comments, blanks and line breaks.
"""

import logging
import re
from collections.abc import Mapping, MutableMapping
from typing import Iterator

from .consts import LineTerminator
from .model import IniFile, IniProperty, IniSection

__all__ = ['IniPathProxy', 'split_path', 'join_path']

# a `\\` or `\.` pair is one escaped char; a bare dot is a separator.
_ESCAPE_OR_DOT = re.compile(r'\\[\\.]|\.')
_ESCAPED = re.compile(r'\\([\\.])')


def _unescape(text: str) -> str:
    return _ESCAPED.sub(r'\1', text)


def split_path(path: str) -> tuple[str | None, str]:
    """`"sect.ion.key"` -> `("sect.ion", "key")`; `"key"` -> `(None, "key")`.

    The *last* unescaped dot separates section and key.
    Escapes are read left to right, so `"C:\\\\Temp\\\\.k"` is key `k`
    in section `C:\\Temp\\`. A backslash before any other char stays as is.
    """
    dots = [i.start() for i in _ESCAPE_OR_DOT.finditer(path)
            if i.group() == '.']
    if not dots:
        return None, _unescape(path)
    return _unescape(path[:dots[-1]]), _unescape(path[dots[-1] + 1:])


def join_path(section: str | None, key: str) -> str:
    key = key.replace('\\', '\\\\').replace('.', '\\.')
    if section is None:
        return key
    # dots in a section name stay literal, the last dot splits.
    return section.replace('\\', '\\\\') + '.' + key


class IniPathProxy(MutableMapping[str, str]):
    """`dict`-like access to an `IniFile` by dotted paths.

    Duplicated keys (or sections) resolve to the *first* one in the file,
    just like Windows' own `GetPrivateProfileString`.
    Assigning `None` removes the key, but never the section holding it.
    """

    def __init__(self, doc: IniFile) -> None:
        self._doc = doc

    @property
    def doc(self) -> IniFile:
        return self._doc

    def __owners(
        self, section: str | None
    ) -> list[tuple[IniSection | None, list[IniProperty]]]:
        if section is None:
            return [(None, self._doc.properties)]
        return [(i, i.properties) for i in self._doc.find_sections(section)]

    def __lookup(self, path: str) -> tuple[
        IniSection | None, list[IniProperty] | None, int
    ]:
        section, key = split_path(path)
        for sect, props in self.__owners(section):
            for idx, prop in enumerate(props):
                if prop.key == key:
                    return sect, props, idx
        return None, None, -1

    # reading

    def read_data(self) -> dict[str, str]:
        """Flatten the whole document, in file order."""
        ret: dict[str, str] = {}
        for prop in self._doc.properties:
            ret.setdefault(join_path(None, prop.key), prop.value)
        for sect in self._doc.sections:
            for prop in sect.properties:
                ret.setdefault(join_path(sect.name, prop.key), prop.value)
        return ret

    def get_value(self, path: str) -> str | None:
        _, props, idx = self.__lookup(path)
        return None if props is None else props[idx].value

    # writing

    def set_value(self, path: str, value: str | None) -> None:
        if value is None:
            self.__remove(path)
            return
        _, props, idx = self.__lookup(path)
        if props is not None:
            # in place: trivia and line terminator stay.
            props[idx].value = value
        else:
            self.__append(*split_path(path), value)

    def write_data(self, updates: Mapping[str, str | None]) -> None:
        """Apply a batch of updates; `None` values delete."""
        for path, value in updates.items():
            self.set_value(path, value)

    def __remove(self, path: str) -> bool:
        sect, props, idx = self.__lookup(path)
        if props is None:
            logging.debug(f'"{path}" not found, nothing to delete.')
            return False
        prop = props.pop(idx)
        # comments above (and below) a removed key stay where they were.
        orphans = prop.leading_trivia + prop.trailing_trivia
        if not orphans:
            return True
        if idx < len(props):
            props[idx].leading_trivia[:0] = orphans
        elif sect is not None:
            sect.trailing_trivia[:0] = orphans
        elif self._doc.sections:
            self._doc.sections[0].leading_trivia[:0] = orphans
        else:
            self._doc.eof_trivia[:0] = orphans
        return True

    def __append(self, section: str | None, key: str, value: str) -> None:
        if section is None:
            owner = None
        elif (owner := self._doc.find_section(section)) is None:
            self.__terminate(
                self._doc.sections[-1] if self._doc.sections else None)
            owner = self._doc.add_section(section)
            logging.debug(f'section {owner} appended.')
        self.__terminate(owner)
        (self._doc.properties if owner is None
         else owner.properties).append(IniProperty(key, value))

    def __terminate(self, section: IniSection | None) -> None:
        # the last line of `section` (or of the top-level pairs) may be the
        # last line of the file, with no line break after it.
        props = self._doc.properties if section is None else section.properties
        tail: IniProperty | IniSection | None = props[-1] if props else section
        if tail is not None and tail.line_terminator == LineTerminator.NONE:
            tail.line_terminator = None

    # MutableMapping

    def __getitem__(self, path: str) -> str:
        if (ret := self.get_value(path)) is None:
            raise KeyError(path)
        return ret

    def __setitem__(self, path: str, value: str | None) -> None:
        self.set_value(path, value)

    def __delitem__(self, path: str) -> None:
        if not self.__remove(path):
            raise KeyError(path)

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and self.get_value(path) is not None

    def __iter__(self) -> Iterator[str]:
        return iter(self.read_data())

    def __len__(self) -> int:
        return len(self.read_data())

    def __repr__(self) -> str:
        return f'IniPathProxy({self.read_data()!r})'
