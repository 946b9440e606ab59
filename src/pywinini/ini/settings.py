# -*- encoding: utf-8 -*-
# @File   : settings.py
# @Time   : 2024/11/05 20:31:16
# @Author : Kariko Lin

"""The disk side: one INI file, read, edited by dotted paths, saved.

    ```python
    ini = IniSettings('C:/Windows/win.ini')
    ini.read_file()
    ini.set_value('Desktop.WallpaperStyle', '2')
    ini.write_file()
    ```

Parsing and printing are cheap and synchronous; only the disk part has
`*_async` variants, which run in a worker thread.
Callers must not edit one instance from two tasks at once.
"""

import asyncio
import logging
from collections.abc import Mapping
from os import PathLike

from .model import IniFile
from .parser import IniParser, dumps, loads
from .proxy import IniPathProxy

__all__ = ['IniNotLoadedError', 'IniSettings']


class IniNotLoadedError(RuntimeError):
    """INI data accessed before any file (or text) was loaded."""
    pass


class IniSettings:
    def __init__(
        self,
        filename: str | PathLike[str] | None = None,
        encoding: str | None = None
    ) -> None:
        self._codec = encoding
        self._parser = (
            None if filename is None else IniParser(filename, encoding))
        self._data: IniPathProxy | None = None

    @property
    def filename(self) -> str | None:
        return None if self._parser is None else self._parser.filename

    @property
    def encoding(self) -> str | None:
        """The configured codec, or the one guessed by the last read."""
        return self._codec if self._parser is None else self._parser.encoding

    @property
    def loaded(self) -> bool:
        return self._data is not None

    @property
    def data(self) -> IniPathProxy:
        if self._data is None:
            raise IniNotLoadedError('INI file has not been loaded.')
        return self._data

    @property
    def doc(self) -> IniFile:
        return self.data.doc

    def __handler(self, filename: str | PathLike[str] | None) -> IniParser:
        if filename is not None:
            # stick to the codec we've found so far.
            return IniParser(filename, self.encoding)
        if self._parser is None:
            raise ValueError('no INI file specified.')
        return self._parser

    def parse(self, text: str) -> IniPathProxy:
        """Load from decoded text instead of disk."""
        self._data = IniPathProxy(loads(text))
        return self._data

    def read_file(
        self, filename: str | PathLike[str] | None = None
    ) -> IniPathProxy:
        """Read (and remember) the file. A missing one reads as empty.

        May raise `IniParseError`; nothing is kept from a bad file then.
        """
        parser = self.__handler(filename)
        doc = parser.read()
        self._parser, self._data = parser, IniPathProxy(doc)
        logging.debug(f'{parser}: {len(self._data)} entries read.')
        return self._data

    def write_file(self, filename: str | PathLike[str] | None = None) -> None:
        """Save to `filename`, or where it was read from.

        `OSError` from the disk is passed through as is.
        """
        doc = self.doc
        parser = self.__handler(filename)
        parser.write(doc)
        logging.debug(f'{parser}: saved.')

    async def read_file_async(
        self, filename: str | PathLike[str] | None = None
    ) -> IniPathProxy:
        return await asyncio.to_thread(self.read_file, filename)

    async def write_file_async(
        self, filename: str | PathLike[str] | None = None
    ) -> None:
        await asyncio.to_thread(self.write_file, filename)

    def read_data(self) -> dict[str, str]:
        return self.data.read_data()

    def write_data(self, updates: Mapping[str, object]) -> None:
        """Batch update. Values are stored as `str(value)`; `None` deletes."""
        self.data.write_data({
            k: None if v is None else str(v) for k, v in updates.items()
        })

    def get_value(self, path: str) -> str | None:
        return self.data.get_value(path)

    def set_value(self, path: str, value: object) -> None:
        self.data.set_value(path, None if value is None else str(value))

    def __str__(self) -> str:
        if self._data is None:
            return f'INI file (not loaded): {self.filename}'
        return dumps(self._data.doc)
