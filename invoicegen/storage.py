"""Tab-separated record files and HTML template sections."""

from __future__ import annotations

import os
import re
from collections.abc import Iterable
from pathlib import Path

__all__ = [
    "StorageError",
    "RecordNotFoundError",
    "RecordFile",
    "read_html_template",
]

_SEPARATOR = "\t"
_INTEGER = re.compile(r"[+-]?\d+")
_DIV = re.compile(r'<div\s+name="([^"]+)">([\s\S]*?)</div>', re.IGNORECASE)


class StorageError(Exception):
    """A record file or template could not be read or written."""


class RecordNotFoundError(StorageError, LookupError):
    """No record with the requested id exists in the file."""


def _leading_id(line: str) -> int:
    """Return the id in the first field of a line, or 0 if it is not a number."""
    first = line.split(_SEPARATOR, 1)[0].strip()
    return int(first) if _INTEGER.fullmatch(first) else 0


class RecordFile:
    """A text file holding one tab-separated record per line, id first."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)

    def __repr__(self) -> str:
        return f"RecordFile({str(self.path)!r})"

    def _lines(self) -> list[str]:
        try:
            with self.path.open(encoding="utf-8") as handle:
                return [line.rstrip("\n") for line in handle]
        except OSError as exc:
            raise StorageError(f"cannot open {self.path}: {exc}") from exc

    def _write(self, lines: Iterable[str]) -> None:
        try:
            with self.path.open("w", encoding="utf-8") as handle:
                handle.writelines(f"{line}\n" for line in lines)
        except OSError as exc:
            raise StorageError(f"cannot write {self.path}: {exc}") from exc

    def read(self) -> list[list[str]]:
        """Return every record as a list of fields; a missing file has none."""
        if not self.path.exists():
            return []
        return [line.split(_SEPARATOR) for line in self._lines()]

    def remove(self, record_id: int) -> None:
        """Delete the first record whose id is ``record_id``."""
        lines = self._lines()
        for index, line in enumerate(lines):
            if _leading_id(line) == record_id:
                del lines[index]
                break
        else:
            raise RecordNotFoundError(f"no record {record_id} in {self.path}")
        self._write(lines)

    def modify(self, record_id: int, values: Iterable[str]) -> None:
        """Replace the first record whose id is ``record_id`` with ``values``."""
        lines = self._lines()
        for index, line in enumerate(lines):
            if _leading_id(line) == record_id:
                lines[index] = _SEPARATOR.join(values)
                break
        else:
            raise RecordNotFoundError(f"no record {record_id} in {self.path}")
        self._write(lines)

    def append(self, values: Iterable[str]) -> int:
        """Add a record with the next free id in front of ``values``; return the id."""
        new_id = 1
        if self.path.exists():
            for line in self._lines():
                new_id = max(new_id, _leading_id(line) + 1)
        record = _SEPARATOR.join([str(new_id), *values])
        try:
            with self.path.open("a", encoding="utf-8") as handle:
                handle.write(f"{record}\n")
        except OSError as exc:
            raise StorageError(f"cannot write {self.path}: {exc}") from exc
        return new_id


def read_html_template(path: str | os.PathLike[str]) -> dict[str, str]:
    """Return the contents of every ``<div name="...">`` section, keyed by name."""
    try:
        html = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise StorageError(f"cannot open {path}: {exc}") from exc
    return {
        match.group(1).strip(): match.group(2).strip()
        for match in _DIV.finditer(html)
    }