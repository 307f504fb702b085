"""One delimiter-separated file with a header row.

Shared file helpers for every flat-file repository.  Writes are plain
truncate-and-write or append: they are not atomic and the class is not
safe for concurrent use.  A crash mid-write can leave a partial file.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence
from pathlib import Path

from ims.domain.exceptions import StorageError
from ims.infrastructure.persistence.field_codec import join_fields, split_fields

logger = logging.getLogger(__name__)


class DelimitedFile:

    def __init__(self, path: Path, columns: Sequence[str]) -> None:
        self.path = path
        self.columns = tuple(columns)

    def ensure(self) -> None:
        """Create the parent directory and the header row if the file is missing."""
        try:
            if not self.path.exists():
                self.path.parent.mkdir(parents=True, exist_ok=True)
                self.path.write_text(join_fields(self.columns) + "\n", encoding="utf-8")
        except OSError as exc:
            raise StorageError(f"Cannot initialise {self.path}: {exc}") from exc

    def read_rows(self) -> Iterator[tuple[int, list[str]]]:
        """Yield ``(line_number, fields)`` for every non-blank data row."""
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return
        except OSError as exc:
            raise StorageError(f"Cannot read {self.path}: {exc}") from exc

        logger.debug("Read %s", self.path)
        for number, line in enumerate(text.split("\n")[1:], start=2):
            if not line.strip():
                continue
            yield number, split_fields(line)

    def rewrite(self, rows: Iterable[Sequence[str]]) -> None:
        lines = [join_fields(self.columns)]
        lines.extend(join_fields(row) for row in rows)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        except OSError as exc:
            raise StorageError(f"Cannot write {self.path}: {exc}") from exc
        logger.debug("Rewrote %s (%d rows)", self.path, len(lines) - 1)

    def append(self, rows: Iterable[Sequence[str]]) -> None:
        payload = "".join(join_fields(row) + "\n" for row in rows)
        if not payload:
            return
        self.ensure()
        try:
            with self.path.open("a", encoding="utf-8") as fh:
                fh.write(payload)
        except OSError as exc:
            raise StorageError(f"Cannot append to {self.path}: {exc}") from exc
        logger.debug("Appended to %s", self.path)

    def skip(self, number: int, reason: str) -> None:
        """Report a malformed row that is left out of the result."""
        logger.warning("Skipping %s line %d: %s", self.path.name, number, reason)
