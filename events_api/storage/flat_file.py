"""CSV-backed flat-file store: whole-file load and atomic whole-file save."""

import csv
import logging
import os
import stat
import tempfile
from collections.abc import Iterable, Sequence
from functools import lru_cache
from pathlib import Path

from events_api.utils.errors import MalformedData

logger = logging.getLogger(__name__)

Row = dict[str, str]


class FlatFileStore:
    """Reads and writes a single CSV file as ``(columns, rows)``.

    Every cell is text. Rows are normalized to the header: short rows are
    padded with ``""`` and a row longer than the header is malformed.
    """

    encoding = "utf-8"

    def load(self, path: str | os.PathLike) -> tuple[list[str], list[Row]]:
        path = Path(path)
        if not path.is_file():
            return [], []

        # utf-8-sig tolerates the BOM spreadsheet exports prepend
        with open(path, "r", encoding="utf-8-sig", newline="") as f:
            reader = csv.reader(f, strict=True)
            try:
                columns: list[str] = []
                rows: list[Row] = []
                for record in reader:
                    if not record:
                        continue
                    if not columns:
                        columns = list(record)
                        continue
                    if len(record) > len(columns):
                        raise MalformedData(
                            f"Failed to parse {path.name}: too many fields on line {reader.line_num} "
                            f"(expected {len(columns)}, parsed {len(record)})"
                        )
                    record = record + [""] * (len(columns) - len(record))
                    rows.append(dict(zip(columns, record)))
            except csv.Error as exc:
                raise MalformedData(f"Failed to parse {path.name}: {exc} (line {reader.line_num})") from exc

        return columns, rows

    def save(self, path: str | os.PathLike, columns: Sequence[str], rows: Iterable[Row]) -> None:
        """Overwrite ``path`` with ``columns`` as header and one line per row.

        Unknown keys are dropped and missing cells written as ``""``. The data
        goes to a sibling temp file first and is renamed over the target.
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        fd, temp_path = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
        try:
            with os.fdopen(fd, "w", encoding=self.encoding, newline="") as f:
                writer = csv.DictWriter(f, fieldnames=list(columns), lineterminator="\n")
                writer.writeheader()
                for row in rows:
                    writer.writerow({column: _cell(row.get(column)) for column in columns})
            os.chmod(temp_path, _target_mode(path))
            os.replace(temp_path, path)
        except BaseException:
            if os.path.exists(temp_path):
                os.remove(temp_path)
            raise

        logger.debug("Wrote %s", path)


def _target_mode(path: Path) -> int:
    """Mode for the rewritten file: the current one, else the umask default."""
    if path.exists():
        return stat.S_IMODE(path.stat().st_mode)
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def _cell(value) -> str:
    if value is None:
        return ""
    return str(value)


@lru_cache()
def get_store() -> FlatFileStore:
    return FlatFileStore()
