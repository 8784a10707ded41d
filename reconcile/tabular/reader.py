"""Delimited text reader.

Parses comma-delimited text with double-quote enclosures into a Table.
Rows whose field count does not fit the header are skipped and their
source row numbers recorded, never padded."""

from __future__ import annotations

import csv
import io
import logging
from pathlib import Path

from ..core.models import RawRecord, Table
from ..errors import MissingFileError, UnreadableFileError

logger = logging.getLogger(__name__)

BOM = "\ufeff"


def _fits_header(fields: list[str], width: int) -> bool:
    """A row fits when it has exactly the header's width, ignoring empty trailing fields."""
    if len(fields) < width:
        return False
    return all(not value for value in fields[width:])


def parse_table(text: str, source: str | None = None) -> Table:
    """Parse delimited text into a Table.

    The first non-blank row is the header. Quoted fields may contain the
    delimiter, line breaks and doubled quote characters. Blank lines are
    ignored.

    Args:
        text: Complete file contents
        source: Label used in log messages and reports

    Returns:
        Table with records in source order
    """
    if text.startswith(BOM):
        text = text[len(BOM) :]

    reader = csv.reader(io.StringIO(text, newline=""))
    header: tuple[str, ...] = ()
    records: list[RawRecord] = []
    malformed: list[int] = []

    last_line = 0
    for fields in reader:
        # line_num points at the last physical line of the row just read
        row_number = last_line + 1
        last_line = reader.line_num

        if not fields:
            continue

        if not header:
            header = tuple(name.strip() for name in fields)
            duplicated = {name for name in header if header.count(name) > 1}
            if duplicated:
                logger.warning(f"{source or 'table'}: duplicate header field(s) {sorted(duplicated)}, last column wins")
            continue

        if not _fits_header(fields, len(header)):
            logger.warning(
                f"{source or 'table'}: row {row_number} has {len(fields)} field(s), "
                f"header has {len(header)}; skipping"
            )
            malformed.append(row_number)
            continue

        records.append(RawRecord(dict(zip(header, fields, strict=False)), row_number=row_number))

    if not header:
        logger.warning(f"{source or 'table'}: no header row found")

    logger.debug(f"{source or 'table'}: parsed {len(records)} record(s), {len(malformed)} malformed")
    return Table(header=header, records=records, malformed_rows=malformed, source=source)


def read_text_file(path: str | Path, role: str = "input") -> str:
    """Read a whole UTF-8 file.

    Raises:
        MissingFileError: If the path does not exist
        UnreadableFileError: If the file cannot be read or is not valid UTF-8
    """
    path = Path(path)
    if not path.is_file():
        raise MissingFileError(str(path), role=role)

    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise UnreadableFileError(str(path), f"not valid UTF-8 at byte {e.start}", role=role) from e
    except OSError as e:
        raise UnreadableFileError(str(path), e.strerror or str(e), role=role) from e
    return text


def read_table(path: str | Path, role: str = "input") -> Table:
    """Read and parse a UTF-8 delimited file.

    Raises:
        MissingFileError: If the path does not exist
        UnreadableFileError: If the file cannot be read or is not valid UTF-8
    """
    table = parse_table(read_text_file(path, role), source=str(path))
    logger.info(f"Read {len(table)} {role} record(s) from {path}")
    return table
