"""Delimited text writer.

Every field is quoted and embedded quotes are doubled, whether or not the
value needs it, so output always re-parses to the same values."""

from __future__ import annotations

import csv
import io
import logging
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path

from ..errors import OutputWriteError

logger = logging.getLogger(__name__)


def format_table(header: Sequence[str], rows: Iterable[Mapping[str, str]]) -> str:
    """Render a header and rows as fully quoted CSV text.

    Fields missing from a row are written as empty strings.
    """
    buffer = io.StringIO(newline="")
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(header)
    for row in rows:
        writer.writerow([row.get(name, "") for name in header])
    return buffer.getvalue()


def write_table(path: str | Path, header: Sequence[str], rows: Iterable[Mapping[str, str]]) -> int:
    """Write rows to path, creating parent directories as needed.

    Returns:
        Number of data rows written

    Raises:
        OutputWriteError: If the file cannot be created or written
    """
    path = Path(path)
    rows = list(rows)
    content = format_table(header, rows)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise OutputWriteError(str(path), e.strerror or str(e)) from e

    logger.info(f"Wrote {len(rows)} row(s) to {path}")
    return len(rows)
