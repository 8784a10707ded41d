"""Core domain models for the reconciliation engine.

These models describe parsed rows, lookup keys and linkage outcomes and
are independent of any file or database access."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

from ..errors import ConfigError

# Data rows start on source row 2; row 1 is the header
FIRST_DATA_ROW = 2


@dataclass(frozen=True)
class RawRecord(Mapping[str, str]):
    """One parsed data row.

    Field order mirrors the source header. Values are exposed through a
    read-only mapping so a record is never changed after parsing.
    """

    data: Mapping[str, str]
    row_number: int = FIRST_DATA_ROW

    # Values live in a mapping proxy, so records are never hashable
    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", MappingProxyType(dict(self.data)))

    def __getitem__(self, name: str) -> str:
        return self.data[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self.data)

    def __len__(self) -> int:
        return len(self.data)

    def get(self, name: str | None, default: str = "") -> str:
        """Return a field value, or default when the field is absent or unset."""
        if name is None:
            return default
        value = self.data.get(name)
        return default if value is None else value

    def to_dict(self) -> dict[str, str]:
        return dict(self.data)


@dataclass
class Table:
    """A parsed delimited file: header, records and malformed row numbers."""

    header: tuple[str, ...]
    records: list[RawRecord] = field(default_factory=list)
    malformed_rows: list[int] = field(default_factory=list)
    source: str | None = None

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[RawRecord]:
        return iter(self.records)

    @property
    def malformed_count(self) -> int:
        return len(self.malformed_rows)

    @classmethod
    def from_rows(
        cls,
        rows: Iterable[Mapping[str, str]],
        header: Sequence[str] | None = None,
        source: str | None = None,
    ) -> Table:
        """Build a table from in-memory mappings.

        The header defaults to the keys of the first row. Row numbers are
        assigned as if the rows had been read from a file with a header line.
        """
        rows = list(rows)
        if header is None:
            header = list(rows[0].keys()) if rows else []
        columns = tuple(header)
        records = [
            RawRecord({name: row.get(name, "") or "" for name in columns}, row_number=index + FIRST_DATA_ROW)
            for index, row in enumerate(rows)
        ]
        return cls(header=columns, records=records, source=source)


@dataclass(frozen=True)
class FieldMap:
    """Names of the header fields holding a person's name and email."""

    first_name: str
    last_name: str
    email: str | None = None

    def first(self, record: RawRecord) -> str:
        return record.get(self.first_name).strip()

    def last(self, record: RawRecord) -> str:
        return record.get(self.last_name).strip()

    def email_of(self, record: RawRecord) -> str:
        return record.get(self.email).strip()

    def has_name(self, record: RawRecord) -> bool:
        """Both first and last name are present."""
        return bool(self.first(record)) and bool(self.last(record))

    def display_name(self, record: RawRecord) -> str:
        return f"{self.first(record)} {self.last(record)}".strip()

    def check_header(self, header: Sequence[str], role: str = "input") -> None:
        """Raise ConfigError if a mapped field is missing from the header."""
        if not header:
            return
        wanted = [self.first_name, self.last_name]
        if self.email:
            wanted.append(self.email)
        missing = [name for name in wanted if name not in header]
        if missing:
            raise ConfigError(f"{role} header is missing field(s) {missing}; available: {list(header)}")


class KeyDomain(Enum):
    """Origin of an index key"""

    EMAIL = "email"
    NAME = "name"


@dataclass(frozen=True)
class NamespacedKey:
    """Lookup key tagged with the domain it was derived from.

    An email key and a name key never compare equal, even when their raw
    text is the same.
    """

    domain: KeyDomain
    value: str

    def __str__(self) -> str:
        return f"{self.domain.value}:{self.value}"

    @classmethod
    def email(cls, value: str) -> NamespacedKey:
        return cls(KeyDomain.EMAIL, value)

    @classmethod
    def name(cls, value: str) -> NamespacedKey:
        return cls(KeyDomain.NAME, value)


class MatchType(Enum):
    """How an input record was linked to a reference record"""

    EMAIL = "email"
    NAME = "name"
    FUZZY = "fuzzy"
    NONE = "none"


@dataclass(frozen=True)
class MatchResult:
    """Outcome of linking one input record"""

    record: RawRecord
    match_type: MatchType = MatchType.NONE
    matched_record: RawRecord | None = None
    tier: str | None = None
    reference_position: int | None = None

    __hash__ = None  # type: ignore[assignment]

    @property
    def matched(self) -> bool:
        return self.matched_record is not None

    @classmethod
    def unmatched(cls, record: RawRecord) -> MatchResult:
        return cls(record=record)


@dataclass(frozen=True)
class DuplicateEntry:
    """A record dropped because its key was already seen in its partition"""

    row_number: int
    label: str

    def __str__(self) -> str:
        return f"Row {self.row_number}: {self.label} - duplicate name"


@dataclass
class PartitionState:
    """Seen keys, kept records and duplicate report for one partition"""

    name: str
    seen: set[str] = field(default_factory=set)
    records: list[RawRecord] = field(default_factory=list)
    duplicates: list[DuplicateEntry] = field(default_factory=list)

    @property
    def output_count(self) -> int:
        return len(self.records)
