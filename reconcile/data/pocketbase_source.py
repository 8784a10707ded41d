"""PocketBase table source.

Loads a collection into a Table so check-in or registration data can be
reconciled straight from the database instead of an exported file."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from pocketbase import PocketBase
from pocketbase.utils import ClientResponseError

from ..core.models import Table
from ..errors import SourceUnavailableError

logger = logging.getLogger(__name__)


def connect(url: str, email: str, password: str) -> PocketBase:
    """Create a PocketBase client authenticated as a superuser.

    Raises:
        SourceUnavailableError: If authentication fails
    """
    if not email or not password:
        raise SourceUnavailableError(
            "Missing PocketBase credentials. "
            "Set RECONCILE_POCKETBASE_ADMIN_EMAIL and RECONCILE_POCKETBASE_ADMIN_PASSWORD."
        )
    pb = PocketBase(url)
    try:
        pb.collection("_superusers").auth_with_password(email, password)
    except ClientResponseError as e:
        raise SourceUnavailableError(f"PocketBase authentication failed at {url}: {e}") from e
    logger.info(f"Authenticated with PocketBase at {url}")
    return pb


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "Yes" if value else "No"
    return str(value)


def load_collection(
    pb: PocketBase,
    collection: str,
    fields: Sequence[str],
    filter_str: str | None = None,
) -> Table:
    """Read a whole collection as a Table.

    Args:
        pb: Authenticated PocketBase client
        collection: Collection name
        fields: Record attributes to read; they become the table header
        filter_str: Optional PocketBase filter expression

    Raises:
        SourceUnavailableError: If the collection cannot be read
    """
    query_params: dict[str, Any] = {"sort": "created"}
    if filter_str:
        query_params["filter"] = filter_str

    try:
        records = pb.collection(collection).get_full_list(query_params=query_params)
    except ClientResponseError as e:
        raise SourceUnavailableError(f"Could not read collection '{collection}': {e}") from e

    rows = [{name: _as_text(getattr(record, name, None)) for name in fields} for record in records]
    logger.info(f"Loaded {len(rows)} record(s) from collection '{collection}'")
    return Table.from_rows(rows, header=list(fields), source=f"pocketbase:{collection}")
