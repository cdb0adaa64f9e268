"""Key-value access over JSON documents with optimistic versioning."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Any

from flask import current_app
from sqlalchemy import func, insert, select, update
from sqlalchemy.exc import IntegrityError

from planpal.constants import DEFAULT_TRANSACTION_ATTEMPTS, KEY_SEPARATOR
from planpal.errors import ConcurrentUpdateError, DuplicateResourceError, NotFoundError

from .models import KVEntry

if TYPE_CHECKING:
    from sqlalchemy.orm import Session

Document = dict[str, Any]
TransactionFn = Callable[[dict[str, Any]], dict[str, Any] | None]

entries = KVEntry.__table__


class _VersionConflict(Exception):
    """A conditional write found a newer version than the one read."""


class KVStore:
    """Get/set/prefix-scan over JSON blobs, with per-key compare-and-swap.

    Every document carries a version. ``transaction`` reads a set of keys,
    lets the caller compute new values, then writes each one only if its
    version is still the one that was read. A lost race rolls the whole
    write set back and runs the callback again against fresh data, so a
    read-modify-write can never silently drop a concurrent update.
    """

    def __init__(
        self, session: Session, max_attempts: int = DEFAULT_TRANSACTION_ATTEMPTS
    ) -> None:
        self.session = session
        self.max_attempts = max(1, int(max_attempts))

    @staticmethod
    def key(*parts: str) -> str:
        """Join key parts, e.g. ``key("polls", poll_id)``."""
        return KEY_SEPARATOR.join(str(p) for p in parts)

    # Reads

    def get(self, key: str) -> Document | None:
        """Fetch one document, or None if the key is absent."""
        row = self.session.execute(
            select(entries.c.value).where(entries.c.key == key)
        ).first()
        return row.value if row else None

    def get_many(self, keys: Iterable[str]) -> dict[str, Document | None]:
        """Fetch several documents at once; absent keys map to None."""
        keys = list(dict.fromkeys(keys))
        if not keys:
            return {}
        rows = self.session.execute(
            select(entries.c.key, entries.c.value).where(entries.c.key.in_(keys))
        )
        found = {row.key: row.value for row in rows}
        return {k: found.get(k) for k in keys}

    def get_by_prefix(self, prefix: str) -> list[Document]:
        """Return every document whose key starts with prefix, oldest first."""
        rows = self.session.execute(
            select(entries.c.value)
            .where(entries.c.key.startswith(prefix, autoescape=True))
            .order_by(entries.c.id)
        )
        return [row.value for row in rows]

    # Writes

    def set(self, key: str, value: Document) -> Document:
        """Store value under key, replacing whatever was there."""
        return self.transaction([key], lambda _: {key: value})[key]

    def create(self, key: str, value: Document) -> Document:
        """Insert a new document; fail if the key is already taken."""

        def insert_new(values: dict[str, Any]) -> dict[str, Any]:
            if values[key] is not None:
                raise DuplicateResourceError(f"{key} already exists.")
            return {key: value}

        return self.transaction([key], insert_new)[key]

    def update(
        self,
        key: str,
        mutate: Callable[[Document], Document | None],
        missing_message: str = "Resource not found.",
    ) -> Document:
        """Atomically apply mutate to the document stored under key.

        mutate may change the document in place or return a replacement.
        """

        def apply(values: dict[str, Any]) -> dict[str, Any]:
            current = values[key]
            if current is None:
                raise NotFoundError(missing_message)
            result = mutate(current)
            return {key: current if result is None else result}

        return self.transaction([key], apply)[key]

    def transaction(self, keys: Iterable[str], fn: TransactionFn) -> dict[str, Any]:
        """Run fn over the current values of keys and commit its writes atomically.

        fn receives ``{key: value_or_None}`` and returns ``{key: new_value}``
        for every document to write (keys it did not read are inserted).
        Exceptions raised by fn abort the transaction without writing.
        Returns the committed writes.
        """
        keys = list(dict.fromkeys(keys))
        for attempt in range(1, self.max_attempts + 1):
            versions, values = self._read_for_update(keys)
            try:
                writes = fn(values) or {}
            except Exception:
                self.session.rollback()
                raise

            try:
                self._write(writes, versions)
                self.session.commit()
                return writes
            except (_VersionConflict, IntegrityError):
                self.session.rollback()
                current_app.logger.warning(
                    f"Store conflict on {sorted(writes)} (attempt {attempt}/"
                    f"{self.max_attempts})"
                )

        raise ConcurrentUpdateError()

    def _read_for_update(
        self, keys: list[str]
    ) -> tuple[dict[str, int], dict[str, Any]]:
        versions: dict[str, int] = {}
        values: dict[str, Any] = {k: None for k in keys}
        if keys:
            rows = self.session.execute(
                select(entries.c.key, entries.c.value, entries.c.version).where(
                    entries.c.key.in_(keys)
                )
            )
            for row in rows:
                versions[row.key] = row.version
                values[row.key] = row.value
        return versions, values

    def _write(self, writes: dict[str, Any], versions: dict[str, int]) -> None:
        for key, value in writes.items():
            if key in versions:
                result = self.session.execute(
                    update(entries)
                    .where(entries.c.key == key, entries.c.version == versions[key])
                    .values(
                        value=value,
                        version=versions[key] + 1,
                        updated_at=func.now(),
                    )
                )
                if result.rowcount != 1:
                    raise _VersionConflict(key)
            else:
                self.session.execute(
                    insert(entries).values(key=key, value=value, version=1)
                )
