"""Short display identifiers for roll entries.

Short-IDs are derived, never stored: a SHA-512 fingerprint of the entry's load
date, camera and stock is hex encoded and cut to a fixed prefix. Entries that
collide within one rendering pass are re-hashed with an increasing counter.
The same dataset rendered in the same order always yields the same IDs, but
IDs are only unique within the pass that assigned them.
"""

from __future__ import annotations

import hashlib

from core.models import DATE_FORMAT, Entry

SHORT_ID_LENGTH = 5


def entry_fingerprint(entry: Entry, index: int = 0) -> str:
    """Return the hex SHA-512 fingerprint of `entry` for disambiguation `index`.

    The hash input is newline-terminated: date, bracketed camera id,
    bracketed stock id and, only for a non-zero index, the index itself.
    """
    h = hashlib.sha512()
    h.update(entry.load_date.strftime(DATE_FORMAT).encode("ascii") + b"\n")
    h.update(b"[" + entry.camera_id.raw + b"]\n")
    h.update(b"[" + entry.stock_id.raw + b"]\n")
    if index != 0:
        h.update(f"{index}\n".encode("ascii"))
    return h.hexdigest()


class ShortIdService:
    """Assigns pass-unique short-IDs. Create one per rendering pass."""

    def __init__(self, length: int = SHORT_ID_LENGTH) -> None:
        self._length = length
        self._seen: set[str] = set()

    def assign(self, entry: Entry) -> str:
        """Return the first unused prefix for `entry` and mark it as used."""
        index = 0
        while True:
            short_id = entry_fingerprint(entry, index)[: self._length]
            if short_id not in self._seen:
                break
            index += 1
        self._seen.add(short_id)
        return short_id
