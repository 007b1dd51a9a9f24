"""Small key/value store with per-entry expiry, backed by a JSON file."""

from __future__ import annotations

from pathlib import Path
from typing import Callable
import logging
import re
import time

from .utils import load_json, save_json

log = logging.getLogger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60
LEADING_INT = re.compile(r"\s*[-+]?\d+")


class ValueStore:
    """String values keyed by name, scoped to one file on disk."""

    def __init__(self, path: Path, clock: Callable[[], float] = time.time) -> None:
        self.path = path
        self.clock = clock

    def _read(self) -> dict:
        payload = load_json(self.path, {})
        if not isinstance(payload, dict):
            log.warning("ignoring malformed store at %s", self.path)
            return {}
        return payload

    def get(self, key: str) -> str | None:
        """Return the stored string, or None when absent, malformed or expired."""
        entry = self._read().get(key)
        if not isinstance(entry, dict) or entry.get("value") is None:
            return None
        expires = entry.get("expires")
        if isinstance(expires, (int, float)) and expires <= self.clock():
            return None
        return str(entry["value"])

    def set(self, key: str, value: object, ttl_days: float | None = None) -> None:
        """Store a value; without a TTL it never expires."""
        payload = self._read()
        expires = self.clock() + ttl_days * SECONDS_PER_DAY if ttl_days else None
        payload[key] = {"value": str(value), "expires": expires}
        save_json(self.path, payload)

    def delete(self, key: str) -> None:
        payload = self._read()
        if payload.pop(key, None) is not None:
            save_json(self.path, payload)


def load_highscore(store: ValueStore, key: str) -> int:
    """Read a saved highscore, treating anything unusable as zero."""
    saved = store.get(key)
    if saved is None:
        return 0
    # Leading digits only, so "12.5" and "12abc" both read as 12.
    match = LEADING_INT.match(saved)
    if match is None:
        log.warning("discarding unreadable highscore %r", saved)
        return 0
    return max(0, int(match.group()))
