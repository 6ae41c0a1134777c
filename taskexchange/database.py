# taskexchange/database.py

from __future__ import annotations

import contextlib
import json
import logging
import os
import tempfile
import threading
from collections.abc import Iterator
from pathlib import Path
from typing import Optional

from taskexchange.config import settings
from taskexchange.models.document import COUNTER_KEYS, Document

logger = logging.getLogger(__name__)


def normalize_counters(doc: Document) -> None:
    """
    Raise every id counter to at least max(id) + 1 of its collection.

    Counters are never lowered, so ids stay unique even after deletes or
    hand edits of the data file.
    """
    for collection, key in COUNTER_KEYS.items():
        records = getattr(doc, collection)
        max_id = max((r.id for r in records), default=0)
        current = doc.counters.get(key, 1)
        if current < max_id + 1:
            if key in doc.counters:
                logger.info("Counter %s healed %s -> %s", key, current, max_id + 1)
            current = max_id + 1
        doc.counters[key] = current


def next_id(doc: Document, counter_key: str) -> int:
    """Return the current counter value and advance the stored counter."""
    current = doc.counters.get(counter_key, 1)
    doc.counters[counter_key] = current + 1
    return current


def load_document(path: str | Path) -> Document:
    """Read the data file, creating an empty one if it does not exist yet."""
    path = Path(path)
    if not path.exists():
        doc = Document()
        write_document(path, doc)
        logger.info("Initialized empty data file %s", path)
        return doc

    raw = path.read_text(encoding="utf-8")
    doc = Document.model_validate(json.loads(raw))
    normalize_counters(doc)
    return doc


def write_document(path: str | Path, doc: Document) -> None:
    """Overwrite the data file with the full document."""
    path = Path(path)
    normalize_counters(doc)
    payload = json.dumps(
        doc.model_dump(mode="json", by_alias=True),
        indent=2,
        ensure_ascii=False,
    )

    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=str(path.parent), prefix=path.name, suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(payload)
        os.replace(tmp_name, path)
    except BaseException:
        with contextlib.suppress(OSError):
            os.unlink(tmp_name)
        raise
    logger.debug("Wrote data file %s (%d bytes)", path, len(payload))


class JsonDatabase:
    """
    Single-file JSON store.

    The document is loaded once and owned in memory; every mutation runs
    inside transaction(), which holds a re-entrant lock for the whole
    read-modify-write and writes the full document through to disk on
    success. A transaction that raises leaves both memory and disk untouched.
    Records handed out by snapshot() or a finished transaction are copies.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._lock = threading.RLock()
        self._active: Optional[Document] = None
        self._doc = load_document(self._path)
        logger.info(
            "JsonDatabase ready file=%s tasks=%s users=%s",
            self._path,
            len(self._doc.tasks),
            len(self._doc.users),
        )

    @property
    def path(self) -> Path:
        return self._path

    def reload(self) -> None:
        """Re-read the data file, dropping the in-memory copy."""
        with self._lock:
            self._doc = load_document(self._path)

    def snapshot(self) -> Document:
        """Deep copy of the current document for read-only use."""
        with self._lock:
            if self._active is not None:
                return self._active.model_copy(deep=True)
            return self._doc.model_copy(deep=True)

    @contextlib.contextmanager
    def transaction(self) -> Iterator[Document]:
        with self._lock:
            # Nested call from the same thread: share the outer working copy.
            if self._active is not None:
                yield self._active
                return

            working = self._doc.model_copy(deep=True)
            self._active = working
            try:
                yield working
                write_document(self._path, working)
                # Callers keep references into `working`; the store keeps its own copy.
                self._doc = working.model_copy(deep=True)
            finally:
                self._active = None


_db: Optional[JsonDatabase] = None


def get_db() -> JsonDatabase:
    global _db
    if _db is None:
        _db = JsonDatabase(settings.DATA_FILE)
    return _db
