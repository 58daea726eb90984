"""
Attachment reuse cache.

Maps a media source URL to the attachment id the platform issued the first
time it was sent with `is_reusable`. Lookups and records are not serialized
per URL: two concurrent sends of the same unseen URL may both upload, and
the last record wins.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional, Protocol, Union

from messenger_sdk.errors import MessengerError
from messenger_sdk.models.base import WireModel

logger = logging.getLogger(__name__)


class ReusableAttachment(WireModel):
    url: str
    attachment_id: str


class ReusableStore(Protocol):
    """Persistence for reusable attachment records, keyed by URL."""

    def get(self, key: str) -> Optional[ReusableAttachment]:
        ...

    def save(self, record: ReusableAttachment) -> None:
        ...


class MemoryReusableStore:
    """Process-local store. Records are lost on exit."""

    def __init__(self) -> None:
        self._records: dict[str, ReusableAttachment] = {}

    def get(self, key: str) -> Optional[ReusableAttachment]:
        return self._records.get(key)

    def save(self, record: ReusableAttachment) -> None:
        self._records[record.url] = record


class JsonFileReusableStore:
    """Store backed by a JSON object `{url: attachment_id}` on disk.

    The file is read once on first access and rewritten in full on every
    save, through a temporary file so a crash never leaves it truncated.
    """

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)
        self._records: Optional[dict[str, str]] = None

    def _load(self) -> dict[str, str]:
        if self._records is None:
            try:
                records = json.loads(self._path.read_text())
            except FileNotFoundError:
                records = {}
            except json.JSONDecodeError as e:
                raise MessengerError(
                    "reusable_store_corrupt",
                    f"cannot read reusable attachments from {self._path}: {e}",
                    details={"path": str(self._path)},
                ) from e
            if not isinstance(records, dict):
                raise MessengerError(
                    "reusable_store_corrupt",
                    f"{self._path} does not hold a JSON object",
                    details={"path": str(self._path)},
                )
            self._records = records
        return self._records

    def get(self, key: str) -> Optional[ReusableAttachment]:
        attachment_id = self._load().get(key)
        if attachment_id is None:
            return None
        return ReusableAttachment(url=key, attachment_id=attachment_id)

    def save(self, record: ReusableAttachment) -> None:
        records = dict(self._load())
        records[record.url] = record.attachment_id
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self._path.parent, prefix=".reusables-")
        try:
            with os.fdopen(fd, "w") as f:
                json.dump(records, f, indent=2)
            os.replace(tmp, self._path)
        except BaseException:
            os.unlink(tmp)
            raise
        self._records = records


class AttachmentReuseCache:
    def __init__(self, store: Optional[ReusableStore] = None):
        self._store: ReusableStore = store if store is not None else MemoryReusableStore()

    def lookup(self, url: str) -> Optional[str]:
        """Attachment id previously recorded for `url`, or None."""
        record = self._store.get(url)
        return record.attachment_id if record is not None else None

    def record(self, url: str, attachment_id: str) -> None:
        """Remember `attachment_id` for `url`, replacing any earlier id."""
        if self.lookup(url) == attachment_id:
            return
        self._store.save(ReusableAttachment(url=url, attachment_id=attachment_id))
        logger.debug("reusable attachment recorded", extra={"url": url, "attachment_id": attachment_id})
