"""
Local persistence of finished summaries.

Each summary is one JSON file under ``<directory>/items/<id>.json``. Records
are written once and never modified; they can only be deleted.
"""

import json
import uuid
from dataclasses import asdict, dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Optional, Union

from ..exceptions import StorageError
from ..logging_config import get_logger


logger = get_logger(__name__)


@dataclass(frozen=True)
class SummaryMetadata:
    """Optional provenance of a stored summary."""

    file_name: Optional[str] = None
    file_size: Optional[int] = None
    page_count: Optional[int] = None
    provider: Optional[str] = None
    model: Optional[str] = None
    tokens_used: Optional[int] = None


@dataclass(frozen=True)
class StoredSummary:
    id: str
    title: str
    content: str
    format: str
    created_at: datetime
    metadata: SummaryMetadata = field(default_factory=SummaryMetadata)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "format": self.format,
            "created_at": self.created_at.isoformat(),
            "metadata": asdict(self.metadata),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "StoredSummary":
        return cls(
            id=data["id"],
            title=data["title"],
            content=data["content"],
            format=data["format"],
            created_at=datetime.fromisoformat(data["created_at"]),
            metadata=SummaryMetadata(**(data.get("metadata") or {})),
        )


class SummaryStore:
    """Key/value store of summaries backed by a directory of JSON files."""

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory)
        self.items_dir = self.directory / "items"

    def _item_path(self, summary_id: str) -> Path:
        return self.items_dir / f"{summary_id}.json"

    def save(
        self,
        title: str,
        content: str,
        format: str,
        metadata: Optional[SummaryMetadata] = None,
    ) -> StoredSummary:
        """
        Persist a new summary with a generated id and timestamp.

        Raises:
            StorageError: If the record cannot be written or read back
        """
        summary = StoredSummary(
            id=str(uuid.uuid4()),
            title=title,
            content=content,
            format=format,
            created_at=datetime.now(),
            metadata=metadata or SummaryMetadata(),
        )

        try:
            self.items_dir.mkdir(parents=True, exist_ok=True)
            with open(self._item_path(summary.id), "w", encoding="utf-8") as f:
                json.dump(summary.to_dict(), f, indent=2, ensure_ascii=False)
        except OSError as e:
            logger.error(f"Failed to add summary: {e}")
            raise StorageError(f"Failed to save summary '{title}': {e}") from e

        # Verify storage
        if self.get(summary.id) is None:
            raise StorageError(f"Summary '{title}' was not stored properly")

        logger.info(f"Stored summary {summary.id} ({title})")
        return summary

    def get(self, summary_id: str) -> Optional[StoredSummary]:
        path = self._item_path(summary_id)
        if not path.exists():
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                return StoredSummary.from_dict(json.load(f))
        except (OSError, json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            raise StorageError(f"Failed to read summary {summary_id}: {e}") from e

    def list_all(self) -> list[StoredSummary]:
        """All stored summaries, newest first."""
        if not self.items_dir.exists():
            return []
        summaries = []
        for path in self.items_dir.glob("*.json"):
            summary = self.get(path.stem)
            if summary is not None:
                summaries.append(summary)
        return sorted(summaries, key=lambda s: s.created_at, reverse=True)

    def delete_by_id(self, summary_id: str) -> None:
        """Delete a summary; deleting an unknown id does nothing."""
        path = self._item_path(summary_id)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to delete summary {summary_id}: {e}") from e
        logger.info(f"Summary deleted: {summary_id}")
