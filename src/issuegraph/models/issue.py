"""Issue and dependency models consumed by every export format."""

import json
import logging
import re
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)

# Lone surrogates survive json.loads but cannot be encoded as UTF-8
_SURROGATE_RE = re.compile("[\ud800-\udfff]")


def strip_surrogates(value):
    if isinstance(value, str):
        return _SURROGATE_RE.sub("", value)
    return value


class Status(str, Enum):
    """Issue lifecycle states."""
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    BLOCKED = "blocked"
    CLOSED = "closed"
    TOMBSTONE = "tombstone"


class DependencyKind(str, Enum):
    """Dependency relation types. Only BLOCKS is structural."""
    BLOCKS = "blocks"
    RELATED = "related"

    @classmethod
    def parse(cls, value: str | None) -> "DependencyKind":
        """Map tracker relation names onto the two kinds we render."""
        if value and value.strip().lower() == cls.BLOCKS.value:
            return cls.BLOCKS
        return cls.RELATED


class Node(BaseModel):
    """A single issue in the dependency graph."""

    id: str = Field(description="Issue identifier, unique within the tracker")
    title: str = Field(default="", description="Issue title")
    status: Status = Field(default=Status.OPEN, description="Lifecycle state")
    priority: int = Field(default=0, description="Tracker priority (0 = highest)")
    labels: list[str] = Field(default_factory=list, description="Label set")

    model_config = ConfigDict(frozen=True)

    @field_validator("id", "title", mode="before")
    @classmethod
    def clean_text(cls, v):
        return strip_surrogates(v)

    @field_validator("labels", mode="before")
    @classmethod
    def coerce_labels(cls, v):
        if v is None:
            return []
        if isinstance(v, (list, tuple, set)):
            return [strip_surrogates(label) for label in v]
        return v

    def has_label(self, label: str) -> bool:
        """Case-insensitive label membership."""
        wanted = label.casefold()
        return any(existing.casefold() == wanted for existing in self.labels)


class Edge(BaseModel):
    """A dependency: ``from_id`` cannot proceed until ``to_id`` is resolved."""

    from_id: str = Field(alias="from")
    to_id: str = Field(alias="to")
    kind: DependencyKind = DependencyKind.BLOCKS

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @field_validator("from_id", "to_id", mode="before")
    @classmethod
    def clean_ids(cls, v):
        return strip_surrogates(v)

    @property
    def is_blocking(self) -> bool:
        return self.kind == DependencyKind.BLOCKS


def issues_from_records(records: list[dict[str, Any]]) -> tuple[list[Node], list[Edge]]:
    """Split raw issue records into nodes and dependency edges.

    Records follow the tracker export shape: issue fields plus a
    ``dependencies`` list of ``{"depends_on_id": ..., "type": ...}``.
    """
    nodes: list[Node] = []
    edges: list[Edge] = []
    skipped = 0

    for record in records:
        if not isinstance(record, dict) or not record.get("id"):
            skipped += 1
            continue
        node = Node(
            id=record["id"],
            title=record.get("title") or "",
            status=record.get("status") or Status.OPEN,
            priority=record.get("priority") or 0,
            labels=record.get("labels"),
        )
        nodes.append(node)

        for dep in record.get("dependencies") or []:
            if not isinstance(dep, dict) or not dep.get("depends_on_id"):
                skipped += 1
                continue
            edges.append(Edge(
                from_id=node.id,
                to_id=dep["depends_on_id"],
                kind=DependencyKind.parse(dep.get("type")),
            ))

    if skipped:
        logger.debug(f"Skipped {skipped} empty issue or dependency records")
    return nodes, edges


def load_issues(path: str | Path) -> tuple[list[Node], list[Edge]]:
    """Load issues from a JSON array or a JSONL file.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If a line or the document is not valid JSON
    """
    path = Path(path)
    text = path.read_text(encoding="utf-8")

    if path.suffix == ".jsonl":
        records = []
        for line_num, line in enumerate(text.splitlines(), 1):
            line = line.strip()
            if not line:
                continue
            try:
                records.append(json.loads(line))
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid JSON in {path} at line {line_num}: {e}")
    else:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}")
        records = data.get("issues", []) if isinstance(data, dict) else data

    nodes, edges = issues_from_records(records)
    logger.debug(f"Loaded {len(nodes)} issues and {len(edges)} dependencies from {path}")
    return nodes, edges
