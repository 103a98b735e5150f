"""DTOs for the asset projection of tasks (no dependency on ORM)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class AssetEntryWrite:
    """Values written to the asset projection by upsert."""

    user_id: int
    company_id: int
    group_id: int
    create_date: datetime
    modified_date: datetime
    class_name: str
    class_pk: int
    class_uuid: str
    visible: bool
    category_ids: tuple[int, ...]
    tag_names: tuple[str, ...]
    title: str
    description: str | None
    summary: str
    priority: float
    mime_type: str = "text/html"


@dataclass(frozen=True)
class AssetEntryResult:
    """Asset projection handle returned by upsert and get_entry."""

    entry_id: int
    company_id: int
    group_id: int
    user_id: int
    class_name: str
    class_pk: int
    class_uuid: str
    visible: bool
    title: str
    description: str | None
    summary: str
    priority: float
    create_date: datetime
    modified_date: datetime
    category_ids: tuple[int, ...] = ()
    tag_names: tuple[str, ...] = ()
    related_entry_ids: tuple[int, ...] = ()
