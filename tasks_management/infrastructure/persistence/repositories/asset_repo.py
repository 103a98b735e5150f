"""Asset repository: searchable/taggable projection of entities, with related links.

Entries are keyed by (class_name, class_pk). Keyword search runs over the
projection (title, description, summary) and only returns visible entries.
"""

from __future__ import annotations

from sqlalchemy import String, delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from tasks_management.application.dtos.asset import AssetEntryResult, AssetEntryWrite
from tasks_management.domain.enums import AssetLinkType
from tasks_management.infrastructure.persistence.models.asset import (
    AssetEntry,
    AssetEntryCategory,
    AssetEntryTag,
    AssetLink,
)
from tasks_management.infrastructure.persistence.repositories.base import paginate
from tasks_management.infrastructure.persistence.repositories.counter_repo import (
    CounterRepository,
)
from tasks_management.shared.telemetry.logging import get_logger
from tasks_management.shared.utils.datetime import ensure_utc, utc_now

ASSET_ENTRY_COUNTER_NAME = "asset_entry"
_RELATED = int(AssetLinkType.RELATED)

_logger = get_logger(__name__)


def _lower(expr):
    return func.lower(expr, type_=String)


def _normalize_tags(tag_names: tuple[str, ...]) -> list[str]:
    """Lowercase, trim and de-duplicate tag names, keeping first-seen order."""
    seen: dict[str, None] = {}
    for name in tag_names:
        tag = name.strip().lower()
        if tag:
            seen.setdefault(tag, None)
    return list(seen)


def _to_result(e: AssetEntry, related_entry_ids: tuple[int, ...]) -> AssetEntryResult:
    """Map AssetEntry ORM (with loaded categories/tags) to AssetEntryResult DTO."""
    return AssetEntryResult(
        entry_id=e.entry_id,
        company_id=e.company_id,
        group_id=e.group_id,
        user_id=e.user_id,
        class_name=e.class_name,
        class_pk=e.class_pk,
        class_uuid=e.class_uuid,
        visible=e.visible,
        title=e.title,
        description=e.description,
        summary=e.summary,
        priority=e.priority,
        create_date=ensure_utc(e.create_date),
        modified_date=ensure_utc(e.modified_date),
        category_ids=tuple(sorted(c.category_id for c in e.categories)),
        tag_names=tuple(sorted(t.tag_name for t in e.tags)),
        related_entry_ids=related_entry_ids,
    )


class AssetRepository:
    """Asset repository. Implements IAssetRepository."""

    def __init__(self, db: AsyncSession, counter_repo: CounterRepository | None = None) -> None:
        self.db = db
        self.counter_repo = counter_repo or CounterRepository(db)

    async def _get_orm(self, class_name: str, class_pk: int) -> AssetEntry | None:
        result = await self.db.execute(
            select(AssetEntry).where(
                AssetEntry.class_name == class_name, AssetEntry.class_pk == class_pk
            )
        )
        return result.scalar_one_or_none()

    async def _related_ids(self, entry_id: int) -> tuple[int, ...]:
        """Entry ids linked to entry_id as related, in either direction."""
        result = await self.db.execute(
            select(AssetLink.entry_id1, AssetLink.entry_id2).where(
                AssetLink.type == _RELATED,
                or_(AssetLink.entry_id1 == entry_id, AssetLink.entry_id2 == entry_id),
            )
        )
        others = {e2 if e1 == entry_id else e1 for e1, e2 in result.all()}
        return tuple(sorted(others))

    async def upsert(self, data: AssetEntryWrite) -> AssetEntryResult:
        """Create or refresh the entry of (class_name, class_pk), replacing categories and tags."""
        entry = await self._get_orm(data.class_name, data.class_pk)
        if entry is None:
            entry = AssetEntry(
                entry_id=await self.counter_repo.increment(ASSET_ENTRY_COUNTER_NAME),
                class_name=data.class_name,
                class_pk=data.class_pk,
                create_date=data.create_date,
                categories=[],
                tags=[],
            )
            self.db.add(entry)
        entry.company_id = data.company_id
        entry.group_id = data.group_id
        entry.user_id = data.user_id
        entry.class_uuid = data.class_uuid
        entry.visible = data.visible
        entry.title = data.title
        entry.description = data.description
        entry.summary = data.summary
        entry.mime_type = data.mime_type
        entry.priority = data.priority
        entry.modified_date = data.modified_date

        wanted_categories = set(data.category_ids)
        for category in list(entry.categories):
            if category.category_id not in wanted_categories:
                entry.categories.remove(category)
        present_categories = {c.category_id for c in entry.categories}
        for category_id in sorted(wanted_categories - present_categories):
            entry.categories.append(AssetEntryCategory(category_id=category_id))

        wanted_tags = _normalize_tags(data.tag_names)
        for tag in list(entry.tags):
            if tag.tag_name not in wanted_tags:
                entry.tags.remove(tag)
        present_tags = {t.tag_name for t in entry.tags}
        for tag_name in wanted_tags:
            if tag_name not in present_tags:
                entry.tags.append(AssetEntryTag(tag_name=tag_name))

        await self.db.flush()
        return _to_result(entry, await self._related_ids(entry.entry_id))

    async def link_related(
        self, user_id: int, entry_id: int, related_entry_ids: tuple[int, ...]
    ) -> None:
        """Make related_entry_ids the exact set of entries related to entry_id (self excluded)."""
        wanted = {i for i in related_entry_ids if i != entry_id}
        result = await self.db.execute(
            select(AssetLink).where(
                AssetLink.type == _RELATED,
                or_(AssetLink.entry_id1 == entry_id, AssetLink.entry_id2 == entry_id),
            )
        )
        present: set[int] = set()
        for link in result.scalars().all():
            other = link.entry_id2 if link.entry_id1 == entry_id else link.entry_id1
            if other in wanted:
                present.add(other)
            else:
                await self.db.delete(link)
        now = utc_now()
        for other in sorted(wanted - present):
            self.db.add(
                AssetLink(
                    entry_id1=entry_id,
                    entry_id2=other,
                    type=_RELATED,
                    user_id=user_id,
                    create_date=now,
                )
            )
        await self.db.flush()

    async def remove(self, class_name: str, class_pk: int) -> None:
        """Delete the entry, its categories, tags and links; no-op when absent."""
        entry = await self._get_orm(class_name, class_pk)
        if entry is None:
            return
        await self.db.execute(
            delete(AssetLink).where(
                or_(AssetLink.entry_id1 == entry.entry_id, AssetLink.entry_id2 == entry.entry_id)
            )
        )
        await self.db.delete(entry)
        await self.db.flush()
        _logger.debug("Asset entry %s removed (%s %s)", entry.entry_id, class_name, class_pk)

    async def get_entry(self, class_name: str, class_pk: int) -> AssetEntryResult | None:
        entry = await self._get_orm(class_name, class_pk)
        if entry is None:
            return None
        return _to_result(entry, await self._related_ids(entry.entry_id))

    async def search(
        self,
        company_id: int,
        group_id: int,
        class_name: str,
        keywords: str,
        start: int | None = None,
        end: int | None = None,
    ) -> list[AssetEntryResult]:
        """Visible entries of the scope where every keyword occurs in title, description or summary."""
        stmt = select(AssetEntry).where(
            AssetEntry.company_id == company_id,
            AssetEntry.group_id == group_id,
            AssetEntry.class_name == class_name,
            AssetEntry.visible.is_(True),
        )
        for term in keywords.split():
            # % and _ in a keyword match literally
            needle = term.lower()
            stmt = stmt.where(
                or_(
                    _lower(AssetEntry.title).contains(needle, autoescape=True),
                    _lower(func.coalesce(AssetEntry.description, "")).contains(
                        needle, autoescape=True
                    ),
                    _lower(AssetEntry.summary).contains(needle, autoescape=True),
                )
            )
        stmt = stmt.order_by(AssetEntry.modified_date.desc(), AssetEntry.entry_id)
        result = await self.db.execute(paginate(stmt, start, end))
        entries = result.scalars().all()
        return [_to_result(e, await self._related_ids(e.entry_id)) for e in entries]

    async def list_class_pks(self, company_id: int, group_id: int, class_name: str) -> list[int]:
        result = await self.db.execute(
            select(AssetEntry.class_pk)
            .where(
                AssetEntry.company_id == company_id,
                AssetEntry.group_id == group_id,
                AssetEntry.class_name == class_name,
            )
            .order_by(AssetEntry.class_pk)
        )
        return list(result.scalars().all())
