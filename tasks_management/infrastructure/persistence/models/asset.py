"""Asset ORM models: searchable/taggable projection of entities, with categories, tags and links."""

from datetime import datetime

from sqlalchemy import (
    BigInteger,
    Boolean,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tasks_management.infrastructure.persistence.database import Base
from tasks_management.infrastructure.persistence.models.mixins import ScopeMixin


class AssetEntry(ScopeMixin, Base):
    """Asset projection of one entity (class_name, class_pk). Table: asset_entry."""

    __tablename__ = "asset_entry"

    entry_id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)
    user_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    class_name: Mapped[str] = mapped_column(String(255), nullable=False)
    class_pk: Mapped[int] = mapped_column(BigInteger, nullable=False)
    class_uuid: Mapped[str] = mapped_column(String(75), nullable=False)
    visible: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    summary: Mapped[str] = mapped_column(Text, nullable=False, default="")
    mime_type: Mapped[str] = mapped_column(String(75), nullable=False, default="text/html")
    priority: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    create_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    modified_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    categories: Mapped[list["AssetEntryCategory"]] = relationship(
        cascade="all, delete-orphan", lazy="selectin"
    )
    tags: Mapped[list["AssetEntryTag"]] = relationship(
        cascade="all, delete-orphan", lazy="selectin"
    )

    __table_args__ = (
        UniqueConstraint("class_name", "class_pk", name="uq_asset_entry_class"),
        Index("ix_asset_entry_scope_class", "company_id", "group_id", "class_name"),
    )


class AssetEntryCategory(Base):
    """Category assigned to an asset entry."""

    __tablename__ = "asset_entry_category"

    entry_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("asset_entry.entry_id", ondelete="CASCADE"), primary_key=True
    )
    category_id: Mapped[int] = mapped_column(BigInteger, primary_key=True)


class AssetEntryTag(Base):
    """Tag name assigned to an asset entry."""

    __tablename__ = "asset_entry_tag"

    entry_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("asset_entry.entry_id", ondelete="CASCADE"), primary_key=True
    )
    tag_name: Mapped[str] = mapped_column(String(75), primary_key=True)


class AssetLink(Base):
    """Directed link from entry_id1 to entry_id2 of a given type (0 = related)."""

    __tablename__ = "asset_link"

    entry_id1: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("asset_entry.entry_id", ondelete="CASCADE"), primary_key=True
    )
    entry_id2: Mapped[int] = mapped_column(BigInteger, primary_key=True, index=True)
    type: Mapped[int] = mapped_column(Integer, primary_key=True, default=0)
    user_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    create_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
