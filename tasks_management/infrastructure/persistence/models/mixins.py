"""SQLAlchemy mixins for common model patterns (DRY).

Provides: ScopeMixin (company/group tenancy pair) and AuditMixin (creator
snapshot and create/modified dates). Dates are set by the service, not by
server defaults, so callers can supply them.
"""

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, String
from sqlalchemy.orm import Mapped, declared_attr, mapped_column


class ScopeMixin:
    """Mixin for company/group scoped models. Both ids are immutable after creation."""

    @declared_attr
    def company_id(cls) -> Mapped[int]:
        return mapped_column(BigInteger, nullable=False, index=True)

    @declared_attr
    def group_id(cls) -> Mapped[int]:
        return mapped_column(BigInteger, nullable=False, index=True)


class AuditMixin:
    """Mixin for creator identity and create/modified dates (timezone-aware)."""

    @declared_attr
    def user_id(cls) -> Mapped[int]:
        return mapped_column(BigInteger, nullable=False)

    @declared_attr
    def user_name(cls) -> Mapped[str]:
        return mapped_column(String(255), nullable=False, default="")

    @declared_attr
    def create_date(cls) -> Mapped[datetime]:
        return mapped_column(DateTime(timezone=True), nullable=False)

    @declared_attr
    def modified_date(cls) -> Mapped[datetime]:
        return mapped_column(DateTime(timezone=True), nullable=False)
