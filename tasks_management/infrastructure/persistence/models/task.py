"""Task ORM model. Company/group scoped task with creator snapshot and assignee."""

from datetime import datetime

from sqlalchemy import BigInteger, Boolean, DateTime, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from tasks_management.infrastructure.persistence.database import Base
from tasks_management.infrastructure.persistence.models.mixins import AuditMixin, ScopeMixin


class Task(ScopeMixin, AuditMixin, Base):
    """Task record. Table: task. task_id comes from the counter table, never autoincrement."""

    __tablename__ = "task"

    task_id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)
    uuid: Mapped[str] = mapped_column(String(75), nullable=False)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    expiration_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    task_user_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    status: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    status_by_user_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    status_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        UniqueConstraint("uuid", "group_id", name="uq_task_uuid_group"),
        Index("ix_task_company_group", "company_id", "group_id"),
        Index("ix_task_company_group_status", "company_id", "group_id", "status"),
        Index("ix_task_company_user", "company_id", "user_id"),
        Index("ix_task_company_task_user", "company_id", "task_user_id"),
    )
