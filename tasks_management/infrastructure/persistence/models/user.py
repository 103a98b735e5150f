"""User ORM model: identities that create and are assigned tasks. Table: app_user."""

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from tasks_management.infrastructure.persistence.database import Base


class User(Base):
    """Identity record. Only existence and name are used by the task service."""

    __tablename__ = "app_user"

    user_id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)
    company_id: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)
    screen_name: Mapped[str] = mapped_column(String(75), nullable=False)
    first_name: Mapped[str] = mapped_column(String(75), nullable=False, default="")
    last_name: Mapped[str] = mapped_column(String(75), nullable=False, default="")
    email: Mapped[str | None] = mapped_column(String(254), nullable=True)
    create_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    __table_args__ = (
        UniqueConstraint("company_id", "screen_name", name="uq_app_user_company_screen_name"),
    )
