"""Resource permission ORM model: one access-control entry per entity instance."""

from sqlalchemy import BigInteger, Boolean, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from tasks_management.infrastructure.persistence.database import Base


class ResourcePermission(Base):
    """Resource entry binding an entity instance (name, prim_key) to its owner and grants."""

    __tablename__ = "resource_permission"

    company_id: Mapped[int] = mapped_column(BigInteger, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), primary_key=True)
    scope: Mapped[int] = mapped_column(Integer, primary_key=True)
    prim_key: Mapped[int] = mapped_column(BigInteger, primary_key=True)
    group_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    owner_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    group_permissions: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    guest_permissions: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    __table_args__ = (
        Index("ix_resource_permission_scope", "company_id", "group_id", "name"),
    )
