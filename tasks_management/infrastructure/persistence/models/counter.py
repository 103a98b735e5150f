"""Counter ORM model: named monotonic sequences for entity ids. Table: counter."""

from sqlalchemy import BigInteger, String
from sqlalchemy.orm import Mapped, mapped_column

from tasks_management.infrastructure.persistence.database import Base


class Counter(Base):
    """One row per sequence (e.g. 'task', 'asset_entry'). current_id is the last id handed out."""

    __tablename__ = "counter"

    name: Mapped[str] = mapped_column(String(75), primary_key=True)
    current_id: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
