"""Initial schema: tasks, users, counters, resources, assets

Revision ID: 3f9a1c2d7e4b
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f9a1c2d7e4b"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create initial schema."""
    op.create_table(
        "counter",
        sa.Column("name", sa.String(length=75), nullable=False),
        sa.Column("current_id", sa.BigInteger(), nullable=False),
        sa.PrimaryKeyConstraint("name"),
    )

    op.create_table(
        "app_user",
        sa.Column("user_id", sa.BigInteger(), autoincrement=False, nullable=False),
        sa.Column("company_id", sa.BigInteger(), nullable=False),
        sa.Column("screen_name", sa.String(length=75), nullable=False),
        sa.Column("first_name", sa.String(length=75), nullable=False),
        sa.Column("last_name", sa.String(length=75), nullable=False),
        sa.Column("email", sa.String(length=254), nullable=True),
        sa.Column(
            "create_date",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("user_id"),
        sa.UniqueConstraint(
            "company_id", "screen_name", name="uq_app_user_company_screen_name"
        ),
    )
    op.create_index(op.f("ix_app_user_company_id"), "app_user", ["company_id"], unique=False)

    # task: id from counter, never autoincrement
    op.create_table(
        "task",
        sa.Column("task_id", sa.BigInteger(), autoincrement=False, nullable=False),
        sa.Column("uuid", sa.String(length=75), nullable=False),
        sa.Column("company_id", sa.BigInteger(), nullable=False),
        sa.Column("group_id", sa.BigInteger(), nullable=False),
        sa.Column("user_id", sa.BigInteger(), nullable=False),
        sa.Column("user_name", sa.String(length=255), nullable=False),
        sa.Column("create_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("modified_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("title", sa.String(length=500), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("expiration_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("task_user_id", sa.BigInteger(), nullable=False),
        sa.Column("completed", sa.Boolean(), nullable=False),
        sa.Column("status", sa.Integer(), nullable=False),
        sa.Column("status_by_user_id", sa.BigInteger(), nullable=True),
        sa.Column("status_date", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("task_id"),
        sa.UniqueConstraint("uuid", "group_id", name="uq_task_uuid_group"),
    )
    op.create_index(op.f("ix_task_company_id"), "task", ["company_id"], unique=False)
    op.create_index(op.f("ix_task_group_id"), "task", ["group_id"], unique=False)
    op.create_index("ix_task_company_group", "task", ["company_id", "group_id"], unique=False)
    op.create_index(
        "ix_task_company_group_status", "task", ["company_id", "group_id", "status"], unique=False
    )
    op.create_index("ix_task_company_user", "task", ["company_id", "user_id"], unique=False)
    op.create_index(
        "ix_task_company_task_user", "task", ["company_id", "task_user_id"], unique=False
    )

    op.create_table(
        "resource_permission",
        sa.Column("company_id", sa.BigInteger(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("scope", sa.Integer(), nullable=False),
        sa.Column("prim_key", sa.BigInteger(), nullable=False),
        sa.Column("group_id", sa.BigInteger(), nullable=False),
        sa.Column("owner_id", sa.BigInteger(), nullable=False),
        sa.Column("group_permissions", sa.Boolean(), nullable=False),
        sa.Column("guest_permissions", sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint("company_id", "name", "scope", "prim_key"),
    )
    op.create_index(
        "ix_resource_permission_scope",
        "resource_permission",
        ["company_id", "group_id", "name"],
        unique=False,
    )

    op.create_table(
        "asset_entry",
        sa.Column("entry_id", sa.BigInteger(), autoincrement=False, nullable=False),
        sa.Column("company_id", sa.BigInteger(), nullable=False),
        sa.Column("group_id", sa.BigInteger(), nullable=False),
        sa.Column("user_id", sa.BigInteger(), nullable=False),
        sa.Column("class_name", sa.String(length=255), nullable=False),
        sa.Column("class_pk", sa.BigInteger(), nullable=False),
        sa.Column("class_uuid", sa.String(length=75), nullable=False),
        sa.Column("visible", sa.Boolean(), nullable=False),
        sa.Column("title", sa.String(length=500), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("summary", sa.Text(), nullable=False),
        sa.Column("mime_type", sa.String(length=75), nullable=False),
        sa.Column("priority", sa.Float(), nullable=False),
        sa.Column("create_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("modified_date", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("entry_id"),
        sa.UniqueConstraint("class_name", "class_pk", name="uq_asset_entry_class"),
    )
    op.create_index(op.f("ix_asset_entry_company_id"), "asset_entry", ["company_id"], unique=False)
    op.create_index(op.f("ix_asset_entry_group_id"), "asset_entry", ["group_id"], unique=False)
    op.create_index(
        "ix_asset_entry_scope_class",
        "asset_entry",
        ["company_id", "group_id", "class_name"],
        unique=False,
    )

    op.create_table(
        "asset_entry_category",
        sa.Column("entry_id", sa.BigInteger(), nullable=False),
        sa.Column("category_id", sa.BigInteger(), nullable=False),
        sa.ForeignKeyConstraint(["entry_id"], ["asset_entry.entry_id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("entry_id", "category_id"),
    )
    op.create_table(
        "asset_entry_tag",
        sa.Column("entry_id", sa.BigInteger(), nullable=False),
        sa.Column("tag_name", sa.String(length=75), nullable=False),
        sa.ForeignKeyConstraint(["entry_id"], ["asset_entry.entry_id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("entry_id", "tag_name"),
    )
    op.create_table(
        "asset_link",
        sa.Column("entry_id1", sa.BigInteger(), nullable=False),
        sa.Column("entry_id2", sa.BigInteger(), nullable=False),
        sa.Column("type", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.BigInteger(), nullable=False),
        sa.Column("create_date", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["entry_id1"], ["asset_entry.entry_id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("entry_id1", "entry_id2", "type"),
    )
    op.create_index(op.f("ix_asset_link_entry_id2"), "asset_link", ["entry_id2"], unique=False)


def downgrade() -> None:
    """Drop initial schema."""
    op.drop_index(op.f("ix_asset_link_entry_id2"), table_name="asset_link")
    op.drop_table("asset_link")
    op.drop_table("asset_entry_tag")
    op.drop_table("asset_entry_category")
    op.drop_index("ix_asset_entry_scope_class", table_name="asset_entry")
    op.drop_index(op.f("ix_asset_entry_group_id"), table_name="asset_entry")
    op.drop_index(op.f("ix_asset_entry_company_id"), table_name="asset_entry")
    op.drop_table("asset_entry")
    op.drop_index("ix_resource_permission_scope", table_name="resource_permission")
    op.drop_table("resource_permission")
    op.drop_index("ix_task_company_task_user", table_name="task")
    op.drop_index("ix_task_company_user", table_name="task")
    op.drop_index("ix_task_company_group_status", table_name="task")
    op.drop_index("ix_task_company_group", table_name="task")
    op.drop_index(op.f("ix_task_group_id"), table_name="task")
    op.drop_index(op.f("ix_task_company_id"), table_name="task")
    op.drop_table("task")
    op.drop_index(op.f("ix_app_user_company_id"), table_name="app_user")
    op.drop_table("app_user")
    op.drop_table("counter")
