"""create coffees, categories and ingredients

Revision ID: 0001
Revises:
Create Date: 2026-02-22 03:30:14

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "coffees",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False, unique=True),
        *_timestamps(),
    )
    op.create_index("uq_coffees_name_lower", "coffees", [sa.text("lower(name)")], unique=True)

    op.create_table(
        "categories",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(50), nullable=False, unique=True),
        sa.Column("description", sa.String(200), nullable=True),
        *_timestamps(),
    )
    op.create_index("uq_categories_name_lower", "categories", [sa.text("lower(name)")], unique=True)

    op.create_table(
        "ingredients",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(50), nullable=False, unique=True),
        sa.Column("description", sa.String(200), nullable=True),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true(), nullable=False),
        *_timestamps(),
    )
    op.create_index("uq_ingredients_name_lower", "ingredients", [sa.text("lower(name)")], unique=True)
    op.create_index("ix_ingredients_is_active", "ingredients", ["is_active"])
    op.create_index("ix_ingredients_created_at", "ingredients", ["created_at"])
    op.create_index("ix_ingredients_updated_at", "ingredients", ["updated_at"])


def downgrade() -> None:
    op.drop_table("ingredients")
    op.drop_table("categories")
    op.drop_table("coffees")
