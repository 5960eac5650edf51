"""Create players table.

Revision ID: 001_create_players
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_create_players"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "players",
        sa.Column(
            "id", sa.BigInteger().with_variant(sa.Integer, "sqlite"),
            primary_key=True, autoincrement=True,
        ),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("race", sa.String(20), nullable=False),
        sa.Column("profession", sa.String(20), nullable=False),
        sa.Column("birthday", sa.DateTime(timezone=True), nullable=False),
        sa.Column("banned", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("experience", sa.Integer, nullable=False),
        sa.Column("level", sa.Integer, nullable=False),
        sa.Column("until_next_level", sa.Integer, nullable=False),
    )
    op.create_index("ix_players_name", "players", ["name"])
    op.create_index("ix_players_level", "players", ["level"])


def downgrade() -> None:
    op.drop_index("ix_players_level", table_name="players")
    op.drop_index("ix_players_name", table_name="players")
    op.drop_table("players")
