"""Create analisis and users tables

Revision ID: 001
Revises: None
Create Date: 2024-05-01 00:00:00.000000+00:00

What:  Creates one table per resource, each with its unique business key.
       Mirrors app/models/analisis.py and app/models/user.py.

Rollback: downgrade() drops both tables (destructive — all data lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _record_columns() -> list:
    """Identity, timestamps and version counter shared by both tables."""
    return [
        sa.Column("id", sa.Uuid(), nullable=False, comment="Record identifier (exposed as `_id`)"),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            comment="When the record was created (UTC)",
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            comment="Last write to the record (UTC)",
        ),
        sa.Column("version_id", sa.Integer(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "analisis",
        *_record_columns(),
        sa.Column("numero_analisis", sa.Text(), nullable=False, comment="Unique analysis number"),
        sa.Column(
            "fecha_analisis",
            sa.DateTime(timezone=True),
            nullable=False,
            comment="When the analysis was performed (defaults to creation time)",
        ),
        sa.Column("tipo_analisis", sa.Text(), nullable=False),
        sa.Column("laboratorio", sa.Text(), nullable=False),
        sa.Column("tecnico_responsable", sa.Text(), nullable=False),
        sa.Column("observaciones", sa.Text(), nullable=False, server_default=sa.text("''")),
        sa.Column(
            "estado",
            sa.String(20),
            nullable=False,
            server_default=sa.text("'pendiente'"),
            comment="pendiente | en_proceso | completado | cancelado",
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("numero_analisis"),
    )
    op.create_index(
        "idx_analisis_estado_laboratorio",
        "analisis",
        ["estado", "laboratorio"],
    )

    op.create_table(
        "users",
        *_record_columns(),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("email", sa.Text(), nullable=False),
        sa.Column("age", sa.Integer(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )
    op.create_index("ix_users_is_active", "users", ["is_active"])


def downgrade() -> None:
    op.drop_index("ix_users_is_active", table_name="users")
    op.drop_table("users")
    op.drop_index("idx_analisis_estado_laboratorio", table_name="analisis")
    op.drop_table("analisis")
