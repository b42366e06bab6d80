"""create species

Revision ID: 5b1e0c7d2a91
Revises:
Create Date: 2025-09-02 10:12:44.301517

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5b1e0c7d2a91'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

KINGDOMS = ("Animalia", "Plantae", "Fungi", "Protista", "Archaea", "Bacteria")


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "species",
        sa.Column(
            "species_id",
            sa.BigInteger().with_variant(sa.Integer(), "sqlite"),
            primary_key=True,
        ),
        sa.Column("scientific_name", sa.String(), nullable=False),
        sa.Column("common_name", sa.String(), nullable=True),
        sa.Column(
            "kingdom",
            sa.Enum(*KINGDOMS, name="kingdom", create_constraint=True),
            nullable=False,
        ),
        sa.Column("total_population", sa.BigInteger(), nullable=True),
        sa.Column("image", sa.Text(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("author", sa.String(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.UniqueConstraint("scientific_name"),
        sa.CheckConstraint(
            "total_population IS NULL OR total_population >= 1",
            name="ck_species_total_population_positive",
        ),
    )
    op.create_index("ix_species_author", "species", ["author"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("ix_species_author", table_name="species")
    op.drop_table("species")
    sa.Enum(name="kingdom").drop(op.get_bind(), checkfirst=True)
