"""Initial tables for properties and property images.

Revision ID: 20261018_0001
Revises:
Create Date: 2026-10-18 09:30:00
"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "20261018_0001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Upgrade schema."""

    op.create_table(
        "properties",
        sa.Column("id", sa.String(length=24), nullable=False),
        sa.Column("owner_id", sa.String(length=24), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("address", sa.Text(), nullable=False),
        sa.Column("price", sa.Numeric(precision=18, scale=2), nullable=False),
        sa.Column("code_internal", sa.String(length=50), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id", name="pk_properties"),
        sa.UniqueConstraint("code_internal", name="uq_properties_code_internal"),
        sa.CheckConstraint("price >= 0", name="ck_properties_price_non_negative"),
        sa.CheckConstraint(
            "year BETWEEN 1800 AND 2100", name="ck_properties_year_range"
        ),
    )
    op.create_index("idx_properties_price", "properties", ["price"], unique=False)
    op.create_index(
        "idx_properties_created_at_desc",
        "properties",
        [sa.text("created_at DESC")],
        unique=False,
    )

    op.create_table(
        "property_images",
        sa.Column("id", sa.String(length=24), nullable=False),
        sa.Column("property_id", sa.String(length=24), nullable=False),
        sa.Column("file", sa.Text(), nullable=False),
        sa.Column(
            "enabled", sa.Boolean(), server_default=sa.text("true"), nullable=False
        ),
        sa.ForeignKeyConstraint(
            ["property_id"],
            ["properties.id"],
            name="fk_property_images_property_id",
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_property_images"),
    )
    op.create_index(
        "idx_property_images_property_enabled",
        "property_images",
        ["property_id", "enabled"],
        unique=False,
    )


def downgrade() -> None:
    """Downgrade schema."""

    op.drop_index(
        "idx_property_images_property_enabled", table_name="property_images"
    )
    op.drop_table("property_images")
    op.drop_index("idx_properties_created_at_desc", table_name="properties")
    op.drop_index("idx_properties_price", table_name="properties")
    op.drop_table("properties")
