"""Create contacts table

Revision ID: 001
Revises: None
Create Date: 2024-01-15 00:00:00.000000+00:00

What:  Creates the `contacts` table backing the `Contact` document collection.
How:   PostgreSQL-specific: UUID primary key with gen_random_uuid(), JSONB body.

Rollback: downgrade() drops the table entirely (destructive — all contacts lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the contacts table and its listing-order index."""
    op.create_table(
        "contacts",
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=True),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
            comment="Store-assigned document identifier",
        ),
        sa.Column(
            "document",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
            comment="Schemaless contact document",
        ),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
            comment="Insertion time (UTC), used for listing order",
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_index("idx_contacts_created_at", "contacts", ["created_at"])


def downgrade() -> None:
    """Drop the contacts table. Destructive: every contact is lost."""
    op.drop_index("idx_contacts_created_at", table_name="contacts")
    op.drop_table("contacts")
