"""add rating and ratings_count to book

Revision ID: 8b4d2e6f1a93
Revises: 3f1a9c2d7b10
Create Date: 2026-10-20 09:41:07.115730

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '8b4d2e6f1a93'
down_revision: Union[str, Sequence[str], None] = '3f1a9c2d7b10'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade():
    with op.batch_alter_table("book") as batch_op:
        batch_op.add_column(sa.Column("rating", sa.Float(), nullable=True))
        batch_op.add_column(sa.Column("ratings_count", sa.Integer(), nullable=False, server_default="0"))
    op.create_index("ix_book_rating", "book", ["rating"])


def downgrade():
    op.drop_index("ix_book_rating", table_name="book")
    with op.batch_alter_table("book") as batch_op:
        batch_op.drop_column("ratings_count")
        batch_op.drop_column("rating")
