"""Record restaurant payouts on orders

Revision ID: 002
Revises: 001
Create Date: 2026-10-20 09:00:00.000000

"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = '002'
down_revision: Union[str, None] = '001'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Add transfer id and destination account to orders"""
    with op.batch_alter_table('orders') as batch_op:
        batch_op.add_column(sa.Column('transfer_id', sa.String(100), nullable=True))
        batch_op.add_column(sa.Column('transfer_account_id', sa.String(100), nullable=True))


def downgrade() -> None:
    """Drop order transfer columns"""
    with op.batch_alter_table('orders') as batch_op:
        batch_op.drop_column('transfer_account_id')
        batch_op.drop_column('transfer_id')
