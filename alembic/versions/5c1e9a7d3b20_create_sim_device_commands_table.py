"""create sim_device_commands table

Revision ID: 5c1e9a7d3b20
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5c1e9a7d3b20'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create sim_device_commands table."""
    # No unique constraint on (namespace, device_name, command): uniqueness is
    # case-insensitive and resolved by merging at write time
    op.create_table(
        'sim_device_commands',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('namespace', sa.String(255), nullable=False),
        sa.Column('device_name', sa.String(255), nullable=False),
        sa.Column('command', sa.Text, nullable=False),
        sa.Column('output', sa.Text, nullable=False, server_default=''),
        sa.Column('enabled', sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    )

    op.create_index(
        'idx_sim_device_commands_ns_device',
        'sim_device_commands',
        ['namespace', 'device_name']
    )
    op.create_index(
        'ix_sim_device_commands_updated_at',
        'sim_device_commands',
        ['updated_at']
    )


def downgrade() -> None:
    """Drop sim_device_commands table."""
    op.drop_index('ix_sim_device_commands_updated_at', 'sim_device_commands')
    op.drop_index('idx_sim_device_commands_ns_device', 'sim_device_commands')
    op.drop_table('sim_device_commands')
