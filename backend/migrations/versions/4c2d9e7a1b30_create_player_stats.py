"""create player_stats

Revision ID: 4c2d9e7a1b30
Revises:
Create Date: 2026-10-18 00:00:00
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '4c2d9e7a1b30'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)
    if insp.has_table('player_stats'):
        return
    op.create_table(
        'player_stats',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('mined', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('placed', sa.Integer(), nullable=False, server_default='0'),
        sa.CheckConstraint('mined >= 0', name='ck_player_stats_mined_non_negative'),
        sa.CheckConstraint('placed >= 0', name='ck_player_stats_placed_non_negative'),
    )


def downgrade():
    op.drop_table('player_stats')
