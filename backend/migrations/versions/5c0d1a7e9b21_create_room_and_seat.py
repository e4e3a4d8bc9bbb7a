"""create room and seat tables

Revision ID: 5c0d1a7e9b21
Revises:
Create Date: 2026-10-19 00:00:00
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '5c0d1a7e9b21'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)
    existing_tables = set(insp.get_table_names())

    if 'room' not in existing_tables:
        op.create_table(
            'room',
            sa.Column('id', sa.String(length=64), nullable=False),
            sa.Column('status', sa.String(length=16), nullable=False),
            sa.Column('players', sa.Text(), nullable=False),
            sa.Column('game_state', sa.Text(), nullable=True),
            sa.Column('created_at', sa.DateTime(), nullable=False),
            sa.Column('updated_at', sa.DateTime(), nullable=False),
            sa.PrimaryKeyConstraint('id'),
        )
    if 'seat' not in existing_tables:
        op.create_table(
            'seat',
            sa.Column('participant_id', sa.String(length=64), nullable=False),
            sa.Column('room_id', sa.String(length=64), nullable=False),
            sa.Column('player_number', sa.Integer(), nullable=False),
            sa.ForeignKeyConstraint(['room_id'], ['room.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('participant_id'),
        )
        with op.batch_alter_table('seat') as batch_op:
            batch_op.create_index('ix_seat_room_id', ['room_id'], unique=False)


def downgrade():
    with op.batch_alter_table('seat') as batch_op:
        batch_op.drop_index('ix_seat_room_id')
    op.drop_table('seat')
    op.drop_table('room')
