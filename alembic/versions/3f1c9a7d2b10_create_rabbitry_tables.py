"""Create rows, hutches, hutch_removals, rabbits, breeding_records and kits

Revision ID: 3f1c9a7d2b10
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '3f1c9a7d2b10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('version', sa.Integer(), nullable=False, server_default='1'),
    ]


def upgrade() -> None:
    # --- rows ---
    op.create_table(
        'rows',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('farm_id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=64), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('capacity', sa.Integer(), nullable=False),
        sa.Column('levels', postgresql.ARRAY(sa.String()), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_rows'),
        sa.UniqueConstraint('farm_id', 'name', name='ux_rows_farm_name'),
    )
    op.create_index('ix_rows_farm_id', 'rows', ['farm_id'], unique=False)

    # --- hutches ---
    op.create_table(
        'hutches',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('farm_id', sa.Uuid(), nullable=False),
        sa.Column('row_id', sa.Uuid(), nullable=False),
        sa.Column('row_name', sa.String(length=64), nullable=False),
        sa.Column('level', sa.String(length=1), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=96), nullable=False),
        sa.Column('size', sa.String(length=32), nullable=False),
        sa.Column('material', sa.String(length=32), nullable=False),
        sa.Column('features', postgresql.ARRAY(sa.String()), nullable=False),
        sa.Column('last_cleaned', sa.DateTime(timezone=True), nullable=True),
        sa.Column('is_deleted', sa.Boolean(), server_default='false', nullable=False),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_hutches'),
        sa.ForeignKeyConstraint(['row_id'], ['rows.id'], name='fk_hutches_row_id_rows'),
    )
    op.create_index(
        'ux_hutches_farm_name_active',
        'hutches',
        ['farm_id', 'name'],
        unique=True,
        postgresql_where="is_deleted = false",
    )
    op.create_index('ix_hutches_farm_row', 'hutches', ['farm_id', 'row_id'], unique=False)

    # --- hutch_removals ---
    op.create_table(
        'hutch_removals',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('farm_id', sa.Uuid(), nullable=False),
        sa.Column('hutch_name', sa.String(length=96), nullable=False),
        sa.Column('rabbit_id', sa.String(length=64), nullable=False),
        sa.Column('reason', sa.String(length=64), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('removed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_hutch_removals'),
    )
    op.create_index(
        'ix_hutch_removals_farm_hutch', 'hutch_removals', ['farm_id', 'hutch_name'], unique=False
    )

    # --- rabbits ---
    op.create_table(
        'rabbits',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('farm_id', sa.Uuid(), nullable=False),
        sa.Column('rabbit_id', sa.String(length=64), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=True),
        sa.Column('gender', sa.String(length=8), nullable=False),
        sa.Column('breed', sa.String(length=128), nullable=True),
        sa.Column('color', sa.String(length=128), nullable=True),
        sa.Column('birth_date', sa.Date(), nullable=True),
        sa.Column('weight', sa.Float(), nullable=True),
        sa.Column('hutch_name', sa.String(length=96), nullable=True),
        sa.Column('status', sa.String(length=16), server_default='active', nullable=False),
        sa.Column('parent_male_id', sa.String(length=64), nullable=True),
        sa.Column('parent_female_id', sa.String(length=64), nullable=True),
        sa.Column('is_pregnant', sa.Boolean(), server_default='false', nullable=False),
        sa.Column('pregnancy_start_date', sa.Date(), nullable=True),
        sa.Column('expected_birth_date', sa.Date(), nullable=True),
        sa.Column('last_birth_date', sa.Date(), nullable=True),
        sa.Column('total_litters', sa.Integer(), server_default='0', nullable=False),
        sa.Column('total_kits', sa.Integer(), server_default='0', nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_rabbits'),
        sa.UniqueConstraint('farm_id', 'rabbit_id', name='ux_rabbits_farm_tag'),
    )
    op.create_index('ix_rabbits_farm_hutch', 'rabbits', ['farm_id', 'hutch_name'], unique=False)

    # --- breeding_records ---
    op.create_table(
        'breeding_records',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('farm_id', sa.Uuid(), nullable=False),
        sa.Column('doe_id', sa.String(length=64), nullable=False),
        sa.Column('buck_id', sa.String(length=64), nullable=True),
        sa.Column('mating_date', sa.Date(), nullable=False),
        sa.Column('expected_birth_date', sa.Date(), nullable=False),
        sa.Column('actual_birth_date', sa.Date(), nullable=True),
        sa.Column('number_of_kits', sa.Integer(), server_default='0', nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_breeding_records'),
    )
    op.create_index(
        'ux_breeding_records_open_doe',
        'breeding_records',
        ['farm_id', 'doe_id'],
        unique=True,
        postgresql_where="actual_birth_date IS NULL",
    )
    op.create_index(
        'ix_breeding_records_farm_doe_date',
        'breeding_records',
        ['farm_id', 'doe_id', 'mating_date'],
        unique=False,
    )

    # --- kits ---
    op.create_table(
        'kits',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('farm_id', sa.Uuid(), nullable=False),
        sa.Column('breeding_record_id', sa.Uuid(), nullable=False),
        sa.Column('kit_number', sa.String(length=64), nullable=False),
        sa.Column('birth_weight', sa.Float(), nullable=True),
        sa.Column('gender', sa.String(length=8), nullable=True),
        sa.Column('color', sa.String(length=128), nullable=True),
        sa.Column('status', sa.String(length=8), nullable=False),
        sa.Column('parent_male_id', sa.String(length=64), nullable=True),
        sa.Column('parent_female_id', sa.String(length=64), nullable=False),
        sa.Column('actual_birth_date', sa.Date(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_kits'),
        sa.ForeignKeyConstraint(
            ['breeding_record_id'], ['breeding_records.id'],
            name='fk_kits_breeding_record_id_breeding_records',
        ),
        sa.UniqueConstraint('breeding_record_id', 'kit_number', name='ux_kits_record_number'),
    )
    op.create_index('ix_kits_farm_id', 'kits', ['farm_id'], unique=False)


def downgrade() -> None:
    op.drop_index('ix_kits_farm_id', table_name='kits')
    op.drop_table('kits')
    op.drop_index('ix_breeding_records_farm_doe_date', table_name='breeding_records')
    op.drop_index('ux_breeding_records_open_doe', table_name='breeding_records')
    op.drop_table('breeding_records')
    op.drop_index('ix_rabbits_farm_hutch', table_name='rabbits')
    op.drop_table('rabbits')
    op.drop_index('ix_hutch_removals_farm_hutch', table_name='hutch_removals')
    op.drop_table('hutch_removals')
    op.drop_index('ix_hutches_farm_row', table_name='hutches')
    op.drop_index('ux_hutches_farm_name_active', table_name='hutches')
    op.drop_table('hutches')
    op.drop_index('ix_rows_farm_id', table_name='rows')
    op.drop_table('rows')
