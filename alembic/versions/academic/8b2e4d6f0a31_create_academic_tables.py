"""create careers, specialities, cycles and subjects

Revision ID: 8b2e4d6f0a31
Revises:
Create Date: 2026-10-17 09:14:37.201946

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '8b2e4d6f0a31'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        'specialities',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=100), nullable=False, unique=True),
        sa.Column('description', sa.String(length=255), nullable=True),
        *timestamps(),
    )
    op.create_index('ix_specialities_id', 'specialities', ['id'])

    op.create_table(
        'careers',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=150), nullable=False, unique=True),
        sa.Column('total_cicles', sa.Integer(), nullable=False),
        sa.Column('duration_years', sa.Integer(), nullable=False),
        *timestamps(),
    )
    op.create_index('ix_careers_id', 'careers', ['id'])

    op.create_table(
        'cycles',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=20), nullable=False),
        sa.Column('year', sa.Integer(), nullable=False),
        sa.Column('period', sa.Integer(), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.false()),
        *timestamps(),
        sa.UniqueConstraint('year', 'period', name='unique_cycle_year_period'),
    )
    op.create_index('ix_cycles_id', 'cycles', ['id'])

    op.create_table(
        'subjects',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=150), nullable=False),
        sa.Column('career_id', sa.Integer(), sa.ForeignKey('careers.id'), nullable=False),
        sa.Column('cicle_number', sa.Integer(), nullable=False),
        sa.Column('cycle_id', sa.Integer(), sa.ForeignKey('cycles.id'), nullable=True),
        *timestamps(),
        sa.UniqueConstraint('career_id', 'cicle_number', 'name', name='unique_subject_career_cicle_name'),
    )
    op.create_index('ix_subjects_id', 'subjects', ['id'])
    op.create_index('ix_subjects_career_id', 'subjects', ['career_id'])
    op.create_index('ix_subjects_cycle_id', 'subjects', ['cycle_id'])


def downgrade() -> None:
    op.drop_table('subjects')
    op.drop_table('cycles')
    op.drop_table('careers')
    op.drop_table('specialities')
