"""create reference, profile and enrollment tables

Revision ID: c5d7e9a1b342
Revises:
Create Date: 2026-10-17 09:17:52.883410

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'c5d7e9a1b342'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    # Reference rows keep the id of the row they copy
    op.create_table(
        'user_reference',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=150), nullable=False),
        sa.Column('role_id', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='active'),
        *timestamps(),
    )
    op.create_index('ix_user_reference_id', 'user_reference', ['id'])
    op.create_index('ix_user_reference_email', 'user_reference', ['email'], unique=True)
    op.create_index('ix_user_reference_role_id', 'user_reference', ['role_id'])
    op.create_index('ix_user_reference_status', 'user_reference', ['status'])

    op.create_table(
        'career_reference',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=False),
        sa.Column('name', sa.String(length=150), nullable=False),
        sa.Column('total_cicles', sa.Integer(), nullable=False),
        *timestamps(),
    )
    op.create_index('ix_career_reference_id', 'career_reference', ['id'])

    op.create_table(
        'speciality_reference',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        *timestamps(),
    )
    op.create_index('ix_speciality_reference_id', 'speciality_reference', ['id'])

    op.create_table(
        'subject_reference',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=False),
        sa.Column('name', sa.String(length=150), nullable=False),
        sa.Column('career_id', sa.Integer(), sa.ForeignKey('career_reference.id'), nullable=False),
        sa.Column('cicle_number', sa.Integer(), nullable=False),
        *timestamps(),
    )
    op.create_index('ix_subject_reference_id', 'subject_reference', ['id'])
    op.create_index('ix_subject_reference_career_id', 'subject_reference', ['career_id'])
    op.create_index('ix_subject_reference_cicle_number', 'subject_reference', ['cicle_number'])

    op.create_table(
        'student_profile',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('user_reference.id', ondelete='CASCADE'), nullable=False, unique=True),
        sa.Column('career_id', sa.Integer(), sa.ForeignKey('career_reference.id'), nullable=False),
        sa.Column('current_cicle', sa.Integer(), nullable=False, server_default='1'),
        *timestamps(),
    )
    op.create_index('ix_student_profile_id', 'student_profile', ['id'])
    op.create_index('ix_student_profile_career_id', 'student_profile', ['career_id'])

    op.create_table(
        'teacher_profile',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('user_reference.id', ondelete='CASCADE'), nullable=False, unique=True),
        sa.Column('speciality_id', sa.Integer(), sa.ForeignKey('speciality_reference.id'), nullable=False),
        sa.Column('career_id', sa.Integer(), sa.ForeignKey('career_reference.id'), nullable=False),
        *timestamps(),
    )
    op.create_index('ix_teacher_profile_id', 'teacher_profile', ['id'])
    op.create_index('ix_teacher_profile_speciality_id', 'teacher_profile', ['speciality_id'])
    op.create_index('ix_teacher_profile_career_id', 'teacher_profile', ['career_id'])

    op.create_table(
        'student_subject',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('student_profile_id', sa.Integer(), sa.ForeignKey('student_profile.id', ondelete='CASCADE'), nullable=False),
        sa.Column('subject_id', sa.Integer(), sa.ForeignKey('subject_reference.id'), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='enrolled'),
        sa.Column('grade', sa.Float(), nullable=True),
        sa.Column('enrolled_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        *timestamps(),
        sa.UniqueConstraint('student_profile_id', 'subject_id', name='unique_student_subject'),
    )
    op.create_index('ix_student_subject_id', 'student_subject', ['id'])
    op.create_index('ix_student_subject_student_profile_id', 'student_subject', ['student_profile_id'])
    op.create_index('ix_student_subject_subject_id', 'student_subject', ['subject_id'])

    op.create_table(
        'subject_assignment',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('teacher_profile_id', sa.Integer(), sa.ForeignKey('teacher_profile.id', ondelete='CASCADE'), nullable=False),
        sa.Column('subject_id', sa.Integer(), sa.ForeignKey('subject_reference.id'), nullable=False),
        *timestamps(),
        sa.UniqueConstraint('teacher_profile_id', 'subject_id', name='unique_teacher_subject'),
    )
    op.create_index('ix_subject_assignment_id', 'subject_assignment', ['id'])
    op.create_index('ix_subject_assignment_teacher_profile_id', 'subject_assignment', ['teacher_profile_id'])
    op.create_index('ix_subject_assignment_subject_id', 'subject_assignment', ['subject_id'])


def downgrade() -> None:
    op.drop_table('subject_assignment')
    op.drop_table('student_subject')
    op.drop_table('teacher_profile')
    op.drop_table('student_profile')
    op.drop_table('subject_reference')
    op.drop_table('speciality_reference')
    op.drop_table('career_reference')
    op.drop_table('user_reference')
