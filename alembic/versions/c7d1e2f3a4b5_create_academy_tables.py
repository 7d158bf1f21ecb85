"""create programs, modules, participants, enrollments and import batches

Revision ID: c7d1e2f3a4b5
Revises:
Create Date: 2026-10-16 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = 'c7d1e2f3a4b5'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table('programs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('code', sa.String(length=50), nullable=True),
        sa.Column('semester', sa.Integer(), nullable=False),
        sa.Column('duration', sa.Integer(), nullable=False),
        sa.Column('credits', sa.Integer(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='true'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_programs_title'), 'programs', ['title'], unique=True)

    op.create_table('modules',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('code', sa.String(length=50), nullable=True),
        sa.Column('credits', sa.Integer(), nullable=False),
        sa.Column('program_id', sa.Integer(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['program_id'], ['programs.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('program_id', 'title', name='uq_module_program_title')
    )
    op.create_index(op.f('ix_modules_program_id'), 'modules', ['program_id'], unique=False)

    op.create_table('participants',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('reg_no', sa.String(length=20), nullable=True),
        sa.Column('first_name', sa.String(length=120), nullable=False),
        sa.Column('last_name', sa.String(length=120), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('phone_number', sa.String(length=50), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=True),
        sa.Column('division', sa.String(length=120), nullable=True),
        sa.Column('deanery', sa.String(length=120), nullable=True),
        sa.Column('parish', sa.String(length=120), nullable=True),
        sa.Column('semester', sa.String(length=20), nullable=True),
        sa.Column('program_id', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['program_id'], ['programs.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_participants_email'), 'participants', ['email'], unique=True)
    op.create_index(op.f('ix_participants_reg_no'), 'participants', ['reg_no'], unique=True)
    op.create_index(op.f('ix_participants_program_id'), 'participants', ['program_id'], unique=False)

    op.create_table('enrollments',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('participant_id', sa.Integer(), nullable=False),
        sa.Column('module_id', sa.Integer(), nullable=False),
        sa.Column('progress', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('grade', sa.String(length=5), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['participant_id'], ['participants.id'], ),
        sa.ForeignKeyConstraint(['module_id'], ['modules.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('participant_id', 'module_id', name='uq_participant_module')
    )
    op.create_index(op.f('ix_enrollments_participant_id'), 'enrollments', ['participant_id'], unique=False)
    op.create_index(op.f('ix_enrollments_module_id'), 'enrollments', ['module_id'], unique=False)

    op.create_table('import_batches',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('entity_type', sa.String(length=50), nullable=False),
        sa.Column('original_name', sa.String(length=255), nullable=False),
        sa.Column('size', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('content_type', sa.String(length=255), nullable=False, server_default='unknown'),
        sa.Column('imported_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_import_batches_entity_type'), 'import_batches', ['entity_type'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(op.f('ix_import_batches_entity_type'), table_name='import_batches')
    op.drop_table('import_batches')
    op.drop_index(op.f('ix_enrollments_module_id'), table_name='enrollments')
    op.drop_index(op.f('ix_enrollments_participant_id'), table_name='enrollments')
    op.drop_table('enrollments')
    op.drop_index(op.f('ix_participants_program_id'), table_name='participants')
    op.drop_index(op.f('ix_participants_reg_no'), table_name='participants')
    op.drop_index(op.f('ix_participants_email'), table_name='participants')
    op.drop_table('participants')
    op.drop_index(op.f('ix_modules_program_id'), table_name='modules')
    op.drop_table('modules')
    op.drop_index(op.f('ix_programs_title'), table_name='programs')
    op.drop_table('programs')
