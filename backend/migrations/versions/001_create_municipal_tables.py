"""Create users, document_types and documents tables

Revision ID: 001
Revises:
Create Date: 2026-10-19 00:00:00.000000
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    """Create the three municipal tables with RESTRICT foreign keys."""

    op.create_table(
        'users',
        sa.Column('user_id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('username', sa.Text(), nullable=False),
        sa.Column('email', sa.Text(), nullable=False),
        sa.Column('password_hash', sa.Text(), nullable=False),
        sa.Column('role', sa.Text(), server_default='citizen', nullable=False),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.func.now(), nullable=False),

        sa.PrimaryKeyConstraint('user_id'),
        sa.UniqueConstraint('username'),
        sa.UniqueConstraint('email'),
        sa.CheckConstraint("role IN ('citizen', 'admin', 'employee')", name='ck_users_role'),
    )

    op.create_table(
        'document_types',
        sa.Column('doctype_id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.func.now(), nullable=False),

        sa.PrimaryKeyConstraint('doctype_id'),
        sa.UniqueConstraint('name'),
    )

    op.create_table(
        'documents',
        sa.Column('document_id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('doctype_id', sa.Integer(), nullable=False),
        sa.Column('status', sa.Text(), server_default='pending', nullable=False),
        sa.Column('request_date', sa.TIMESTAMP(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('issue_date', sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),

        sa.PrimaryKeyConstraint('document_id'),
        sa.ForeignKeyConstraint(['user_id'], ['users.user_id'], ondelete='RESTRICT'),
        sa.ForeignKeyConstraint(['doctype_id'], ['document_types.doctype_id'], ondelete='RESTRICT'),
        sa.CheckConstraint(
            "status IN ('pending', 'approved', 'rejected', 'in_progress')",
            name='ck_documents_status'
        ),
    )

    op.create_index('ix_documents_user_id', 'documents', ['user_id'])
    op.create_index('ix_documents_doctype_id', 'documents', ['doctype_id'])
    op.create_index('ix_documents_request_date', 'documents', ['request_date'])


def downgrade():
    op.drop_index('ix_documents_request_date', table_name='documents')
    op.drop_index('ix_documents_doctype_id', table_name='documents')
    op.drop_index('ix_documents_user_id', table_name='documents')
    op.drop_table('documents')
    op.drop_table('document_types')
    op.drop_table('users')
