"""add_results_and_feedback

Revision ID: 8c4e2d61f0ab
Revises: 3f1a9c2b7d40
Create Date: 2026-09-15 18:42:31.208774

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '8c4e2d61f0ab'
down_revision: Union[str, Sequence[str], None] = '3f1a9c2b7d40'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table('test_results',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('session_id', sa.String(64), nullable=False),
        sa.Column('client_id', sa.String(64), nullable=True),
        sa.Column('book_id', sa.String(64), nullable=False),
        sa.Column('chapter_id', sa.String(64), nullable=False),
        sa.Column('set_id', sa.String(64), nullable=True),
        sa.Column('score', sa.Integer(), nullable=False),
        sa.Column('total_questions', sa.Integer(), nullable=False),
        sa.Column('percentage', sa.Integer(), nullable=False),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_test_results_session_id', 'test_results', ['session_id'], unique=True)
    op.create_index('ix_test_results_client_id', 'test_results', ['client_id'])
    op.create_index('ix_test_results_book_id', 'test_results', ['book_id'])
    op.create_index('ix_test_results_chapter_id', 'test_results', ['chapter_id'])

    op.create_table('feedback',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('client_id', sa.String(64), nullable=True),
        sa.Column('book_id', sa.String(64), nullable=True),
        sa.Column('chapter_id', sa.String(64), nullable=True),
        sa.Column('question_id', sa.String(64), nullable=True),
        sa.Column('feedback_type', sa.String(50), nullable=False),
        sa.Column('feedback_categories_json', sa.Text(), nullable=True),
        sa.Column('feedback_content', sa.Text(), nullable=True),
        sa.Column('status', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_feedback_question_id', 'feedback', ['question_id'])
    op.create_index('ix_feedback_status', 'feedback', ['status'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('ix_feedback_status', table_name='feedback')
    op.drop_index('ix_feedback_question_id', table_name='feedback')
    op.drop_table('feedback')
    op.drop_table('test_results')
