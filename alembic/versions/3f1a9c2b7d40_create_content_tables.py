"""create_content_tables

Revision ID: 3f1a9c2b7d40
Revises:
Create Date: 2026-09-02 10:14:07.512331

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1a9c2b7d40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table('textbooks',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('book_id', sa.String(64), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('subject', sa.String(64), nullable=False),
        sa.Column('publisher', sa.String(255), nullable=False),
        sa.Column('chapter_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('question_count', sa.Integer(), nullable=False, server_default='0'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_textbooks_book_id', 'textbooks', ['book_id'], unique=True)
    op.create_index('ix_textbooks_subject', 'textbooks', ['subject'])

    op.create_table('chapters',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('chapter_id', sa.String(64), nullable=False),
        sa.Column('book_id', sa.String(64), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('question_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('description', sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_chapters_chapter_id', 'chapters', ['chapter_id'], unique=True)
    op.create_index('ix_chapters_book_id', 'chapters', ['book_id'])

    op.create_table('chapter_items',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('item_id', sa.String(64), nullable=False),
        sa.Column('chapter_id', sa.String(64), nullable=False),
        sa.Column('book_id', sa.String(64), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('key_points', sa.Text(), nullable=True),
        sa.Column('full_text', sa.Text(), nullable=True),
        sa.Column('page_reference', sa.String(64), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_chapter_items_item_id', 'chapter_items', ['item_id'], unique=True)
    op.create_index('ix_chapter_items_chapter_id', 'chapter_items', ['chapter_id'])
    op.create_index('ix_chapter_items_book_id', 'chapter_items', ['book_id'])
    op.create_index('ix_chapter_items_page_reference', 'chapter_items', ['page_reference'])

    op.create_table('questions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('question_id', sa.String(64), nullable=False),
        sa.Column('book_id', sa.String(64), nullable=False),
        sa.Column('chapter_id', sa.String(64), nullable=False),
        sa.Column('set_id', sa.String(64), nullable=True),
        sa.Column('question_text', sa.Text(), nullable=False),
        sa.Column('option_a', sa.Text(), nullable=False),
        sa.Column('option_b', sa.Text(), nullable=False),
        sa.Column('option_c', sa.Text(), nullable=False),
        sa.Column('option_d', sa.Text(), nullable=False),
        sa.Column('correct_answer', sa.String(4), nullable=False),
        sa.Column('explanation', sa.Text(), nullable=True),
        sa.Column('difficulty', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('question_type', sa.String(32), nullable=False, server_default='multiple_choice'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_questions_question_id', 'questions', ['question_id'], unique=True)
    op.create_index('ix_questions_book_id', 'questions', ['book_id'])
    op.create_index('ix_questions_chapter_id', 'questions', ['chapter_id'])
    op.create_index('ix_questions_set_id', 'questions', ['set_id'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('questions')
    op.drop_table('chapter_items')
    op.drop_table('chapters')
    op.drop_table('textbooks')
