"""Initial schema: characters, quotes, conversations, episodes

Revision ID: 000_initial
Revises:
Create Date: 2026-10-17

Conversation -> quote and episode -> conversation references are association
tables. conversation_quotes.position keeps the utterance order.
"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = '000_initial'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table('characters',
        sa.Column('id', postgresql.UUID(as_uuid=True), server_default=sa.text('gen_random_uuid()'), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table('quotes',
        sa.Column('id', postgresql.UUID(as_uuid=True), server_default=sa.text('gen_random_uuid()'), nullable=False),
        sa.Column('character_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('text', sa.Text(), nullable=False),
        sa.ForeignKeyConstraint(['character_id'], ['characters.id'], name='fk_quotes_character_id_characters', ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table('conversations',
        sa.Column('id', postgresql.UUID(as_uuid=True), server_default=sa.text('gen_random_uuid()'), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table('episodes',
        sa.Column('id', postgresql.UUID(as_uuid=True), server_default=sa.text('gen_random_uuid()'), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=True),
        sa.Column('number', sa.Integer(), nullable=False),
        sa.Column('season', sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table('conversation_quotes',
        sa.Column('conversation_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('quote_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['conversation_id'], ['conversations.id'], name='fk_conversation_quotes_conversation_id_conversations', ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['quote_id'], ['quotes.id'], name='fk_conversation_quotes_quote_id_quotes', ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('conversation_id', 'quote_id')
    )

    op.create_table('episode_conversations',
        sa.Column('episode_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('conversation_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.ForeignKeyConstraint(['episode_id'], ['episodes.id'], name='fk_episode_conversations_episode_id_episodes', ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['conversation_id'], ['conversations.id'], name='fk_episode_conversations_conversation_id_conversations', ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('episode_id', 'conversation_id')
    )


def downgrade() -> None:
    op.drop_table('episode_conversations')
    op.drop_table('conversation_quotes')
    op.drop_table('episodes')
    op.drop_table('conversations')
    op.drop_table('quotes')
    op.drop_table('characters')
