"""Add indexes for episode resolution and search

Revision ID: 001_lookup_indexes
Revises: 000_initial
Create Date: 2026-10-17

Episode resolution looks rows up by conversation_id / quote_id (the second
column of each composite primary key), and search filters quotes by
character and episodes by season/number.
"""

from alembic import op

# revision identifiers, used by Alembic.
revision = "001_lookup_indexes"
down_revision = "000_initial"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_index("ix_characters_name", "characters", ["name"])
    op.create_index("ix_quotes_character_id", "quotes", ["character_id"])
    op.create_index("idx_conversation_quotes_quote", "conversation_quotes", ["quote_id"])
    op.create_index(
        "idx_episode_conversations_conversation",
        "episode_conversations",
        ["conversation_id"],
    )
    op.create_index("idx_episodes_season_number", "episodes", ["season", "number"])


def downgrade() -> None:
    op.drop_index("idx_episodes_season_number", table_name="episodes")
    op.drop_index("idx_episode_conversations_conversation", table_name="episode_conversations")
    op.drop_index("idx_conversation_quotes_quote", table_name="conversation_quotes")
    op.drop_index("ix_quotes_character_id", table_name="quotes")
    op.drop_index("ix_characters_name", table_name="characters")
