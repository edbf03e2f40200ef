"""create accounts, tags and account_tags tables

Revision ID: 20241213_0001
Revises:
Create Date: 2024-12-13 20:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '20241213_0001'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            'created_at',
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text('CURRENT_TIMESTAMP'),
            comment='When the record was created'
        ),
        sa.Column(
            'updated_at',
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text('CURRENT_TIMESTAMP'),
            comment='When the record was last updated'
        ),
    ]


def upgrade() -> None:
    """Create the account, tag and link tables with their unique indexes."""

    op.create_table(
        'accounts',
        sa.Column('id', sa.Uuid(), primary_key=True, nullable=False),
        *_timestamps(),
        sa.Column(
            'nickname',
            sa.String(length=20),
            nullable=False,
            comment='Account nickname - unique, immutable'
        ),
        sa.Column(
            'password',
            sa.String(length=255),
            nullable=False,
            comment='bcrypt hash - never plaintext'
        ),
        sa.Column('bio', sa.String(length=35), nullable=True),
    )
    op.create_index('ix_accounts_nickname', 'accounts', ['nickname'], unique=True)

    op.create_table(
        'tags',
        sa.Column('id', sa.Uuid(), primary_key=True, nullable=False),
        *_timestamps(),
        sa.Column('title', sa.String(), nullable=False),
    )
    # Target of the tag get-or-create ON CONFLICT clause
    op.create_index('ix_tags_title', 'tags', ['title'], unique=True)

    op.create_table(
        'account_tags',
        sa.Column(
            'account_id',
            sa.Uuid(),
            sa.ForeignKey('accounts.id'),
            primary_key=True,
            nullable=False
        ),
        sa.Column(
            'tag_id',
            sa.Uuid(),
            sa.ForeignKey('tags.id'),
            primary_key=True,
            nullable=False
        ),
    )
    op.create_index('ix_account_tags_tag_id', 'account_tags', ['tag_id'], unique=False)


def downgrade() -> None:
    """Drop the link table first, then tags and accounts."""

    op.drop_index('ix_account_tags_tag_id', table_name='account_tags')
    op.drop_table('account_tags')

    op.drop_index('ix_tags_title', table_name='tags')
    op.drop_table('tags')

    op.drop_index('ix_accounts_nickname', table_name='accounts')
    op.drop_table('accounts')
