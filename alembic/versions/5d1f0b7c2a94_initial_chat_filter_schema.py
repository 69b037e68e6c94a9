"""Initial chat filter schema

Revision ID: 5d1f0b7c2a94
Revises:
Create Date: 2026-10-16 10:12:41.518304

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '5d1f0b7c2a94'
down_revision = None
branch_labels = None
depends_on = None


MODERATION_DEFAULTS = [
    ('moderation.userStrikesThreshold', '3', 'Strikes before a seller account is blocked'),
    ('moderation.contactScorePenalty', '3', 'Contact score added for suspicious patterns'),
    ('moderation.businessScoreBonus', '15', 'Business score added for strong business indicators'),
    ('moderation.contactPenaltyHeavy', '20', 'Contact score added for strong contact indicators'),
    ('moderation.minimumContactScore', '8', 'Minimum contact score to treat a message as contact context'),
    ('moderation.scoreDifferenceThreshold', '5', 'Required margin of contact score over business score'),
    ('moderation.consecutiveNumbersLimit', '7', 'Spelled-out numbers that form a dictated sequence'),
    ('moderation.numbersWithContextLimit', '3', 'Spelled-out numbers checked against contact context'),
]


def upgrade() -> None:
    # Create users table
    op.create_table('users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('is_blocked', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email')
    )
    op.create_index('idx_users_blocked', 'users', ['is_blocked'])
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=False)

    # Create sellers table
    op.create_table('sellers',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('store_name', sa.String(length=255), nullable=False),
        sa.Column('status', sa.String(length=20), server_default='active', nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.CheckConstraint("status IN ('active', 'inactive', 'pending')", name='valid_seller_status'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id')
    )
    op.create_index('idx_sellers_status', 'sellers', ['status'])

    # Create user_strikes table
    op.create_table('user_strikes',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('reason', sa.String(length=255), nullable=False),
        sa.Column('message_id', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.CheckConstraint('LENGTH(reason) > 0', name='non_empty_strike_reason'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('idx_user_strikes_user', 'user_strikes', ['user_id'])
    op.create_index('idx_user_strikes_created', 'user_strikes', ['created_at'])

    # Create configurations table
    configurations = op.create_table('configurations',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('key', sa.String(length=255), nullable=False),
        sa.Column('value', sa.Text(), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('group', sa.String(length=50), server_default='general', nullable=False),
        sa.Column('type', sa.String(length=20), server_default='text', nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.CheckConstraint("type IN ('text', 'number', 'boolean', 'json', 'textarea')", name='valid_config_type'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('key')
    )
    op.create_index('idx_configurations_group', 'configurations', ['group'])
    op.create_index(op.f('ix_configurations_key'), 'configurations', ['key'], unique=False)

    # Seed moderation defaults
    op.bulk_insert(configurations, [
        {'key': key, 'value': value, 'description': description, 'group': 'moderation', 'type': 'number'}
        for key, value, description in MODERATION_DEFAULTS
    ])


def downgrade() -> None:
    # Drop tables in reverse order due to foreign key constraints
    op.drop_table('configurations')
    op.drop_table('user_strikes')
    op.drop_table('sellers')
    op.drop_table('users')
