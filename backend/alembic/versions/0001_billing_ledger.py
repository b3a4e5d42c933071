"""Create accounts, teams and billing ledger tables

Revision ID: 0001_billing_ledger
Revises:
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001_billing_ledger'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def _restrict_fk(column: str, target: str, unique: bool = False) -> sa.Column:
    return sa.Column(
        column,
        sa.Integer,
        sa.ForeignKey(target, ondelete='RESTRICT', onupdate='RESTRICT'),
        nullable=False,
        unique=unique,
        index=True,
    )


def upgrade() -> None:
    """Create every table; foreign keys RESTRICT so history cannot be orphaned."""

    op.create_table(
        'users',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('email', sa.String(255), nullable=False, unique=True, index=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('hashed_password', sa.String(255)),
        sa.Column('email_verified', sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column('is_admin', sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column('locale', sa.String(20), nullable=False, server_default='en'),
        sa.Column('timezone', sa.String(64)),
        *_timestamps(),
    )

    op.create_table(
        'email_verifications',
        sa.Column('id', sa.Integer, primary_key=True),
        _restrict_fk('user_id', 'users.id'),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('otp_code', sa.String(12), nullable=False),
        sa.Column('attempts', sa.Integer, nullable=False, server_default='0'),
        *_timestamps(),
    )

    op.create_table(
        'teams',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('is_personal', sa.Boolean, nullable=False),
        _restrict_fk('user_id', 'users.id'),
        *_timestamps(),
    )

    op.create_table(
        'plans',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('name', sa.String(20), nullable=False),
        # exact decimal kept as text
        sa.Column('price', sa.String(32), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        'subscriptions',
        sa.Column('id', sa.Integer, primary_key=True),
        _restrict_fk('plan_id', 'plans.id'),
        _restrict_fk('team_id', 'teams.id', unique=True),
        sa.Column('is_active', sa.Boolean, nullable=False, server_default=sa.true()),
        *_timestamps(),
    )

    # append-only: renewals add rows, nothing updates old ones
    op.create_table(
        'orders',
        sa.Column('id', sa.Integer, primary_key=True),
        _restrict_fk('subscription_id', 'subscriptions.id'),
        sa.Column('price', sa.String(32), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        'subscription_activations',
        sa.Column('id', sa.Integer, primary_key=True),
        _restrict_fk('order_id', 'orders.id', unique=True),
        *_timestamps(),
    )


def downgrade() -> None:
    """Drop tables, dependents first."""
    op.drop_table('subscription_activations')
    op.drop_table('orders')
    op.drop_table('subscriptions')
    op.drop_table('plans')
    op.drop_table('teams')
    op.drop_table('email_verifications')
    op.drop_table('users')
