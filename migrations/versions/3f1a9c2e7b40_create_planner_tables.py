"""create planner tables

Revision ID: 3f1a9c2e7b40
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1a9c2e7b40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _money(name: str, nullable: bool = False) -> sa.Column:
    return sa.Column(name, sa.Numeric(precision=14, scale=2), nullable=nullable)


def _created_at() -> sa.Column:
    return sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.func.now(), nullable=False)


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('password_hash', sa.String(255), nullable=False),
        _created_at(),
    )

    op.create_table(
        'family_profiles',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('key', sa.String(64), nullable=False, unique=True),
        sa.Column('family_name', sa.String(255), nullable=False),
        _money('monthly_goal', nullable=True),
        sa.Column('owner_user_id', sa.String(36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        _created_at(),
    )
    op.create_index('ix_family_profiles_owner_user_id', 'family_profiles', ['owner_user_id'])

    for table in ('income_types', 'expense_types'):
        op.create_table(
            table,
            sa.Column('id', sa.String(36), primary_key=True),
            sa.Column('key', sa.String(64), nullable=False),
            sa.Column('label', sa.String(255), nullable=False),
            sa.Column('owner_user_id', sa.String(36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=True),
            sa.Column('family_id', sa.String(36), sa.ForeignKey('family_profiles.id', ondelete='CASCADE'), nullable=True),
            _created_at(),
        )
        op.create_index(f'ix_{table}_owner_family', table, ['owner_user_id', 'family_id'])

    op.create_table(
        'income_sources',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        _money('monthly_ils'),
        sa.Column('type_id', sa.String(36), sa.ForeignKey('income_types.id', ondelete='SET NULL'), nullable=True),
        sa.Column('family_id', sa.String(36), sa.ForeignKey('family_profiles.id', ondelete='CASCADE'), nullable=False),
        _created_at(),
    )
    op.create_index('ix_income_sources_type_id', 'income_sources', ['type_id'])
    op.create_index('ix_income_sources_family_id', 'income_sources', ['family_id'])

    op.create_table(
        'investments',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('account_type', sa.String(255), nullable=False),
        sa.Column('provider', sa.String(255), nullable=True),
        _money('current_value_ils'),
        _money('yearly_deposit_ils', nullable=True),
        sa.Column('family_id', sa.String(36), sa.ForeignKey('family_profiles.id', ondelete='CASCADE'), nullable=False),
        _created_at(),
    )
    op.create_index('ix_investments_family_id', 'investments', ['family_id'])

    op.create_table(
        'family_expenses',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        _money('monthly_ils'),
        sa.Column('type_id', sa.String(36), sa.ForeignKey('expense_types.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('family_id', sa.String(36), sa.ForeignKey('family_profiles.id', ondelete='CASCADE'), nullable=False),
        _created_at(),
    )
    op.create_index('ix_family_expenses_type_id', 'family_expenses', ['type_id'])
    op.create_index('ix_family_expenses_family_id', 'family_expenses', ['family_id'])

    op.create_table(
        'house_types',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('key', sa.String(64), nullable=False, unique=True),
        sa.Column('label', sa.String(255), nullable=False, unique=True),
        sa.Column('description', sa.Text(), nullable=True),
    )

    op.create_table(
        'build_cost_items',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('code', sa.String(64), nullable=False),
        sa.Column('stage', sa.String(255), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        _money('amount_ils'),
        sa.Column('percent_hint', sa.Numeric(precision=6, scale=2), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('sort_order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('house_type_id', sa.String(36), sa.ForeignKey('house_types.id', ondelete='CASCADE'), nullable=False),
    )
    op.create_index('ix_build_cost_items_house_type_id', 'build_cost_items', ['house_type_id'])

    op.create_table(
        'scenarios',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('key', sa.String(64), nullable=False),
        sa.Column('label', sa.String(255), nullable=False),
        _money('total_cost_ils'),
        _money('equity_ils'),
        _money('mortgage_ils'),
        _money('monthly_pay_ils'),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('family_id', sa.String(36), sa.ForeignKey('family_profiles.id', ondelete='CASCADE'), nullable=True),
        _created_at(),
    )
    op.create_index('ix_scenarios_family_id', 'scenarios', ['family_id'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('ix_scenarios_family_id', 'scenarios')
    op.drop_table('scenarios')
    op.drop_index('ix_build_cost_items_house_type_id', 'build_cost_items')
    op.drop_table('build_cost_items')
    op.drop_table('house_types')
    op.drop_index('ix_family_expenses_family_id', 'family_expenses')
    op.drop_index('ix_family_expenses_type_id', 'family_expenses')
    op.drop_table('family_expenses')
    op.drop_index('ix_investments_family_id', 'investments')
    op.drop_table('investments')
    op.drop_index('ix_income_sources_family_id', 'income_sources')
    op.drop_index('ix_income_sources_type_id', 'income_sources')
    op.drop_table('income_sources')
    for table in ('expense_types', 'income_types'):
        op.drop_index(f'ix_{table}_owner_family', table)
        op.drop_table(table)
    op.drop_index('ix_family_profiles_owner_user_id', 'family_profiles')
    op.drop_table('family_profiles')
    op.drop_table('users')
