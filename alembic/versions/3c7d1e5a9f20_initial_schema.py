"""initial_schema

Crea las tablas del gestor compartido: user, manager, membership, month,
income y expense.

Revision ID: 3c7d1e5a9f20
Revises:
Create Date: 2026-10-19 12:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '3c7d1e5a9f20'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'user',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('email', sa.String(length=200), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('password_hash', sa.String(length=200), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email'),
    )

    op.create_table(
        'manager',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('description', sa.String(length=1000), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'membership',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('manager_id', sa.Integer(), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['user.id']),
        sa.ForeignKeyConstraint(['manager_id'], ['manager.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'manager_id', name='uq_membership_user_manager'),
    )
    op.create_index('ix_membership_user_id', 'membership', ['user_id'])
    op.create_index('ix_membership_manager_id', 'membership', ['manager_id'])

    op.create_table(
        'month',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('manager_id', sa.Integer(), nullable=False),
        sa.Column('start_date', sa.DateTime(), nullable=False),
        sa.Column('close_date', sa.DateTime(), nullable=True),
        sa.Column('closed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['manager_id'], ['manager.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_month_manager_id', 'month', ['manager_id'])

    op.create_table(
        'income',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('month_id', sa.Integer(), nullable=False),
        sa.Column('amount', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('description', sa.String(length=500), nullable=False),
        sa.Column('date', sa.DateTime(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['month_id'], ['month.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_income_month_id', 'income', ['month_id'])

    op.create_table(
        'expense',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('month_id', sa.Integer(), nullable=False),
        sa.Column('amount', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('description', sa.String(length=500), nullable=False),
        sa.Column('category', sa.String(length=100), nullable=True),
        sa.Column('date', sa.DateTime(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['month_id'], ['month.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_expense_month_id', 'expense', ['month_id'])


def downgrade() -> None:
    op.drop_index('ix_expense_month_id', table_name='expense')
    op.drop_table('expense')
    op.drop_index('ix_income_month_id', table_name='income')
    op.drop_table('income')
    op.drop_index('ix_month_manager_id', table_name='month')
    op.drop_table('month')
    op.drop_index('ix_membership_manager_id', table_name='membership')
    op.drop_index('ix_membership_user_id', table_name='membership')
    op.drop_table('membership')
    op.drop_table('manager')
    op.drop_table('user')
