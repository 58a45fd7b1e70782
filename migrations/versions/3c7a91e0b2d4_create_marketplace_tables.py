"""create role, user, category and listing tables

Revision ID: 3c7a91e0b2d4
Revises:
Create Date: 2026-10-17
"""

from alembic import op
import sqlalchemy as sa


revision = '3c7a91e0b2d4'
down_revision = None
branch_labels = None
depends_on = None


def _has_table(table_name: str) -> bool:
    inspector = sa.inspect(op.get_bind())
    return inspector.has_table(table_name)


def upgrade():
    if not _has_table('role'):
        op.create_table(
            'role',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('name', sa.String(length=64), nullable=False, unique=True),
        )
    if not _has_table('user'):
        op.create_table(
            'user',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('username', sa.String(length=80), nullable=False, unique=True),
            sa.Column('email', sa.String(length=120), nullable=False, unique=True),
            sa.Column('email_confirmed', sa.Boolean(), nullable=False),
            sa.Column('password', sa.String(length=255), nullable=False),
            sa.Column('first_name', sa.String(length=120), nullable=False),
            sa.Column('last_name', sa.String(length=120), nullable=False),
            sa.Column('country', sa.String(length=120), nullable=True),
            sa.Column('created_at', sa.DateTime(), nullable=False),
        )
    if not _has_table('user_roles'):
        op.create_table(
            'user_roles',
            sa.Column('user_id', sa.Integer(), sa.ForeignKey('user.id'), primary_key=True),
            sa.Column('role_id', sa.Integer(), sa.ForeignKey('role.id'), primary_key=True),
        )
    if not _has_table('category'):
        op.create_table(
            'category',
            sa.Column('id', sa.Integer(), primary_key=True, autoincrement=False),
            sa.Column('name', sa.String(length=80), nullable=False),
            sa.Column('description', sa.String(length=255), nullable=True),
        )
    if not _has_table('listing'):
        op.create_table(
            'listing',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('user_id', sa.Integer(), sa.ForeignKey('user.id'), nullable=False),
            sa.Column('category_id', sa.Integer(), sa.ForeignKey('category.id'), nullable=False),
            sa.Column('title', sa.String(length=200), nullable=False),
            sa.Column('description', sa.Text(), nullable=True),
            sa.Column('make', sa.String(length=80), nullable=False),
            sa.Column('model', sa.String(length=80), nullable=False),
            sa.Column('year', sa.Integer(), nullable=True),
            sa.Column('condition', sa.String(length=40), nullable=True),
            sa.Column('price', sa.Float(), nullable=False),
            sa.Column('currency', sa.String(length=3), nullable=False),
            sa.Column('listing_type', sa.String(length=40), nullable=True),
            sa.Column('is_active', sa.Boolean(), nullable=False),
            sa.Column('created_at', sa.DateTime(), nullable=False),
            sa.Column('image_url', sa.String(length=500), nullable=True),
        )


def downgrade():
    for table_name in ('listing', 'category', 'user_roles', 'user', 'role'):
        if _has_table(table_name):
            op.drop_table(table_name)
