"""Create recipe sharing schema

Revision ID: 5c1e9a7d2b40
Revises:
Create Date: 2026-10-19 10:12:44.318020

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '5c1e9a7d2b40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

CATEGORIES = [
    ("Breakfast", "breakfast"),
    ("Lunch", "lunch"),
    ("Dinner", "dinner"),
    ("Dessert", "dessert"),
    ("Snack", "snack"),
    ("Vegetarian", "vegetarian"),
    ("Vegan", "vegan"),
    ("Baking", "baking"),
    ("Soup", "soup"),
    ("Salad", "salad"),
]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'profiles',
        sa.Column('id', sa.String(64), primary_key=True),
        sa.Column('username', sa.String(20), nullable=False),
        sa.Column('full_name', sa.String(100)),
        sa.Column('bio', sa.Text()),
        sa.Column('avatar_url', sa.String(1024)),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_profiles_username', 'profiles', ['username'], unique=True)

    op.create_table(
        'recipes',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.String(64), sa.ForeignKey('profiles.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(100), nullable=False),
        sa.Column('description', sa.Text()),
        sa.Column('prep_time', sa.Integer()),
        sa.Column('cook_time', sa.Integer()),
        sa.Column('servings', sa.Integer()),
        sa.Column('difficulty', sa.String(10)),
        sa.Column('status', sa.String(10), nullable=False, server_default='published'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("difficulty IN ('easy', 'medium', 'hard')", name='ck_recipes_difficulty'),
        sa.CheckConstraint("status IN ('draft', 'published')", name='ck_recipes_status'),
    )
    op.create_index('ix_recipes_user_id', 'recipes', ['user_id'])
    op.create_index('ix_recipes_title', 'recipes', ['title'])
    op.create_index('ix_recipes_created_at', 'recipes', ['created_at'])

    op.create_table(
        'ingredients',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('recipe_id', sa.Integer(), sa.ForeignKey('recipes.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('quantity', sa.String(50)),
        sa.Column('unit', sa.String(50)),
        sa.Column('order', sa.Integer(), nullable=False),
        sa.UniqueConstraint('recipe_id', 'order', name='uq_ingredients_recipe_order'),
    )
    op.create_index('ix_ingredients_recipe_id', 'ingredients', ['recipe_id'])

    op.create_table(
        'instructions',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('recipe_id', sa.Integer(), sa.ForeignKey('recipes.id', ondelete='CASCADE'), nullable=False),
        sa.Column('step_number', sa.Integer(), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.UniqueConstraint('recipe_id', 'step_number', name='uq_instructions_recipe_step'),
    )
    op.create_index('ix_instructions_recipe_id', 'instructions', ['recipe_id'])

    categories = op.create_table(
        'categories',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(50), nullable=False, unique=True),
        sa.Column('slug', sa.String(50), nullable=False),
    )
    op.create_index('ix_categories_slug', 'categories', ['slug'], unique=True)

    op.create_table(
        'recipe_categories',
        sa.Column('recipe_id', sa.Integer(), sa.ForeignKey('recipes.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('category_id', sa.Integer(), sa.ForeignKey('categories.id', ondelete='CASCADE'), primary_key=True),
    )

    op.create_table(
        'recipe_images',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('recipe_id', sa.Integer(), sa.ForeignKey('recipes.id', ondelete='CASCADE'), nullable=False),
        sa.Column('image_url', sa.String(1024), nullable=False),
        sa.Column('is_primary', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_recipe_images_recipe_id', 'recipe_images', ['recipe_id'])

    for table in ('likes', 'saved_recipes'):
        op.create_table(
            table,
            sa.Column('user_id', sa.String(64), sa.ForeignKey('profiles.id', ondelete='CASCADE'), primary_key=True),
            sa.Column('recipe_id', sa.Integer(), sa.ForeignKey('recipes.id', ondelete='CASCADE'), primary_key=True),
            sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        )

    op.create_table(
        'comments',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('recipe_id', sa.Integer(), sa.ForeignKey('recipes.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.String(64), sa.ForeignKey('profiles.id', ondelete='CASCADE'), nullable=False),
        sa.Column('content', sa.String(1000), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_comments_recipe_id', 'comments', ['recipe_id'])
    op.create_index('ix_comments_created_at', 'comments', ['created_at'])

    op.bulk_insert(categories, [{"name": name, "slug": slug} for name, slug in CATEGORIES])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('comments')
    op.drop_table('saved_recipes')
    op.drop_table('likes')
    op.drop_table('recipe_images')
    op.drop_table('recipe_categories')
    op.drop_table('categories')
    op.drop_table('instructions')
    op.drop_table('ingredients')
    op.drop_table('recipes')
    op.drop_table('profiles')
