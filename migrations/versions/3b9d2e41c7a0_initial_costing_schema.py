"""Initial costing schema

Revision ID: 3b9d2e41c7a0
Revises:
Create Date: 2026-10-19 09:12:44.118203

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3b9d2e41c7a0'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'ingredient',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('vendor', sa.String(length=100), nullable=True),
        sa.Column('purchase_price', sa.Float(), nullable=False),
        sa.Column('purchase_size', sa.Float(), nullable=False),
        sa.Column('purchase_uom', sa.String(length=10), nullable=False),
        sa.Column('density', sa.Float(), nullable=False),
        sa.Column('cost_per_gram', sa.Float(), nullable=False),
        sa.Column('stock_level', sa.Float(), nullable=True),
        sa.Column('location', sa.String(length=100), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    with op.batch_alter_table('ingredient', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_ingredient_name'), ['name'], unique=True)

    op.create_table(
        'packaging_item',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('category', sa.String(length=20), nullable=False),
        sa.Column('vendor', sa.String(length=100), nullable=True),
        sa.Column('unit_price', sa.Float(), nullable=False),
        sa.Column('stock_level', sa.Float(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    with op.batch_alter_table('packaging_item', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_packaging_item_name'), ['name'], unique=False)
        batch_op.create_index(batch_op.f('ix_packaging_item_category'), ['category'], unique=False)

    op.create_table(
        'recipe',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('lineage_id', sa.Integer(), nullable=True),
        sa.Column('version', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('client', sa.String(length=200), nullable=True),
        sa.Column('project', sa.String(length=200), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=True),
        sa.Column('unit_size_g', sa.Float(), nullable=False),
        sa.Column('batch_units', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    with op.batch_alter_table('recipe', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_recipe_lineage_id'), ['lineage_id'], unique=False)
        batch_op.create_index(batch_op.f('ix_recipe_name'), ['name'], unique=False)

    op.create_table(
        'recipe_ingredient',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('recipe_id', sa.Integer(), nullable=False),
        sa.Column('ingredient_id', sa.Integer(), nullable=False),
        sa.Column('percentage', sa.Float(), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['recipe_id'], ['recipe.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    with op.batch_alter_table('recipe_ingredient', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_recipe_ingredient_recipe_id'), ['recipe_id'], unique=False)
        batch_op.create_index(batch_op.f('ix_recipe_ingredient_ingredient_id'), ['ingredient_id'], unique=False)

    op.create_table(
        'product',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('sku', sa.String(length=50), nullable=True),
        sa.Column('net_weight_g', sa.Float(), nullable=False),
        sa.Column('recipe_id', sa.Integer(), nullable=False),
        sa.Column('recipe_name', sa.String(length=200), nullable=True),
        sa.Column('container_id', sa.Integer(), nullable=True),
        sa.Column('closure_id', sa.Integer(), nullable=True),
        sa.Column('label_id', sa.Integer(), nullable=True),
        sa.Column('box_id', sa.Integer(), nullable=True),
        sa.Column('total_material_cost', sa.Float(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    with op.batch_alter_table('product', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_product_name'), ['name'], unique=False)
        batch_op.create_index(batch_op.f('ix_product_recipe_id'), ['recipe_id'], unique=False)

    op.create_table(
        'quote',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('lineage_id', sa.Integer(), nullable=True),
        sa.Column('version', sa.Integer(), nullable=False),
        sa.Column('quote_number', sa.String(length=20), nullable=False),
        sa.Column('client_name', sa.String(length=200), nullable=False),
        sa.Column('product_id', sa.Integer(), nullable=True),
        sa.Column('product_name', sa.String(length=200), nullable=True),
        sa.Column('product_sku', sa.String(length=50), nullable=True),
        sa.Column('net_weight_g', sa.Float(), nullable=True),
        sa.Column('recipe_id', sa.Integer(), nullable=False),
        sa.Column('container_id', sa.Integer(), nullable=True),
        sa.Column('closure_id', sa.Integer(), nullable=True),
        sa.Column('label_id', sa.Integer(), nullable=True),
        sa.Column('box_id', sa.Integer(), nullable=True),
        sa.Column('labor_rate', sa.Float(), nullable=False),
        sa.Column('overhead_rate', sa.Float(), nullable=False),
        sa.Column('setup_cost', sa.Float(), nullable=False),
        sa.Column('target_margin_pct', sa.Float(), nullable=False),
        sa.Column('tier1_units', sa.Integer(), nullable=False),
        sa.Column('tier2_units', sa.Integer(), nullable=False),
        sa.Column('tier3_units', sa.Integer(), nullable=False),
        sa.Column('selected_tier_units', sa.Integer(), nullable=True),
        sa.Column('selected_tier_price', sa.Float(), nullable=True),
        sa.Column('selected_tier_total', sa.Float(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    with op.batch_alter_table('quote', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_quote_lineage_id'), ['lineage_id'], unique=False)
        batch_op.create_index(batch_op.f('ix_quote_quote_number'), ['quote_number'], unique=False)
        batch_op.create_index(batch_op.f('ix_quote_client_name'), ['client_name'], unique=False)


def downgrade():
    op.drop_table('quote')
    op.drop_table('product')
    op.drop_table('recipe_ingredient')
    op.drop_table('recipe')
    op.drop_table('packaging_item')
    op.drop_table('ingredient')
