"""initial_schema

Revision ID: a3c1e7f29b40
Revises:
Create Date: 2026-03-02 18:41:07.220914

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = 'a3c1e7f29b40'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timing_columns() -> list[sa.Column]:
    return [
        sa.Column('start_indoors_weeks', sa.Float(), nullable=True),
        sa.Column('start_indoors_weeks_min', sa.Float(), nullable=True),
        sa.Column('start_indoors_weeks_max', sa.Float(), nullable=True),
        sa.Column('transplant_weeks_after_last_frost', sa.Float(), nullable=True),
        sa.Column('transplant_weeks_after_last_frost_min', sa.Float(), nullable=True),
        sa.Column('transplant_weeks_after_last_frost_max', sa.Float(), nullable=True),
        sa.Column('direct_sow_weeks', sa.Float(), nullable=True),
        sa.Column('direct_sow_weeks_min', sa.Float(), nullable=True),
        sa.Column('direct_sow_weeks_max', sa.Float(), nullable=True),
        sa.Column('days_to_maturity', sa.Integer(), nullable=True),
        sa.Column('days_to_maturity_min', sa.Integer(), nullable=True),
        sa.Column('days_to_maturity_max', sa.Integer(), nullable=True),
        sa.Column('trellis_required', sa.Boolean(), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=False),
        sa.Column('last_name', sa.String(length=100), nullable=True),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('hashed_password', sa.String(length=255), nullable=False),
        sa.Column('role', sa.Enum('user', 'admin', name='user_role'), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('last_frost_date', sa.Date(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('last_login', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    op.create_table(
        'garden_seasons',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=True),
        sa.Column('year', sa.Integer(), nullable=True),
        sa.Column('last_frost_date', sa.Date(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_garden_seasons_user_id'), 'garden_seasons', ['user_id'])

    op.create_table(
        'plant_types',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('common_name', sa.String(length=200), nullable=False),
        sa.Column('color_hex', sa.String(length=9), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_plant_types_common_name'), 'plant_types', ['common_name'])

    for table, name_nullable in (('varieties', False), ('plant_profiles', True)):
        op.create_table(
            table,
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('plant_type_id', sa.Integer(), nullable=True),
            sa.Column('variety_name', sa.String(length=200), nullable=name_nullable),
            *_timing_columns(),
            sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
            sa.ForeignKeyConstraint(['plant_type_id'], ['plant_types.id']),
            sa.PrimaryKeyConstraint('id'),
        )
        op.create_index(op.f(f'ix_{table}_plant_type_id'), table, ['plant_type_id'])
    op.create_index(op.f('ix_varieties_variety_name'), 'varieties', ['variety_name'])

    op.create_table(
        'crop_plans',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('garden_season_id', sa.Integer(), nullable=False),
        sa.Column('plant_type_id', sa.Integer(), nullable=True),
        sa.Column('variety_id', sa.Integer(), nullable=True),
        sa.Column('plant_profile_id', sa.Integer(), nullable=True),
        sa.Column('label', sa.String(length=200), nullable=True),
        sa.Column('color_hex', sa.String(length=9), nullable=True),
        sa.Column(
            'planting_method',
            sa.Enum('transplant', 'direct_seed', 'both', name='planting_method_enum'),
            nullable=False,
        ),
        sa.Column('seed_offset_days', sa.Integer(), nullable=True),
        sa.Column('transplant_offset_days', sa.Integer(), nullable=True),
        sa.Column('direct_seed_offset_days', sa.Integer(), nullable=True),
        sa.Column('dtm_days', sa.Integer(), nullable=True),
        sa.Column('harvest_window_days', sa.Integer(), nullable=True),
        sa.Column('quantity_planned', sa.Integer(), nullable=False),
        sa.Column('quantity_scheduled', sa.Integer(), nullable=False),
        sa.Column('quantity_planted', sa.Integer(), nullable=False),
        sa.Column(
            'status',
            sa.Enum('planned', 'scheduled', 'planted', 'harvested', name='crop_plan_status_enum'),
            nullable=False,
        ),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['garden_season_id'], ['garden_seasons.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['plant_type_id'], ['plant_types.id']),
        sa.ForeignKeyConstraint(['variety_id'], ['varieties.id']),
        sa.ForeignKeyConstraint(['plant_profile_id'], ['plant_profiles.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    for column in ('user_id', 'garden_season_id', 'plant_type_id', 'variety_id', 'plant_profile_id'):
        op.create_index(op.f(f'ix_crop_plans_{column}'), 'crop_plans', [column])

    op.create_table(
        'crop_tasks',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('crop_plan_id', sa.Integer(), nullable=False),
        sa.Column('garden_season_id', sa.Integer(), nullable=False),
        sa.Column(
            'task_type',
            sa.Enum(
                'seed', 'transplant', 'direct_seed', 'harvest', 'bed_prep', 'cultivate',
                name='crop_task_type_enum',
            ),
            nullable=False,
        ),
        sa.Column('subtype', sa.String(length=30), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('quantity_target', sa.Integer(), nullable=False),
        sa.Column('quantity_completed', sa.Integer(), nullable=False),
        sa.Column('color_hex', sa.String(length=9), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('how_to_content', sa.Text(), nullable=True),
        sa.Column('is_completed', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint('start_date <= end_date', name='ck_crop_tasks_window_order'),
        sa.ForeignKeyConstraint(['crop_plan_id'], ['crop_plans.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['garden_season_id'], ['garden_seasons.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_crop_tasks_crop_plan_id'), 'crop_tasks', ['crop_plan_id'])
    op.create_index(op.f('ix_crop_tasks_garden_season_id'), 'crop_tasks', ['garden_season_id'])
    op.create_index(op.f('ix_crop_tasks_start_date'), 'crop_tasks', ['start_date'])


def downgrade() -> None:
    op.drop_table('crop_tasks')
    op.drop_table('crop_plans')
    op.drop_table('plant_profiles')
    op.drop_table('varieties')
    op.drop_table('plant_types')
    op.drop_table('garden_seasons')
    op.drop_table('users')
    for enum_name in (
        'crop_task_type_enum', 'crop_plan_status_enum', 'planting_method_enum', 'user_role',
    ):
        sa.Enum(name=enum_name).drop(op.get_bind(), checkfirst=True)
