"""initial neurorelief schema

Revision ID: neurorelief_0001
Revises:
Create Date: 2024-05-01

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = 'neurorelief_0001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=True),
        sa.Column('first_name', sa.String(), nullable=True),
        sa.Column('last_name', sa.String(), nullable=True),
        sa.Column('profile_image_url', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('now()'), nullable=True),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.text('now()'), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email')
    )
    op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)

    op.create_table(
        'migraine_episodes',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.String(), nullable=False),
        sa.Column('start_time', sa.DateTime(), nullable=False),
        sa.Column('end_time', sa.DateTime(), nullable=True),
        sa.Column('intensity', sa.Integer(), nullable=False),
        sa.Column('symptoms', sa.JSON(), nullable=True),
        sa.Column('triggers', sa.JSON(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('is_emergency', sa.Boolean(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('now()'), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_migraine_episodes_user_id'), 'migraine_episodes', ['user_id'], unique=False)
    op.create_index(op.f('ix_migraine_episodes_start_time'), 'migraine_episodes', ['start_time'], unique=False)

    op.create_table(
        'medications',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('dosage', sa.String(), nullable=False),
        sa.Column('frequency', sa.String(), nullable=False),
        sa.Column('side_effects', sa.JSON(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('now()'), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_medications_user_id'), 'medications', ['user_id'], unique=False)
    op.create_index(op.f('ix_medications_is_active'), 'medications', ['is_active'], unique=False)

    op.create_table(
        'medication_logs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.String(), nullable=False),
        sa.Column('medication_id', sa.Integer(), nullable=True),
        sa.Column('episode_id', sa.Integer(), nullable=True),
        sa.Column('taken_at', sa.DateTime(), nullable=False),
        sa.Column('effectiveness', sa.Integer(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('now()'), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.ForeignKeyConstraint(['medication_id'], ['medications.id']),
        sa.ForeignKeyConstraint(['episode_id'], ['migraine_episodes.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_medication_logs_user_id'), 'medication_logs', ['user_id'], unique=False)
    op.create_index(op.f('ix_medication_logs_taken_at'), 'medication_logs', ['taken_at'], unique=False)

    op.create_table(
        'triggers',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('category', sa.String(), nullable=False),
        sa.Column('correlation_score', sa.Float(), nullable=True),
        sa.Column('frequency', sa.Integer(), nullable=True),
        sa.Column('last_occurrence', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('now()'), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_triggers_user_id'), 'triggers', ['user_id'], unique=False)

    op.create_table(
        'medical_reports',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.String(), nullable=False),
        sa.Column('report_type', sa.String(), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('report_data', sa.JSON(), nullable=False),
        sa.Column('generated_at', sa.DateTime(), server_default=sa.text('now()'), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_medical_reports_user_id'), 'medical_reports', ['user_id'], unique=False)
    op.create_index(op.f('ix_medical_reports_generated_at'), 'medical_reports', ['generated_at'], unique=False)

    op.create_table(
        'medical_logs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.String(), nullable=False),
        sa.Column('episode_id', sa.Integer(), nullable=True),
        sa.Column('log_type', sa.String(), nullable=False),
        sa.Column('severity', sa.Integer(), nullable=True),
        sa.Column('vital_signs', sa.JSON(), nullable=True),
        sa.Column('symptoms', sa.JSON(), nullable=True),
        sa.Column('pain_location', sa.String(), nullable=True),
        sa.Column('pain_quality', sa.String(), nullable=True),
        sa.Column('associated_symptoms', sa.JSON(), nullable=True),
        sa.Column('triggers', sa.JSON(), nullable=True),
        sa.Column('medication_response', sa.Integer(), nullable=True),
        sa.Column('functional_impact', sa.Integer(), nullable=True),
        sa.Column('environmental_factors', sa.JSON(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('timestamp', sa.DateTime(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('now()'), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.ForeignKeyConstraint(['episode_id'], ['migraine_episodes.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_medical_logs_user_id'), 'medical_logs', ['user_id'], unique=False)
    op.create_index(op.f('ix_medical_logs_episode_id'), 'medical_logs', ['episode_id'], unique=False)
    op.create_index(op.f('ix_medical_logs_log_type'), 'medical_logs', ['log_type'], unique=False)
    op.create_index(op.f('ix_medical_logs_timestamp'), 'medical_logs', ['timestamp'], unique=False)

    op.create_table(
        'assessment_templates',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.String(), nullable=False),
        sa.Column('template_name', sa.String(), nullable=False),
        sa.Column('template_type', sa.String(), nullable=False),
        sa.Column('questions', sa.JSON(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('now()'), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_assessment_templates_user_id'), 'assessment_templates', ['user_id'], unique=False)


def downgrade():
    op.drop_table('assessment_templates')
    op.drop_table('medical_logs')
    op.drop_table('medical_reports')
    op.drop_table('triggers')
    op.drop_table('medication_logs')
    op.drop_table('medications')
    op.drop_table('migraine_episodes')
    op.drop_table('users')
