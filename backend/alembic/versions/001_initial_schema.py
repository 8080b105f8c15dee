"""Initial schema: bikes, documents, alerts, notifications, maintenance

Revision ID: 001
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'bikes',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('user_id', sa.String(36), nullable=False),
        sa.Column('nickname', sa.String(), nullable=True),
        sa.Column('brand', sa.String(), nullable=False),
        sa.Column('model', sa.String(), nullable=False),
        sa.Column('current_odometer_km', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('last_oil_change_km', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('last_oil_change_date', sa.DateTime(), nullable=True),
        sa.Column('oil_change_interval_km', sa.Integer(), nullable=False, server_default='2500'),
        sa.Column('is_active', sa.Boolean(), nullable=True, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('deleted_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_bikes_user_id', 'bikes', ['user_id'])

    op.create_table(
        'documents',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('bike_id', sa.String(36), nullable=False),
        sa.Column('user_id', sa.String(36), nullable=False),
        sa.Column('document_type', sa.String(20), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('issue_date', sa.Date(), nullable=True),
        sa.Column('expiry_date', sa.Date(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.Column('deleted_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['bike_id'], ['bikes.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_documents_bike_id', 'documents', ['bike_id'])
    op.create_index('ix_documents_user_id', 'documents', ['user_id'])

    op.create_table(
        'document_alerts',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('document_id', sa.String(36), nullable=False),
        sa.Column('user_id', sa.String(36), nullable=False),
        sa.Column('alert_type', sa.String(20), nullable=False),
        sa.Column('scheduled_at', sa.DateTime(), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('retry_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('last_error', sa.Text(), nullable=True),
        sa.Column('sent_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['document_id'], ['documents.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_document_alerts_document_id', 'document_alerts', ['document_id'])
    op.create_index('ix_document_alerts_status_scheduled_at', 'document_alerts', ['status', 'scheduled_at'])

    op.create_table(
        'notification_settings',
        sa.Column('user_id', sa.String(36), nullable=False),
        sa.Column('push_enabled', sa.Boolean(), nullable=True, server_default=sa.true()),
        sa.Column('email_enabled', sa.Boolean(), nullable=True, server_default=sa.true()),
        sa.Column('sms_enabled', sa.Boolean(), nullable=True, server_default=sa.false()),
        sa.Column('quiet_hours_start', sa.String(5), nullable=True),
        sa.Column('quiet_hours_end', sa.String(5), nullable=True),
        sa.Column('document_alerts', sa.Boolean(), nullable=True, server_default=sa.true()),
        sa.Column('maintenance_alerts', sa.Boolean(), nullable=True, server_default=sa.true()),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('user_id')
    )

    op.create_table(
        'notification_queue',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('user_id', sa.String(36), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('body', sa.Text(), nullable=False),
        sa.Column('data', sa.JSON(), nullable=True),
        sa.Column('category', sa.String(), nullable=False),
        sa.Column('priority', sa.String(20), nullable=False, server_default='normal'),
        sa.Column('status', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('scheduled_at', sa.DateTime(), nullable=True),
        sa.Column('sent_at', sa.DateTime(), nullable=True),
        sa.Column('error_message', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_notification_queue_user_id', 'notification_queue', ['user_id'])

    op.create_table(
        'maintenance_schedules',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('bike_id', sa.String(36), nullable=False),
        sa.Column('maintenance_type', sa.String(), nullable=False),
        sa.Column('interval_km', sa.Integer(), nullable=True),
        sa.Column('interval_days', sa.Integer(), nullable=True),
        sa.Column('is_enabled', sa.Boolean(), nullable=True, server_default=sa.true()),
        sa.ForeignKeyConstraint(['bike_id'], ['bikes.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('bike_id', 'maintenance_type', name='uq_maintenance_schedule_bike_type')
    )
    op.create_index('ix_maintenance_schedules_bike_id', 'maintenance_schedules', ['bike_id'])

    op.create_table(
        'maintenance_records',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('bike_id', sa.String(36), nullable=False),
        sa.Column('maintenance_type', sa.String(), nullable=False),
        sa.Column('odometer_at_maintenance', sa.Integer(), nullable=False),
        sa.Column('performed_at', sa.DateTime(), nullable=True),
        sa.Column('next_due_km', sa.Integer(), nullable=True),
        sa.Column('next_due_date', sa.Date(), nullable=True),
        sa.ForeignKeyConstraint(['bike_id'], ['bikes.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_maintenance_records_bike_id', 'maintenance_records', ['bike_id'])


def downgrade() -> None:
    op.drop_table('maintenance_records')
    op.drop_table('maintenance_schedules')
    op.drop_table('notification_queue')
    op.drop_table('notification_settings')
    op.drop_table('document_alerts')
    op.drop_table('documents')
    op.drop_table('bikes')
