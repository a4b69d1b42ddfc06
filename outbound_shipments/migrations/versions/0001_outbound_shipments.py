"""create outbound_shipments

Revision ID: 0001_outbound_shipments
Revises:
Create Date: 2021-05-07

"""
from alembic import op
import sqlalchemy as sa

revision = '0001_outbound_shipments'
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    op.create_table(
        'outbound_shipments',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('name', sa.String, nullable=False),
        sa.Column('contents', sa.String, nullable=False),
        sa.Column('street_1', sa.String, nullable=False),
        sa.Column('street_2', sa.String, nullable=False),
        sa.Column('city', sa.String, nullable=False),
        sa.Column('state', sa.String, nullable=False),
        sa.Column('zipcode', sa.String, nullable=False),
        sa.Column('country', sa.String, nullable=False),
        sa.Column('address_formatted', sa.String, nullable=False),
        sa.Column('email', sa.String, nullable=False),
        sa.Column('phone', sa.String, nullable=False),
        sa.Column('status', sa.String, nullable=False),
        sa.Column('carrier', sa.String, nullable=False),
        sa.Column('tracking_number', sa.String, nullable=False),
        sa.Column('tracking_link', sa.String, nullable=False),
        sa.Column('oxide_tracking_link', sa.String, nullable=False),
        sa.Column('tracking_status', sa.String, nullable=False),
        sa.Column('label_link', sa.String, nullable=False),
        sa.Column('reprint_label', sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column('resend_email_to_recipient', sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column('cost', sa.REAL, nullable=False, server_default=sa.text('0')),
        sa.Column('schedule_pickup', sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column('pickup_date', sa.Date, nullable=True),
        # No server default: writers supply the creation instant
        sa.Column('created_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('shipped_time', sa.DateTime(timezone=True), nullable=True),
        sa.Column('delivered_time', sa.DateTime(timezone=True), nullable=True),
        sa.Column('eta', sa.DateTime(timezone=True), nullable=True),
        sa.Column('shippo_id', sa.String, nullable=False),
        sa.Column('messages', sa.String, nullable=False),
        sa.Column('notes', sa.String, nullable=False),
        sa.Column('geocode_cache', sa.String, nullable=False),
        sa.Column('airtable_record_id', sa.String, nullable=False, server_default=''),
        sa.UniqueConstraint('tracking_number', name='outbound_shipments_tracking_number_key'),
    )

def downgrade():
    op.drop_table('outbound_shipments')
