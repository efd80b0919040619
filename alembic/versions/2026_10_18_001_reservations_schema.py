"""Users, tables, reservations and table assignments

Revision ID: 001_reservations_schema
Revises:
Create Date: 2026-10-18

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision = '001_reservations_schema'
down_revision = None

user_role = sa.Enum('CUSTOMER', 'ADMIN', name='userrole')
dining_slot = sa.Enum('BREAKFAST', 'LUNCH', 'DINNER', name='diningslot')
reservation_status = sa.Enum('PENDING', 'CONFIRMED', 'COMPLETED', 'CANCELLED', name='reservationstatus')


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password_hash', sa.String(), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('surname', sa.String(100), nullable=False),
        sa.Column('phone', sa.String(50), nullable=True),
        sa.Column('role', user_role, nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_is_active', 'users', ['is_active'])

    op.create_table(
        'tables',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('number', sa.Integer(), nullable=False),
        sa.Column('capacity', sa.Integer(), nullable=False),
        sa.Column('location', sa.String(50), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint('capacity > 0', name='ck_table_capacity_positive'),
    )
    op.create_index('ix_tables_number', 'tables', ['number'], unique=True)
    op.create_index('ix_tables_location', 'tables', ['location'])

    op.create_table(
        'reservations',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('time', dining_slot, nullable=False),
        sa.Column('guests', sa.Integer(), nullable=False),
        sa.Column('status', reservation_status, nullable=False),
        sa.Column('user_id', sa.Uuid(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint('guests > 0', name='ck_reservation_guests_positive'),
    )
    op.create_index('ix_reservations_date', 'reservations', ['date'])
    op.create_index('ix_reservations_time', 'reservations', ['time'])
    op.create_index('ix_reservations_status', 'reservations', ['status'])
    op.create_index('ix_reservations_user_id', 'reservations', ['user_id'])

    op.create_table(
        'reservation_tables',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column(
            'reservation_id', sa.Uuid(),
            sa.ForeignKey('reservations.id', ondelete='CASCADE'),
            nullable=False,
        ),
        sa.Column('table_id', sa.Uuid(), sa.ForeignKey('tables.id'), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('time', dining_slot, nullable=False),
        # The double-booking backstop
        sa.UniqueConstraint('table_id', 'date', 'time', name='uq_table_slot'),
    )
    op.create_index('ix_reservation_tables_reservation_id', 'reservation_tables', ['reservation_id'])
    op.create_index('ix_reservation_tables_table_id', 'reservation_tables', ['table_id'])
    op.create_index('ix_reservation_tables_date', 'reservation_tables', ['date'])


def downgrade():
    op.drop_table('reservation_tables')
    op.drop_table('reservations')
    op.drop_table('tables')
    op.drop_table('users')

    bind = op.get_bind()
    for enum in (reservation_status, dining_slot, user_role):
        enum.drop(bind, checkfirst=True)
