"""Esquema inicial: laboratories, users, orders, order_sequences, notifications

Revision ID: a1c4e7d2b9f0
Revises:
Create Date: 2026-10-18 10:12:41.305118

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = 'a1c4e7d2b9f0'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# user_status lo comparten users y laboratories: se crea una sola vez
role_enum = postgresql.ENUM(
    'superadmin', 'laboratorio', 'doctor', name='role', create_type=False,
)
user_status_enum = postgresql.ENUM(
    'active', 'inactive', name='user_status', create_type=False,
)
order_status_enum = postgresql.ENUM(
    'pendiente', 'iniciada', 'en_proceso', 'terminada', 'cancelada',
    name='order_status', create_type=False,
)


def upgrade() -> None:
    bind = op.get_bind()
    role_enum.create(bind, checkfirst=True)
    user_status_enum.create(bind, checkfirst=True)
    order_status_enum.create(bind, checkfirst=True)

    op.create_table(
        'laboratories',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('address', sa.String(length=500), nullable=False),
        sa.Column('phone', sa.String(length=30), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('status', user_status_enum, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password', sa.String(length=255), nullable=False, comment='Hash bcrypt, nunca se expone'),
        sa.Column('phone', sa.String(length=30), nullable=True),
        sa.Column('role', role_enum, nullable=False),
        sa.Column('status', user_status_enum, nullable=False),
        sa.Column('lab_id', sa.Uuid(), nullable=True, comment='Laboratorio del usuario (null para superadmin)'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)
    op.create_index(op.f('ix_users_lab_id'), 'users', ['lab_id'], unique=False)

    op.create_table(
        'order_sequences',
        sa.Column('name', sa.String(length=50), nullable=False, comment='Nombre de la secuencia (ej: orders)'),
        sa.Column('last_number', sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint('name'),
    )
    order_sequences = sa.table(
        'order_sequences',
        sa.column('name', sa.String),
        sa.column('last_number', sa.Integer),
    )
    op.bulk_insert(order_sequences, [{'name': 'orders', 'last_number': 0}])

    op.create_table(
        'orders',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('order_number', sa.Integer(), nullable=False, comment='Número visible, asignado desde order_sequences'),
        sa.Column('doctor_id', sa.Uuid(), nullable=True),
        sa.Column('lab_id', sa.Uuid(), nullable=False),
        sa.Column('status', order_status_enum, nullable=False),
        sa.Column('value', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('services', sa.JSON(), nullable=False),
        sa.Column('odontograma', sa.JSON(), nullable=False),
        sa.Column('nombre_paciente', sa.String(length=200), nullable=True),
        sa.Column('observaciones', sa.Text(), nullable=True),
        sa.Column('instrucciones', sa.Text(), nullable=True),
        sa.Column('color_sustrato', sa.String(length=100), nullable=True),
        sa.Column('color_trabajo', sa.String(length=100), nullable=True),
        sa.Column('material', sa.String(length=50), nullable=True),
        sa.Column('progress_percentage', sa.String(length=3), nullable=False, comment='0-100 como texto'),
        sa.Column('archivado', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('order_number'),
    )
    op.create_index(op.f('ix_orders_doctor_id'), 'orders', ['doctor_id'], unique=False)
    op.create_index(op.f('ix_orders_lab_id'), 'orders', ['lab_id'], unique=False)
    op.create_index('idx_orders_lab_status', 'orders', ['lab_id', 'status'], unique=False)

    op.create_table(
        'notifications',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False, comment='Destinatario: id de usuario o id de laboratorio (new_order)'),
        sa.Column('type', sa.String(length=50), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('status', sa.String(length=10), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_notifications_user_created', 'notifications', ['user_id', 'created_at'], unique=False)


def downgrade() -> None:
    op.drop_index('idx_notifications_user_created', table_name='notifications')
    op.drop_table('notifications')
    op.drop_index('idx_orders_lab_status', table_name='orders')
    op.drop_index(op.f('ix_orders_lab_id'), table_name='orders')
    op.drop_index(op.f('ix_orders_doctor_id'), table_name='orders')
    op.drop_table('orders')
    op.drop_table('order_sequences')
    op.drop_index(op.f('ix_users_lab_id'), table_name='users')
    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_table('users')
    op.drop_table('laboratories')

    bind = op.get_bind()
    order_status_enum.drop(bind, checkfirst=True)
    user_status_enum.drop(bind, checkfirst=True)
    role_enum.drop(bind, checkfirst=True)
