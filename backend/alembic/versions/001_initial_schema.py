"""Initial schema: courts, members, reservations, maintenance windows

Revision ID: 001_initial
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision = "001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "court",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("surface", sa.String(), nullable=False),
        sa.Column("is_covered", sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_court_name", "court", ["name"], unique=True)

    op.create_table(
        "member",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("first_name", sa.String(), nullable=False),
        sa.Column("last_name", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("role", sa.String(length=20), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_member_email", "member", ["email"], unique=True)

    # Slot uniqueness lives here so concurrent writers cannot double-book
    op.create_table(
        "reservation",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("start_time", sa.Time(), nullable=False),
        sa.Column("court_id", sa.Integer(), nullable=False),
        sa.Column("member_id", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["court_id"], ["court.id"]),
        sa.ForeignKeyConstraint(["member_id"], ["member.id"]),
        sa.UniqueConstraint("court_id", "date", "start_time", name="uq_reservation_court_slot"),
    )
    op.create_index("ix_reservation_date", "reservation", ["date"])
    op.create_index("ix_reservation_court_id", "reservation", ["court_id"])
    op.create_index("ix_reservation_member_id", "reservation", ["member_id"])

    op.create_table(
        "maintenancewindow",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("court_id", sa.Integer(), nullable=False),
        sa.Column("technician_id", sa.Integer(), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("description", sa.String(), nullable=False),
        sa.Column("status", sa.String(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["court_id"], ["court.id"]),
        sa.ForeignKeyConstraint(["technician_id"], ["member.id"]),
    )
    op.create_index("ix_maintenancewindow_court_id", "maintenancewindow", ["court_id"])


def downgrade() -> None:
    op.drop_index("ix_maintenancewindow_court_id", table_name="maintenancewindow")
    op.drop_table("maintenancewindow")
    op.drop_index("ix_reservation_member_id", table_name="reservation")
    op.drop_index("ix_reservation_court_id", table_name="reservation")
    op.drop_index("ix_reservation_date", table_name="reservation")
    op.drop_table("reservation")
    op.drop_index("ix_member_email", table_name="member")
    op.drop_table("member")
    op.drop_index("ix_court_name", table_name="court")
    op.drop_table("court")
