"""Create provider directory, taxonomy and staff tables.

Revision ID: 20261019_0001
Revises: 
Create Date: 2026-10-19

"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "clinics",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("city", sa.String(120), nullable=True),
        sa.Column("country", sa.String(120), nullable=True),
        sa.Column("is_public_listed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("treatments_offered", sa.JSON(), nullable=True),
        sa.Column("specialties", sa.JSON(), nullable=True),
        sa.Column("success_rates", sa.JSON(), nullable=True),
        sa.Column("average_cost_by_treatment", sa.JSON(), nullable=True),
        sa.Column("international_support", sa.JSON(), nullable=True),
        sa.Column("price_range_min", sa.Float(), nullable=True),
        sa.Column("price_range_max", sa.Float(), nullable=True),
        sa.Column("patient_satisfaction", sa.Float(), nullable=True),
        sa.Column("completion_rate", sa.Float(), nullable=True),
        sa.Column("rating_avg", sa.Float(), nullable=True),
        sa.Column("response_time_hours", sa.Float(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index(op.f("ix_clinics_name"), "clinics", ["name"], unique=False)
    op.create_index(op.f("ix_clinics_city"), "clinics", ["city"], unique=False)
    op.create_index(op.f("ix_clinics_is_public_listed"), "clinics", ["is_public_listed"], unique=False)

    op.create_table(
        "treatment_conditions",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("condition", sa.Text(), nullable=False),
        sa.Column("specialty", sa.String(120), nullable=False),
        sa.Column("keywords", sa.JSON(), nullable=True),
    )
    op.create_index(op.f("ix_treatment_conditions_condition"), "treatment_conditions", ["condition"], unique=False)

    op.create_table(
        "clinic_members",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("clinic_id", sa.String(36), nullable=False),
        sa.Column("user_id", sa.String(128), nullable=False),
        sa.Column("role", sa.String(32), nullable=False),
    )
    op.create_index(op.f("ix_clinic_members_clinic_id"), "clinic_members", ["clinic_id"], unique=False)
    op.create_index(op.f("ix_clinic_members_user_id"), "clinic_members", ["user_id"], unique=False)

    op.create_table(
        "profiles",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.String(128), nullable=False),
        sa.Column("full_name", sa.Text(), nullable=True),
        sa.Column("specialties", sa.JSON(), nullable=True),
    )
    op.create_index(op.f("ix_profiles_user_id"), "profiles", ["user_id"], unique=True)


def downgrade() -> None:
    op.drop_index(op.f("ix_profiles_user_id"), table_name="profiles")
    op.drop_table("profiles")
    op.drop_index(op.f("ix_clinic_members_user_id"), table_name="clinic_members")
    op.drop_index(op.f("ix_clinic_members_clinic_id"), table_name="clinic_members")
    op.drop_table("clinic_members")
    op.drop_index(op.f("ix_treatment_conditions_condition"), table_name="treatment_conditions")
    op.drop_table("treatment_conditions")
    op.drop_index(op.f("ix_clinics_is_public_listed"), table_name="clinics")
    op.drop_index(op.f("ix_clinics_city"), table_name="clinics")
    op.drop_index(op.f("ix_clinics_name"), table_name="clinics")
    op.drop_table("clinics")
