"""Initial schema — suppliers, assignments and the assignment audit log.

Revision ID: 001
Revises: None
Create Date: 2026-10-19
"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Suppliers
    op.create_table(
        "suppliers",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("company_name", sa.String(200), nullable=False),
        sa.Column("contact_name", sa.String(200), nullable=True),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
    )

    # Assignments
    op.create_table(
        "supplier_assignments",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column(
            "supplier_id", sa.String(64), sa.ForeignKey("suppliers.id"), nullable=False
        ),
        sa.Column("request_type", sa.String(20), nullable=False),
        sa.Column("request_id", sa.String(64), nullable=False),
        sa.Column("status", sa.String(40), nullable=False, server_default="NEW"),
        sa.Column("priority", sa.Integer, nullable=False, server_default="1"),
        sa.Column("supplier_notes", sa.Text, nullable=True),
        sa.Column("created_by", sa.String(64), nullable=True),
        sa.Column("version", sa.Integer, nullable=False, server_default="1"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("priority BETWEEN 0 AND 3", name="ck_assignments_priority"),
    )
    op.create_index("idx_assignments_supplier", "supplier_assignments", ["supplier_id"])
    op.create_index(
        "idx_assignments_status_type", "supplier_assignments", ["status", "request_type"]
    )
    op.create_index("idx_assignments_created", "supplier_assignments", ["created_at"])

    # Audit log (append-only)
    op.create_table(
        "supplier_assignment_audit",
        sa.Column("seq", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("id", sa.String(64), unique=True, nullable=False),
        sa.Column(
            "assignment_id",
            sa.String(64),
            sa.ForeignKey("supplier_assignments.id"),
            nullable=False,
        ),
        sa.Column("old_status", sa.String(40), nullable=False),
        sa.Column("new_status", sa.String(40), nullable=False),
        sa.Column("changed_by_role", sa.String(20), nullable=False),
        sa.Column("changed_by", sa.String(64), nullable=True),
        sa.Column("notes", sa.Text, nullable=True),
        sa.Column("changed_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("idx_audit_assignment", "supplier_assignment_audit", ["assignment_id"])
    op.create_index(
        "uq_audit_assignment_old_status",
        "supplier_assignment_audit",
        ["assignment_id", "old_status"],
        unique=True,
    )


def downgrade() -> None:
    op.drop_table("supplier_assignment_audit")
    op.drop_table("supplier_assignments")
    op.drop_table("suppliers")
