"""SQLAlchemy ORM models — maps to PostgreSQL tables."""

from datetime import datetime

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from assignflow.adapters.persistence.database import Base


class SupplierModel(Base):
    __tablename__ = "suppliers"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    company_name: Mapped[str] = mapped_column(String(200), nullable=False)
    contact_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    assignments: Mapped[list["AssignmentModel"]] = relationship(back_populates="supplier")


class AssignmentModel(Base):
    __tablename__ = "supplier_assignments"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    supplier_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("suppliers.id"), nullable=False
    )
    request_type: Mapped[str] = mapped_column(String(20), nullable=False)
    request_id: Mapped[str] = mapped_column(String(64), nullable=False)
    status: Mapped[str] = mapped_column(String(40), nullable=False, default="NEW")
    priority: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    supplier_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_by: Mapped[str | None] = mapped_column(String(64), nullable=True)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    supplier: Mapped["SupplierModel"] = relationship(back_populates="assignments")
    audit_entries: Mapped[list["AssignmentAuditModel"]] = relationship(
        back_populates="assignment", order_by="AssignmentAuditModel.seq"
    )

    __table_args__ = (
        Index("idx_assignments_supplier", "supplier_id"),
        Index("idx_assignments_status_type", "status", "request_type"),
        Index("idx_assignments_created", "created_at"),
        CheckConstraint("priority BETWEEN 0 AND 3", name="ck_assignments_priority"),
    )


class AssignmentAuditModel(Base):
    __tablename__ = "supplier_assignment_audit"

    # seq gives a total order even when two entries share changed_at
    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    assignment_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("supplier_assignments.id"), nullable=False
    )
    old_status: Mapped[str] = mapped_column(String(40), nullable=False)
    new_status: Mapped[str] = mapped_column(String(40), nullable=False)
    changed_by_role: Mapped[str] = mapped_column(String(20), nullable=False)
    changed_by: Mapped[str | None] = mapped_column(String(64), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    changed_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    assignment: Mapped["AssignmentModel"] = relationship(back_populates="audit_entries")

    __table_args__ = (
        Index("idx_audit_assignment", "assignment_id"),
        # No two entries of one assignment may leave the same status
        Index("uq_audit_assignment_old_status", "assignment_id", "old_status", unique=True),
    )
