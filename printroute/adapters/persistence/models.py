"""SQLAlchemy ORM models — maps to PostgreSQL tables."""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    Boolean,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from printroute.adapters.persistence.database import Base


class PrintCenterModel(Base):
    __tablename__ = "print_centers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), unique=True, nullable=False)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    staff: Mapped[list["StaffMemberModel"]] = relationship(back_populates="print_center")
    assignments: Mapped[list["AssignmentModel"]] = relationship(back_populates="print_center")

    __table_args__ = (Index("idx_print_centers_active", "is_active"),)


class StaffMemberModel(Base):
    __tablename__ = "staff_members"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    role: Mapped[str] = mapped_column(String(20), nullable=False)
    print_center_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("print_centers.id"), nullable=True
    )

    print_center: Mapped["PrintCenterModel | None"] = relationship(back_populates="staff")


class OrderModel(Base):
    __tablename__ = "orders"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    total: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=0)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    longitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    customer_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    assignment: Mapped["AssignmentModel | None"] = relationship(
        back_populates="order", uselist=False
    )

    __table_args__ = (Index("idx_orders_status", "status"),)


class AssignmentModel(Base):
    __tablename__ = "assignments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    order_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("orders.id"), unique=True, nullable=False
    )
    print_center_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("print_centers.id"), nullable=False
    )
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="PENDING")
    notes: Mapped[str | None] = mapped_column(String(500), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    completed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    order: Mapped["OrderModel"] = relationship(back_populates="assignment")
    print_center: Mapped["PrintCenterModel"] = relationship(back_populates="assignments")

    __table_args__ = (
        Index("idx_assignments_print_center", "print_center_id"),
        Index("idx_assignments_status", "status"),
    )
