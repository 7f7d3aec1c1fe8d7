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
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from civic_routing.adapters.persistence.database import Base
from civic_routing.domain.value_objects.enums import AssignmentOutcome, Trigger


def _in_enum(column: str, enum_cls) -> str:
    values = ", ".join(f"'{m.value}'" for m in enum_cls)
    return f"{column} IN ({values})"


class CityModel(Base):
    __tablename__ = "cities"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    state: Mapped[str | None] = mapped_column(String(100), nullable=True)

    authorities: Mapped[list["AuthorityModel"]] = relationship(back_populates="city")


class IssueCategoryModel(Base):
    __tablename__ = "issue_categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    slug: Mapped[str | None] = mapped_column(String(100), nullable=True)


class AuthorityModel(Base):
    __tablename__ = "authorities"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(150), nullable=False)
    city_id: Mapped[int] = mapped_column(Integer, ForeignKey("cities.id"), nullable=False)
    region: Mapped[str] = mapped_column(String(100), nullable=False)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )

    city: Mapped["CityModel"] = relationship(back_populates="authorities")

    __table_args__ = (Index("idx_authorities_city", "city_id"),)


class AuthorityCategoryModel(Base):
    __tablename__ = "authority_categories"

    authority_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("authorities.id", ondelete="CASCADE"), primary_key=True
    )
    issue_category_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("issue_categories.id", ondelete="CASCADE"), primary_key=True
    )

    __table_args__ = (Index("idx_authority_categories_category", "issue_category_id"),)


class ReportModel(Base):
    __tablename__ = "reports"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str | None] = mapped_column(String(200), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    issue_category_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("issue_categories.id"), nullable=False
    )
    city_id: Mapped[int | None] = mapped_column(Integer, ForeignKey("cities.id"), nullable=True)
    region: Mapped[str | None] = mapped_column(String(100), nullable=True)
    # Written only by the assignment engine.
    authority_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("authorities.id"), nullable=True
    )
    status: Mapped[str] = mapped_column(String(30), nullable=False, default="reported")
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )

    ledger: Mapped[list["AssignmentLedgerModel"]] = relationship(
        back_populates="report", order_by="AssignmentLedgerModel.id"
    )

    __table_args__ = (
        Index("idx_reports_authority", "authority_id"),
        Index("idx_reports_city", "city_id"),
    )


class AssignmentLedgerModel(Base):
    __tablename__ = "assignment_ledger"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    report_id: Mapped[int] = mapped_column(Integer, ForeignKey("reports.id"), nullable=False)
    actor_id: Mapped[int] = mapped_column(Integer, nullable=False)
    trigger: Mapped[str] = mapped_column(String(20), nullable=False)
    outcome: Mapped[str] = mapped_column(String(50), nullable=False)
    previous_authority_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    new_authority_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    reason: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )

    report: Mapped["ReportModel"] = relationship(back_populates="ledger")

    __table_args__ = (
        Index("idx_assignment_ledger_report", "report_id", "id"),
        CheckConstraint(_in_enum("trigger", Trigger), name="ck_assignment_ledger_trigger"),
        CheckConstraint(_in_enum("outcome", AssignmentOutcome), name="ck_assignment_ledger_outcome"),
    )
