"""
SQLAlchemy ORM models

Ownership root is FamilyProfile: every financial record hangs off a profile,
and a profile has exactly one owning user. Rows with family_id NULL on
IncomeType / ExpenseType / Scenario form the shared default tier.
"""
import uuid
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import String, Text, Integer, Numeric, TIMESTAMP, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from homeplanner.infrastructure.db.session import Base


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# Currency columns: two decimal places, exposed to clients as plain numbers
Money = Numeric(precision=14, scale=2)


class User(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)  # stored lower-cased
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), default=_utcnow, nullable=False
    )

    profiles: Mapped[list["FamilyProfile"]] = relationship(
        back_populates="owner", cascade="all, delete-orphan", passive_deletes=True
    )


class FamilyProfile(Base):
    """
    A named budget unit (household) owned by one user
    """
    __tablename__ = "family_profiles"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    key: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    family_name: Mapped[str] = mapped_column(String(255), nullable=False)
    monthly_goal: Mapped[Decimal | None] = mapped_column(Money, nullable=True)
    owner_user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    # Client-side default: microsecond precision keeps "earliest profile" stable
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), default=_utcnow, nullable=False
    )

    owner: Mapped[User] = relationship(back_populates="profiles")
    incomes: Mapped[list["IncomeSource"]] = relationship(
        back_populates="family", cascade="all, delete-orphan", passive_deletes=True
    )
    investments: Mapped[list["Investment"]] = relationship(
        back_populates="family", cascade="all, delete-orphan", passive_deletes=True
    )
    expenses: Mapped[list["FamilyExpense"]] = relationship(
        back_populates="family", cascade="all, delete-orphan", passive_deletes=True
    )


class IncomeType(Base):
    """
    Income category label; family_id NULL marks a shared default (legacy global) type
    """
    __tablename__ = "income_types"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    key: Mapped[str] = mapped_column(String(64), nullable=False)
    label: Mapped[str] = mapped_column(String(255), nullable=False)
    owner_user_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=True
    )
    family_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("family_profiles.id", ondelete="CASCADE"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), default=_utcnow, nullable=False
    )

    __table_args__ = (
        Index("ix_income_types_owner_family", "owner_user_id", "family_id"),
    )


class ExpenseType(Base):
    """
    Expense category label; family_id NULL marks a shared default (legacy global) type
    """
    __tablename__ = "expense_types"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    key: Mapped[str] = mapped_column(String(64), nullable=False)
    label: Mapped[str] = mapped_column(String(255), nullable=False)
    owner_user_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=True
    )
    family_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("family_profiles.id", ondelete="CASCADE"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), default=_utcnow, nullable=False
    )

    __table_args__ = (
        Index("ix_expense_types_owner_family", "owner_user_id", "family_id"),
    )


class IncomeSource(Base):
    __tablename__ = "income_sources"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    monthly_ils: Mapped[Decimal] = mapped_column(Money, nullable=False)
    type_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("income_types.id", ondelete="SET NULL"), nullable=True, index=True
    )
    family_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("family_profiles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), default=_utcnow, nullable=False
    )

    family: Mapped[FamilyProfile] = relationship(back_populates="incomes")
    income_type: Mapped[IncomeType | None] = relationship()

    @property
    def type_label(self) -> str | None:
        return self.income_type.label if self.income_type else None


class Investment(Base):
    __tablename__ = "investments"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    account_type: Mapped[str] = mapped_column(String(255), nullable=False)
    provider: Mapped[str | None] = mapped_column(String(255), nullable=True)
    current_value_ils: Mapped[Decimal] = mapped_column(Money, nullable=False)
    yearly_deposit_ils: Mapped[Decimal | None] = mapped_column(Money, nullable=True)
    family_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("family_profiles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), default=_utcnow, nullable=False
    )

    family: Mapped[FamilyProfile] = relationship(back_populates="investments")


class FamilyExpense(Base):
    __tablename__ = "family_expenses"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    monthly_ils: Mapped[Decimal] = mapped_column(Money, nullable=False)
    type_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("expense_types.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    family_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("family_profiles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), default=_utcnow, nullable=False
    )

    family: Mapped[FamilyProfile] = relationship(back_populates="expenses")
    expense_type: Mapped[ExpenseType] = relationship()

    @property
    def type_label(self) -> str:
        return self.expense_type.label


# ============================================================================
# Global reference data (build catalog, scenarios)
# ============================================================================


class HouseType(Base):
    __tablename__ = "house_types"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    key: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    label: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    items: Mapped[list["BuildCostItem"]] = relationship(
        back_populates="house_type", cascade="all, delete-orphan", passive_deletes=True
    )


class BuildCostItem(Base):
    __tablename__ = "build_cost_items"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    code: Mapped[str] = mapped_column(String(64), nullable=False)
    stage: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    amount_ils: Mapped[Decimal] = mapped_column(Money, nullable=False)
    percent_hint: Mapped[Decimal | None] = mapped_column(Numeric(precision=6, scale=2), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, server_default="0", default=0)
    house_type_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("house_types.id", ondelete="CASCADE"), nullable=False, index=True
    )

    house_type: Mapped[HouseType] = relationship(back_populates="items")


class Scenario(Base):
    """
    Mortgage / construction affordability case; family_id NULL = shared default tier
    """
    __tablename__ = "scenarios"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    key: Mapped[str] = mapped_column(String(64), nullable=False)
    label: Mapped[str] = mapped_column(String(255), nullable=False)
    total_cost_ils: Mapped[Decimal] = mapped_column(Money, nullable=False)
    equity_ils: Mapped[Decimal] = mapped_column(Money, nullable=False)
    mortgage_ils: Mapped[Decimal] = mapped_column(Money, nullable=False)
    monthly_pay_ils: Mapped[Decimal] = mapped_column(Money, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    family_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("family_profiles.id", ondelete="CASCADE"), nullable=True, index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), default=_utcnow, nullable=False
    )
