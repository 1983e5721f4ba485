"""
Finance use cases - summary view and ownership-checked CRUD for incomes,
investments and expenses

Partial updates: omitted (or blank) fields keep their stored value, explicit
null clears nullable fields, and a required amount with nothing stored falls
back to 0.
"""
from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy.orm import Session

from homeplanner.application.ownership import (
    FamilyScope,
    get_owned_record,
    resolve_family_scope,
    scope_for_family,
)
from homeplanner.application.taxonomy import INCOME_TYPES, EXPENSE_TYPES, list_visible_types, resolve_type
from homeplanner.errors import ValidationError, NotFoundError
from homeplanner.infrastructure.db.models import FamilyProfile, IncomeSource, Investment, FamilyExpense
from homeplanner.utils.validation import as_number, clean_text, optional_text, to_decimal

DEFAULT_INCOME_TYPE_LABEL = "Salary"


@dataclass
class FinanceTotals:
    monthly_income: float
    monthly_expenses: float
    net_monthly: float
    investments_total: float


@dataclass
class FinanceSummary:
    profile: FamilyProfile
    totals: FinanceTotals
    incomes: list[IncomeSource]
    investments: list[Investment]
    expenses: list[FamilyExpense]
    income_types: list
    expense_types: list


def compute_totals(
    incomes: list[IncomeSource],
    expenses: list[FamilyExpense],
    investments: list[Investment],
) -> FinanceTotals:
    """
    Sum a family's records

    Sums run over the wire values (floats) so that
    monthly_income - monthly_expenses == net_monthly holds exactly for clients.
    """
    monthly_income = sum((as_number(item.monthly_ils) for item in incomes), 0.0)
    monthly_expenses = sum((as_number(item.monthly_ils) for item in expenses), 0.0)
    investments_total = sum((as_number(item.current_value_ils) for item in investments), 0.0)
    return FinanceTotals(
        monthly_income=monthly_income,
        monthly_expenses=monthly_expenses,
        net_monthly=monthly_income - monthly_expenses,
        investments_total=investments_total,
    )


def _required_amount(changes: dict, field: str, current: Decimal | None) -> Decimal:
    value = changes.get(field)
    if value is not None:
        return to_decimal(value)
    return current if current is not None else Decimal("0")


class GetFinanceSummaryUseCase:
    """Use case: Finances view of one family profile"""

    def __init__(self, db: Session):
        self.db = db

    def execute(self, user_id: str, profile_id: str | None = None) -> FinanceSummary:
        scope = resolve_family_scope(self.db, user_id, profile_id)
        profile = self.db.get(FamilyProfile, scope.family_id)

        incomes = self._records(IncomeSource, scope)
        investments = self._records(Investment, scope)
        expenses = self._records(FamilyExpense, scope)

        return FinanceSummary(
            profile=profile,
            totals=compute_totals(incomes, expenses, investments),
            incomes=incomes,
            investments=investments,
            expenses=expenses,
            income_types=list_visible_types(self.db, INCOME_TYPES, scope),
            expense_types=list_visible_types(self.db, EXPENSE_TYPES, scope),
        )

    def _records(self, model, scope: FamilyScope) -> list:
        return (
            self.db.query(model)
            .filter(model.family_id == scope.family_id)
            .order_by(model.created_at.asc(), model.id.asc())
            .all()
        )


# === Incomes ===

class CreateIncomeUseCase:
    def __init__(self, db: Session):
        self.db = db

    def execute(
        self,
        user_id: str,
        name: str,
        monthly_ils: float | None,
        type_id: str | None = None,
        type_label: str | None = None,
        profile_id: str | None = None,
    ) -> IncomeSource:
        """
        Create an income source

        Type resolution: type_id, else type_label (match-or-create), else the
        default "Salary" label.
        """
        name = clean_text(name)
        if not name or monthly_ils is None:
            raise ValidationError("name and monthlyIls are required.")

        scope = resolve_family_scope(self.db, user_id, profile_id)
        income_type = resolve_type(
            self.db, INCOME_TYPES, scope,
            type_id=type_id,
            label=clean_text(type_label) or DEFAULT_INCOME_TYPE_LABEL,
        )

        income = IncomeSource(
            name=name,
            monthly_ils=to_decimal(monthly_ils),
            income_type=income_type,
            family_id=scope.family_id,
        )
        self.db.add(income)
        self.db.commit()
        return income


class UpdateIncomeUseCase:
    def __init__(self, db: Session):
        self.db = db

    def execute(self, income_id: str, user_id: str, **changes) -> IncomeSource:
        income = get_owned_record(self.db, IncomeSource, income_id, user_id)
        if not income:
            raise NotFoundError("Income source not found.")

        name = clean_text(changes.get("name"))
        if name:
            income.name = name
        income.monthly_ils = _required_amount(changes, "monthly_ils", income.monthly_ils)

        type_id = clean_text(changes.get("type_id"))
        type_label = clean_text(changes.get("type_label"))
        if type_id or type_label:
            scope = scope_for_family(self.db, user_id, income.family_id)
            income.income_type = resolve_type(self.db, INCOME_TYPES, scope, type_id=type_id, label=type_label)

        self.db.commit()
        return income


class DeleteIncomeUseCase:
    def __init__(self, db: Session):
        self.db = db

    def execute(self, income_id: str, user_id: str) -> None:
        income = get_owned_record(self.db, IncomeSource, income_id, user_id)
        if not income:
            raise NotFoundError("Income source not found.")
        self.db.delete(income)
        self.db.commit()


# === Investments ===

class CreateInvestmentUseCase:
    def __init__(self, db: Session):
        self.db = db

    def execute(
        self,
        user_id: str,
        name: str,
        account_type: str,
        current_value_ils: float | None,
        provider: str | None = None,
        yearly_deposit_ils: float | None = None,
        profile_id: str | None = None,
    ) -> Investment:
        name = clean_text(name)
        account_type = clean_text(account_type)
        if not name or not account_type or current_value_ils is None:
            raise ValidationError("name, accountType and currentValueIls are required.")

        scope = resolve_family_scope(self.db, user_id, profile_id)
        investment = Investment(
            name=name,
            account_type=account_type,
            provider=optional_text(provider),
            current_value_ils=to_decimal(current_value_ils),
            yearly_deposit_ils=to_decimal(yearly_deposit_ils),
            family_id=scope.family_id,
        )
        self.db.add(investment)
        self.db.commit()
        return investment


class UpdateInvestmentUseCase:
    def __init__(self, db: Session):
        self.db = db

    def execute(self, investment_id: str, user_id: str, **changes) -> Investment:
        investment = get_owned_record(self.db, Investment, investment_id, user_id)
        if not investment:
            raise NotFoundError("Investment not found.")

        name = clean_text(changes.get("name"))
        if name:
            investment.name = name
        account_type = clean_text(changes.get("account_type"))
        if account_type:
            investment.account_type = account_type
        if "provider" in changes:
            investment.provider = optional_text(changes["provider"])
        investment.current_value_ils = _required_amount(
            changes, "current_value_ils", investment.current_value_ils
        )
        if "yearly_deposit_ils" in changes:
            investment.yearly_deposit_ils = to_decimal(changes["yearly_deposit_ils"])

        self.db.commit()
        return investment


class DeleteInvestmentUseCase:
    def __init__(self, db: Session):
        self.db = db

    def execute(self, investment_id: str, user_id: str) -> None:
        investment = get_owned_record(self.db, Investment, investment_id, user_id)
        if not investment:
            raise NotFoundError("Investment not found.")
        self.db.delete(investment)
        self.db.commit()


# === Expenses ===

class CreateExpenseUseCase:
    def __init__(self, db: Session):
        self.db = db

    def execute(
        self,
        user_id: str,
        name: str,
        monthly_ils: float | None,
        type_id: str | None = None,
        type_label: str | None = None,
        profile_id: str | None = None,
    ) -> FamilyExpense:
        name = clean_text(name)
        type_id = clean_text(type_id)
        type_label = clean_text(type_label)
        if not name or monthly_ils is None or (not type_id and not type_label):
            raise ValidationError("name, monthlyIls and typeId/typeLabel are required.")

        scope = resolve_family_scope(self.db, user_id, profile_id)
        expense_type = resolve_type(self.db, EXPENSE_TYPES, scope, type_id=type_id, label=type_label)

        expense = FamilyExpense(
            name=name,
            monthly_ils=to_decimal(monthly_ils),
            expense_type=expense_type,
            family_id=scope.family_id,
        )
        self.db.add(expense)
        self.db.commit()
        return expense


class UpdateExpenseUseCase:
    def __init__(self, db: Session):
        self.db = db

    def execute(self, expense_id: str, user_id: str, **changes) -> FamilyExpense:
        expense = get_owned_record(self.db, FamilyExpense, expense_id, user_id)
        if not expense:
            raise NotFoundError("Expense not found.")

        name = clean_text(changes.get("name"))
        if name:
            expense.name = name
        expense.monthly_ils = _required_amount(changes, "monthly_ils", expense.monthly_ils)

        type_id = clean_text(changes.get("type_id"))
        type_label = clean_text(changes.get("type_label"))
        if type_id or type_label:
            scope = scope_for_family(self.db, user_id, expense.family_id)
            expense.expense_type = resolve_type(self.db, EXPENSE_TYPES, scope, type_id=type_id, label=type_label)

        self.db.commit()
        return expense


class DeleteExpenseUseCase:
    def __init__(self, db: Session):
        self.db = db

    def execute(self, expense_id: str, user_id: str) -> None:
        expense = get_owned_record(self.db, FamilyExpense, expense_id, user_id)
        if not expense:
            raise NotFoundError("Expense not found.")
        self.db.delete(expense)
        self.db.commit()
