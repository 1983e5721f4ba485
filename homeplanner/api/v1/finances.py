"""
Finances API endpoints - summary view, incomes, investments, expenses
"""
from fastapi import APIRouter, Depends, Query, Response, status
from pydantic import AliasChoices, Field, field_validator
from sqlalchemy.orm import Session

from homeplanner.api.deps import get_db, get_current_user_id
from homeplanner.api.schemas import CamelModel
from homeplanner.application.finances import (
    GetFinanceSummaryUseCase,
    CreateIncomeUseCase, UpdateIncomeUseCase, DeleteIncomeUseCase,
    CreateInvestmentUseCase, UpdateInvestmentUseCase, DeleteInvestmentUseCase,
    CreateExpenseUseCase, UpdateExpenseUseCase, DeleteExpenseUseCase,
)
from homeplanner.infrastructure.db.models import IncomeSource, Investment, FamilyExpense
from homeplanner.utils.validation import parse_amount, as_number, as_optional_number


router = APIRouter(prefix="/api/v1/finances", tags=["finances"])


# === Request models ===

class CreateIncomeRequest(CamelModel):
    name: str | None = None
    monthly_ils: float | None = None
    type_id: str | None = None
    type_label: str | None = Field(default=None, validation_alias=AliasChoices("typeLabel", "type", "type_label"))
    profile_id: str | None = Field(default=None, validation_alias=AliasChoices("profileId", "familyId", "profile_id"))

    @field_validator("monthly_ils", mode="before")
    @classmethod
    def validate_amount(cls, v):
        return parse_amount(v)


class UpdateIncomeRequest(CamelModel):
    name: str | None = None
    monthly_ils: float | None = None
    type_id: str | None = None
    type_label: str | None = Field(default=None, validation_alias=AliasChoices("typeLabel", "type", "type_label"))

    @field_validator("monthly_ils", mode="before")
    @classmethod
    def validate_amount(cls, v):
        return parse_amount(v)


class CreateInvestmentRequest(CamelModel):
    name: str | None = None
    account_type: str | None = None
    provider: str | None = None
    current_value_ils: float | None = None
    yearly_deposit_ils: float | None = None
    profile_id: str | None = Field(default=None, validation_alias=AliasChoices("profileId", "familyId", "profile_id"))

    @field_validator("current_value_ils", "yearly_deposit_ils", mode="before")
    @classmethod
    def validate_amounts(cls, v):
        return parse_amount(v)


class UpdateInvestmentRequest(CamelModel):
    name: str | None = None
    account_type: str | None = None
    provider: str | None = None
    current_value_ils: float | None = None
    yearly_deposit_ils: float | None = None

    @field_validator("current_value_ils", "yearly_deposit_ils", mode="before")
    @classmethod
    def validate_amounts(cls, v):
        return parse_amount(v)


class CreateExpenseRequest(CamelModel):
    name: str | None = None
    monthly_ils: float | None = None
    type_id: str | None = None
    type_label: str | None = None
    profile_id: str | None = Field(default=None, validation_alias=AliasChoices("profileId", "familyId", "profile_id"))

    @field_validator("monthly_ils", mode="before")
    @classmethod
    def validate_amount(cls, v):
        return parse_amount(v)


class UpdateExpenseRequest(CamelModel):
    name: str | None = None
    monthly_ils: float | None = None
    type_id: str | None = None
    type_label: str | None = None

    @field_validator("monthly_ils", mode="before")
    @classmethod
    def validate_amount(cls, v):
        return parse_amount(v)


# === Response models ===

class IncomeResponse(CamelModel):
    id: str
    name: str
    type_id: str | None
    type: str | None
    monthly_ils: float


class InvestmentResponse(CamelModel):
    id: str
    name: str
    account_type: str
    provider: str | None
    current_value_ils: float
    yearly_deposit_ils: float | None


class ExpenseResponse(CamelModel):
    id: str
    name: str
    type_id: str
    type: str
    monthly_ils: float


class TypeResponse(CamelModel):
    id: str
    key: str
    label: str


class TotalsResponse(CamelModel):
    monthly_income: float
    monthly_expenses: float
    net_monthly: float
    investments_total: float


class FinanceResponse(CamelModel):
    id: str
    key: str
    family_name: str
    monthly_goal: float | None
    totals: TotalsResponse
    incomes: list[IncomeResponse]
    investments: list[InvestmentResponse]
    expenses: list[ExpenseResponse]
    income_types: list[TypeResponse]
    expense_types: list[TypeResponse]


def income_response(item: IncomeSource) -> IncomeResponse:
    return IncomeResponse(
        id=item.id,
        name=item.name,
        type_id=item.type_id,
        type=item.type_label,
        monthly_ils=as_number(item.monthly_ils),
    )


def investment_response(item: Investment) -> InvestmentResponse:
    return InvestmentResponse(
        id=item.id,
        name=item.name,
        account_type=item.account_type,
        provider=item.provider,
        current_value_ils=as_number(item.current_value_ils),
        yearly_deposit_ils=as_optional_number(item.yearly_deposit_ils),
    )


def expense_response(item: FamilyExpense) -> ExpenseResponse:
    return ExpenseResponse(
        id=item.id,
        name=item.name,
        type_id=item.type_id,
        type=item.type_label,
        monthly_ils=as_number(item.monthly_ils),
    )


def type_response(item) -> TypeResponse:
    return TypeResponse(id=item.id, key=item.key, label=item.label)


# === Summary ===

@router.get("", response_model=FinanceResponse)
def get_finances(
    profile_id: str | None = Query(default=None, alias="profileId"),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Finances of a family profile (default profile when profileId is omitted)"""
    summary = GetFinanceSummaryUseCase(db).execute(user_id, profile_id)
    profile = summary.profile
    totals = summary.totals

    return FinanceResponse(
        id=profile.id,
        key=profile.key,
        family_name=profile.family_name,
        monthly_goal=as_optional_number(profile.monthly_goal),
        totals=TotalsResponse(
            monthly_income=totals.monthly_income,
            monthly_expenses=totals.monthly_expenses,
            net_monthly=totals.net_monthly,
            investments_total=totals.investments_total,
        ),
        incomes=[income_response(i) for i in summary.incomes],
        investments=[investment_response(i) for i in summary.investments],
        expenses=[expense_response(i) for i in summary.expenses],
        income_types=[type_response(t) for t in summary.income_types],
        expense_types=[type_response(t) for t in summary.expense_types],
    )


# === Incomes ===

@router.post("/incomes", response_model=IncomeResponse, status_code=status.HTTP_201_CREATED)
def create_income(
    req: CreateIncomeRequest,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    income = CreateIncomeUseCase(db).execute(
        user_id=user_id,
        name=req.name,
        monthly_ils=req.monthly_ils,
        type_id=req.type_id,
        type_label=req.type_label,
        profile_id=req.profile_id,
    )
    return income_response(income)


@router.patch("/incomes/{income_id}", response_model=IncomeResponse)
def update_income(
    income_id: str,
    req: UpdateIncomeRequest,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    income = UpdateIncomeUseCase(db).execute(income_id, user_id, **req.model_dump(exclude_unset=True))
    return income_response(income)


@router.delete("/incomes/{income_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_income(
    income_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    DeleteIncomeUseCase(db).execute(income_id, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# === Investments ===

@router.post("/investments", response_model=InvestmentResponse, status_code=status.HTTP_201_CREATED)
def create_investment(
    req: CreateInvestmentRequest,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    investment = CreateInvestmentUseCase(db).execute(
        user_id=user_id,
        name=req.name,
        account_type=req.account_type,
        current_value_ils=req.current_value_ils,
        provider=req.provider,
        yearly_deposit_ils=req.yearly_deposit_ils,
        profile_id=req.profile_id,
    )
    return investment_response(investment)


@router.patch("/investments/{investment_id}", response_model=InvestmentResponse)
def update_investment(
    investment_id: str,
    req: UpdateInvestmentRequest,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    investment = UpdateInvestmentUseCase(db).execute(
        investment_id, user_id, **req.model_dump(exclude_unset=True)
    )
    return investment_response(investment)


@router.delete("/investments/{investment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_investment(
    investment_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    DeleteInvestmentUseCase(db).execute(investment_id, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# === Expenses ===

@router.post("/expenses", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED)
def create_expense(
    req: CreateExpenseRequest,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    expense = CreateExpenseUseCase(db).execute(
        user_id=user_id,
        name=req.name,
        monthly_ils=req.monthly_ils,
        type_id=req.type_id,
        type_label=req.type_label,
        profile_id=req.profile_id,
    )
    return expense_response(expense)


@router.patch("/expenses/{expense_id}", response_model=ExpenseResponse)
def update_expense(
    expense_id: str,
    req: UpdateExpenseRequest,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    expense = UpdateExpenseUseCase(db).execute(expense_id, user_id, **req.model_dump(exclude_unset=True))
    return expense_response(expense)


@router.delete("/expenses/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_expense(
    expense_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    DeleteExpenseUseCase(db).execute(expense_id, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
