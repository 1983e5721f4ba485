"""
Income / expense type API endpoints
"""
from fastapi import APIRouter, Depends, Query, Response, status
from pydantic import AliasChoices, Field
from sqlalchemy.orm import Session

from homeplanner.api.deps import get_db, get_current_user_id
from homeplanner.api.schemas import CamelModel
from homeplanner.api.v1.finances import TypeResponse, type_response
from homeplanner.application.taxonomy import (
    INCOME_TYPES, EXPENSE_TYPES,
    ListTypesUseCase, CreateTypeUseCase, RenameTypeUseCase, DeleteTypeUseCase,
)


router = APIRouter(prefix="/api/v1/finances", tags=["finances"])


# === Request models ===

class CreateTypeRequest(CamelModel):
    label: str | None = None
    profile_id: str | None = Field(default=None, validation_alias=AliasChoices("profileId", "familyId", "profile_id"))


class RenameTypeRequest(CamelModel):
    label: str | None = None


# === Income types ===

@router.get("/income-types", response_model=list[TypeResponse])
def list_income_types(
    profile_id: str | None = Query(default=None, alias="profileId"),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Income types visible to the profile, by label"""
    return [type_response(t) for t in ListTypesUseCase(db, INCOME_TYPES).execute(user_id, profile_id)]


@router.post("/income-types", response_model=TypeResponse, status_code=status.HTTP_201_CREATED)
def create_income_type(
    req: CreateTypeRequest,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    row = CreateTypeUseCase(db, INCOME_TYPES).execute(user_id, req.label, profile_id=req.profile_id)
    return type_response(row)


@router.patch("/income-types/{type_id}", response_model=TypeResponse)
def rename_income_type(
    type_id: str,
    req: RenameTypeRequest,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    row = RenameTypeUseCase(db, INCOME_TYPES).execute(type_id, user_id, req.label)
    return type_response(row)


@router.delete("/income-types/{type_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_income_type(
    type_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Delete an income type; incomes using it keep existing without a type"""
    DeleteTypeUseCase(db, INCOME_TYPES).execute(type_id, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# === Expense types ===

@router.get("/expense-types", response_model=list[TypeResponse])
def list_expense_types(
    profile_id: str | None = Query(default=None, alias="profileId"),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Expense types visible to the profile, by label"""
    return [type_response(t) for t in ListTypesUseCase(db, EXPENSE_TYPES).execute(user_id, profile_id)]


@router.post("/expense-types", response_model=TypeResponse, status_code=status.HTTP_201_CREATED)
def create_expense_type(
    req: CreateTypeRequest,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    row = CreateTypeUseCase(db, EXPENSE_TYPES).execute(user_id, req.label, profile_id=req.profile_id)
    return type_response(row)


@router.patch("/expense-types/{type_id}", response_model=TypeResponse)
def rename_expense_type(
    type_id: str,
    req: RenameTypeRequest,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    row = RenameTypeUseCase(db, EXPENSE_TYPES).execute(type_id, user_id, req.label)
    return type_response(row)


@router.delete("/expense-types/{type_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_expense_type(
    type_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Delete an expense type; rejected with 400 while expenses still use it"""
    DeleteTypeUseCase(db, EXPENSE_TYPES).execute(type_id, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
