"""
Scenario API endpoints
"""
from fastapi import APIRouter, Depends, Query, Response, status
from pydantic import AliasChoices, Field, field_validator
from sqlalchemy.orm import Session

from homeplanner.api.deps import get_db, get_current_user_id
from homeplanner.api.schemas import CamelModel
from homeplanner.application.scenarios import ListScenariosUseCase, CreateScenarioUseCase, DeleteScenarioUseCase
from homeplanner.infrastructure.db.models import Scenario
from homeplanner.utils.validation import parse_amount, as_number


router = APIRouter(prefix="/api/v1/scenarios", tags=["scenarios"])


# === Request/Response models ===

class CreateScenarioRequest(CamelModel):
    key: str | None = None
    label: str | None = None
    total_cost_ils: float | None = None
    equity_ils: float | None = None
    mortgage_ils: float | None = None
    monthly_pay_ils: float | None = None
    notes: str | None = None
    profile_id: str | None = Field(default=None, validation_alias=AliasChoices("profileId", "familyId", "profile_id"))

    @field_validator("total_cost_ils", "equity_ils", "mortgage_ils", "monthly_pay_ils", mode="before")
    @classmethod
    def validate_amounts(cls, v):
        return parse_amount(v)


class ScenarioResponse(CamelModel):
    id: str
    key: str
    label: str
    total_cost_ils: float
    equity_ils: float
    mortgage_ils: float
    monthly_pay_ils: float
    notes: str | None


def scenario_response(item: Scenario) -> ScenarioResponse:
    return ScenarioResponse(
        id=item.id,
        key=item.key,
        label=item.label,
        total_cost_ils=as_number(item.total_cost_ils),
        equity_ils=as_number(item.equity_ils),
        mortgage_ils=as_number(item.mortgage_ils),
        monthly_pay_ils=as_number(item.monthly_pay_ils),
        notes=item.notes,
    )


# === Endpoints ===

@router.get("", response_model=list[ScenarioResponse])
def list_scenarios(
    profile_id: str | None = Query(default=None, alias="profileId"),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Scenarios of the profile (plus shared ones on the default profile), by monthly payment"""
    return [scenario_response(s) for s in ListScenariosUseCase(db).execute(user_id, profile_id)]


@router.post("", response_model=ScenarioResponse, status_code=status.HTTP_201_CREATED)
def create_scenario(
    req: CreateScenarioRequest,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    scenario = CreateScenarioUseCase(db).execute(
        user_id=user_id,
        label=req.label,
        total_cost_ils=req.total_cost_ils,
        equity_ils=req.equity_ils,
        mortgage_ils=req.mortgage_ils,
        monthly_pay_ils=req.monthly_pay_ils,
        notes=req.notes,
        key=req.key,
        profile_id=req.profile_id,
    )
    return scenario_response(scenario)


@router.delete("/{scenario_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_scenario(
    scenario_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    DeleteScenarioUseCase(db).execute(scenario_id, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
