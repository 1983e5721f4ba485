"""
Family profile API endpoints
"""
from datetime import datetime

from fastapi import APIRouter, Depends, status
from pydantic import field_validator
from sqlalchemy.orm import Session

from homeplanner.api.deps import get_db, get_current_user_id
from homeplanner.api.schemas import CamelModel
from homeplanner.application.profiles import ListProfilesUseCase, CreateProfileUseCase
from homeplanner.infrastructure.db.models import FamilyProfile
from homeplanner.utils.validation import parse_amount, as_optional_number


router = APIRouter(prefix="/api/v1/profiles", tags=["profiles"])


# === Request/Response models ===

class CreateProfileRequest(CamelModel):
    family_name: str | None = None
    monthly_goal: float | None = None

    @field_validator("monthly_goal", mode="before")
    @classmethod
    def validate_goal(cls, v):
        return parse_amount(v)


class ProfileResponse(CamelModel):
    id: str
    key: str
    family_name: str
    monthly_goal: float | None
    created_at: datetime


def profile_response(profile: FamilyProfile) -> ProfileResponse:
    return ProfileResponse(
        id=profile.id,
        key=profile.key,
        family_name=profile.family_name,
        monthly_goal=as_optional_number(profile.monthly_goal),
        created_at=profile.created_at,
    )


# === Endpoints ===

@router.get("", response_model=list[ProfileResponse])
def list_profiles(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Profiles of the current user, oldest (default) first"""
    return [profile_response(p) for p in ListProfilesUseCase(db).execute(user_id)]


@router.post("", response_model=ProfileResponse, status_code=status.HTTP_201_CREATED)
def create_profile(
    req: CreateProfileRequest,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Create a family profile"""
    profile = CreateProfileUseCase(db).execute(
        user_id=user_id,
        family_name=req.family_name,
        monthly_goal=req.monthly_goal,
    )
    return profile_response(profile)
