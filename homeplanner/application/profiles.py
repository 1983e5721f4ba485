"""
Family profile use cases
"""
import logging

from sqlalchemy.orm import Session

from homeplanner.errors import ValidationError
from homeplanner.infrastructure.db.models import FamilyProfile
from homeplanner.utils.keys import make_profile_key
from homeplanner.utils.validation import clean_text, to_decimal

logger = logging.getLogger(__name__)


class ListProfilesUseCase:
    def __init__(self, db: Session):
        self.db = db

    def execute(self, user_id: str) -> list[FamilyProfile]:
        return (
            self.db.query(FamilyProfile)
            .filter(FamilyProfile.owner_user_id == user_id)
            .order_by(FamilyProfile.created_at.asc(), FamilyProfile.id.asc())
            .all()
        )


class CreateProfileUseCase:
    """Use case: Create a family profile; the first one becomes the user's default"""

    def __init__(self, db: Session):
        self.db = db

    def execute(self, user_id: str, family_name: str, monthly_goal: float | None = None) -> FamilyProfile:
        family_name = clean_text(family_name)
        if not family_name:
            raise ValidationError("familyName is required.")

        profile = FamilyProfile(
            key=make_profile_key(),
            family_name=family_name,
            monthly_goal=to_decimal(monthly_goal),
            owner_user_id=user_id,
        )
        self.db.add(profile)
        self.db.commit()
        logger.info("Created family profile id=%s for user id=%s", profile.id, user_id)
        return profile
