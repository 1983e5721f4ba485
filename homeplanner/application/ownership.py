"""
Ownership resolution

Maps (user, optional profile id) to the family profile the caller may act on,
and owns the merge rule between per-family rows and the shared default tier.
"""
from dataclasses import dataclass

from sqlalchemy import or_
from sqlalchemy.orm import Session

from homeplanner.application.users import GetCurrentUserUseCase
from homeplanner.auth import TokenService
from homeplanner.errors import NotFoundError
from homeplanner.infrastructure.db.models import FamilyProfile

PROFILE_NOT_FOUND = "Family profile not found."


@dataclass(frozen=True)
class FamilyScope:
    """
    The family a request acts on

    is_default: the family is the caller's earliest-created profile. Only the
    default profile's views merge in shared-tier rows (family_id NULL).
    """
    user_id: str
    family_id: str
    is_default: bool

    def visible(self, model):
        """Filter clause: rows of this family, plus shared-tier rows for the default profile"""
        own = model.family_id == self.family_id
        if not self.is_default:
            return own
        return or_(own, model.family_id.is_(None))


def resolve_current_user_id(db: Session, tokens: TokenService, token: str | None) -> str:
    """
    Token to user id; re-checks that the user row still exists

    Raises:
        UnauthorizedError
    """
    return GetCurrentUserUseCase(db, tokens).execute(token).id


def get_default_family_id(db: Session, user_id: str) -> str | None:
    """Earliest-created profile of the user"""
    row = (
        db.query(FamilyProfile.id)
        .filter(FamilyProfile.owner_user_id == user_id)
        .order_by(FamilyProfile.created_at.asc(), FamilyProfile.id.asc())
        .first()
    )
    return row[0] if row else None


def resolve_family_id(db: Session, user_id: str, profile_id: str | None = None) -> str:
    """
    Effective family id for the caller

    Args:
        profile_id: requested profile; blank means the default profile

    Raises:
        NotFoundError: requested profile is not owned by the user, or the
            user has no profiles at all
    """
    profile_id = (profile_id or "").strip()
    if not profile_id:
        family_id = get_default_family_id(db, user_id)
        if not family_id:
            raise NotFoundError(PROFILE_NOT_FOUND)
        return family_id

    owned = db.query(FamilyProfile.id).filter(
        FamilyProfile.id == profile_id,
        FamilyProfile.owner_user_id == user_id,
    ).first()
    if not owned:
        raise NotFoundError(PROFILE_NOT_FOUND)
    return owned[0]


def resolve_family_scope(db: Session, user_id: str, profile_id: str | None = None) -> FamilyScope:
    family_id = resolve_family_id(db, user_id, profile_id)
    return FamilyScope(
        user_id=user_id,
        family_id=family_id,
        is_default=family_id == get_default_family_id(db, user_id),
    )


def scope_for_family(db: Session, user_id: str, family_id: str) -> FamilyScope:
    """Scope of a family already known to be owned by the user (e.g. an owned record's family)"""
    return FamilyScope(
        user_id=user_id,
        family_id=family_id,
        is_default=family_id == get_default_family_id(db, user_id),
    )


def get_owned_record(db: Session, model, record_id: str, user_id: str):
    """
    Row of a family-owned table whose family belongs to the user

    Returns None for missing rows and for rows of other users alike.
    """
    return (
        db.query(model)
        .join(FamilyProfile, model.family_id == FamilyProfile.id)
        .filter(model.id == record_id, FamilyProfile.owner_user_id == user_id)
        .first()
    )
