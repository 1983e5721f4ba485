"""
Income / expense type taxonomy use cases

Types are scoped to (owner user, family profile). Rows with family_id NULL are
shared default types: visible from the owner's default profile, never
mutable through the API.

Deleting a type that records still reference follows a per-kind policy:
income types are soft metadata (references are nulled, then the type is
removed in the same transaction); expense types are budget categories and
the delete is rejected.
"""
import logging
from dataclasses import dataclass

from sqlalchemy import func
from sqlalchemy.orm import Session

from homeplanner.application.ownership import FamilyScope, resolve_family_scope
from homeplanner.errors import ValidationError, ConflictError, NotFoundError, InUseError
from homeplanner.infrastructure.db.models import IncomeType, ExpenseType, IncomeSource, FamilyExpense
from homeplanner.utils.keys import make_type_key
from homeplanner.utils.validation import clean_text

logger = logging.getLogger(__name__)

# What happens to referencing records when a type in use is deleted
IN_USE_NULL_REFERENCES = "NULL_REFERENCES"
IN_USE_REJECT = "REJECT"


@dataclass(frozen=True)
class TypeKind:
    model: type
    record_model: type
    noun: str
    in_use_policy: str


INCOME_TYPES = TypeKind(
    model=IncomeType,
    record_model=IncomeSource,
    noun="Income type",
    in_use_policy=IN_USE_NULL_REFERENCES,
)
EXPENSE_TYPES = TypeKind(
    model=ExpenseType,
    record_model=FamilyExpense,
    noun="Expense type",
    in_use_policy=IN_USE_REJECT,
)


def _label_taken(
    db: Session,
    kind: TypeKind,
    owner_user_id: str | None,
    family_id: str | None,
    label: str,
    exclude_id: str | None = None,
) -> bool:
    """Case-insensitive label clash within one (owner, family) scope"""
    model = kind.model
    query = db.query(model.id).filter(
        model.owner_user_id == owner_user_id,
        model.family_id == family_id,
        func.lower(model.label) == label.lower(),
    )
    if exclude_id is not None:
        query = query.filter(model.id != exclude_id)
    return query.first() is not None


def _get_owned_type(db: Session, kind: TypeKind, type_id: str, user_id: str):
    """Family-scoped type owned by the user; shared-tier and foreign types are not found"""
    model = kind.model
    row = db.query(model).filter(
        model.id == type_id,
        model.owner_user_id == user_id,
        model.family_id.is_not(None),
    ).first()
    if not row:
        raise NotFoundError(f"{kind.noun} not found.")
    return row


def list_visible_types(db: Session, kind: TypeKind, scope: FamilyScope) -> list:
    model = kind.model
    return (
        db.query(model)
        .filter(scope.visible(model))
        .order_by(model.label.asc(), model.id.asc())
        .all()
    )


def resolve_type(
    db: Session,
    kind: TypeKind,
    scope: FamilyScope,
    type_id: str | None = None,
    label: str | None = None,
):
    """
    Find a type by id, else match-or-create it by label

    Args:
        type_id: must reference a type visible to the scope
        label: case-insensitive match among visible types; created in the
            scope's family when nothing matches

    Returns:
        The type row, or None when neither id nor label is given

    Raises:
        NotFoundError: type_id is unknown or not visible to the family

    Not atomic: two concurrent creates with the same new label may both
    insert a row.
    """
    model = kind.model
    type_id = clean_text(type_id)
    label = clean_text(label)

    if type_id:
        row = db.query(model).filter(model.id == type_id, scope.visible(model)).first()
        if not row:
            raise NotFoundError(f"{kind.noun} not found.")
        return row

    if not label:
        return None

    row = (
        db.query(model)
        .filter(scope.visible(model), func.lower(model.label) == label.lower())
        .order_by(model.family_id.is_(None).asc(), model.created_at.asc())
        .first()
    )
    if row:
        return row

    row = model(
        key=make_type_key(),
        label=label,
        owner_user_id=scope.user_id,
        family_id=scope.family_id,
    )
    db.add(row)
    db.flush()
    return row


class ListTypesUseCase:
    def __init__(self, db: Session, kind: TypeKind):
        self.db = db
        self.kind = kind

    def execute(self, user_id: str, profile_id: str | None = None) -> list:
        scope = resolve_family_scope(self.db, user_id, profile_id)
        return list_visible_types(self.db, self.kind, scope)


class CreateTypeUseCase:
    """Use case: Create a type in the caller's family scope"""

    def __init__(self, db: Session, kind: TypeKind):
        self.db = db
        self.kind = kind

    def execute(self, user_id: str, label: str, profile_id: str | None = None):
        label = clean_text(label)
        if not label:
            raise ValidationError("label is required.")

        scope = resolve_family_scope(self.db, user_id, profile_id)
        if _label_taken(self.db, self.kind, user_id, scope.family_id, label):
            raise ConflictError(f"{self.kind.noun} already exists.")

        row = self.kind.model(
            key=make_type_key(),
            label=label,
            owner_user_id=user_id,
            family_id=scope.family_id,
        )
        self.db.add(row)
        self.db.commit()
        return row


class RenameTypeUseCase:
    """
    Use case: Change a type's label

    Records reference types by id, so they pick up the new label on the next read.
    """

    def __init__(self, db: Session, kind: TypeKind):
        self.db = db
        self.kind = kind

    def execute(self, type_id: str, user_id: str, label: str):
        label = clean_text(label)
        if not label:
            raise ValidationError("label is required.")

        row = _get_owned_type(self.db, self.kind, type_id, user_id)
        if _label_taken(self.db, self.kind, row.owner_user_id, row.family_id, label, exclude_id=row.id):
            raise ConflictError(f"{self.kind.noun} already exists.")

        row.label = label
        self.db.commit()
        return row


class DeleteTypeUseCase:
    """Use case: Delete a type, applying the kind's in-use policy"""

    def __init__(self, db: Session, kind: TypeKind):
        self.db = db
        self.kind = kind

    def execute(self, type_id: str, user_id: str) -> None:
        row = _get_owned_type(self.db, self.kind, type_id, user_id)
        record_model = self.kind.record_model

        in_use = (
            self.db.query(func.count(record_model.id))
            .filter(record_model.type_id == row.id)
            .scalar()
        )

        if in_use and self.kind.in_use_policy == IN_USE_REJECT:
            raise InUseError(f"{self.kind.noun} is in use.")

        if in_use:
            # Null-out and delete commit together
            self.db.query(record_model).filter(
                record_model.type_id == row.id
            ).update({record_model.type_id: None}, synchronize_session="fetch")
            logger.info("%s id=%s deleted, cleared it on %d record(s)", self.kind.noun, row.id, in_use)

        self.db.delete(row)
        self.db.commit()
