"""
Build catalog use cases - house types and their build cost items

Global reference data: no ownership scoping.
"""
from dataclasses import dataclass

from sqlalchemy import func
from sqlalchemy.orm import Session

from homeplanner.errors import ValidationError, ConflictError, NotFoundError
from homeplanner.infrastructure.db.models import HouseType, BuildCostItem
from homeplanner.utils.keys import make_item_code, slugify
from homeplanner.utils.validation import as_number, clean_text, optional_text, to_decimal


@dataclass
class HouseBuild:
    house_type: HouseType
    total: float
    items: list[BuildCostItem]


class ListBuildCatalogUseCase:
    """
    Use case: House types (by label) with their cost items

    Items are ordered by stage, then by sort_order within a stage.
    """

    def __init__(self, db: Session):
        self.db = db

    def execute(self) -> list[HouseBuild]:
        house_types = self.db.query(HouseType).order_by(HouseType.label.asc()).all()
        items = (
            self.db.query(BuildCostItem)
            .order_by(BuildCostItem.stage.asc(), BuildCostItem.sort_order.asc(), BuildCostItem.id.asc())
            .all()
        )

        by_house_type: dict[str, list[BuildCostItem]] = {}
        for item in items:
            by_house_type.setdefault(item.house_type_id, []).append(item)

        catalog = []
        for house_type in house_types:
            costs = by_house_type.get(house_type.id, [])
            catalog.append(HouseBuild(
                house_type=house_type,
                total=sum((as_number(item.amount_ils) for item in costs), 0.0),
                items=costs,
            ))
        return catalog


class CreateHouseTypeUseCase:
    def __init__(self, db: Session):
        self.db = db

    def execute(self, label: str, description: str | None = None) -> HouseType:
        label = clean_text(label)
        if not label:
            raise ValidationError("label is required.")

        duplicate = self.db.query(HouseType.id).filter(
            func.lower(HouseType.label) == label.lower()
        ).first()
        if duplicate:
            raise ConflictError("House type already exists.")

        house_type = HouseType(
            key=self._unique_key(slugify(label)),
            label=label,
            description=optional_text(description),
        )
        self.db.add(house_type)
        self.db.commit()
        return house_type

    def _unique_key(self, base: str) -> str:
        key, suffix = base, 2
        while self.db.query(HouseType.id).filter(HouseType.key == key).first():
            key = f"{base}_{suffix}"
            suffix += 1
        return key


class CreateBuildItemUseCase:
    def __init__(self, db: Session):
        self.db = db

    def execute(
        self,
        house_type_id: str,
        stage: str,
        name: str,
        amount_ils: float | None,
        percent_hint: float | None = None,
        notes: str | None = None,
        order: int | None = None,
    ) -> BuildCostItem:
        house_type_id = clean_text(house_type_id)
        stage = clean_text(stage)
        name = clean_text(name)
        if not house_type_id or not stage or not name or amount_ils is None:
            raise ValidationError("houseTypeId, stage, name and amountIls are required.")

        if not self.db.get(HouseType, house_type_id):
            raise NotFoundError("House type not found.")

        item = BuildCostItem(
            code=make_item_code(),
            house_type_id=house_type_id,
            stage=stage,
            name=name,
            amount_ils=to_decimal(amount_ils),
            percent_hint=to_decimal(percent_hint),
            notes=optional_text(notes),
            sort_order=order if order is not None else 0,
        )
        self.db.add(item)
        self.db.commit()
        return item


class UpdateBuildItemUseCase:
    def __init__(self, db: Session):
        self.db = db

    def execute(self, item_id: str, **changes) -> BuildCostItem:
        item = self.db.get(BuildCostItem, item_id)
        if not item:
            raise NotFoundError("Build item not found.")

        stage = clean_text(changes.get("stage"))
        if stage:
            item.stage = stage
        name = clean_text(changes.get("name"))
        if name:
            item.name = name
        if changes.get("amount_ils") is not None:
            item.amount_ils = to_decimal(changes["amount_ils"])
        if "percent_hint" in changes:
            item.percent_hint = to_decimal(changes["percent_hint"])
        if "notes" in changes:
            item.notes = optional_text(changes["notes"])
        if changes.get("order") is not None:
            item.sort_order = changes["order"]

        self.db.commit()
        return item


class DeleteBuildItemUseCase:
    def __init__(self, db: Session):
        self.db = db

    def execute(self, item_id: str) -> None:
        item = self.db.get(BuildCostItem, item_id)
        if not item:
            raise NotFoundError("Build item not found.")
        self.db.delete(item)
        self.db.commit()
