"""
Build catalog API endpoints

Global reference data: no bearer token, no ownership checks.
"""
from fastapi import APIRouter, Depends, Response, status
from pydantic import field_validator
from sqlalchemy.orm import Session

from homeplanner.api.deps import get_db
from homeplanner.api.schemas import CamelModel
from homeplanner.application.catalog import (
    ListBuildCatalogUseCase,
    CreateHouseTypeUseCase,
    CreateBuildItemUseCase,
    UpdateBuildItemUseCase,
    DeleteBuildItemUseCase,
)
from homeplanner.infrastructure.db.models import BuildCostItem, HouseType
from homeplanner.utils.validation import MAX_PERCENT, parse_amount, parse_sort_order, as_number, as_optional_number


router = APIRouter(prefix="/api/v1/build", tags=["build"])


# === Request/Response models ===

class CreateHouseTypeRequest(CamelModel):
    label: str | None = None
    description: str | None = None


class CreateBuildItemRequest(CamelModel):
    house_type_id: str | None = None
    stage: str | None = None
    name: str | None = None
    amount_ils: float | None = None
    percent_hint: float | None = None
    notes: str | None = None
    order: int | None = None

    @field_validator("amount_ils", mode="before")
    @classmethod
    def validate_amount(cls, v):
        return parse_amount(v)

    @field_validator("percent_hint", mode="before")
    @classmethod
    def validate_percent(cls, v):
        return parse_amount(v, limit=MAX_PERCENT)

    @field_validator("order", mode="before")
    @classmethod
    def validate_order(cls, v):
        return parse_sort_order(v)


class UpdateBuildItemRequest(CamelModel):
    stage: str | None = None
    name: str | None = None
    amount_ils: float | None = None
    percent_hint: float | None = None
    notes: str | None = None
    order: int | None = None

    @field_validator("amount_ils", mode="before")
    @classmethod
    def validate_amount(cls, v):
        return parse_amount(v)

    @field_validator("percent_hint", mode="before")
    @classmethod
    def validate_percent(cls, v):
        return parse_amount(v, limit=MAX_PERCENT)

    @field_validator("order", mode="before")
    @classmethod
    def validate_order(cls, v):
        return parse_sort_order(v)


class BuildItemResponse(CamelModel):
    id: str
    code: str
    stage: str
    name: str
    amount_ils: float
    percent_hint: float | None
    notes: str | None
    order: int
    house_type_id: str


class HouseTypeResponse(CamelModel):
    id: str
    key: str
    label: str
    description: str | None


class HouseBuildResponse(HouseTypeResponse):
    total: float
    items: list[BuildItemResponse]


def build_item_response(item: BuildCostItem) -> BuildItemResponse:
    return BuildItemResponse(
        id=item.id,
        code=item.code,
        stage=item.stage,
        name=item.name,
        amount_ils=as_number(item.amount_ils),
        percent_hint=as_optional_number(item.percent_hint),
        notes=item.notes,
        order=item.sort_order,
        house_type_id=item.house_type_id,
    )


def house_type_response(house_type: HouseType) -> HouseTypeResponse:
    return HouseTypeResponse(
        id=house_type.id,
        key=house_type.key,
        label=house_type.label,
        description=house_type.description,
    )


# === Endpoints ===

@router.get("", response_model=list[HouseBuildResponse])
def list_build_catalog(db: Session = Depends(get_db)):
    """House types with grouped build cost items and their totals"""
    return [
        HouseBuildResponse(
            id=build.house_type.id,
            key=build.house_type.key,
            label=build.house_type.label,
            description=build.house_type.description,
            total=build.total,
            items=[build_item_response(item) for item in build.items],
        )
        for build in ListBuildCatalogUseCase(db).execute()
    ]


@router.post("/types", response_model=HouseTypeResponse, status_code=status.HTTP_201_CREATED)
def create_house_type(req: CreateHouseTypeRequest, db: Session = Depends(get_db)):
    house_type = CreateHouseTypeUseCase(db).execute(label=req.label, description=req.description)
    return house_type_response(house_type)


@router.post("/items", response_model=BuildItemResponse, status_code=status.HTTP_201_CREATED)
def create_build_item(req: CreateBuildItemRequest, db: Session = Depends(get_db)):
    item = CreateBuildItemUseCase(db).execute(
        house_type_id=req.house_type_id,
        stage=req.stage,
        name=req.name,
        amount_ils=req.amount_ils,
        percent_hint=req.percent_hint,
        notes=req.notes,
        order=req.order,
    )
    return build_item_response(item)


@router.patch("/items/{item_id}", response_model=BuildItemResponse)
def update_build_item(item_id: str, req: UpdateBuildItemRequest, db: Session = Depends(get_db)):
    item = UpdateBuildItemUseCase(db).execute(item_id, **req.model_dump(exclude_unset=True))
    return build_item_response(item)


@router.delete("/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_build_item(item_id: str, db: Session = Depends(get_db)):
    DeleteBuildItemUseCase(db).execute(item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
