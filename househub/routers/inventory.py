"""Inventory items, the shopping list, and staple templates."""
import logging
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from househub.database import get_db
from househub.models.user import User
from househub.models.inventory import CustomStaple, DefaultStaple, InventoryItem
from househub.schemas.inventory import (
    CustomStapleCreate,
    CustomStapleUpdate,
    InventoryItemCreate,
    InventoryItemResponse,
    InventoryItemUpdate,
    QuantityUpdate,
    QuickAddStaple,
    StapleResponse,
)
from househub.dependencies import get_current_user, get_property_or_404, require_manager
from househub.services.filters import filter_by_category, search_text
from househub.services.staples import (
    SOURCE_CUSTOM,
    available_staples,
    combine_staples,
    find_existing_item,
    low_stock,
)

router = APIRouter(tags=["inventory"])
log = logging.getLogger("uvicorn.error")


def _items_for(db: Session, property_id: int) -> list[InventoryItem]:
    return (
        db.query(InventoryItem)
        .filter(InventoryItem.property_id == property_id)
        .order_by(InventoryItem.category, InventoryItem.name)
        .all()
    )


def _get_item_or_404(db: Session, item_id: int) -> InventoryItem:
    item = db.query(InventoryItem).filter(InventoryItem.id == item_id).first()
    if not item:
        raise HTTPException(status_code=404, detail="Inventory item not found")
    return item


def _staples_for(db: Session, property_id: int):
    defaults = (
        db.query(DefaultStaple)
        .filter(DefaultStaple.is_active.is_(True))
        .order_by(DefaultStaple.display_order)
        .all()
    )
    customs = (
        db.query(CustomStaple)
        .filter(CustomStaple.property_id == property_id)
        .order_by(CustomStaple.name)
        .all()
    )
    return combine_staples(defaults, customs)


@router.get("/inventory", response_model=list[InventoryItemResponse])
def list_inventory(
    property_id: int = Query(...),
    category: str | None = Query(None),
    search: str | None = Query(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    get_property_or_404(db, property_id)
    items = search_text(filter_by_category(_items_for(db, property_id), category), search, ("name",))
    return [InventoryItemResponse.model_validate(i) for i in items]


@router.get("/inventory/shopping-list", response_model=list[InventoryItemResponse])
def shopping_list(
    property_id: int = Query(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Items at or below their restock threshold."""
    get_property_or_404(db, property_id)
    return [InventoryItemResponse.model_validate(i) for i in low_stock(_items_for(db, property_id))]


@router.post("/inventory", response_model=InventoryItemResponse)
def create_item(
    data: InventoryItemCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    get_property_or_404(db, data.property_id)
    if find_existing_item(data.name, data.category, _items_for(db, data.property_id)):
        raise HTTPException(status_code=409, detail=f"{data.name} already exists in your inventory")
    item = InventoryItem(
        property_id=data.property_id,
        name=data.name,
        category=data.category,
        quantity=data.quantity,
        threshold=data.threshold,
        user_id=current_user.id,
        last_updated_by=current_user.id,
    )
    db.add(item)
    db.commit()
    db.refresh(item)
    return InventoryItemResponse.model_validate(item)


@router.put("/inventory/{item_id}", response_model=InventoryItemResponse)
def update_item(
    item_id: int,
    data: InventoryItemUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    item = _get_item_or_404(db, item_id)
    changes = data.model_dump(exclude_unset=True)
    name = changes.get("name", item.name)
    category = changes.get("category", item.category)
    others = [i for i in _items_for(db, item.property_id) if i.id != item.id]
    if find_existing_item(name, category, others):
        raise HTTPException(status_code=409, detail=f"{name} already exists in your inventory")
    for field, value in changes.items():
        setattr(item, field, value)
    item.last_updated_by = current_user.id
    db.commit()
    db.refresh(item)
    return InventoryItemResponse.model_validate(item)


@router.patch("/inventory/{item_id}/quantity", response_model=InventoryItemResponse)
def update_quantity(
    item_id: int,
    data: QuantityUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    item = _get_item_or_404(db, item_id)
    item.quantity = data.quantity
    item.last_updated_by = current_user.id
    db.commit()
    db.refresh(item)
    return InventoryItemResponse.model_validate(item)


@router.delete("/inventory/{item_id}")
def delete_item(
    item_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_manager),
):
    item = _get_item_or_404(db, item_id)
    db.delete(item)
    db.commit()
    return {"status": "ok", "message": "Item deleted"}


@router.get("/staples", response_model=list[StapleResponse])
def list_staples(
    property_id: int = Query(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    get_property_or_404(db, property_id)
    return [StapleResponse.model_validate(s) for s in _staples_for(db, property_id)]


@router.get("/staples/available", response_model=list[StapleResponse])
def list_available_staples(
    property_id: int = Query(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Staples not yet tracked in this property's inventory."""
    get_property_or_404(db, property_id)
    staples = available_staples(_staples_for(db, property_id), _items_for(db, property_id))
    return [StapleResponse.model_validate(s) for s in staples]


@router.post("/staples", response_model=StapleResponse)
def create_custom_staple(
    data: CustomStapleCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    get_property_or_404(db, data.property_id)
    staple = CustomStaple(
        property_id=data.property_id,
        user_id=current_user.id,
        name=data.name,
        category=data.category,
        default_threshold=data.default_threshold,
    )
    db.add(staple)
    db.commit()
    db.refresh(staple)
    return StapleResponse(
        id=staple.id,
        name=staple.name,
        category=staple.category,
        default_threshold=staple.default_threshold,
        source_table=SOURCE_CUSTOM,
    )


def _get_custom_staple_or_404(db: Session, staple_id: int) -> CustomStaple:
    staple = db.query(CustomStaple).filter(CustomStaple.id == staple_id).first()
    if not staple:
        raise HTTPException(status_code=404, detail="Staple not found")
    return staple


@router.put("/staples/{staple_id}", response_model=StapleResponse)
def update_custom_staple(
    staple_id: int,
    data: CustomStapleUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    staple = _get_custom_staple_or_404(db, staple_id)
    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(staple, field, value)
    db.commit()
    db.refresh(staple)
    return StapleResponse(
        id=staple.id,
        name=staple.name,
        category=staple.category,
        default_threshold=staple.default_threshold,
        source_table=SOURCE_CUSTOM,
    )


@router.delete("/staples/{staple_id}")
def delete_custom_staple(
    staple_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    staple = _get_custom_staple_or_404(db, staple_id)
    db.delete(staple)
    db.commit()
    return {"status": "ok", "message": "Staple deleted"}


@router.post("/staples/quick-add", response_model=InventoryItemResponse)
def quick_add_staple(
    data: QuickAddStaple,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Start tracking a staple in inventory (quantity 0, staple's default threshold)."""
    get_property_or_404(db, data.property_id)
    model = CustomStaple if data.source_table == SOURCE_CUSTOM else DefaultStaple
    staple = db.query(model).filter(model.id == data.staple_id).first()
    if not staple:
        raise HTTPException(status_code=404, detail="Staple not found")
    if find_existing_item(staple.name, staple.category, _items_for(db, data.property_id)):
        raise HTTPException(status_code=409, detail=f"{staple.name} already exists in your inventory")
    item = InventoryItem(
        property_id=data.property_id,
        name=staple.name,
        category=staple.category,
        quantity=0,
        threshold=staple.default_threshold,
        user_id=current_user.id,
        last_updated_by=current_user.id,
    )
    db.add(item)
    db.commit()
    db.refresh(item)
    log.info("[Inventory] Staple %r added to property %s", staple.name, data.property_id)
    return InventoryItemResponse.model_validate(item)
