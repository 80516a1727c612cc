"""Properties: the house(s) everything else hangs off."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from househub.database import get_db
from househub.models.user import User
from househub.models.property import Property
from househub.schemas.property import PropertyCreate, PropertyResponse, PropertyUpdate
from househub.dependencies import get_current_user, get_property_or_404, require_manager

router = APIRouter(prefix="/properties", tags=["properties"])


@router.get("", response_model=list[PropertyResponse])
def list_properties(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    props = db.query(Property).order_by(Property.name).all()
    return [PropertyResponse.model_validate(p) for p in props]


@router.post("", response_model=PropertyResponse)
def create_property(
    data: PropertyCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_manager),
):
    prop = Property(
        name=data.name,
        address=data.address,
        description=data.description,
        header_image_url=data.header_image_url,
        amenities=data.amenities,
        created_by=current_user.id,
    )
    db.add(prop)
    db.commit()
    db.refresh(prop)
    return PropertyResponse.model_validate(prop)


@router.get("/{property_id}", response_model=PropertyResponse)
def get_property(
    property_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return PropertyResponse.model_validate(get_property_or_404(db, property_id))


@router.put("/{property_id}", response_model=PropertyResponse)
def update_property(
    property_id: int,
    data: PropertyUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_manager),
):
    prop = get_property_or_404(db, property_id)
    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(prop, field, value)
    db.commit()
    db.refresh(prop)
    return PropertyResponse.model_validate(prop)


@router.delete("/{property_id}")
def delete_property(
    property_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_manager),
):
    prop = get_property_or_404(db, property_id)
    db.delete(prop)
    db.commit()
    return {"status": "ok", "message": "Property deleted"}
