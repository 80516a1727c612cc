"""House walkthrough manual: sections and their ordered steps."""
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import func
from sqlalchemy.orm import Session
from househub.database import get_db
from househub.models.user import User
from househub.models.walkthrough import WalkthroughSection, WalkthroughStep
from househub.schemas.walkthrough import (
    WalkthroughSectionCreate,
    WalkthroughSectionResponse,
    WalkthroughSectionUpdate,
    WalkthroughStepCreate,
    WalkthroughStepResponse,
    WalkthroughStepUpdate,
)
from househub.dependencies import get_current_user, get_property_or_404, require_manager

router = APIRouter(prefix="/walkthrough", tags=["walkthrough"])


def _get_section_or_404(db: Session, section_id: int) -> WalkthroughSection:
    section = db.query(WalkthroughSection).filter(WalkthroughSection.id == section_id).first()
    if not section:
        raise HTTPException(status_code=404, detail="Section not found")
    return section


def _get_step_or_404(db: Session, step_id: int) -> WalkthroughStep:
    step = db.query(WalkthroughStep).filter(WalkthroughStep.id == step_id).first()
    if not step:
        raise HTTPException(status_code=404, detail="Step not found")
    return step


@router.get("/sections", response_model=list[WalkthroughSectionResponse])
def list_sections(
    property_id: int = Query(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    get_property_or_404(db, property_id)
    sections = (
        db.query(WalkthroughSection)
        .filter(WalkthroughSection.property_id == property_id)
        .order_by(WalkthroughSection.order_index, WalkthroughSection.id)
        .all()
    )
    return [WalkthroughSectionResponse.model_validate(s) for s in sections]


@router.post("/sections", response_model=WalkthroughSectionResponse)
def create_section(
    data: WalkthroughSectionCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_manager),
):
    get_property_or_404(db, data.property_id)
    order_index = data.order_index
    if order_index is None:
        # Append after the last section
        last = db.query(func.max(WalkthroughSection.order_index)).filter(
            WalkthroughSection.property_id == data.property_id
        ).scalar()
        order_index = (last + 1) if last is not None else 0
    section = WalkthroughSection(
        property_id=data.property_id,
        title=data.title,
        description=data.description,
        order_index=order_index,
    )
    db.add(section)
    db.commit()
    db.refresh(section)
    return WalkthroughSectionResponse.model_validate(section)


@router.put("/sections/{section_id}", response_model=WalkthroughSectionResponse)
def update_section(
    section_id: int,
    data: WalkthroughSectionUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_manager),
):
    section = _get_section_or_404(db, section_id)
    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(section, field, value)
    db.commit()
    db.refresh(section)
    return WalkthroughSectionResponse.model_validate(section)


@router.delete("/sections/{section_id}")
def delete_section(
    section_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_manager),
):
    section = _get_section_or_404(db, section_id)
    db.delete(section)
    db.commit()
    return {"status": "ok", "message": "Section deleted"}


@router.post("/sections/{section_id}/steps", response_model=WalkthroughStepResponse)
def create_step(
    section_id: int,
    data: WalkthroughStepCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_manager),
):
    section = _get_section_or_404(db, section_id)
    order_index = data.order_index
    if order_index is None:
        last = db.query(func.max(WalkthroughStep.order_index)).filter(
            WalkthroughStep.section_id == section.id
        ).scalar()
        order_index = (last + 1) if last is not None else 0
    step = WalkthroughStep(
        section_id=section.id,
        title=data.title,
        body=data.body,
        image_url=data.image_url,
        order_index=order_index,
    )
    db.add(step)
    db.commit()
    db.refresh(step)
    return WalkthroughStepResponse.model_validate(step)


@router.put("/steps/{step_id}", response_model=WalkthroughStepResponse)
def update_step(
    step_id: int,
    data: WalkthroughStepUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_manager),
):
    step = _get_step_or_404(db, step_id)
    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(step, field, value)
    db.commit()
    db.refresh(step)
    return WalkthroughStepResponse.model_validate(step)


@router.delete("/steps/{step_id}")
def delete_step(
    step_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_manager),
):
    step = _get_step_or_404(db, step_id)
    db.delete(step)
    db.commit()
    return {"status": "ok", "message": "Step deleted"}
