"""Local recommendations for a property."""
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from househub.database import get_db
from househub.models.user import User
from househub.models.recommendation import Recommendation
from househub.schemas.recommendation import RecommendationCreate, RecommendationResponse, RecommendationUpdate
from househub.dependencies import get_current_user, get_property_or_404
from househub.services.filters import filter_by_category, search_text
from househub.services.roles import can_manage_property

router = APIRouter(prefix="/recommendations", tags=["recommendations"])


def _get_or_404(db: Session, recommendation_id: int) -> Recommendation:
    rec = db.query(Recommendation).filter(Recommendation.id == recommendation_id).first()
    if not rec:
        raise HTTPException(status_code=404, detail="Recommendation not found")
    return rec


def _require_author_or_manager(rec: Recommendation, user: User) -> None:
    if rec.created_by != user.id and not can_manage_property(user.role):
        raise HTTPException(status_code=403, detail="You can only change recommendations you added")


@router.get("", response_model=list[RecommendationResponse])
def list_recommendations(
    property_id: int = Query(...),
    category: str | None = Query(None, description="Category, or 'all'"),
    search: str | None = Query(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    get_property_or_404(db, property_id)
    recs = (
        db.query(Recommendation)
        .filter(Recommendation.property_id == property_id)
        .order_by(Recommendation.name)
        .all()
    )
    recs = search_text(filter_by_category(recs, category), search, ("name", "description", "address"))
    return [RecommendationResponse.model_validate(r) for r in recs]


@router.post("", response_model=RecommendationResponse)
def create_recommendation(
    data: RecommendationCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    get_property_or_404(db, data.property_id)
    rec = Recommendation(**data.model_dump(), created_by=current_user.id)
    db.add(rec)
    db.commit()
    db.refresh(rec)
    return RecommendationResponse.model_validate(rec)


@router.get("/{recommendation_id}", response_model=RecommendationResponse)
def get_recommendation(
    recommendation_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return RecommendationResponse.model_validate(_get_or_404(db, recommendation_id))


@router.put("/{recommendation_id}", response_model=RecommendationResponse)
def update_recommendation(
    recommendation_id: int,
    data: RecommendationUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    rec = _get_or_404(db, recommendation_id)
    _require_author_or_manager(rec, current_user)
    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(rec, field, value)
    db.commit()
    db.refresh(rec)
    return RecommendationResponse.model_validate(rec)


@router.delete("/{recommendation_id}")
def delete_recommendation(
    recommendation_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    rec = _get_or_404(db, recommendation_id)
    _require_author_or_manager(rec, current_user)
    db.delete(rec)
    db.commit()
    return {"status": "ok", "message": "Recommendation deleted"}
