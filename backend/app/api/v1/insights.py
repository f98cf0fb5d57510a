"""
Saved insights API endpoints.

Lets any authenticated user bookmark dashboard views. Ownership comes from
the bearer token claims.
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.api.deps import get_current_claims
from app.core.errors import AuthorizationError, NotFoundError, ValidationError
from app.db.session import get_db
from app.models import SavedInsight

router = APIRouter()


class InsightCreate(BaseModel):
    type: Optional[str] = None
    data_json: Optional[str] = None
    name: Optional[str] = None


class InsightResponse(BaseModel):
    id: int
    user_id: int
    type: str
    data_json: str
    name: str
    created_at: datetime

    class Config:
        from_attributes = True


@router.get("", response_model=list[InsightResponse])
def list_insights(claims: dict = Depends(get_current_claims), db: Session = Depends(get_db)):
    return (
        db.query(SavedInsight)
        .filter(SavedInsight.user_id == claims["id"])
        .order_by(SavedInsight.id)
        .all()
    )


@router.post("", response_model=InsightResponse, status_code=status.HTTP_201_CREATED)
def create_insight(
    insight_data: InsightCreate,
    claims: dict = Depends(get_current_claims),
    db: Session = Depends(get_db),
):
    if not (insight_data.type and insight_data.data_json and insight_data.name):
        raise ValidationError("Missing required fields")

    insight = SavedInsight(
        user_id=claims["id"],
        type=insight_data.type,
        data_json=insight_data.data_json,
        name=insight_data.name,
    )
    db.add(insight)
    db.commit()
    db.refresh(insight)
    return insight


@router.delete("/{insight_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_insight(
    insight_id: int,
    claims: dict = Depends(get_current_claims),
    db: Session = Depends(get_db),
):
    insight = db.query(SavedInsight).filter(SavedInsight.id == insight_id).first()
    if not insight:
        raise NotFoundError("Insight not found")

    if insight.user_id != claims["id"]:
        raise AuthorizationError("Insight belongs to another user")

    db.delete(insight)
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
