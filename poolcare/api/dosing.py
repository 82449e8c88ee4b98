from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from poolcare.core.database import get_db
from poolcare.core.security import get_current_user
from poolcare.models.user import User
from poolcare.schemas.dosing import (
    ChemistrySnapshotRead,
    DosingRecommendationRead,
    DosingSuggestionRead,
    DosingSuggestRequest,
    TargetProfileRead,
)
from poolcare.services import dosing_coach
from poolcare.services.chemistry_snapshot import CHEMISTRY_FIELDS

router = APIRouter(prefix="/ai", tags=["ai"])


@router.post("/dosing/suggest", response_model=DosingSuggestionRead, response_model_exclude_none=True)
def suggest_dosing(
    payload: DosingSuggestRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> DosingSuggestionRead:
    pool = dosing_coach.find_pool(db, pool_id=payload.pool_id, org_id=current_user.org_id)
    if not pool:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Pool not found")

    suggestion = dosing_coach.suggest_for_pool(
        db,
        pool=pool,
        org_id=current_user.org_id,
        reading_id=payload.reading_id,
        overrides=payload.model_dump(include=set(CHEMISTRY_FIELDS)),
    )

    return DosingSuggestionRead(
        recommendations=[
            DosingRecommendationRead(
                chemical=item.chemical,
                qty=item.qty,
                unit=item.unit,
                purpose=item.purpose,
                priority=item.priority.value,
                warning=item.warning,
            )
            for item in suggestion.recommendations
        ],
        current=ChemistrySnapshotRead(**suggestion.current.measured()),
        targets=TargetProfileRead.model_validate(suggestion.targets.as_dict()),
        pool_volume=suggestion.pool_volume_liters,
    )
