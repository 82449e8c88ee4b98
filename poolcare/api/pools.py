from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from poolcare.core.database import get_db
from poolcare.core.security import get_current_user
from poolcare.models.pool import Pool
from poolcare.models.reading import Reading
from poolcare.models.user import User
from poolcare.schemas.pool import PoolCreate, PoolRead, PoolUpdate, ReadingCreate, ReadingRead
from poolcare.services.dosing_coach import find_pool

router = APIRouter(prefix="/pools", tags=["pools"])


def _get_org_pool_or_404(db: Session, pool_id: str, org_id: str) -> Pool:
    pool = find_pool(db, pool_id=pool_id, org_id=org_id)
    if not pool:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Pool not found")
    return pool


@router.post("", response_model=PoolRead, status_code=status.HTTP_201_CREATED)
def create_pool(
    payload: PoolCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Pool:
    pool = Pool(
        org_id=current_user.org_id,
        name=payload.name,
        address=payload.address,
        volume_l=payload.volume_l,
        surface_type=payload.surface_type,
        targets=payload.targets,
        notes=payload.notes,
    )
    db.add(pool)
    db.commit()
    db.refresh(pool)
    return pool


@router.get("", response_model=list[PoolRead])
def list_pools(
    search: str | None = Query(default=None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[Pool]:
    query = db.query(Pool).filter(Pool.org_id == current_user.org_id)
    if search:
        query = query.filter(Pool.name.ilike(f"%{search}%"))
    return query.order_by(Pool.created_at.desc(), Pool.id.asc()).all()


@router.get("/{pool_id}", response_model=PoolRead)
def get_pool(
    pool_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Pool:
    return _get_org_pool_or_404(db, pool_id=pool_id, org_id=current_user.org_id)


@router.patch("/{pool_id}", response_model=PoolRead)
def update_pool(
    pool_id: str,
    payload: PoolUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Pool:
    pool = _get_org_pool_or_404(db, pool_id=pool_id, org_id=current_user.org_id)

    for field, value in payload.model_dump(exclude_unset=True).items():
        setattr(pool, field, value)

    db.add(pool)
    db.commit()
    db.refresh(pool)
    return pool


@router.delete("/{pool_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_pool(
    pool_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Response:
    pool = _get_org_pool_or_404(db, pool_id=pool_id, org_id=current_user.org_id)
    db.delete(pool)
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{pool_id}/readings", response_model=ReadingRead, status_code=status.HTTP_201_CREATED)
def add_reading(
    pool_id: str,
    payload: ReadingCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Reading:
    pool = _get_org_pool_or_404(db, pool_id=pool_id, org_id=current_user.org_id)

    reading = Reading(
        org_id=current_user.org_id,
        pool_id=pool.id,
        ph=payload.ph,
        chlorine_free=payload.chlorine_free,
        chlorine_total=payload.chlorine_total,
        alkalinity=payload.alkalinity,
        calcium_hardness=payload.calcium_hardness,
        cyanuric_acid=payload.cyanuric_acid,
        temp_c=payload.temp_c,
    )
    if payload.measured_at is not None:
        reading.measured_at = payload.measured_at

    db.add(reading)
    db.commit()
    db.refresh(reading)
    return reading


@router.get("/{pool_id}/readings", response_model=list[ReadingRead])
def list_readings(
    pool_id: str,
    limit: int = Query(default=50, ge=1, le=500),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[Reading]:
    pool = _get_org_pool_or_404(db, pool_id=pool_id, org_id=current_user.org_id)
    return (
        db.query(Reading)
        .filter(
            Reading.pool_id == pool.id,
            Reading.org_id == current_user.org_id,
        )
        .order_by(Reading.measured_at.desc(), Reading.created_at.desc())
        .limit(limit)
        .all()
    )
