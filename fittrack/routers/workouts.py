from typing import NoReturn, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from fittrack.deps.tracking import get_facade
from fittrack.errors import (
    AuthenticationRequiredError,
    BackendError,
    MigrationError,
    TrackingError,
    ValidationError,
)
from fittrack.schemas.stats import Achievement, WorkoutStatistics
from fittrack.schemas.workout import HistoryPageRead, WorkoutSession, WorkoutSessionCreate
from fittrack.services.tracking import WorkoutTrackingFacade

router = APIRouter(prefix="/workouts", tags=["workouts"])

def raise_for(error: Optional[TrackingError]) -> NoReturn:
    if isinstance(error, AuthenticationRequiredError):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=error.message,
            headers={"WWW-Authenticate": "Bearer"},
        )
    if isinstance(error, ValidationError):
        raise HTTPException(
            status_code=422,
            detail={"field": error.field, "kind": error.kind.value, "message": error.message},
        )
    if isinstance(error, BackendError):
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={"message": error.message, "outcome_unknown": error.outcome_unknown},
        )
    if isinstance(error, MigrationError):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=error.message)
    raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Unexpected failure")

@router.post("", response_model=WorkoutSession, status_code=status.HTTP_201_CREATED)
async def track_workout(payload: WorkoutSessionCreate, facade: WorkoutTrackingFacade = Depends(get_facade)):
    stored = await facade.track_workout(payload)
    if stored is None:
        raise_for(facade.last_error)
    return stored

@router.get("", response_model=HistoryPageRead)
async def load_history(
    facade: WorkoutTrackingFacade = Depends(get_facade),
    page: int = Query(1, ge=1),
    page_size: Optional[int] = Query(None, ge=1, le=100),
):
    result = await facade.load_history(page, page_size)
    if facade.last_error is not None:
        raise_for(facade.last_error)
    return HistoryPageRead(
        items=result.items,
        total_count=result.total,
        page=page,
        page_size=page_size or facade.default_page_size,
    )

@router.get("/statistics", response_model=WorkoutStatistics)
async def get_statistics(facade: WorkoutTrackingFacade = Depends(get_facade)):
    stats = await facade.get_statistics()
    if facade.last_error is not None:
        raise_for(facade.last_error)
    return stats

@router.get("/achievements", response_model=list[Achievement])
async def get_achievements(facade: WorkoutTrackingFacade = Depends(get_facade)):
    achievements = await facade.get_achievements()
    if facade.last_error is not None:
        raise_for(facade.last_error)
    return achievements

@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_workout(session_id: str, facade: WorkoutTrackingFacade = Depends(get_facade)):
    if await facade.remove_workout(session_id):
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    if facade.last_error is not None:
        raise_for(facade.last_error)
    raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Workout not found")

@router.post("/transfer-demo-data")
async def transfer_demo_data(facade: WorkoutTrackingFacade = Depends(get_facade)):
    if not await facade.transfer_demo_data():
        raise_for(facade.last_error)
    return {"transferred": True}
