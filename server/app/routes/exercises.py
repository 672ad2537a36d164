from fastapi import APIRouter, Depends, HTTPException
from typing import List

from app.schemas import ExerciseSummary, ExerciseResponse
from app.services.exercise_store import ExerciseStore, ExerciseStoreError, get_exercise_store

router = APIRouter(tags=["Exercises"])


@router.get("", response_model=List[ExerciseSummary])
async def list_exercises(store: ExerciseStore = Depends(get_exercise_store)):
    """List all exercises (id and name only) for the lobby"""
    try:
        return store.list_exercises()
    except ExerciseStoreError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/{exercise_id}", response_model=ExerciseResponse)
async def get_exercise(exercise_id: str, store: ExerciseStore = Depends(get_exercise_store)):
    """Get one exercise with its starter code and solution"""
    try:
        exercise = await store.aget_by_id(exercise_id)
    except ExerciseStoreError as e:
        raise HTTPException(status_code=500, detail=str(e))

    if exercise is None:
        raise HTTPException(status_code=404, detail="Exercise not found")
    return exercise
