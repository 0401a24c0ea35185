#rescue_api/api/shift.py
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from typing import List

from rescue_api.crud.shift import create_shift, delete_shift, get_all_shifts, get_shift, update_shift
from rescue_api.database import get_db
from rescue_api.schemas.response import SuccessResponse
from rescue_api.schemas.shift import ShiftCreate, ShiftRead, ShiftUpdate
from rescue_api.services.patching import present_fields

router = APIRouter(prefix="/shifts", tags=["Shifts"])

@router.get("/", response_model=List[ShiftRead], responses={204: {"description": "No shifts"}})
def list_shifts(db: Session = Depends(get_db)):
    shifts = get_all_shifts(db)
    if not shifts:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return shifts

@router.get("/{shift_id}", response_model=ShiftRead)
def read_shift(shift_id: int, db: Session = Depends(get_db)):
    return get_shift(db, shift_id)

@router.post("/", response_model=SuccessResponse, status_code=status.HTTP_201_CREATED)
def create_shift_api(data: ShiftCreate, db: Session = Depends(get_db)):
    """
    Создать смену. Длительность вычисляется из дат.
    """
    shift = create_shift(db, data.model_dump())
    return SuccessResponse(result=shift.id, detail="Shift created")

@router.put("/{shift_id}", response_model=SuccessResponse)
def update_shift_api(shift_id: int, data: ShiftUpdate, db: Session = Depends(get_db)):
    update_shift(db, shift_id, present_fields(data))
    return SuccessResponse(result=shift_id, detail="Shift updated")

@router.delete("/{shift_id}", response_model=SuccessResponse)
def delete_shift_api(shift_id: int, db: Session = Depends(get_db)):
    """
    Удалить смену. 409, если она назначена какой-либо команде.
    """
    delete_shift(db, shift_id)
    return SuccessResponse(result=shift_id, detail="Shift deleted")
