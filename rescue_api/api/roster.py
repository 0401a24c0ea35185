#rescue_api/api/roster.py
"""
Бойцы, машины и ресурсы: создание и чтение. Привязка к команде делается через /teams.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from rescue_api.crud import roster as crud_roster
from rescue_api.database import get_db
from rescue_api.schemas.response import SuccessResponse
from rescue_api.schemas.roster import (
    MemberCreate,
    MemberRead,
    ResourceCreate,
    ResourceRead,
    VehicleCreate,
    VehicleRead,
)

router = APIRouter(tags=["Roster"])

# ==== Members ====

@router.get("/members/", response_model=List[MemberRead])
def list_members(db: Session = Depends(get_db)):
    return crud_roster.get_all_members(db)

@router.get("/members/{member_id}", response_model=MemberRead)
def read_member(member_id: int, db: Session = Depends(get_db)):
    return crud_roster.get_member(db, member_id)

@router.post("/members/", response_model=SuccessResponse, status_code=status.HTTP_201_CREATED)
def create_member_api(data: MemberCreate, db: Session = Depends(get_db)):
    member = crud_roster.create_member(db, data.model_dump())
    return SuccessResponse(result=member.id, detail="Member created")

# ==== Vehicles ====

@router.get("/vehicles/", response_model=List[VehicleRead])
def list_vehicles(db: Session = Depends(get_db)):
    return crud_roster.get_all_vehicles(db)

@router.get("/vehicles/{vehicle_id}", response_model=VehicleRead)
def read_vehicle(vehicle_id: int, db: Session = Depends(get_db)):
    return crud_roster.get_vehicle(db, vehicle_id)

@router.post("/vehicles/", response_model=SuccessResponse, status_code=status.HTTP_201_CREATED)
def create_vehicle_api(data: VehicleCreate, db: Session = Depends(get_db)):
    vehicle = crud_roster.create_vehicle(db, data.model_dump())
    return SuccessResponse(result=vehicle.id, detail="Vehicle created")

# ==== Resources ====

@router.get("/resources/", response_model=List[ResourceRead])
def list_resources(db: Session = Depends(get_db)):
    return crud_roster.get_all_resources(db)

@router.get("/resources/{resource_id}", response_model=ResourceRead)
def read_resource(resource_id: int, db: Session = Depends(get_db)):
    return crud_roster.get_resource(db, resource_id)

@router.post("/resources/", response_model=SuccessResponse, status_code=status.HTTP_201_CREATED)
def create_resource_api(data: ResourceCreate, db: Session = Depends(get_db)):
    resource = crud_roster.create_resource(db, data.model_dump())
    return SuccessResponse(result=resource.id, detail="Resource created")
