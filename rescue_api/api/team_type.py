#rescue_api/api/team_type.py
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from typing import List

from rescue_api.crud.team_type import (
    create_team_type,
    delete_team_type,
    get_all_team_types,
    get_team_type,
    update_team_type,
)
from rescue_api.database import get_db
from rescue_api.schemas.response import SuccessResponse
from rescue_api.schemas.team_type import TeamTypeCreate, TeamTypeRead, TeamTypeUpdate
from rescue_api.services.patching import present_fields

router = APIRouter(prefix="/team-types", tags=["Team types"])

@router.get("/", response_model=List[TeamTypeRead], responses={204: {"description": "No team types"}})
def list_team_types(db: Session = Depends(get_db)):
    team_types = get_all_team_types(db)
    if not team_types:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return team_types

@router.get("/{team_type_id}", response_model=TeamTypeRead)
def read_team_type(team_type_id: int, db: Session = Depends(get_db)):
    return get_team_type(db, team_type_id)

@router.post("/", response_model=SuccessResponse, status_code=status.HTTP_201_CREATED)
def create_team_type_api(data: TeamTypeCreate, db: Session = Depends(get_db)):
    team_type = create_team_type(db, data.model_dump())
    return SuccessResponse(result=team_type.id, detail="Team type created")

@router.put("/{team_type_id}", response_model=SuccessResponse)
def update_team_type_api(team_type_id: int, data: TeamTypeUpdate, db: Session = Depends(get_db)):
    update_team_type(db, team_type_id, present_fields(data))
    return SuccessResponse(result=team_type_id, detail="Team type updated")

@router.delete("/{team_type_id}", response_model=SuccessResponse)
def delete_team_type_api(team_type_id: int, db: Session = Depends(get_db)):
    delete_team_type(db, team_type_id)
    return SuccessResponse(result=team_type_id, detail="Team type deleted")
