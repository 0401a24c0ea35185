#rescue_api/api/team.py
from fastapi import APIRouter, Depends, Response, status
from typing import List

from rescue_api.core.exceptions import ValidationError
from rescue_api.dependencies import get_assignment_service, get_team_orchestrator
from rescue_api.schemas.response import SuccessResponse
from rescue_api.schemas.team import TeamCreate, TeamPatch, TeamRead
from rescue_api.services.assignment import AssignmentService
from rescue_api.services.patching import present_fields
from rescue_api.services.team_orchestrator import TeamOrchestrator

router = APIRouter(prefix="/teams", tags=["Teams"])

def parse_id_list(raw: str, field: str) -> List[int]:
    """
    "1,2,3" -> [1, 2, 3]. Пустые элементы отбрасываются.
    """
    ids: List[int] = []
    for chunk in raw.split(","):
        chunk = chunk.strip()
        if not chunk:
            continue
        try:
            ids.append(int(chunk))
        except ValueError:
            raise ValidationError.single(field, f"'{chunk}' is not an integer id") from None
    return ids

@router.get("/", response_model=List[TeamRead], responses={204: {"description": "No teams"}})
def list_teams(orchestrator: TeamOrchestrator = Depends(get_team_orchestrator)):
    """
    Список всех команд; 204, если команд нет.
    """
    teams = orchestrator.list()
    if not teams:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return teams

@router.get("/{team_id}", response_model=TeamRead)
def read_team(team_id: int, orchestrator: TeamOrchestrator = Depends(get_team_orchestrator)):
    """
    Получить команду по ID.
    """
    return orchestrator.get(team_id)

@router.post("/", response_model=SuccessResponse, status_code=status.HTTP_201_CREATED)
def create_team_api(data: TeamCreate, orchestrator: TeamOrchestrator = Depends(get_team_orchestrator)):
    """
    Создать команду вместе со сменой, ротой, типом и коллекциями.
    """
    team = orchestrator.save(data.model_dump())
    return SuccessResponse(result=team.id, detail="Team created")

@router.put("/{team_id}", response_model=SuccessResponse)
def update_team_api(team_id: int, data: TeamPatch, orchestrator: TeamOrchestrator = Depends(get_team_orchestrator)):
    """
    Частичное обновление: меняются только присланные поля.
    """
    orchestrator.update(present_fields(data), team_id)
    return SuccessResponse(result=team_id, detail="Team updated")

@router.delete("/{team_id}", response_model=SuccessResponse)
def delete_team_api(team_id: int, orchestrator: TeamOrchestrator = Depends(get_team_orchestrator)):
    """
    Удалить команду вместе с её бойцами, машинами и ресурсами.
    """
    orchestrator.delete(team_id)
    return SuccessResponse(result=team_id, detail="Team deleted")

@router.post("/{team_id}/assign-shift/{shift_id}", response_model=SuccessResponse)
def assign_shift_api(team_id: int, shift_id: int, service: AssignmentService = Depends(get_assignment_service)):
    service.assign_shift(team_id, shift_id)
    return SuccessResponse(result=team_id, detail="Shift assigned to team")

@router.post("/{team_id}/assign-company/{company_id}", response_model=SuccessResponse)
def assign_company_api(team_id: int, company_id: int, service: AssignmentService = Depends(get_assignment_service)):
    service.assign_company(team_id, company_id)
    return SuccessResponse(result=team_id, detail="Company assigned to team")

@router.post("/{team_id}/assign-team-type/{team_type_id}", response_model=SuccessResponse)
def assign_team_type_api(team_id: int, team_type_id: int, service: AssignmentService = Depends(get_assignment_service)):
    service.assign_team_type(team_id, team_type_id)
    return SuccessResponse(result=team_id, detail="Team type assigned to team")

@router.post("/{team_id}/assign-members/{member_ids}", response_model=SuccessResponse)
def assign_members_api(team_id: int, member_ids: str, service: AssignmentService = Depends(get_assignment_service)):
    """
    Заменить состав команды. `member_ids` задаётся списком ID через запятую: 1,2,3.
    """
    service.assign_members(team_id, parse_id_list(member_ids, "member_ids"))
    return SuccessResponse(result=team_id, detail="Members assigned to team")
