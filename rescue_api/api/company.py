#rescue_api/api/company.py
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from typing import List

from rescue_api.crud.company import (
    assign_location,
    create_company,
    delete_company,
    get_all_companies,
    get_company,
    update_company,
)
from rescue_api.database import get_db
from rescue_api.schemas.company import CompanyCreate, CompanyRead, CompanyUpdate
from rescue_api.schemas.response import SuccessResponse
from rescue_api.services.patching import present_fields

router = APIRouter(prefix="/companies", tags=["Companies"])

@router.get("/", response_model=List[CompanyRead], responses={204: {"description": "No companies"}})
def list_companies(db: Session = Depends(get_db)):
    companies = get_all_companies(db)
    if not companies:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return companies

@router.get("/{company_id}", response_model=CompanyRead)
def read_company(company_id: int, db: Session = Depends(get_db)):
    return get_company(db, company_id)

@router.post("/", response_model=SuccessResponse, status_code=status.HTTP_201_CREATED)
def create_company_api(data: CompanyCreate, db: Session = Depends(get_db)):
    """
    Создать роту вместе с адресом. 409 при повторяющемся имени.
    """
    company = create_company(db, data.model_dump())
    return SuccessResponse(result=company.id, detail="Company created")

@router.put("/{company_id}", response_model=SuccessResponse)
def update_company_api(company_id: int, data: CompanyUpdate, db: Session = Depends(get_db)):
    update_company(db, company_id, present_fields(data))
    return SuccessResponse(result=company_id, detail="Company updated")

@router.delete("/{company_id}", response_model=SuccessResponse)
def delete_company_api(company_id: int, db: Session = Depends(get_db)):
    delete_company(db, company_id)
    return SuccessResponse(result=company_id, detail="Company deleted")

@router.post("/{company_id}/assign-location/{location_id}", response_model=SuccessResponse)
def assign_location_api(company_id: int, location_id: int, db: Session = Depends(get_db)):
    assign_location(db, company_id, location_id)
    return SuccessResponse(result=company_id, detail="Location assigned to company")
