# routers/institutions.py
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import require_role
from schemas.institution import InstitutionCreate, InstitutionListResponse, InstitutionResponse
from services import DuplicateInstitutionError, InstitutionService

router = APIRouter(prefix="/api/institutions", tags=["institutions"])


@router.get("", response_model=InstitutionListResponse)
def list_institutions(db: Session = Depends(get_session)):
     return InstitutionListResponse(
          institutions=[InstitutionResponse.model_validate(i) for i in InstitutionService.list_all(db)]
     )


@router.post("", response_model=InstitutionResponse, status_code=status.HTTP_201_CREATED)
def create_institution(
     body: InstitutionCreate,
     db: Session = Depends(get_session),
     token: dict = Depends(require_role("admin"))
):
     try:
          return InstitutionService.create(db, name=body.name, code=body.code, wallet_address=body.wallet_address)
     except DuplicateInstitutionError as e:
          raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
