# routers/admin.py
"""
System admin console: account administration, institution verification,
the system log and platform-wide statistics.

Deleting users or institutions never deletes issued records or ledger entries.
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import require_role
from schemas.admin import (
     AdminUserListResponse,
     AdminUserResponse,
     AdminUserUpdate,
     ResetPasswordRequest,
     ResetPasswordResponse,
     SystemLogListResponse,
     SystemLogResponse,
)
from schemas.institution import InstitutionResponse, InstitutionUpdate
from services import (
     AuditService,
     DuplicateInstitutionError,
     DuplicateUserError,
     InstitutionNotFoundError,
     InstitutionService,
     LedgerStore,
     PaymentService,
     RecordStore,
     StudentService,
     UserNotFoundError,
     UserService,
)

router = APIRouter(prefix="/api/admin", tags=["admin"])

admin_only = require_role("admin")


@router.get("/users", response_model=AdminUserListResponse)
def list_users(db: Session = Depends(get_session), token: dict = Depends(admin_only)):
     return AdminUserListResponse(users=[AdminUserResponse.model_validate(u) for u in UserService.list_all(db)])


@router.put("/users/{user_id}", response_model=AdminUserResponse)
def update_user(
     user_id: int,
     body: AdminUserUpdate,
     db: Session = Depends(get_session),
     token: dict = Depends(admin_only)
):
     try:
          return UserService.admin_update(
               db, user_id, body.model_dump(exclude_unset=True), performed_by=token["id"]
          )
     except UserNotFoundError as e:
          raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
     except (DuplicateUserError, ValueError) as e:
          raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.delete("/users/{user_id}")
def delete_user(user_id: int, db: Session = Depends(get_session), token: dict = Depends(admin_only)):
     try:
          UserService.delete_user(db, user_id, performed_by=token["id"])
     except UserNotFoundError as e:
          raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
     except ValueError as e:
          raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
     return {"message": "User deleted successfully"}


@router.post("/users/{user_id}/reset-password", response_model=ResetPasswordResponse)
def reset_password(
     user_id: int,
     body: Optional[ResetPasswordRequest] = None,
     db: Session = Depends(get_session),
     token: dict = Depends(admin_only)
):
     try:
          password = UserService.reset_password(
               db, user_id, performed_by=token["id"], new_password=body.new_password if body else None
          )
     except UserNotFoundError as e:
          raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
     return ResetPasswordResponse(temporary_password=password)


@router.get("/logs", response_model=SystemLogListResponse)
def list_logs(
     limit: int = Query(100, ge=1, le=1000),
     db: Session = Depends(get_session),
     token: dict = Depends(admin_only)
):
     logs = AuditService.recent(db, limit)
     return SystemLogListResponse(logs=[SystemLogResponse.model_validate(log) for log in logs])


@router.get("/stats")
def system_stats(db: Session = Depends(get_session), token: dict = Depends(admin_only)):
     by_role = UserService.count_by_role(db)
     return {
          "users": {"total": sum(by_role.values()), **by_role},
          "students": {
               "total": StudentService.count(db),
               "pending": StudentService.count(db, status="pending_verification"),
               "verified": StudentService.count(db, status="active"),
          },
          "records": {
               "total": RecordStore(db).count(),
               "anchored": LedgerStore(db).count_anchored_records(),
          },
          "blockchain": {"total_transactions": LedgerStore(db).count()},
          "institutions": {
               "total": InstitutionService.count(db),
               "verified": InstitutionService.count(db, verified=True),
          },
          "payments": PaymentService.revenue_summary(db),
          "logs": {"total": AuditService.count(db)},
     }


@router.put("/institutions/{institution_id}", response_model=InstitutionResponse)
def update_institution(
     institution_id: int,
     body: InstitutionUpdate,
     db: Session = Depends(get_session),
     token: dict = Depends(admin_only)
):
     try:
          return InstitutionService.update(
               db, institution_id, body.model_dump(exclude_unset=True), performed_by=token["id"]
          )
     except InstitutionNotFoundError as e:
          raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
     except (DuplicateInstitutionError, ValueError) as e:
          raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.delete("/institutions/{institution_id}")
def delete_institution(institution_id: int, db: Session = Depends(get_session), token: dict = Depends(admin_only)):
     try:
          InstitutionService.delete(db, institution_id, performed_by=token["id"])
     except InstitutionNotFoundError as e:
          raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
     return {"message": "Institution deleted successfully"}
