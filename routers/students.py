# routers/students.py
"""
Student API routes: registration, lookup and whole-student verification.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import create_access_token, get_record_store, get_verification_engine, require_role
from routers.records import verification_response
from schemas.record import RecordResponse, StudentSummary, StudentVerificationResponse
from schemas.student import StudentCreate, StudentListResponse, StudentResponse, StudentSelfRegister
from services import (
     DuplicateStudentError,
     DuplicateUserError,
     RecordStore,
     StudentService,
     VerificationEngine,
)

router = APIRouter(prefix="/api/students", tags=["students"])


@router.post(
     "",
     status_code=status.HTTP_201_CREATED,
     summary="Register a student"
)
def register_student(
     body: StudentCreate,
     db: Session = Depends(get_session),
     token: dict = Depends(require_role("admin", "institution"))
):
     try:
          student = StudentService.register(
               db,
               student_id=body.student_id,
               name=body.name,
               email=body.email,
               course=body.course,
               department=body.department,
               enrollment_year=body.enrollment_year,
               wallet_address=body.wallet_address,
               institution_id=token.get("institution_id"),
          )
     except DuplicateStudentError as e:
          raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

     return {
          "message": "Student registered successfully",
          "student": StudentResponse.model_validate(student),
     }


@router.post(
     "/self-register",
     status_code=status.HTTP_201_CREATED,
     summary="Public student sign-up"
)
def self_register(
     body: StudentSelfRegister,
     db: Session = Depends(get_session)
):
     """
     Creates a student login and profile (pending verification) plus a pending
     registration fee. Returns a token so the student can pay straight away.
     """
     try:
          user, student, fee = StudentService.self_register(
               db,
               student_id=body.student_id,
               name=body.name,
               email=body.email,
               password=body.password,
               course=body.course,
               department=body.department,
               enrollment_year=body.enrollment_year,
          )
     except (DuplicateStudentError, DuplicateUserError) as e:
          raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

     return {
          "message": "Registration successful! Please complete fee payment.",
          "token": create_access_token(user),
          "student": StudentResponse.model_validate(student),
          "pending_fee": {"type": fee.type, "amount": float(fee.amount), "currency": fee.currency},
     }


@router.get(
     "",
     response_model=StudentListResponse,
     summary="List all students"
)
def list_students(
     db: Session = Depends(get_session),
     token: dict = Depends(require_role("admin", "institution"))
):
     return StudentListResponse(
          students=[StudentResponse.model_validate(s) for s in StudentService.list_all(db)]
     )


@router.get(
     "/wallet/{wallet_address}/records",
     summary="Records of the student owning a wallet"
)
def records_by_wallet(
     wallet_address: str,
     records: RecordStore = Depends(get_record_store)
):
     student = StudentService.get_by_wallet(records.db, wallet_address)
     if not student:
          raise HTTPException(
               status_code=status.HTTP_404_NOT_FOUND,
               detail="No student found for this wallet address"
          )

     return {
          "student": StudentSummary(
               student_id=student.student_id,
               name=student.name,
               course=student.course,
               department=student.department,
          ),
          "records": [
               RecordResponse.model_validate(r)
               for r in records.find_by_subject_entity_id(student.student_id)
          ],
     }


@router.get(
     "/{student_id}/verify",
     response_model=StudentVerificationResponse,
     summary="Verify every record of a student"
)
def verify_student(
     student_id: str,
     engine: VerificationEngine = Depends(get_verification_engine)
):
     """
     Public verification of all records issued to a student.

     **verified** is true only if every record verifies. **status** tells apart
     NO_RECORDS, ALL_VERIFIED, UNVERIFIED and TAMPERED.
     """
     student = StudentService.get_by_student_id(engine.records.db, student_id)
     if not student:
          raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Student not found")

     summary = engine.verify_subject(student.student_id)
     return StudentVerificationResponse(
          verified=summary.verified,
          status=summary.status.value,
          message=summary.message,
          total=summary.total,
          tampered_count=summary.tampered_count,
          unanchored_count=summary.unanchored_count,
          student=StudentSummary(
               student_id=student.student_id,
               name=student.name,
               course=student.course,
               department=student.department,
               enrollment_year=student.enrollment_year,
               institution=student.institution.name if student.institution else "Unknown",
          ),
          records=[verification_response(r) for r in summary.results],
     )
