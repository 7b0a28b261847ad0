# routers/records.py
"""
Record API routes for BlockEdu backend.

Issuing a record hashes it and anchors the hash on the ledger in the same
request. Verification is public: anyone holding a record id can check it.

Role-based access:
- Admin / Institution: issue records, edit metadata, re-anchor
- Any authenticated user: read a record and its ledger history
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status

from dependencies import (
     get_ledger_store,
     get_record_store,
     get_verification_engine,
     issuer_identity,
     require_role,
     verify_token,
)
from models import LedgerAction, LedgerEntry, Record
from schemas.ledger import LedgerEntryResponse, TransactionListResponse
from schemas.record import (
     AnchorResponse,
     RecordCreate,
     RecordIssueResponse,
     RecordMetadataUpdate,
     RecordResponse,
     VerificationResultResponse,
)
from services import (
     HashingFailure,
     ImmutableFieldViolation,
     LedgerEntryDraft,
     LedgerStore,
     RecordDraft,
     RecordNotFoundError,
     RecordStore,
     StudentService,
     VerificationEngine,
     VerificationResult,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/records", tags=["records"])

# Request body names for model columns (RecordCreate.data / student_id)
REQUEST_FIELD_NAMES = {
     "data": "payload",
     "student_id": "subject_entity_id",
}


def verification_response(result: VerificationResult) -> VerificationResultResponse:
     return VerificationResultResponse(
          record_id=result.record_id,
          verified=result.verified,
          tampered=result.tampered,
          unanchored=result.unanchored,
          reason=result.reason.value,
          message=result.message,
          title=result.title,
          type=result.type,
          content_hash=result.content_hash,
          ledger_hash=result.ledger_hash,
          transaction_id=result.transaction_id,
     )


def _anchor(ledger: LedgerStore, record: Record, token: dict) -> LedgerEntry:
     return ledger.append(LedgerEntryDraft(
          content_hash=record.content_hash,
          action=LedgerAction.STORE_RECORD,
          record_id=record.id,
          actor_address=token.get("wallet_address"),
          record_type=record.type.value,
     ))


def _get_record_or_404(records: RecordStore, record_id: int) -> Record:
     record = records.get(record_id)
     if record is None:
          raise HTTPException(
               status_code=status.HTTP_404_NOT_FOUND,
               detail=f"Record with ID {record_id} not found"
          )
     return record


@router.post(
     "",
     response_model=RecordIssueResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Issue a record and anchor it on the ledger"
)
def issue_record(
     body: RecordCreate,
     records: RecordStore = Depends(get_record_store),
     ledger: LedgerStore = Depends(get_ledger_store),
     token: dict = Depends(require_role("admin", "institution"))
):
     """
     Issue a new academic record for a registered student.

     - **student_id**: subject of the record (must exist)
     - **type**: transcript, certificate, marksheet, degree or other
     - **data**: payload, hashed together with student, type, title and issue time
     """
     student = StudentService.get_by_student_id(records.db, body.student_id)
     if not student:
          raise HTTPException(
               status_code=status.HTTP_404_NOT_FOUND,
               detail="Student not found"
          )

     try:
          record = records.create(RecordDraft(
               subject_entity_id=student.student_id,
               type=body.type,
               title=body.title,
               description=body.description,
               payload=body.data,
               issued_by=issuer_identity(token),
          ))
     except HashingFailure as e:
          raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))

     entry = _anchor(ledger, record, token)
     return RecordIssueResponse(
          record=RecordResponse.model_validate(record),
          blockchain=AnchorResponse.model_validate(entry),
     )


@router.get(
     "/{record_id}",
     response_model=RecordResponse,
     summary="Get a record"
)
def get_record(
     record_id: int,
     records: RecordStore = Depends(get_record_store),
     token: dict = Depends(verify_token)
):
     return _get_record_or_404(records, record_id)


@router.patch(
     "/{record_id}",
     response_model=RecordResponse,
     summary="Edit record metadata"
)
def update_record_metadata(
     record_id: int,
     body: RecordMetadataUpdate,
     records: RecordStore = Depends(get_record_store),
     token: dict = Depends(require_role("admin", "institution"))
):
     """
     Edit the display title or description of a record.

     Hash-bearing fields (payload, type, student, content hash) cannot change;
     issue a new record instead. The content hash is never modified here.
     """
     patch = body.model_dump(exclude_unset=True)
     patch.update(body.model_extra or {})
     patch = {REQUEST_FIELD_NAMES.get(name, name): value for name, value in patch.items()}
     try:
          return records.update_metadata(record_id, patch)
     except RecordNotFoundError as e:
          raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
     except ImmutableFieldViolation as e:
          logger.warning("Rejected metadata patch on record %s: %s", record_id, e)
          raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
     except ValueError as e:
          raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.post(
     "/{record_id}/anchor",
     response_model=AnchorResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Anchor the record's current hash again"
)
def reanchor_record(
     record_id: int,
     records: RecordStore = Depends(get_record_store),
     ledger: LedgerStore = Depends(get_ledger_store),
     token: dict = Depends(require_role("admin", "institution"))
):
     """Append another STORE_RECORD entry; verification uses the most recent one."""
     record = _get_record_or_404(records, record_id)
     return _anchor(ledger, record, token)


@router.get(
     "/{record_id}/verify",
     response_model=VerificationResultResponse,
     summary="Verify a record against the ledger"
)
def verify_record(
     record_id: int,
     engine: VerificationEngine = Depends(get_verification_engine)
):
     """
     Public verification. A missing record is a negative result, not a 404:
     check **reason** for RECORD_NOT_FOUND, UNANCHORED, HASH_MISMATCH or STORAGE_CORRUPTION.
     """
     return verification_response(engine.verify(record_id))


@router.get(
     "/{record_id}/history",
     response_model=TransactionListResponse,
     summary="Ledger entries anchoring a record"
)
def record_history(
     record_id: int,
     ledger: LedgerStore = Depends(get_ledger_store),
     token: dict = Depends(verify_token)
):
     entries = ledger.find_by_record_id(record_id)
     return TransactionListResponse(
          transactions=[LedgerEntryResponse.model_validate(e) for e in entries],
          total=len(entries),
     )
