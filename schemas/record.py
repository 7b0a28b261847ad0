# schemas/record.py
"""
Pydantic schemas for Record API request/response validation.
"""
from datetime import datetime
from typing import Any, List, Optional
from pydantic import BaseModel, Field, ConfigDict

from models.record import RecordType


class RecordCreate(BaseModel):
     """Schema for issuing a new record."""
     student_id: str = Field(..., min_length=1, max_length=100, description="Subject student ID (must exist)")
     type: RecordType = Field(..., description="Record type")
     title: str = Field(..., min_length=1, max_length=255)
     description: Optional[str] = Field(None, max_length=2000)
     data: Any = Field(default_factory=dict, description="Record payload; hashed, never interpreted")

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "student_id": "STU2024001",
                    "type": "transcript",
                    "title": "Semester 1 Transcript",
                    "description": "Academic transcript for semester 1",
                    "data": {"grade": "A", "cgpa": 9.1}
               }
          }
     )


class RecordMetadataUpdate(BaseModel):
     """
     Schema for editing record metadata.

     Extra keys are accepted here so that attempts to change hash-bearing
     fields reach the service and are rejected with a clear message.
     """
     title: Optional[str] = Field(None, min_length=1, max_length=255)
     description: Optional[str] = Field(None, max_length=2000)

     model_config = ConfigDict(
          extra="allow",
          json_schema_extra={
               "example": {
                    "title": "Semester 1 Transcript (corrected heading)"
               }
          }
     )


class RecordResponse(BaseModel):
     """Schema for record response."""
     id: int
     subject_entity_id: str
     type: RecordType
     title: str
     issued_title: str
     description: Optional[str] = None
     payload: Any = None
     content_hash: str
     issued_by: Optional[str] = None
     created_at: datetime
     updated_at: Optional[datetime] = None

     model_config = ConfigDict(from_attributes=True)


class AnchorResponse(BaseModel):
     """Ledger anchor returned when a record is issued or re-anchored."""
     transaction_id: str
     content_hash: str
     block_number: int
     timestamp: datetime

     model_config = ConfigDict(from_attributes=True)


class RecordIssueResponse(BaseModel):
     message: str = "Record uploaded and stored on blockchain"
     record: RecordResponse
     blockchain: AnchorResponse


class VerificationResultResponse(BaseModel):
     """Per-record verification outcome."""
     record_id: int
     verified: bool
     tampered: bool
     unanchored: bool
     reason: str
     message: str
     title: Optional[str] = None
     type: Optional[str] = None
     content_hash: Optional[str] = None
     ledger_hash: Optional[str] = None
     transaction_id: Optional[str] = None

     model_config = ConfigDict(
          from_attributes=True,
          json_schema_extra={
               "example": {
                    "record_id": 1,
                    "verified": True,
                    "tampered": False,
                    "unanchored": False,
                    "reason": "VERIFIED",
                    "message": "Record verified. Its hash matches the ledger.",
                    "content_hash": "3f1a...",
                    "ledger_hash": "3f1a...",
                    "transaction_id": "0x9c2e..."
               }
          }
     )


class StudentSummary(BaseModel):
     student_id: str
     name: str
     course: Optional[str] = None
     department: Optional[str] = None
     enrollment_year: Optional[int] = None
     institution: Optional[str] = None


class StudentVerificationResponse(BaseModel):
     """Aggregate verification for all of a student's records."""
     verified: bool
     status: str
     message: str
     total: int
     tampered_count: int
     unanchored_count: int
     student: StudentSummary
     records: List[VerificationResultResponse]
