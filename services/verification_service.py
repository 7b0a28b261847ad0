# services/verification_service.py
"""
Verification Service - tamper detection for issued records.

For one record:
1. Missing record                                   -> not verified (RECORD_NOT_FOUND)
2. Latest ledger entry disagrees with stored hash   -> tampered (HASH_MISMATCH)
3. Stored fields no longer produce the stored hash  -> tampered (STORAGE_CORRUPTION)
4. No ledger entry at all                           -> UNANCHORED, verified or not per policy
5. Otherwise                                        -> VERIFIED

For a student, the overall result is the AND of the per-record results.
Verification only reads; repeated calls without writes give identical results.
"""
import enum
import logging
from dataclasses import dataclass, field
from typing import List, Optional

import config
from services.ledger_service import LedgerStore
from services.record_service import RecordStore

logger = logging.getLogger(__name__)

UNANCHORED_POLICIES = ("accept", "reject")


class VerificationReason(str, enum.Enum):
     VERIFIED = "VERIFIED"
     UNANCHORED = "UNANCHORED"
     RECORD_NOT_FOUND = "RECORD_NOT_FOUND"
     STORAGE_CORRUPTION = "STORAGE_CORRUPTION"
     HASH_MISMATCH = "HASH_MISMATCH"


class SubjectStatus(str, enum.Enum):
     NO_RECORDS = "NO_RECORDS"
     ALL_VERIFIED = "ALL_VERIFIED"
     UNVERIFIED = "UNVERIFIED"
     TAMPERED = "TAMPERED"


REASON_MESSAGES = {
     VerificationReason.VERIFIED: "Record verified. Its hash matches the ledger.",
     VerificationReason.UNANCHORED: "Record has not been anchored on the ledger yet.",
     VerificationReason.RECORD_NOT_FOUND: "Record not found. It was never issued.",
     VerificationReason.STORAGE_CORRUPTION: "Record content no longer matches its stored hash. It was modified in storage.",
     VerificationReason.HASH_MISMATCH: "Record hash does not match the ledger. The record has been tampered with.",
}

SUBJECT_MESSAGES = {
     SubjectStatus.NO_RECORDS: "No records found for this student.",
     SubjectStatus.ALL_VERIFIED: "All records verified successfully. No tampering detected.",
     SubjectStatus.UNVERIFIED: "Some records are not anchored on the ledger and could not be verified.",
     SubjectStatus.TAMPERED: "Warning: Some records may have been tampered with!",
}


@dataclass(frozen=True)
class VerificationResult:
     record_id: int
     verified: bool
     reason: VerificationReason
     tampered: bool = False
     unanchored: bool = False
     content_hash: Optional[str] = None
     ledger_hash: Optional[str] = None
     transaction_id: Optional[str] = None
     title: Optional[str] = None
     type: Optional[str] = None

     @property
     def message(self) -> str:
          return REASON_MESSAGES[self.reason]


@dataclass(frozen=True)
class SubjectVerification:
     subject_entity_id: str
     verified: bool
     status: SubjectStatus
     results: List[VerificationResult] = field(default_factory=list)

     @property
     def total(self) -> int:
          return len(self.results)

     @property
     def tampered_count(self) -> int:
          return sum(1 for r in self.results if r.tampered)

     @property
     def unanchored_count(self) -> int:
          return sum(1 for r in self.results if r.unanchored)

     @property
     def message(self) -> str:
          return SUBJECT_MESSAGES[self.status]


class VerificationEngine:
     """Stateless cross-check of RecordStore contents against the LedgerStore."""

     def __init__(
          self,
          records: RecordStore,
          ledger: LedgerStore,
          unanchored_policy: Optional[str] = None
     ):
          self.records = records
          self.ledger = ledger
          self.unanchored_policy = (unanchored_policy or config.UNANCHORED_POLICY).lower()
          if self.unanchored_policy not in UNANCHORED_POLICIES:
               raise ValueError(f"Unknown unanchored policy: {self.unanchored_policy}")

     def verify(self, record_id: int) -> VerificationResult:
          record = self.records.get(record_id)
          if record is None:
               return VerificationResult(
                    record_id=record_id,
                    verified=False,
                    reason=VerificationReason.RECORD_NOT_FOUND,
               )

          recomputed = self.records.recompute_hash(record)
          entry = self.ledger.latest_for_record(record.id)
          details = dict(
               record_id=record.id,
               content_hash=record.content_hash,
               ledger_hash=entry.content_hash if entry else None,
               transaction_id=entry.transaction_id if entry else None,
               title=record.title,
               type=record.type.value,
          )

          if entry is not None and entry.content_hash != record.content_hash:
               logger.warning(
                    "Hash mismatch for record %s: stored=%s..., ledger=%s...",
                    record.id, record.content_hash[:16], entry.content_hash[:16]
               )
               return VerificationResult(
                    verified=False, tampered=True, reason=VerificationReason.HASH_MISMATCH, **details
               )

          if recomputed != record.content_hash:
               logger.warning(
                    "Storage corruption for record %s: stored=%s..., computed=%s...",
                    record.id, record.content_hash[:16], recomputed[:16]
               )
               return VerificationResult(
                    verified=False, tampered=True, reason=VerificationReason.STORAGE_CORRUPTION, **details
               )

          if entry is None:
               return VerificationResult(
                    verified=self.unanchored_policy == "accept",
                    unanchored=True,
                    reason=VerificationReason.UNANCHORED,
                    **details
               )

          return VerificationResult(verified=True, reason=VerificationReason.VERIFIED, **details)

     def verify_subject(self, subject_entity_id: str) -> SubjectVerification:
          """Verify every record of one subject; overall result is the AND of all."""
          results = [self.verify(r.id) for r in self.records.find_by_subject_entity_id(subject_entity_id)]

          if not results:
               status = SubjectStatus.NO_RECORDS
          elif any(r.tampered for r in results):
               status = SubjectStatus.TAMPERED
          elif all(r.verified for r in results):
               status = SubjectStatus.ALL_VERIFIED
          else:
               status = SubjectStatus.UNVERIFIED

          return SubjectVerification(
               subject_entity_id=subject_entity_id,
               verified=all(r.verified for r in results),
               status=status,
               results=results,
          )
