# services/record_service.py
"""
Record Service - issuance and metadata maintenance for academic records.

A record's content hash is computed once, at creation, over its canonical form.
Afterwards only the display title and description may change; changing the
payload means issuing a new record (new id, new hash).
"""
import logging
import threading
from dataclasses import dataclass
from typing import Any, List, Optional

from sqlalchemy.orm import Session

from models import Record, RecordType, utc_now
from services.exceptions import ImmutableFieldViolation, RecordNotFoundError
from services.hashing_service import HashingService, record_canonical_form

logger = logging.getLogger(__name__)

_create_lock = threading.Lock()


@dataclass
class RecordDraft:
     """Issuer input for a new record."""
     subject_entity_id: str
     type: RecordType
     title: str
     payload: Any = None
     description: Optional[str] = None
     issued_by: Optional[str] = None


class RecordStore:
     """Owns Record rows. Hash-bearing columns are written exactly once."""

     def __init__(self, db: Session, hashing: Optional[HashingService] = None):
          self.db = db
          self.hashing = hashing or HashingService()

     def create(self, draft: RecordDraft) -> Record:
          """
          Issue a new record.

          Computes content_hash over {subject_entity_id, type, title, payload, created_at}
          before anything is written, so a non-serializable payload fails with
          HashingFailure and leaves the store untouched. The payload is hashed and
          stored in its JSON-normalized form, so a reloaded record recomputes to
          the same hash.
          """
          record_type = RecordType(draft.type)
          created_at = utc_now()
          payload = self.hashing.normalize(draft.payload)
          content_hash = self.hashing.hash_value(record_canonical_form(
               draft.subject_entity_id,
               record_type,
               draft.title,
               payload,
               created_at,
          ))

          record = Record(
               subject_entity_id=draft.subject_entity_id,
               type=record_type,
               title=draft.title,
               issued_title=draft.title,
               description=draft.description or "",
               payload=payload,
               content_hash=content_hash,
               issued_by=draft.issued_by,
               created_at=created_at,
          )
          with _create_lock:
               self.db.add(record)
               self.db.flush()

          logger.info(
               "Record issued: id=%s subject=%s type=%s hash=%s...",
               record.id, record.subject_entity_id, record_type.value, content_hash[:16]
          )
          return record

     def get(self, record_id: int) -> Optional[Record]:
          return self.db.query(Record).filter(Record.id == record_id).first()

     def find_by_subject_entity_id(self, subject_entity_id: str) -> List[Record]:
          """All records of one subject, in creation order."""
          return (
               self.db.query(Record)
               .filter(Record.subject_entity_id == subject_entity_id)
               .order_by(Record.id)
               .all()
          )

     def update_metadata(self, record_id: int, patch: dict) -> Record:
          """
          Apply a metadata patch (title, description only).

          Raises:
               ImmutableFieldViolation: patch names a hash-bearing field
               ValueError: patch names a field records do not have
               RecordNotFoundError: no record with this id
          """
          immutable = set(patch) & Record.HASHED_FIELDS
          if immutable:
               raise ImmutableFieldViolation(immutable)
          unknown = set(patch) - Record.EDITABLE_FIELDS
          if unknown:
               raise ValueError(f"Unknown record field(s): {', '.join(sorted(unknown))}")
          if "title" in patch and not patch["title"]:
               raise ValueError("Title cannot be empty")

          record = self.get(record_id)
          if record is None:
               raise RecordNotFoundError(f"Record with ID {record_id} not found")

          for name, value in patch.items():
               setattr(record, name, value)
          self.db.flush()
          return record

     def recompute_hash(self, record: Record) -> str:
          """Hash the record's stored hash-bearing fields again."""
          return self.hashing.hash_value(record_canonical_form(
               record.subject_entity_id,
               record.type,
               record.issued_title,
               record.payload,
               record.created_at,
          ))

     def count(self) -> int:
          return self.db.query(Record).count()
