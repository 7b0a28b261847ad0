import enum
from sqlalchemy import Column, Integer, String, Text, DateTime, Enum, JSON
from .base import Base, utc_now


class RecordType(str, enum.Enum):
     """Kinds of academic record an issuer can publish."""
     TRANSCRIPT = "transcript"
     CERTIFICATE = "certificate"
     MARKSHEET = "marksheet"
     DEGREE = "degree"
     OTHER = "other"


class Record(Base):
     """
     Record model - an issued academic record.

     content_hash covers subject_entity_id, type, issued_title, payload and
     created_at. Those columns never change after issuance; only the display
     title and description are editable.
     """
     __tablename__ = "records"

     HASHED_FIELDS = frozenset({
          "id",
          "subject_entity_id",
          "type",
          "issued_title",
          "payload",
          "content_hash",
          "issued_by",
          "created_at",
     })
     EDITABLE_FIELDS = frozenset({"title", "description"})

     id = Column(Integer, primary_key=True, autoincrement=True)
     subject_entity_id = Column(String(100), nullable=False, index=True)
     type = Column(
          Enum(RecordType, name="record_type", create_constraint=True),
          nullable=False,
          index=True
     )

     # Display metadata
     title = Column(String(255), nullable=False)
     description = Column(Text, nullable=True)

     # Hash-bearing content
     issued_title = Column(String(255), nullable=False)
     payload = Column(JSON, nullable=True)
     content_hash = Column(String(128), nullable=False, index=True)
     issued_by = Column(String(255), nullable=True)

     # Timestamps
     created_at = Column(DateTime, default=utc_now, nullable=False)
     updated_at = Column(DateTime, onupdate=utc_now, nullable=True)

     def __repr__(self):
          return f"<Record(id={self.id}, subject='{self.subject_entity_id}', hash={self.content_hash[:16]}...)>"
