# services/hashing_service.py
"""
Hashing Service - deterministic content hashing for records and ledger anchors.

1. Canonicalize: JSON with sorted keys, compact separators, UTF-8, no NaN/Infinity,
   wrapped together with the canonicalization version tag
2. Digest the canonical bytes with the configured algorithm (SHA-256 by default)

The same logical input always yields the same hex digest. Anything that is not
JSON-serializable raises HashingFailure.
"""
import hashlib
import json
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

import config
from models.record import RecordType
from services.exceptions import HashingFailure


def _normalize_amount(amount: Decimal) -> str:
     """Normalize amount to canonical string for hashing (2 decimal places)."""
     return f"{Decimal(amount):.2f}"


def _normalize_timestamp(ts: datetime) -> str:
     """Normalize timestamp to ISO format (second precision) for deterministic hashing."""
     return ts.replace(microsecond=0).isoformat(timespec="seconds")


def record_canonical_form(
     subject_entity_id: str,
     record_type: RecordType,
     title: str,
     payload: Any,
     created_at: datetime
) -> dict:
     """The fixed field set a record's content hash covers."""
     return {
          "subject_entity_id": str(subject_entity_id),
          "type": RecordType(record_type).value,
          "title": title,
          "payload": payload,
          "created_at": _normalize_timestamp(created_at),
     }


def payment_canonical_form(
     user_id: int,
     student_id: Optional[str],
     payment_type: str,
     amount: Decimal,
     currency: str,
     paid_at: datetime
) -> dict:
     """The fixed field set hashed when a payment is anchored."""
     return {
          "user_id": user_id,
          "student_id": student_id,
          "type": payment_type,
          "amount": _normalize_amount(amount),
          "currency": currency,
          "paid_at": _normalize_timestamp(paid_at),
     }


class HashingService:
     """Canonicalization + digest, fixed per deployment."""

     def __init__(self, algorithm: Optional[str] = None, version: Optional[str] = None):
          self.algorithm = (algorithm or config.HASH_ALGORITHM).lower()
          self.version = version or config.CANONICALIZATION_VERSION
          # shake_* digests need an explicit length, so they are not pluggable here
          if self.algorithm not in hashlib.algorithms_available or self.algorithm.startswith("shake_"):
               raise ValueError(f"Unsupported hash algorithm: {self.algorithm}")

     def canonicalize(self, value: Any) -> bytes:
          try:
               return json.dumps(
                    {"v": self.version, "data": value},
                    sort_keys=True,
                    separators=(",", ":"),
                    ensure_ascii=False,
                    allow_nan=False,
               ).encode("utf-8")
          except (TypeError, ValueError) as e:
               # UnicodeEncodeError (lone surrogates) is a ValueError
               raise HashingFailure(f"Value is not canonically serializable: {e}") from e

     def normalize(self, value: Any) -> Any:
          """
          The value as it reads back from a JSON column.

          Non-string dict keys become strings and tuples become lists. Hashing
          and storing the normalized value keeps the digest stable across a
          database round trip.
          """
          return json.loads(self.canonicalize(value).decode("utf-8"))["data"]

     def hash_bytes(self, canonical_bytes: bytes) -> str:
          return hashlib.new(self.algorithm, canonical_bytes).hexdigest()

     def hash_value(self, value: Any) -> str:
          """Canonicalize then digest. Returns a hex string."""
          return self.hash_bytes(self.canonicalize(value))
