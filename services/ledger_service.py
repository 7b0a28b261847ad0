# services/ledger_service.py
"""
Ledger Service - simulated blockchain of anchored content hashes.

When something is anchored (a record is issued, arbitrary data is stored, a fee is paid):
1. The caller supplies the content hash and what it refers to (a LedgerEntryDraft)
2. The store assigns a random transaction id, a simulated block number and appended_at
3. The entry is appended at the end of the sequence; entries are never updated or deleted

Lookups return None (or an empty list) when nothing matches: "not on the ledger"
is a normal outcome, not an error.
"""
import logging
import secrets
import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, List, Optional

from sqlalchemy import desc, distinct, func
from sqlalchemy.orm import Session

from models import LedgerEntry, LedgerAction, utc_now
from services.hashing_service import HashingService

logger = logging.getLogger(__name__)

# Simulated chain height range for block numbers
BLOCK_NUMBER_BASE = 18_000_000
BLOCK_NUMBER_SPREAD = 1_000_000

# Serializes id assignment + flush across request threads
_append_lock = threading.Lock()


@dataclass
class LedgerEntryDraft:
     """What the caller knows about an anchoring event before it is appended."""
     content_hash: str
     action: LedgerAction
     record_id: Optional[int] = None
     actor_address: Optional[str] = None
     record_type: str = "generic"
     timestamp: datetime = field(default_factory=utc_now)


def generate_transaction_id() -> str:
     """Opaque, unpredictable transaction id: 0x + 64 hex chars."""
     return "0x" + secrets.token_hex(32)


def generate_block_number() -> int:
     return BLOCK_NUMBER_BASE + secrets.randbelow(BLOCK_NUMBER_SPREAD)


class LedgerStore:
     """Append-only access to the ledger_entries table. Exposes append and reads only."""

     def __init__(self, db: Session, hashing: Optional[HashingService] = None):
          self.db = db
          self.hashing = hashing or HashingService()

     def append(self, draft: LedgerEntryDraft) -> LedgerEntry:
          """
          Append an immutable entry to the ledger.

          - Assigns a unique random transaction_id and a simulated block_number
          - Stamps appended_at
          - Never touches existing entries
          """
          with _append_lock:
               transaction_id = generate_transaction_id()
               while self.find_by_transaction_id(transaction_id) is not None:
                    transaction_id = generate_transaction_id()

               entry = LedgerEntry(
                    transaction_id=transaction_id,
                    record_id=draft.record_id,
                    content_hash=draft.content_hash,
                    action=draft.action,
                    actor_address=draft.actor_address,
                    record_type=draft.record_type,
                    timestamp=draft.timestamp,
                    block_number=generate_block_number(),
                    appended_at=utc_now(),
               )
               self.db.add(entry)
               self.db.flush()

          logger.info(
               "Ledger append: tx=%s action=%s record_id=%s hash=%s...",
               entry.transaction_id[:18], entry.action.value, entry.record_id, entry.content_hash[:16]
          )
          return entry

     def store_hash(
          self,
          data: Any,
          record_type: str = "generic",
          actor_address: Optional[str] = None
     ) -> LedgerEntry:
          """Hash arbitrary data and anchor it with a STORE_HASH entry."""
          content_hash = self.hashing.hash_value(data)
          return self.append(LedgerEntryDraft(
               content_hash=content_hash,
               action=LedgerAction.STORE_HASH,
               actor_address=actor_address,
               record_type=record_type or "generic",
          ))

     def find_by_transaction_id(self, transaction_id: str) -> Optional[LedgerEntry]:
          return (
               self.db.query(LedgerEntry)
               .filter(LedgerEntry.transaction_id == transaction_id)
               .first()
          )

     def find_by_record_id(self, record_id: int) -> List[LedgerEntry]:
          """All entries referencing a record, in insertion order."""
          return (
               self.db.query(LedgerEntry)
               .filter(LedgerEntry.record_id == record_id)
               .order_by(LedgerEntry.id)
               .all()
          )

     def latest_for_record(self, record_id: int) -> Optional[LedgerEntry]:
          return (
               self.db.query(LedgerEntry)
               .filter(LedgerEntry.record_id == record_id)
               .order_by(desc(LedgerEntry.id))
               .limit(1)
               .first()
          )

     def find_by_content_hash(self, content_hash: str) -> Optional[LedgerEntry]:
          """Earliest entry anchoring the given hash."""
          return (
               self.db.query(LedgerEntry)
               .filter(LedgerEntry.content_hash == content_hash)
               .order_by(LedgerEntry.id)
               .first()
          )

     def list_entries(self, limit: Optional[int] = None, newest_first: bool = False) -> List[LedgerEntry]:
          query = self.db.query(LedgerEntry).order_by(
               desc(LedgerEntry.id) if newest_first else LedgerEntry.id
          )
          if limit is not None:
               query = query.limit(limit)
          return query.all()

     def count(self) -> int:
          return self.db.query(LedgerEntry).count()

     def count_anchored_records(self) -> int:
          """Distinct records with at least one ledger entry."""
          return (
               self.db.query(func.count(distinct(LedgerEntry.record_id)))
               .filter(LedgerEntry.record_id.isnot(None))
               .scalar()
          )
