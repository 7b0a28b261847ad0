"""
LedgerEntry model - simulated blockchain transaction anchoring a content hash.

Entries are append-only. Any attempt to flush an UPDATE or DELETE of a ledger
row is refused by the mapper events below.
"""
import enum
from sqlalchemy import Column, Integer, String, DateTime, Enum, event
from .base import Base, utc_now


class LedgerAction(str, enum.Enum):
     """What an anchoring event recorded."""
     STORE_RECORD = "STORE_RECORD"
     STORE_HASH = "STORE_HASH"
     PAYMENT_RECORDED = "PAYMENT_RECORDED"


class ImmutableLedgerError(RuntimeError):
     """Raised when something tries to modify or remove a ledger entry."""


class LedgerEntry(Base):
     """
     Immutable ledger entry. record_id is a weak back-reference (no foreign key);
     entries anchoring arbitrary data or payments leave it empty.
     """
     __tablename__ = "ledger_entries"

     id = Column(Integer, primary_key=True, autoincrement=True)
     transaction_id = Column(String(66), nullable=False, unique=True, index=True)  # 0x + 64 hex
     record_id = Column(Integer, nullable=True, index=True)
     content_hash = Column(String(128), nullable=False, index=True)
     action = Column(
          Enum(LedgerAction, name="ledger_action", create_constraint=True),
          nullable=False,
          index=True
     )
     actor_address = Column(String(255), nullable=True)
     record_type = Column(String(50), default="generic", nullable=False)
     timestamp = Column(DateTime, default=utc_now, nullable=False)
     block_number = Column(Integer, nullable=False)
     appended_at = Column(DateTime, default=utc_now, nullable=False)

     def __repr__(self):
          return f"<LedgerEntry(id={self.id}, tx={self.transaction_id[:18]}..., action='{self.action.value}')>"


@event.listens_for(LedgerEntry, "before_update")
def _refuse_update(mapper, connection, target):
     raise ImmutableLedgerError(f"Ledger entry {target.transaction_id} is append-only and cannot be updated")


@event.listens_for(LedgerEntry, "before_delete")
def _refuse_delete(mapper, connection, target):
     raise ImmutableLedgerError(f"Ledger entry {target.transaction_id} is append-only and cannot be deleted")
