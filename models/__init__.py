from .base import Base, utc_now
from .user import User
from .institution import Institution
from .student import Student
from .record import Record, RecordType
from .ledger_entry import LedgerEntry, LedgerAction, ImmutableLedgerError
from .payment import Payment, PaymentStatus
from .system_log import SystemLog, SystemAction

__all__ = [
     "Base",
     "utc_now",
     "User",
     "Institution",
     "Student",
     "Record",
     "RecordType",
     "LedgerEntry",
     "LedgerAction",
     "ImmutableLedgerError",
     "Payment",
     "PaymentStatus",
     "SystemLog",
     "SystemAction",
]
