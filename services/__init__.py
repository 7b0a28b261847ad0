# services/__init__.py
from .exceptions import (
     HashingFailure,
     ImmutableFieldViolation,
     ImmutableLedgerError,
     RecordNotFoundError,
     DuplicateStudentError,
     DuplicateUserError,
     InvalidPasswordError,
     UserNotFoundError,
     InstitutionNotFoundError,
     DuplicateInstitutionError,
)
from .hashing_service import HashingService, record_canonical_form, payment_canonical_form
from .ledger_service import LedgerStore, LedgerEntryDraft, generate_transaction_id
from .record_service import RecordStore, RecordDraft
from .verification_service import (
     VerificationEngine,
     VerificationResult,
     VerificationReason,
     SubjectVerification,
     SubjectStatus,
)
from .audit_service import AuditService
from .user_service import UserService
from .institution_service import InstitutionService
from .student_service import StudentService
from .payment_service import PaymentService

__all__ = [
     "HashingFailure",
     "ImmutableFieldViolation",
     "ImmutableLedgerError",
     "RecordNotFoundError",
     "DuplicateStudentError",
     "DuplicateUserError",
     "InvalidPasswordError",
     "UserNotFoundError",
     "InstitutionNotFoundError",
     "DuplicateInstitutionError",
     "HashingService",
     "record_canonical_form",
     "payment_canonical_form",
     "LedgerStore",
     "LedgerEntryDraft",
     "generate_transaction_id",
     "RecordStore",
     "RecordDraft",
     "VerificationEngine",
     "VerificationResult",
     "VerificationReason",
     "SubjectVerification",
     "SubjectStatus",
     "AuditService",
     "UserService",
     "InstitutionService",
     "StudentService",
     "PaymentService",
]
