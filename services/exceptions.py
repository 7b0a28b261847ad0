# services/exceptions.py
"""
Error types raised by the service layer.

"Not found" is not an error here: lookups return None (or an empty list) and
verification reports a negative result. Only contract violations are raised.
"""
from models.ledger_entry import ImmutableLedgerError


class HashingFailure(TypeError):
     """Input could not be canonicalized (not JSON-serializable). Caller bug."""


class ImmutableFieldViolation(ValueError):
     """A patch tried to change a hash-bearing field of an issued record."""

     def __init__(self, fields):
          self.fields = sorted(fields)
          super().__init__(
               f"Cannot modify hash-bearing field(s) {', '.join(self.fields)}; "
               "issue a new record instead"
          )


class RecordNotFoundError(LookupError):
     """Raised only where a mutation targets a record that does not exist."""


class DuplicateStudentError(ValueError):
     """A student with the same public student_id already exists."""


class DuplicateUserError(ValueError):
     """A user with the same email already exists."""


class InvalidPasswordError(ValueError):
     """The current password supplied for a password change is wrong."""


class UserNotFoundError(LookupError):
     """An account-management action targets a user that does not exist."""


class InstitutionNotFoundError(LookupError):
     """An admin action targets an institution that does not exist."""


class DuplicateInstitutionError(ValueError):
     """An institution with the same code already exists."""


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
]
