# schemas/__init__.py
from .auth import (
     RegisterRequest,
     LoginRequest,
     WalletLoginRequest,
     ChangePasswordRequest,
     UpdateProfileRequest,
     UserResponse,
     TokenResponse,
     WalletLoginResponse,
)
from .student import StudentCreate, StudentSelfRegister, StudentResponse, StudentListResponse
from .record import (
     RecordCreate,
     RecordMetadataUpdate,
     RecordResponse,
     RecordIssueResponse,
     AnchorResponse,
     VerificationResultResponse,
     StudentVerificationResponse,
)
from .ledger import (
     StoreHashRequest,
     StoreHashResponse,
     LedgerEntryResponse,
     VerifyHashResponse,
     TransactionListResponse,
)
from .payment import PaymentCreateRequest, PaymentResponse, PaymentCreateResponse, PaymentListResponse
from .institution import InstitutionCreate, InstitutionUpdate, InstitutionResponse, InstitutionListResponse
from .admin import (
     AdminUserResponse,
     AdminUserListResponse,
     AdminUserUpdate,
     ResetPasswordRequest,
     ResetPasswordResponse,
     SystemLogResponse,
     SystemLogListResponse,
)

__all__ = [
     "RegisterRequest",
     "LoginRequest",
     "UserResponse",
     "TokenResponse",
     "WalletLoginRequest",
     "ChangePasswordRequest",
     "UpdateProfileRequest",
     "WalletLoginResponse",
     "StudentCreate",
     "StudentSelfRegister",
     "StudentResponse",
     "StudentListResponse",
     "RecordCreate",
     "RecordMetadataUpdate",
     "RecordResponse",
     "RecordIssueResponse",
     "AnchorResponse",
     "VerificationResultResponse",
     "StudentVerificationResponse",
     "StoreHashRequest",
     "StoreHashResponse",
     "LedgerEntryResponse",
     "VerifyHashResponse",
     "TransactionListResponse",
     "PaymentCreateRequest",
     "PaymentResponse",
     "PaymentCreateResponse",
     "PaymentListResponse",
     "InstitutionCreate",
     "InstitutionResponse",
     "InstitutionListResponse",
     "InstitutionUpdate",
     "AdminUserResponse",
     "AdminUserListResponse",
     "AdminUserUpdate",
     "ResetPasswordRequest",
     "ResetPasswordResponse",
     "SystemLogResponse",
     "SystemLogListResponse",
]
