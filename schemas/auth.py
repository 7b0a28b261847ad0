from typing import Optional
from pydantic import BaseModel, Field, ConfigDict


class RegisterRequest(BaseModel):
     email: str = Field(..., min_length=3, max_length=255)
     password: str = Field(..., min_length=6, max_length=72)
     name: str = Field(..., min_length=1, max_length=200)
     role: str = Field("student", description="admin, institution or student")
     wallet_address: Optional[str] = Field(None, max_length=64)
     institution_id: Optional[int] = None


class LoginRequest(BaseModel):
     email: str
     password: str


class WalletLoginRequest(BaseModel):
     """Signature and message are accepted for client compatibility; the simulated chain does not check them."""
     wallet_address: str = Field(..., min_length=1, max_length=64)
     signature: Optional[str] = None
     message: Optional[str] = None

     model_config = ConfigDict(
          json_schema_extra={
               "example": {"wallet_address": "0x8ba1f109551bD432803012645Ac136ddd64DBA72"}
          }
     )


class ChangePasswordRequest(BaseModel):
     current_password: str = Field(..., min_length=1)
     new_password: str = Field(..., min_length=6, max_length=72)


class UpdateProfileRequest(BaseModel):
     """Omitted fields stay unchanged; wallet_address may be set to null to clear it."""
     name: Optional[str] = Field(None, max_length=200)
     email: Optional[str] = Field(None, max_length=255)
     wallet_address: Optional[str] = Field(None, max_length=64)


class UserResponse(BaseModel):
     id: int
     email: Optional[str] = None
     name: str
     role: str
     wallet_address: Optional[str] = None
     institution_id: Optional[int] = None
     student_id: Optional[str] = None

     model_config = ConfigDict(from_attributes=True)


class TokenResponse(BaseModel):
     token: str
     user: UserResponse


class WalletLoginResponse(TokenResponse):
     message: str = "Wallet login successful"
     created: bool = False
