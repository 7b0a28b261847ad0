# schemas/admin.py
"""
Pydantic schemas for the system admin console.
"""
from datetime import datetime
from typing import Any, List, Optional
from pydantic import BaseModel, Field, ConfigDict

from models.system_log import SystemAction


class AdminUserResponse(BaseModel):
     id: int
     email: Optional[str] = None
     name: str
     role: str
     wallet_address: Optional[str] = None
     institution_id: Optional[int] = None
     student_id: Optional[str] = None
     created_at: datetime
     updated_at: Optional[datetime] = None

     model_config = ConfigDict(from_attributes=True)


class AdminUserListResponse(BaseModel):
     users: List[AdminUserResponse]


class AdminUserUpdate(BaseModel):
     """Omitted fields stay unchanged; wallet_address may be set to null to clear it."""
     name: Optional[str] = Field(None, max_length=200)
     email: Optional[str] = Field(None, max_length=255)
     role: Optional[str] = Field(None, description="admin, institution or student")
     wallet_address: Optional[str] = Field(None, max_length=64)


class ResetPasswordRequest(BaseModel):
     new_password: Optional[str] = Field(None, min_length=6, max_length=72)


class ResetPasswordResponse(BaseModel):
     message: str = "Password reset successfully"
     temporary_password: str


class SystemLogResponse(BaseModel):
     id: int
     action: SystemAction
     performed_by: Optional[int] = None
     target_user_id: Optional[int] = None
     target_email: Optional[str] = None
     target_institution_id: Optional[int] = None
     details: Any = None
     ip_address: Optional[str] = None
     created_at: datetime

     model_config = ConfigDict(from_attributes=True)


class SystemLogListResponse(BaseModel):
     logs: List[SystemLogResponse]
