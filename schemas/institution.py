# schemas/institution.py
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field, ConfigDict


class InstitutionCreate(BaseModel):
     name: str = Field(..., min_length=1, max_length=255)
     code: str = Field(..., min_length=1, max_length=50)
     wallet_address: Optional[str] = Field(None, max_length=64)

     model_config = ConfigDict(
          json_schema_extra={
               "example": {"name": "State University", "code": "SU001"}
          }
     )


class InstitutionResponse(BaseModel):
     id: int
     name: str
     code: str
     wallet_address: Optional[str] = None
     verified: bool
     created_at: datetime
     updated_at: Optional[datetime] = None

     model_config = ConfigDict(from_attributes=True)


class InstitutionListResponse(BaseModel):
     institutions: List[InstitutionResponse]


class InstitutionUpdate(BaseModel):
     """Admin edit. Omitted fields stay unchanged."""
     name: Optional[str] = Field(None, min_length=1, max_length=255)
     code: Optional[str] = Field(None, min_length=1, max_length=50)
     wallet_address: Optional[str] = Field(None, max_length=64)
     verified: Optional[bool] = None

     model_config = ConfigDict(
          json_schema_extra={
               "example": {"verified": True}
          }
     )
