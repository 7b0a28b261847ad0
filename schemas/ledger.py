# schemas/ledger.py
"""
Pydantic schemas for the simulated blockchain API.
"""
from datetime import datetime
from typing import Any, List, Optional
from pydantic import BaseModel, Field, ConfigDict

from models.ledger_entry import LedgerAction


class StoreHashRequest(BaseModel):
     """Request body for POST /api/blockchain/store-hash."""
     data: Any = Field(..., description="Arbitrary JSON data to hash and anchor")
     record_type: Optional[str] = Field(None, max_length=50)

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "data": {"studentId": "STU2024001", "course": "Computer Science"},
                    "record_type": "enrollment"
               }
          }
     )


class LedgerEntryResponse(BaseModel):
     transaction_id: str
     record_id: Optional[int] = None
     content_hash: str
     action: LedgerAction
     actor_address: Optional[str] = None
     record_type: str
     block_number: int
     timestamp: datetime
     appended_at: datetime

     model_config = ConfigDict(from_attributes=True)


class StoreHashResponse(BaseModel):
     success: bool = True
     message: str = "Hash stored on blockchain successfully"
     transaction: LedgerEntryResponse


class VerifyHashResponse(BaseModel):
     """Response for GET /api/blockchain/verify-hash."""
     verified: bool
     exists: bool
     message: str
     transaction: Optional[LedgerEntryResponse] = None


class TransactionListResponse(BaseModel):
     transactions: List[LedgerEntryResponse]
     total: int
