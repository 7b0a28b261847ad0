# schemas/payment.py
"""
Pydantic schemas for payment API.
"""
from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field, ConfigDict

from models.payment import PaymentStatus


class PaymentCreateRequest(BaseModel):
     """Request body for POST /api/payments."""

     type: str = Field(..., min_length=1, max_length=100, description="Fee type, e.g. registration_fee")
     amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2, description="Amount paid")
     currency: Optional[str] = Field(None, min_length=3, max_length=3)
     description: Optional[str] = Field(None, max_length=255)
     payment_method: Optional[str] = Field(None, max_length=50)

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "type": "registration_fee",
                    "amount": 500.00,
                    "currency": "USD",
                    "payment_method": "card",
               }
          }
     )


class PaymentResponse(BaseModel):
     id: int
     user_id: int
     student_id: Optional[str] = None
     type: str
     amount: Decimal
     currency: str
     status: PaymentStatus
     description: Optional[str] = None
     payment_method: Optional[str] = None
     transaction_id: Optional[str] = Field(None, description="Ledger transaction id for client verification")
     paid_at: Optional[datetime] = None
     created_at: datetime

     model_config = ConfigDict(from_attributes=True)


class PaymentCreateResponse(BaseModel):
     message: str = "Payment successful"
     payment: PaymentResponse


class PaymentListResponse(BaseModel):
     payments: List[PaymentResponse]
