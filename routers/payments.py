# routers/payments.py
"""
Payment API.

POST /api/payments: pay a fee. Completes the matching pending fee (if any),
appends a PAYMENT_RECORDED ledger entry and returns the transaction id.
No payment provider is involved; the request itself is the confirmation.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import get_ledger_store, require_role, verify_token
from schemas.payment import (
     PaymentCreateRequest,
     PaymentCreateResponse,
     PaymentListResponse,
     PaymentResponse,
)
from services import LedgerStore, PaymentService, UserService

router = APIRouter(prefix="/api/payments", tags=["payments"])


@router.get("", response_model=PaymentListResponse, summary="Current user's payments")
def list_my_payments(
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token),
):
     payments = PaymentService.list_for_user(db, token.get("id"))
     return PaymentListResponse(payments=[PaymentResponse.model_validate(p) for p in payments])


@router.get("/pending", response_model=PaymentListResponse, summary="Current user's pending fees")
def list_pending_payments(
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token),
):
     payments = PaymentService.list_pending_for_user(db, token.get("id"))
     return PaymentListResponse(payments=[PaymentResponse.model_validate(p) for p in payments])


@router.get("/all", response_model=PaymentListResponse, summary="All payments (admin)")
def list_all_payments(
     db: Session = Depends(get_session),
     token: dict = Depends(require_role("admin")),
):
     return PaymentListResponse(
          payments=[PaymentResponse.model_validate(p) for p in PaymentService.list_all(db)]
     )


@router.post(
     "",
     response_model=PaymentCreateResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Pay a fee",
)
def create_payment(
     body: PaymentCreateRequest,
     ledger: LedgerStore = Depends(get_ledger_store),
     token: dict = Depends(verify_token),
):
     """
     Record a payment for the current user.

     1. Completes the pending fee of the same type, if one exists (amounts must match).
     2. Anchors the payment on the ledger.
     3. Returns the payment with its ledger transaction id.
     """
     user = UserService.get(ledger.db, token.get("id"))
     if not user:
          raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

     try:
          payment = PaymentService.record_payment(
               ledger.db,
               user,
               payment_type=body.type,
               amount=body.amount,
               currency=body.currency,
               description=body.description,
               payment_method=body.payment_method,
               ledger=ledger,
          )
     except ValueError as e:
          raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

     return PaymentCreateResponse(payment=PaymentResponse.model_validate(payment))
