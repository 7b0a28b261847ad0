# routers/ledger.py
"""
Simulated blockchain API.

POST /store-hash anchors the hash of arbitrary data; GET /verify-hash looks a
hash or transaction id up. A miss is reported as verified=false, not as an error.
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from dependencies import get_ledger_store, verify_token
from schemas.ledger import (
     LedgerEntryResponse,
     StoreHashRequest,
     StoreHashResponse,
     TransactionListResponse,
     VerifyHashResponse,
)
from services import HashingFailure, LedgerStore

router = APIRouter(prefix="/api/blockchain", tags=["blockchain"])


@router.post(
     "/store-hash",
     response_model=StoreHashResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Hash data and anchor it on the ledger"
)
def store_hash(
     body: StoreHashRequest,
     ledger: LedgerStore = Depends(get_ledger_store),
     token: dict = Depends(verify_token)
):
     if body.data is None:
          raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Data is required")
     try:
          entry = ledger.store_hash(
               body.data,
               record_type=body.record_type or "generic",
               actor_address=token.get("wallet_address"),
          )
     except HashingFailure as e:
          raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))

     return StoreHashResponse(transaction=LedgerEntryResponse.model_validate(entry))


@router.get(
     "/verify-hash",
     response_model=VerifyHashResponse,
     summary="Look up a hash or transaction id"
)
def verify_hash(
     hash: Optional[str] = Query(None, description="Content hash to look up"),
     tx_hash: Optional[str] = Query(None, description="Transaction id to look up (takes precedence)"),
     ledger: LedgerStore = Depends(get_ledger_store)
):
     if not hash and not tx_hash:
          raise HTTPException(
               status_code=status.HTTP_400_BAD_REQUEST,
               detail="Hash or transaction hash is required"
          )

     if tx_hash:
          entry = ledger.find_by_transaction_id(tx_hash)
     else:
          entry = ledger.find_by_content_hash(hash)

     if entry is None:
          return VerifyHashResponse(verified=False, exists=False, message="Hash not found on blockchain")

     return VerifyHashResponse(
          verified=True,
          exists=True,
          message="Hash verified successfully on blockchain",
          transaction=LedgerEntryResponse.model_validate(entry),
     )


@router.get(
     "/transactions",
     response_model=TransactionListResponse,
     summary="List ledger transactions"
)
def list_transactions(
     limit: Optional[int] = Query(None, ge=1, le=1000, description="Most recent N only"),
     ledger: LedgerStore = Depends(get_ledger_store),
     token: dict = Depends(verify_token)
):
     entries = ledger.list_entries(limit=limit, newest_first=limit is not None)
     return TransactionListResponse(
          transactions=[LedgerEntryResponse.model_validate(e) for e in entries],
          total=ledger.count(),
     )
