# dependencies.py
"""
FastAPI dependencies shared by the routers: bearer-token auth and role checks.
"""
from datetime import datetime, timedelta, timezone

from fastapi import Depends, HTTPException, Request, status
from jose import JWTError, jwt
from sqlalchemy.orm import Session

import config
from database import get_session
from models import User
from services import HashingService, LedgerStore, RecordStore, VerificationEngine


def get_hashing_service() -> HashingService:
     return HashingService()


def get_ledger_store(
     db: Session = Depends(get_session),
     hashing: HashingService = Depends(get_hashing_service),
) -> LedgerStore:
     return LedgerStore(db, hashing)


def get_record_store(
     db: Session = Depends(get_session),
     hashing: HashingService = Depends(get_hashing_service),
) -> RecordStore:
     return RecordStore(db, hashing)


def get_verification_engine(
     records: RecordStore = Depends(get_record_store),
     ledger: LedgerStore = Depends(get_ledger_store),
) -> VerificationEngine:
     return VerificationEngine(records, ledger)


def create_access_token(user: User) -> str:
     """Sign a JWT carrying the claims the routers rely on."""
     expires = datetime.now(timezone.utc) + timedelta(minutes=config.JWT_EXPIRE_MINUTES)
     claims = {
          "id": user.id,
          "email": user.email,
          "role": user.role,
          "wallet_address": user.wallet_address,
          "institution_id": user.institution_id,
          "student_id": user.student_id,
          "exp": expires,
     }
     return jwt.encode(claims, config.JWT_SECRET, algorithm=config.JWT_ALGORITHM)


# Token Auth Dependency
def verify_token(request: Request) -> dict:
     auth = request.headers.get("Authorization")
     if not auth or not auth.startswith("Bearer "):
          raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Access token required")
     token = auth.split(" ", 1)[1]
     try:
          return jwt.decode(token, config.JWT_SECRET, algorithms=[config.JWT_ALGORITHM])
     except JWTError:
          raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid or expired token")


def require_role(*roles: str):
     """Dependency factory: the token's role must be one of `roles`."""

     def checker(token: dict = Depends(verify_token)) -> dict:
          if token.get("role") not in roles:
               raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient permissions")
          return token

     return checker


def issuer_identity(token: dict) -> str:
     """Opaque issuer identity recorded on records: the institution if any, else the user."""
     if token.get("institution_id"):
          return f"institution:{token['institution_id']}"
     return f"user:{token.get('id')}"


def client_ip(request: Request):
     return request.client.host if request.client else None
