from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import client_ip, create_access_token, verify_token
from schemas.auth import (
     ChangePasswordRequest,
     LoginRequest,
     RegisterRequest,
     TokenResponse,
     UpdateProfileRequest,
     UserResponse,
     WalletLoginRequest,
     WalletLoginResponse,
)
from services import DuplicateUserError, InvalidPasswordError, UserService

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _current_user(db: Session, token: dict):
     user = UserService.get(db, token.get("id"))
     if not user:
          raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
     return user


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def register_user(body: RegisterRequest, db: Session = Depends(get_session)):
     # Admin accounts are provisioned out of band
     if body.role == "admin":
          raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Cannot self-register as admin")
     try:
          user = UserService.create_user(
               db,
               email=body.email,
               password=body.password,
               name=body.name,
               role=body.role,
               wallet_address=body.wallet_address,
               institution_id=body.institution_id,
          )
     except (DuplicateUserError, ValueError) as e:
          raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

     return TokenResponse(token=create_access_token(user), user=UserResponse.model_validate(user))


@router.post("/login", response_model=TokenResponse)
def login_user(body: LoginRequest, db: Session = Depends(get_session)):
     user = UserService.authenticate(db, body.email, body.password)
     if not user:
          raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
     return TokenResponse(token=create_access_token(user), user=UserResponse.model_validate(user))


@router.post("/wallet-login", response_model=WalletLoginResponse)
def wallet_login(body: WalletLoginRequest, db: Session = Depends(get_session)):
     """Log in by wallet address. Unknown wallets get a new student account."""
     user, created = UserService.wallet_login(db, body.wallet_address)
     return WalletLoginResponse(
          token=create_access_token(user),
          user=UserResponse.model_validate(user),
          created=created,
     )


@router.get("/me", response_model=UserResponse)
def current_user(db: Session = Depends(get_session), token: dict = Depends(verify_token)):
     return _current_user(db, token)


@router.post("/change-password")
def change_password(
     body: ChangePasswordRequest,
     request: Request,
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     user = _current_user(db, token)
     try:
          UserService.change_password(
               db, user, body.current_password, body.new_password, ip_address=client_ip(request)
          )
     except InvalidPasswordError as e:
          raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))
     return {"message": "Password changed successfully"}


@router.put("/update-profile")
def update_profile(
     body: UpdateProfileRequest,
     request: Request,
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     user = _current_user(db, token)
     try:
          user = UserService.update_profile(
               db, user, body.model_dump(exclude_unset=True), ip_address=client_ip(request)
          )
     except (DuplicateUserError, ValueError) as e:
          raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
     return {"message": "Profile updated successfully", "user": UserResponse.model_validate(user)}
