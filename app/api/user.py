from fastapi import APIRouter, Depends, HTTPException, Response, Request
from sqlalchemy.orm import Session
from app.schemas.user import UserCreate, UserOut, UserLogin
import app.crud.user_crud as crud_user
from app.db.database import get_db
from app.core.config import ACCESS_TOKEN_EXPIRE_MINUTES, REFRESH_TOKEN_EXPIRE_DAYS, COOKIE_SECURE
from app.core.security import verify_password, create_access_token, decode_access_token
from app.dependencies import get_current_user
from datetime import timedelta
import logging
import re

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/user", tags=["user"])

def validate_password(password: str) -> bool:
    # 비밀번호는 최소 8자 이상, 숫자, 특수문자를 포함해야 합니다.
    if len(password) < 8:
        return False
    if not re.search(r"[0-9]", password):
        return False
    if not re.search(r"[!@#$%^&*(),.?\":{}|<>]", password):
        return False
    return True

def _set_auth_cookie(response: Response, key: str, value: str, max_age: int):
    response.set_cookie(
        key=key,
        value=value,
        httponly=True,
        secure=COOKIE_SECURE,
        samesite="lax",
        max_age=max_age
    )

# 회원가입
@router.post("/signup", response_model=UserOut)
def signup(user_in: UserCreate, db: Session = Depends(get_db)):
    if not validate_password(user_in.password):
        raise HTTPException(status_code=400, detail="Password does not meet the required criteria.")
    db_user = crud_user.get_user_by_email(db, user_in.email)
    if db_user:
        raise HTTPException(status_code=400, detail="Email already registered")
    return crud_user.create_user(db, user_in)

# 로그인 (JWT 발급)
@router.post("/login")
def login(form_data: UserLogin, response: Response, db: Session = Depends(get_db)):
    logger.debug(f"Login attempt for email: {form_data.email}")
    db_user = crud_user.get_user_by_email(db, form_data.email)
    if not db_user or not verify_password(form_data.password, db_user.password):
        logger.debug("Invalid credentials.")
        raise HTTPException(status_code=401, detail="Invalid credentials")

    access_token_expires = timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    refresh_token_expires = timedelta(days=REFRESH_TOKEN_EXPIRE_DAYS)

    access_token = create_access_token(data={"sub": db_user.email}, expires_delta=access_token_expires)
    refresh_token = create_access_token(data={"sub": db_user.email, "type": "refresh"}, expires_delta=refresh_token_expires)

    _set_auth_cookie(response, "access_token", access_token, int(access_token_expires.total_seconds()))
    _set_auth_cookie(response, "refresh_token", refresh_token, int(refresh_token_expires.total_seconds()))

    logger.debug("Tokens generated and cookies set.")
    return {"access_token": access_token, "refresh_token": refresh_token, "token_type": "bearer"}

# 토큰 갱신
@router.post("/refresh")
def refresh_token(request: Request, response: Response, db: Session = Depends(get_db)):
    refresh_token = request.cookies.get("refresh_token")

    if not refresh_token:
        raise HTTPException(status_code=401, detail="Refresh token not found")

    payload = decode_access_token(refresh_token)
    if payload is None or payload.get("type") != "refresh" or not payload.get("sub"):
        raise HTTPException(status_code=401, detail="Invalid refresh token")

    email = payload["sub"]
    if not crud_user.get_user_by_email(db, email):
        raise HTTPException(status_code=401, detail="User not found")

    access_token_expires = timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    new_access_token = create_access_token(data={"sub": email}, expires_delta=access_token_expires)
    _set_auth_cookie(response, "access_token", new_access_token, int(access_token_expires.total_seconds()))

    logger.debug(f"Token refreshed for user: {email}")
    return {"access_token": new_access_token, "token_type": "bearer"}

# 로그아웃
@router.post("/logout")
def logout(response: Response):
    response.delete_cookie(key="access_token")
    response.delete_cookie(key="refresh_token")
    return {"message": "Successfully logged out"}

# 내 정보 조회 (JWT 필요)
@router.get("/me", response_model=UserOut)
def read_me(current_user = Depends(get_current_user)):
    return current_user
