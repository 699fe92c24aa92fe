from fastapi import Request, Depends, HTTPException, status
from sqlalchemy.orm import Session
from app.db.database import get_db
from app.core.security import decode_access_token
from app.crud.user_crud import get_user_by_email
from app.services.llm_client import LLMClient
from app.services.pdf_extractor import PdfTextExtractor

def get_current_user(request: Request, db: Session = Depends(get_db)):
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials"
    )

    token = request.cookies.get("access_token")
    if not token:
        raise credentials_exception

    payload = decode_access_token(token)
    if payload is None or payload.get("type") == "refresh":
        # access token이 만료된 경우 refresh token이 살아있으면 클라이언트가 갱신하도록 알림
        refresh_token = request.cookies.get("refresh_token")
        if refresh_token:
            refresh_payload = decode_access_token(refresh_token)
            if refresh_payload is not None:
                raise HTTPException(
                    status_code=status.HTTP_401_UNAUTHORIZED,
                    detail="Token expired, refresh needed",
                    headers={"X-Token-Expired": "true"}
                )

        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token"
        )

    user = get_user_by_email(db, payload.get("sub"))
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )

    return user

def get_llm_client(request: Request) -> LLMClient:
    return request.app.state.llm_client

def get_pdf_extractor(request: Request) -> PdfTextExtractor:
    return request.app.state.pdf_extractor
