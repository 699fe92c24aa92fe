from sqlalchemy.orm import Session
from app.models.user import User
from app.schemas.user import UserCreate
from app.core.security import get_password_hash
from datetime import datetime

# 유저 생성
def create_user(db: Session, user: UserCreate):
    hashed_pw = get_password_hash(user.password)
    db_user = User(
        email=user.email,
        password=hashed_pw,
        name=user.name,
        created_at=datetime.utcnow()
    )
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user

# 이메일로 유저 조회
def get_user_by_email(db: Session, email: str):
    return db.query(User).filter(User.email == email).first()
