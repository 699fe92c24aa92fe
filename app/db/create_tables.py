import logging

from app.db.database import engine, Base
from app.models.user import User  # noqa: F401  (테이블 등록용)

logger = logging.getLogger(__name__)


def create_tables():
    Base.metadata.create_all(bind=engine)
    logger.info("모든 테이블이 정상적으로 생성되었습니다!")
