from sqlalchemy.engine import Engine

from campuspoints.models.base import Base
from campuspoints.models import chat, notes, points, user  # noqa: F401 - 메타데이터에 테이블 등록


def create_tables(engine: Engine) -> None:
    """모든 테이블 생성 (이미 있으면 건너뜀)"""
    Base.metadata.create_all(bind=engine)
