import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from campuspoints.core.exceptions import StorageFailureError

logger = logging.getLogger(__name__)


@contextmanager
def atomic(session_factory: sessionmaker, read_only: bool = False) -> Iterator[Session]:
    """하나의 트랜잭션 범위로 세션을 제공

    read_only=True이면 연결에 read_only 실행 옵션을 붙인다. SQLite에서는
    쓰기 잠금 없이 (deferred BEGIN) 트랜잭션을 시작하여 다른 쓰기와 막히지 않는다.

    블록이 정상 종료되면 커밋, 예외가 발생하면 롤백한다.
    저장소 계층 오류(SQLAlchemyError)는 StorageFailureError로 변환되어
    호출자가 재시도 여부를 판단할 수 있다.
    """
    db = session_factory()
    try:
        if read_only:
            db.connection(execution_options={"read_only": True})
        yield db
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Storage operation failed, transaction rolled back: {str(e)}")
        raise StorageFailureError(
            "Storage operation could not complete",
            details={"reason": type(e).__name__},
        ) from e
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
