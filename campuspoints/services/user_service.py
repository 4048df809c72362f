from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker

from campuspoints.database.session import atomic
from campuspoints.repositories.user_repository import UserRepository
from campuspoints.repositories.points_repository import PointsRepository
from campuspoints.core.exceptions import ConflictError
from campuspoints.schemas.user import UserCreate, UserWithPoints
import logging

logger = logging.getLogger(__name__)


class UserService:
    """사용자 관련 비즈니스 로직을 담당하는 서비스"""

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def register(self, user_data: UserCreate) -> UserWithPoints:
        """사용자 등록 - 잔액 0인 포인트 계정을 같은 트랜잭션에서 생성

        이메일 중복은 사전 조회로 먼저 거르고, 동시 등록으로 조회를 통과한
        경우에는 users.email 유니크 제약 위반을 ConflictError로 변환한다.
        """
        with atomic(self.session_factory) as db:
            user_repo = UserRepository(db)
            if user_repo.get_by_email(user_data.email):
                raise ConflictError(
                    "Email already registered", details={"email": user_data.email}
                )

            try:
                user = user_repo.create_user(
                    email=user_data.email,
                    name=user_data.name,
                    department=user_data.department,
                )
            except IntegrityError as e:
                logger.warning(
                    f"Concurrent registration for {user_data.email}: {type(e).__name__}"
                )
                raise ConflictError(
                    "Email already registered", details={"email": user_data.email}
                ) from e
            PointsRepository(db).open_account(user.id)

        logger.info(f"Registered user {user.id} with a new points account")
        return UserWithPoints(**user.model_dump(), points=0)
