from fastapi import APIRouter, Depends, status
from dependency_injector.wiring import inject, Provide

from campuspoints.containers import Container
from campuspoints.schemas.user import UserCreate, UserWithPoints
from campuspoints.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserWithPoints, status_code=status.HTTP_201_CREATED)
@inject
def register_user(
    user_data: UserCreate,
    user_service: UserService = Depends(Provide[Container.services.user_service]),
) -> UserWithPoints:
    """
    사용자 등록 - 잔액 0인 포인트 계정이 함께 생성된다

    HTTP Status:
        201: 등록 성공
        409: 이미 등록된 이메일
        422: 요청 형식 오류
    """
    return user_service.register(user_data)
