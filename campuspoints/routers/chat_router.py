from fastapi import APIRouter, Depends
from dependency_injector.wiring import inject, Provide

from campuspoints.containers import Container
from campuspoints.schemas.chat import RewardMessageRequest, RewardMessageResponse
from campuspoints.services.reward_service import RewardService

router = APIRouter(prefix="/chat", tags=["chat"])


@router.patch("/messages", response_model=RewardMessageResponse)
@inject
def reward_message(
    request: RewardMessageRequest,
    reward_service: RewardService = Depends(Provide[Container.services.reward_service]),
) -> RewardMessageResponse:
    """
    댓글 보상 - 주제 작성자가 댓글 작성자에게 포인트 지급 (메시지당 1회)

    HTTP Status:
        200: 보상 성공
        403: 주제 작성자가 아님
        404: 메시지 없음 또는 다른 주제의 메시지
        409: 이미 보상된 메시지
    """
    return reward_service.reward(
        request.message_id, request.topic_id, request.giver_user_id
    )
