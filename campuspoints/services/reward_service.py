from typing import Type
from sqlalchemy.orm import sessionmaker

from campuspoints.database.session import atomic
from campuspoints.repositories.chat_repository import ChatRepository
from campuspoints.services.ledger_service import LedgerService
from campuspoints.core.exceptions import (
    AlreadyRewardedError,
    MessageNotFoundError,
    RewardNotAllowedError,
)
from campuspoints.schemas.chat import RewardedMessage, RewardMessageResponse
import logging

logger = logging.getLogger(__name__)

REWARD_REASON = "reply rewarded by topic author"


class RewardService:
    """댓글 보상 서비스 - 주제 작성자가 댓글 하나당 한 번만 보상 지급

    플래그 설정과 포인트 적립은 하나의 트랜잭션에서 처리되어
    둘 다 반영되거나 둘 다 반영되지 않는다.
    """

    def __init__(
        self,
        session_factory: sessionmaker,
        ledger_service: LedgerService,
        reward_points: int = 5,
        chat_repository_cls: Type[ChatRepository] = ChatRepository,
    ):
        self.session_factory = session_factory
        self.ledger_service = ledger_service
        self.reward_points = reward_points
        self.chat_repository_cls = chat_repository_cls

    def reward(
        self, message_id: int, topic_id: int, acting_user_id: int
    ) -> RewardMessageResponse:
        """댓글 보상 지급

        검사 순서:
            1. 메시지가 존재하고 해당 주제에 속하는지 (MessageNotFoundError)
            2. 요청자가 주제 작성자인지 (RewardNotAllowedError)
            3. 아직 보상되지 않았는지 (AlreadyRewardedError)

        Returns:
            RewardMessageResponse: 보상된 메시지, 수령자, 수령자의 새 잔액, 원장 항목
        """
        with atomic(self.session_factory) as db:
            chat_repo = self.chat_repository_cls(db)

            message = chat_repo.get_message_ref(message_id)
            if message is None or message.topic_id != topic_id:
                raise MessageNotFoundError(message_id, topic_id)

            if acting_user_id != message.topic_author_id:
                logger.warning(
                    f"User {acting_user_id} tried to reward message {message_id} "
                    f"on topic {topic_id} owned by {message.topic_author_id}"
                )
                raise RewardNotAllowedError(topic_id, acting_user_id)

            if message.rewarded_by_author:
                raise AlreadyRewardedError(message_id)

            # 동시 요청 중 먼저 플래그를 바꾼 요청만 통과
            if not chat_repo.mark_rewarded(message_id):
                raise AlreadyRewardedError(message_id)

            result = self.ledger_service.credit_in_session(
                db, message.author_id, self.reward_points, REWARD_REASON
            )

        logger.info(
            f"Message {message_id} rewarded by user {acting_user_id}: "
            f"{self.reward_points} points to user {message.author_id}"
        )
        return RewardMessageResponse(
            message=RewardedMessage(id=message_id, rewarded_by_author=True),
            recipient_id=message.author_id,
            new_user_points=result.points,
            transaction=result.transaction,
        )
