from typing import Optional
from sqlalchemy.orm import Session

from campuspoints.models.chat import ChatMessage as ChatMessageModel, ChatTopic as ChatTopicModel
from campuspoints.schemas.chat import MessageRef
from campuspoints.repositories.base import BaseRepository


class ChatRepository(BaseRepository[ChatMessageModel, MessageRef]):
    """채팅 리포지토리 - 보상 판단에 필요한 메시지/주제 조회와 보상 플래그 관리"""

    def __init__(self, db: Session):
        super().__init__(ChatMessageModel, MessageRef, db)

    def get_message_ref(self, message_id: int) -> Optional[MessageRef]:
        """메시지와 소속 주제 작성자 조회"""
        message = (
            self.db.query(ChatMessageModel)
            .filter(ChatMessageModel.id == message_id)
            .first()
        )
        if message is None:
            return None

        return MessageRef(
            id=message.id,
            topic_id=message.topic_id,
            author_id=message.author_id,
            topic_author_id=message.topic.author_id,
            rewarded_by_author=bool(message.rewarded_by_author),
        )

    def mark_rewarded(self, message_id: int) -> bool:
        """보상 플래그를 false -> true로 전환

        이미 true라면 아무 행도 갱신되지 않아 False를 반환한다.
        동시 요청 중 오직 하나만 True를 받는다.
        """
        updated_count = (
            self.db.query(ChatMessageModel)
            .filter(
                ChatMessageModel.id == message_id,
                ChatMessageModel.rewarded_by_author.is_(False),
            )
            .update({"rewarded_by_author": True}, synchronize_session=False)
        )
        return updated_count > 0

    def create_topic(self, author_id: int, title: str, content: str = "") -> int:
        topic = ChatTopicModel(author_id=author_id, title=title, content=content)
        self.db.add(topic)
        self.db.flush()
        return topic.id

    def create_message(self, topic_id: int, author_id: int, text: str) -> int:
        message = ChatMessageModel(topic_id=topic_id, author_id=author_id, text=text)
        self.db.add(message)
        self.db.flush()
        return message.id
