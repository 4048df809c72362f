from sqlalchemy import BigInteger, Boolean, ForeignKey, Index, String, Text, false
from sqlalchemy.orm import Mapped, mapped_column, relationship

from campuspoints.models.base import BaseModel, BigIntegerPK


class ChatTopic(BaseModel):
    __tablename__ = "chat_topics"

    id: Mapped[int] = mapped_column(BigIntegerPK, primary_key=True, autoincrement=True)
    author_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("users.id"), nullable=False
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")


class ChatMessage(BaseModel):
    __tablename__ = "chat_messages"
    __table_args__ = (Index("idx_chat_messages_topic_id", "topic_id"),)

    id: Mapped[int] = mapped_column(BigIntegerPK, primary_key=True, autoincrement=True)
    topic_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("chat_topics.id"), nullable=False
    )
    author_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("users.id"), nullable=False
    )
    text: Mapped[str] = mapped_column(Text, nullable=False)

    # 주제 작성자의 보상 여부 - false -> true 한 번만 전이
    rewarded_by_author: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )

    topic: Mapped[ChatTopic] = relationship(ChatTopic, lazy="joined")
