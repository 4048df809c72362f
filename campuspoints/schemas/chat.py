from pydantic import BaseModel, Field

from campuspoints.schemas.points import PointTransactionEntry


class MessageRef(BaseModel):
    """보상 판단에 필요한 메시지/주제 정보"""

    id: int
    topic_id: int
    author_id: int
    topic_author_id: int
    rewarded_by_author: bool


class RewardMessageRequest(BaseModel):
    """주제 작성자가 댓글에 보상 지급"""

    message_id: int = Field(..., alias="messageId", gt=0)
    topic_id: int = Field(..., alias="topicId", gt=0)
    giver_user_id: int = Field(..., alias="giverUserId", gt=0, description="보상하는 사용자 (주제 작성자)")

    class Config:
        populate_by_name = True


class RewardedMessage(BaseModel):
    id: int
    rewarded_by_author: bool = Field(..., alias="rewardedByAuthor")

    class Config:
        populate_by_name = True


class RewardMessageResponse(BaseModel):
    message: RewardedMessage
    recipient_id: int = Field(..., alias="recipientId", description="보상을 받은 댓글 작성자")
    new_user_points: int = Field(..., alias="newUserPoints", description="댓글 작성자의 새 잔액")
    transaction: PointTransactionEntry

    class Config:
        populate_by_name = True
