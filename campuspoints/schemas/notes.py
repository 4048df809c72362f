from pydantic import BaseModel, Field
from typing import Optional

from campuspoints.schemas.points import PointTransactionEntry


class Note(BaseModel):
    id: int
    author_id: int
    title: str
    price: int
    file_url: Optional[str] = None

    class Config:
        from_attributes = True


class NotePurchaseRequest(BaseModel):
    user_id: int = Field(..., alias="userId", gt=0, description="구매자 ID")

    class Config:
        populate_by_name = True


class NotePurchaseResponse(BaseModel):
    note_id: int = Field(..., alias="noteId")
    charged: bool = Field(..., description="포인트 차감 여부 (무료 노트는 False)")
    points: int = Field(..., description="구매 후 잔액")
    file_url: Optional[str] = Field(None, alias="fileUrl")
    transaction: Optional[PointTransactionEntry] = None

    class Config:
        populate_by_name = True
