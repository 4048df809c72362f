from typing import Optional

from sqlalchemy import BigInteger, CheckConstraint, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from campuspoints.models.base import BaseModel, BigIntegerPK


class Note(BaseModel):
    __tablename__ = "notes"
    __table_args__ = (CheckConstraint("price >= 0", name="ck_notes_price_non_negative"),)

    id: Mapped[int] = mapped_column(BigIntegerPK, primary_key=True, autoincrement=True)
    author_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("users.id"), nullable=False
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    price: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    file_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
