from typing import Optional
from sqlalchemy.orm import Session

from campuspoints.models.notes import Note as NoteModel
from campuspoints.schemas.notes import Note as NoteSchema
from campuspoints.repositories.base import BaseRepository


class NoteRepository(BaseRepository[NoteModel, NoteSchema]):
    """노트 리포지토리 - 구매 시 가격 조회용"""

    def __init__(self, db: Session):
        super().__init__(NoteModel, NoteSchema, db)

    def create_note(
        self, author_id: int, title: str, price: int, file_url: Optional[str] = None
    ) -> Optional[NoteSchema]:
        return self.create(
            author_id=author_id, title=title, price=price, file_url=file_url
        )
