from sqlalchemy.orm import sessionmaker

from campuspoints.database.session import atomic
from campuspoints.repositories.note_repository import NoteRepository
from campuspoints.repositories.points_repository import PointsRepository
from campuspoints.services.ledger_service import LedgerService
from campuspoints.core.exceptions import AccountNotFoundError, NotFoundError
from campuspoints.schemas.notes import NotePurchaseResponse
import logging

logger = logging.getLogger(__name__)


class NoteService:
    """노트 구매 서비스"""

    def __init__(self, session_factory: sessionmaker, ledger_service: LedgerService):
        self.session_factory = session_factory
        self.ledger_service = ledger_service

    def purchase(self, user_id: int, note_id: int) -> NotePurchaseResponse:
        """노트 구매 - 가격만큼 포인트 차감

        가격이 0인 노트는 무료이며 원장에 아무것도 기록하지 않는다.
        """
        with atomic(self.session_factory) as db:
            note = NoteRepository(db).get_by_id(note_id)
            if note is None:
                raise NotFoundError(
                    f"Note not found: {note_id}", details={"note_id": note_id}
                )

            if note.price == 0:
                balance = PointsRepository(db).get_balance(user_id)
                if balance is None:
                    raise AccountNotFoundError(user_id)
                return NotePurchaseResponse(
                    note_id=note.id,
                    charged=False,
                    points=balance,
                    file_url=note.file_url,
                )

            result = self.ledger_service.debit_in_session(
                db, user_id, note.price, f"bought note: {note.title}"
            )

        logger.info(f"User {user_id} bought note {note_id} for {note.price} points")
        return NotePurchaseResponse(
            note_id=note.id,
            charged=True,
            points=result.points,
            file_url=note.file_url,
            transaction=result.transaction,
        )
