from fastapi import APIRouter, Depends, Path
from dependency_injector.wiring import inject, Provide

from campuspoints.containers import Container
from campuspoints.schemas.notes import NotePurchaseRequest, NotePurchaseResponse
from campuspoints.services.note_service import NoteService

router = APIRouter(prefix="/notes", tags=["notes"])


@router.post("/{note_id}/purchase", response_model=NotePurchaseResponse)
@inject
def purchase_note(
    request: NotePurchaseRequest,
    note_id: int = Path(..., description="노트 ID"),
    note_service: NoteService = Depends(Provide[Container.services.note_service]),
) -> NotePurchaseResponse:
    """노트 구매 - 무료 노트는 포인트를 차감하지 않는다"""
    return note_service.purchase(request.user_id, note_id)
