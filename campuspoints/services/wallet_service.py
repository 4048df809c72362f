from typing import List, Optional

from campuspoints.core.exceptions import NotFoundError
from campuspoints.core.point_packs import POINT_PACKS
from campuspoints.schemas.points import LedgerTransactionResponse, PointPack
from campuspoints.services.ledger_service import LedgerService
import logging

logger = logging.getLogger(__name__)


class WalletService:
    """지갑 충전 서비스 - 포인트 팩 구매를 적립으로 변환"""

    def __init__(self, ledger_service: LedgerService):
        self.ledger_service = ledger_service

    def list_packs(self) -> List[PointPack]:
        return [PointPack.model_validate(pack._asdict()) for pack in POINT_PACKS.values()]

    def purchase_pack(
        self, user_id: int, pack_id: int, request_ref: Optional[str] = None
    ) -> LedgerTransactionResponse:
        """포인트 팩 구매 - 팩의 포인트만큼 적립"""
        pack = POINT_PACKS.get(pack_id)
        if pack is None:
            raise NotFoundError(
                f"Point pack not found: {pack_id}", details={"pack_id": pack_id}
            )

        reason = f"purchase points pack {pack.label} ({pack.price} NTD)"
        result = self.ledger_service.earn(user_id, pack.points, reason, request_ref)
        logger.info(f"User {user_id} purchased point pack {pack.label}")
        return result
