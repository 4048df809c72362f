"""
지갑 API 라우터

- POST /wallet/earn: 포인트 적립
- POST /wallet/use: 포인트 사용
- GET /wallet/summary: 잔액과 적립/사용 내역
- GET /wallet/packs: 충전 포인트 팩 목록
- POST /wallet/packs/{pack_id}/purchase: 포인트 팩 구매
- GET /wallet/integrity: 잔액/원장 정합성 검증

인증은 앞단에서 처리되며 요청자는 userId로 전달된다.
"""

from typing import List
from fastapi import APIRouter, Depends, Path, Query
from dependency_injector.wiring import inject, Provide

from campuspoints.containers import Container
from campuspoints.services.ledger_service import LedgerService
from campuspoints.services.wallet_service import WalletService
from campuspoints.schemas.points import (
    EarnPointsRequest,
    LedgerTransactionResponse,
    PackPurchaseRequest,
    PointPack,
    PointsIntegrityCheckResponse,
    SpendPointsRequest,
    WalletSummaryResponse,
)

router = APIRouter(prefix="/wallet", tags=["wallet"])


@router.post("/earn", response_model=LedgerTransactionResponse)
@inject
def earn_points(
    request: EarnPointsRequest,
    ledger_service: LedgerService = Depends(Provide[Container.services.ledger_service]),
) -> LedgerTransactionResponse:
    """
    포인트 적립

    HTTP Status:
        200: 적립 성공
        404: 포인트 계정 없음
        503: 저장소 오류 (재시도 가능)
    """
    return ledger_service.earn(
        request.user_id, request.amount, request.message, request.request_ref
    )


@router.post("/use", response_model=LedgerTransactionResponse)
@inject
def use_points(
    request: SpendPointsRequest,
    ledger_service: LedgerService = Depends(Provide[Container.services.ledger_service]),
) -> LedgerTransactionResponse:
    """
    포인트 사용

    HTTP Status:
        200: 사용 성공
        400: 잔액 부족
        404: 포인트 계정 없음
    """
    return ledger_service.spend(request.user_id, request.amount, request.message)


@router.get("/summary", response_model=WalletSummaryResponse)
@inject
def get_wallet_summary(
    user_id: int = Query(..., alias="userId", gt=0, description="사용자 ID"),
    ledger_service: LedgerService = Depends(Provide[Container.services.ledger_service]),
) -> WalletSummaryResponse:
    """잔액과 적립/사용 내역 (최신순)"""
    return ledger_service.get_summary(user_id)


@router.get("/packs", response_model=List[PointPack])
@inject
def list_point_packs(
    wallet_service: WalletService = Depends(Provide[Container.services.wallet_service]),
) -> List[PointPack]:
    return wallet_service.list_packs()


@router.post("/packs/{pack_id}/purchase", response_model=LedgerTransactionResponse)
@inject
def purchase_point_pack(
    request: PackPurchaseRequest,
    pack_id: int = Path(..., description="포인트 팩 ID"),
    wallet_service: WalletService = Depends(Provide[Container.services.wallet_service]),
) -> LedgerTransactionResponse:
    """
    포인트 팩 구매 - 결제 완료 후 팩의 포인트를 적립

    HTTP Status:
        200: 적립 성공
        404: 존재하지 않는 팩 또는 포인트 계정 없음
    """
    return wallet_service.purchase_pack(request.user_id, pack_id, request.request_ref)


@router.get("/integrity", response_model=PointsIntegrityCheckResponse)
@inject
def verify_points_integrity(
    user_id: int = Query(..., alias="userId", gt=0, description="사용자 ID"),
    ledger_service: LedgerService = Depends(Provide[Container.services.ledger_service]),
) -> PointsIntegrityCheckResponse:
    """잔액이 원장 합계와 일치하는지 검증"""
    return ledger_service.verify_integrity(user_id)
