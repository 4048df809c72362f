from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime

from campuspoints.models.points import MAX_AMOUNT, TransactionKind


class PointTransactionEntry(BaseModel):
    """포인트 원장 항목"""

    id: int = Field(..., description="원장 항목 ID")
    kind: TransactionKind = Field(..., alias="type", description="거래 유형 (EARN/SPEND)")
    amount: int = Field(..., description="포인트 변동량 (항상 양수)")
    reason: str = Field("", alias="message", description="거래 사유")
    balance_after: int = Field(..., alias="balanceAfter", description="거래 후 잔액")
    created_at: datetime = Field(..., alias="dateISO", description="생성 시간")

    class Config:
        from_attributes = True
        populate_by_name = True


class LedgerTransactionResponse(BaseModel):
    """적립/사용 처리 결과"""

    points: int = Field(..., description="거래 후 잔액")
    transaction: PointTransactionEntry = Field(..., description="생성된 원장 항목")

    class Config:
        from_attributes = True


class EarnPointsRequest(BaseModel):
    """포인트 적립 요청 (지갑 충전)"""

    user_id: int = Field(..., alias="userId", gt=0, description="사용자 ID")
    amount: int = Field(..., gt=0, le=MAX_AMOUNT, description="적립할 포인트")
    message: str = Field("", max_length=255, description="기록 내용")
    request_ref: Optional[str] = Field(
        None, alias="requestRef", max_length=100, description="클라이언트 멱등 토큰 (기록용)"
    )

    class Config:
        populate_by_name = True


class SpendPointsRequest(BaseModel):
    """포인트 사용 요청"""

    user_id: int = Field(..., alias="userId", gt=0, description="사용자 ID")
    amount: int = Field(..., gt=0, le=MAX_AMOUNT, description="차감할 포인트")
    message: str = Field("", max_length=255, description="기록 내용")

    class Config:
        populate_by_name = True


class WalletUser(BaseModel):
    id: int
    name: str
    department: Optional[str] = None
    points: int

    class Config:
        from_attributes = True


class WalletSummaryResponse(BaseModel):
    """지갑 요약 - 잔액과 적립/사용 내역 (최신순)"""

    user: WalletUser
    points: int = Field(..., description="현재 잔액")
    earn_records: List[PointTransactionEntry] = Field(
        default_factory=list, alias="earnRecords", description="적립 내역"
    )
    use_records: List[PointTransactionEntry] = Field(
        default_factory=list, alias="useRecords", description="사용 내역"
    )

    class Config:
        populate_by_name = True


class PointPack(BaseModel):
    """충전 포인트 팩"""

    id: int
    label: str
    points: int
    price: int

    class Config:
        from_attributes = True


class PackPurchaseRequest(BaseModel):
    user_id: int = Field(..., alias="userId", gt=0, description="사용자 ID")
    request_ref: Optional[str] = Field(
        None, alias="requestRef", max_length=100, description="클라이언트 멱등 토큰 (기록용)"
    )

    class Config:
        populate_by_name = True


class PointsIntegrityCheckResponse(BaseModel):
    """포인트 정합성 검증 응답"""

    status: str = Field(..., description="검증 상태 (OK, MISMATCH)")
    user_id: int = Field(..., description="사용자 ID")
    account_balance: int = Field(..., description="계정에 저장된 잔액")
    calculated_balance: int = Field(..., description="원장 합계로 계산한 잔액 (EARN - SPEND)")
    last_balance_after: Optional[int] = Field(None, description="마지막 원장 항목의 거래 후 잔액")
    entry_count: int = Field(..., description="원장 항목 수")
    verified_at: datetime = Field(..., description="검증 시간")
