"""
포인트 시스템 데이터 모델

- point_accounts: 사용자별 현재 잔액 (Account Store)
- point_transactions: 모든 잔액 변동을 기록하는 원장 (Transaction Log)

두 테이블은 LedgerService를 통해서만 변경되며, 잔액 갱신과 원장 기록은
항상 같은 트랜잭션 안에서 함께 커밋된다.
"""

import enum
from typing import Optional

from sqlalchemy import BigInteger, CheckConstraint, Enum, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from campuspoints.models.base import Base, BaseModel, BigIntegerPK, CreatedAtMixin


# 한 번의 적립/사용 금액 상한 (32비트 정수 범위)
MAX_AMOUNT = 2**31 - 1
# point_accounts.balance (BIGINT) 상한
MAX_BALANCE = 2**63 - 1


class TransactionKind(str, enum.Enum):
    """원장 거래 유형 - 두 가지 값만 허용되는 닫힌 열거형"""

    EARN = "EARN"  # 적립 (지갑 충전, 댓글 보상)
    SPEND = "SPEND"  # 사용 (노트 구매)


class PointAccount(BaseModel):
    """사용자 포인트 계정 - 사용자 생성 시 잔액 0으로 함께 생성"""

    __tablename__ = "point_accounts"
    __table_args__ = (
        CheckConstraint("balance >= 0", name="ck_point_accounts_balance_non_negative"),
    )

    user_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("users.id"), primary_key=True
    )
    balance: Mapped[int] = mapped_column(
        BigInteger, nullable=False, default=0, server_default="0"
    )


class PointTransaction(Base, CreatedAtMixin):
    """
    포인트 원장 테이블 - 추가 전용(append-only)

    1. 불변성: 생성된 레코드는 수정/삭제되지 않음
    2. 완전성: 성공한 적립/사용마다 정확히 한 건 기록
    3. 정합성: balance_after로 거래 직후 잔액을 추적
    """

    __tablename__ = "point_transactions"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_point_transactions_amount_positive"),
        CheckConstraint(
            "balance_after >= 0", name="ck_point_transactions_balance_after_non_negative"
        ),
        Index("idx_point_transactions_user_id", "user_id", "id"),
    )

    id: Mapped[int] = mapped_column(BigIntegerPK, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("users.id"), nullable=False
    )
    kind: Mapped[TransactionKind] = mapped_column(
        Enum(TransactionKind, name="point_transaction_kind"), nullable=False
    )
    amount: Mapped[int] = mapped_column(BigInteger, nullable=False)
    reason: Mapped[str] = mapped_column(Text, nullable=False, default="")
    balance_after: Mapped[int] = mapped_column(BigInteger, nullable=False)

    # 클라이언트가 보낸 멱등 토큰 - 감사용으로만 저장하며 중복 제거에는 사용하지 않음
    request_ref: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
