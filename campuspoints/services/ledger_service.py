from datetime import datetime, timezone
from typing import Optional
from sqlalchemy.orm import Session, sessionmaker

from campuspoints.database.session import atomic
from campuspoints.repositories.points_repository import PointsRepository
from campuspoints.repositories.user_repository import UserRepository
from campuspoints.models.points import MAX_AMOUNT, MAX_BALANCE, TransactionKind
from campuspoints.core.exceptions import (
    AccountNotFoundError,
    InvalidAmountError,
    InsufficientBalanceError,
)
from campuspoints.schemas.points import (
    LedgerTransactionResponse,
    PointsIntegrityCheckResponse,
    WalletSummaryResponse,
    WalletUser,
)
import logging

logger = logging.getLogger(__name__)


class LedgerService:
    """포인트 원장 서비스 - 잔액 변경은 오직 이 서비스를 통해서만 이루어진다

    각 공개 연산은 session_factory로 자체 세션을 열고 하나의 트랜잭션을 소유한다.
    잔액 갱신과 원장 기록은 같은 트랜잭션에서 함께 커밋되거나 함께 롤백된다.
    """

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    @staticmethod
    def _validate_amount(amount) -> None:
        # bool은 int의 하위 타입이므로 명시적으로 거부
        if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
            raise InvalidAmountError(details={"amount": repr(amount)})
        if amount > MAX_AMOUNT:
            raise InvalidAmountError(
                f"Amount must not exceed {MAX_AMOUNT}",
                details={"amount": amount, "max_amount": MAX_AMOUNT},
            )

    def earn(
        self,
        user_id: int,
        amount: int,
        reason: str = "",
        request_ref: Optional[str] = None,
    ) -> LedgerTransactionResponse:
        """포인트 적립

        Args:
            user_id: 사용자 ID
            amount: 적립할 포인트 (양의 정수)
            reason: 거래 사유
            request_ref: 클라이언트 멱등 토큰 (기록만 하고 중복 제거에는 사용하지 않음)

        Returns:
            LedgerTransactionResponse: 새 잔액과 생성된 원장 항목
        """
        self._validate_amount(amount)

        with atomic(self.session_factory) as db:
            result = self.credit_in_session(db, user_id, amount, reason, request_ref)

        logger.info(
            f"Earned {amount} points for user {user_id}: balance={result.points}"
        )
        return result

    def spend(self, user_id: int, amount: int, reason: str = "") -> LedgerTransactionResponse:
        """포인트 사용

        잔액 확인과 차감이 하나의 UPDATE 문으로 처리되므로 같은 계정에 대한
        동시 사용 요청이 잔액을 음수로 만들 수 없다.
        """
        self._validate_amount(amount)

        with atomic(self.session_factory) as db:
            result = self.debit_in_session(db, user_id, amount, reason)

        logger.info(
            f"Spent {amount} points for user {user_id}: balance={result.points}"
        )
        return result

    def credit_in_session(
        self,
        db: Session,
        user_id: int,
        amount: int,
        reason: str = "",
        request_ref: Optional[str] = None,
    ) -> LedgerTransactionResponse:
        """호출자 트랜잭션 안에서 적립 (커밋하지 않음)"""
        self._validate_amount(amount)
        points_repo = PointsRepository(db)

        if not points_repo.increment_balance(user_id, amount):
            current_balance = points_repo.get_balance(user_id)
            if current_balance is None:
                raise AccountNotFoundError(user_id)
            raise InvalidAmountError(
                "Amount would exceed the maximum balance",
                details={
                    "user_id": user_id,
                    "amount": amount,
                    "balance": current_balance,
                    "max_balance": MAX_BALANCE,
                },
            )

        balance = points_repo.get_balance(user_id)
        entry = points_repo.append_transaction(
            user_id=user_id,
            kind=TransactionKind.EARN,
            amount=amount,
            reason=reason,
            balance_after=balance,
            request_ref=request_ref,
        )
        return LedgerTransactionResponse(points=balance, transaction=entry)

    def debit_in_session(
        self, db: Session, user_id: int, amount: int, reason: str = ""
    ) -> LedgerTransactionResponse:
        """호출자 트랜잭션 안에서 차감 (커밋하지 않음)"""
        self._validate_amount(amount)
        points_repo = PointsRepository(db)

        if not points_repo.decrement_balance_if_sufficient(user_id, amount):
            current_balance = points_repo.get_balance(user_id)
            if current_balance is None:
                raise AccountNotFoundError(user_id)
            logger.warning(
                f"Insufficient balance for user {user_id}: requested={amount}, balance={current_balance}"
            )
            raise InsufficientBalanceError(
                details={
                    "user_id": user_id,
                    "requested": amount,
                    "balance": current_balance,
                }
            )

        balance = points_repo.get_balance(user_id)
        entry = points_repo.append_transaction(
            user_id=user_id,
            kind=TransactionKind.SPEND,
            amount=amount,
            reason=reason,
            balance_after=balance,
        )
        return LedgerTransactionResponse(points=balance, transaction=entry)

    def get_balance(self, user_id: int) -> int:
        """현재 잔액 조회"""
        with atomic(self.session_factory, read_only=True) as db:
            balance = PointsRepository(db).get_balance(user_id)

        if balance is None:
            raise AccountNotFoundError(user_id)
        return balance

    def get_summary(self, user_id: int) -> WalletSummaryResponse:
        """지갑 요약 - 잔액과 적립/사용 내역 (최신순)

        잔액과 내역을 같은 트랜잭션에서 읽어 서로 어긋나지 않는 스냅샷을 반환한다.
        """
        with atomic(self.session_factory, read_only=True) as db:
            points_repo = PointsRepository(db)
            balance = points_repo.get_balance(user_id)
            if balance is None:
                raise AccountNotFoundError(user_id)

            user = UserRepository(db).get_by_id(user_id)
            earn_records = points_repo.get_user_transactions(
                user_id, kind=TransactionKind.EARN
            )
            use_records = points_repo.get_user_transactions(
                user_id, kind=TransactionKind.SPEND
            )

        logger.info(
            f"Retrieved wallet summary for user {user_id}: "
            f"{len(earn_records)} earn, {len(use_records)} use records"
        )
        return WalletSummaryResponse(
            user=WalletUser(
                id=user_id,
                name=user.name if user else "",
                department=user.department if user else None,
                points=balance,
            ),
            points=balance,
            earn_records=earn_records,
            use_records=use_records,
        )

    def verify_integrity(self, user_id: int) -> PointsIntegrityCheckResponse:
        """포인트 정합성 검증

        계정 잔액을 원장 합계(EARN - SPEND) 및 마지막 원장 항목의
        balance_after와 비교한다.
        """
        with atomic(self.session_factory, read_only=True) as db:
            points_repo = PointsRepository(db)
            balance = points_repo.get_balance(user_id)
            if balance is None:
                raise AccountNotFoundError(user_id)

            totals = points_repo.sum_by_kind(user_id)
            latest_entry = points_repo.get_latest_transaction(user_id)
            entry_count = points_repo.count_user_transactions(user_id)

        calculated_balance = totals[TransactionKind.EARN] - totals[TransactionKind.SPEND]
        last_balance_after = latest_entry.balance_after if latest_entry else None

        is_consistent = balance == calculated_balance and (
            last_balance_after is None or last_balance_after == balance
        )
        status = "OK" if is_consistent else "MISMATCH"
        if not is_consistent:
            logger.error(
                f"Points integrity mismatch for user {user_id}: "
                f"balance={balance}, calculated={calculated_balance}, last_balance_after={last_balance_after}"
            )

        return PointsIntegrityCheckResponse(
            status=status,
            user_id=user_id,
            account_balance=balance,
            calculated_balance=calculated_balance,
            last_balance_after=last_balance_after,
            entry_count=entry_count,
            verified_at=datetime.now(timezone.utc),
        )
