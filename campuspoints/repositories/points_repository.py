"""
포인트 리포지토리 - 계정 잔액과 원장에 대한 데이터베이스 접근

핵심 특징:
- 잔액 변경은 조건부 UPDATE 한 문장으로 처리된다 (읽고-계산하고-쓰기 금지)
- 차감은 `balance >= amount` 조건을 UPDATE의 WHERE 절에 포함하여
  잔액 확인과 차감이 분리되지 않는다
- UPDATE가 계정 행을 잠근 뒤에 원장을 추가하므로 같은 계정의 원장 ID 순서가
  실제 적용 순서와 일치한다
"""

from typing import Dict, List, Optional
from sqlalchemy.orm import Session
from sqlalchemy import desc, func

from campuspoints.models.points import (
    MAX_BALANCE,
    PointAccount as PointAccountModel,
    PointTransaction as PointTransactionModel,
    TransactionKind,
)
from campuspoints.schemas.points import PointTransactionEntry
from campuspoints.repositories.base import BaseRepository


class PointsRepository(BaseRepository[PointTransactionModel, PointTransactionEntry]):
    """포인트 리포지토리 - 계정 및 원장 관련 모든 데이터베이스 작업 처리"""

    def __init__(self, db: Session):
        super().__init__(PointTransactionModel, PointTransactionEntry, db)

    def _to_ledger_entry(self, model_instance: PointTransactionModel) -> PointTransactionEntry:
        """SQLAlchemy 모델을 Pydantic 스키마로 변환"""
        return PointTransactionEntry(
            id=model_instance.id,
            kind=model_instance.kind,
            amount=model_instance.amount,
            reason=model_instance.reason or "",
            balance_after=model_instance.balance_after,
            created_at=model_instance.created_at,
        )

    # ------------------------------------------------------------------
    # Account Store
    # ------------------------------------------------------------------

    def open_account(self, user_id: int) -> None:
        """잔액 0인 계정 생성"""
        self.db.add(PointAccountModel(user_id=user_id, balance=0))
        self.db.flush()

    def get_balance(self, user_id: int) -> Optional[int]:
        """현재 잔액 조회 (계정이 없으면 None)"""
        return (
            self.db.query(PointAccountModel.balance)
            .filter(PointAccountModel.user_id == user_id)
            .scalar()
        )

    def increment_balance(self, user_id: int, amount: int) -> bool:
        """잔액 증가 - 계정이 없거나 BIGINT 상한을 넘게 되면 False"""
        updated_count = (
            self.db.query(PointAccountModel)
            .filter(
                PointAccountModel.user_id == user_id,
                PointAccountModel.balance <= MAX_BALANCE - amount,
            )
            .update(
                {"balance": PointAccountModel.balance + amount},
                synchronize_session=False,
            )
        )
        return updated_count > 0

    def decrement_balance_if_sufficient(self, user_id: int, amount: int) -> bool:
        """잔액이 충분할 때만 차감 - 계정이 없거나 잔액 부족이면 False"""
        updated_count = (
            self.db.query(PointAccountModel)
            .filter(
                PointAccountModel.user_id == user_id,
                PointAccountModel.balance >= amount,
            )
            .update(
                {"balance": PointAccountModel.balance - amount},
                synchronize_session=False,
            )
        )
        return updated_count > 0

    # ------------------------------------------------------------------
    # Transaction Log
    # ------------------------------------------------------------------

    def append_transaction(
        self,
        user_id: int,
        kind: TransactionKind,
        amount: int,
        reason: str,
        balance_after: int,
        request_ref: Optional[str] = None,
    ) -> PointTransactionEntry:
        """원장 항목 추가 (커밋은 호출자 트랜잭션에서)"""
        ledger_entry = self.model_class(
            user_id=user_id,
            kind=kind,
            amount=amount,
            reason=reason,
            balance_after=balance_after,
            request_ref=request_ref,
        )
        self.db.add(ledger_entry)
        self.db.flush()
        self.db.refresh(ledger_entry)
        return self._to_ledger_entry(ledger_entry)

    def get_user_transactions(
        self, user_id: int, kind: Optional[TransactionKind] = None
    ) -> List[PointTransactionEntry]:
        """사용자 원장 조회 (최신순)"""
        query = self.db.query(self.model_class).filter(
            self.model_class.user_id == user_id
        )
        if kind is not None:
            query = query.filter(self.model_class.kind == kind)

        model_instances = query.order_by(desc(self.model_class.id)).all()
        return [self._to_ledger_entry(instance) for instance in model_instances]

    def sum_by_kind(self, user_id: int) -> Dict[TransactionKind, int]:
        """거래 유형별 합계"""
        rows = (
            self.db.query(self.model_class.kind, func.sum(self.model_class.amount))
            .filter(self.model_class.user_id == user_id)
            .group_by(self.model_class.kind)
            .all()
        )
        totals = {kind: 0 for kind in TransactionKind}
        for kind, total in rows:
            totals[kind] = int(total or 0)
        return totals

    def count_user_transactions(self, user_id: int) -> int:
        return (
            self.db.query(self.model_class)
            .filter(self.model_class.user_id == user_id)
            .count()
        )

    def get_latest_transaction(self, user_id: int) -> Optional[PointTransactionEntry]:
        latest_entry = (
            self.db.query(self.model_class)
            .filter(self.model_class.user_id == user_id)
            .order_by(desc(self.model_class.id))
            .first()
        )
        return self._to_ledger_entry(latest_entry) if latest_entry else None
