import threading

import pytest

from campuspoints.core.exceptions import (
    AccountNotFoundError,
    AlreadyRewardedError,
    MessageNotFoundError,
    RewardNotAllowedError,
)
from campuspoints.database.session import atomic
from campuspoints.models.chat import ChatMessage
from campuspoints.models.points import PointTransaction, TransactionKind
from campuspoints.repositories.user_repository import UserRepository
from campuspoints.services.ledger_service import LedgerService
from campuspoints.services.reward_service import RewardService
from conftest import make_topic_with_reply, make_user


def _reward_service(factory, reward_points=5):
    return RewardService(factory, LedgerService(factory), reward_points=reward_points)


def _is_rewarded(factory, message_id):
    with atomic(factory) as db:
        return db.query(ChatMessage).filter(ChatMessage.id == message_id).one().rewarded_by_author


def _ledger_entries(factory, user_id):
    with atomic(factory) as db:
        return (
            db.query(PointTransaction)
            .filter(PointTransaction.user_id == user_id)
            .order_by(PointTransaction.id)
            .all()
        )


def test_topic_author_rewards_reply(session_factory):
    author = make_user(session_factory, "Author")
    replier = make_user(session_factory, "Replier")
    topic_id, message_id = make_topic_with_reply(session_factory, author, replier)

    result = _reward_service(session_factory).reward(message_id, topic_id, author)

    assert result.message.id == message_id
    assert result.message.rewarded_by_author is True
    assert result.recipient_id == replier
    assert result.new_user_points == 5
    assert result.transaction.amount == 5
    assert result.transaction.reason == "reply rewarded by topic author"
    assert _is_rewarded(session_factory, message_id)
    assert LedgerService(session_factory).get_balance(author) == 0

    entries = _ledger_entries(session_factory, replier)
    assert len(entries) == 1
    assert entries[0].kind == TransactionKind.EARN
    assert "reward" in entries[0].reason
    assert _ledger_entries(session_factory, author) == []


def test_second_reward_is_rejected(session_factory):
    author = make_user(session_factory, "Author")
    replier = make_user(session_factory, "Replier")
    topic_id, message_id = make_topic_with_reply(session_factory, author, replier)
    service = _reward_service(session_factory)

    service.reward(message_id, topic_id, author)
    with pytest.raises(AlreadyRewardedError) as exc_info:
        service.reward(message_id, topic_id, author)

    assert exc_info.value.status_code == 409
    assert LedgerService(session_factory).get_balance(replier) == 5
    assert len(_ledger_entries(session_factory, replier)) == 1


def test_non_author_cannot_reward(session_factory):
    author = make_user(session_factory, "Author")
    replier = make_user(session_factory, "Replier")
    outsider = make_user(session_factory, "Outsider")
    topic_id, message_id = make_topic_with_reply(session_factory, author, replier)

    with pytest.raises(RewardNotAllowedError) as exc_info:
        _reward_service(session_factory).reward(message_id, topic_id, outsider)

    assert exc_info.value.status_code == 403
    assert not _is_rewarded(session_factory, message_id)
    assert LedgerService(session_factory).get_balance(replier) == 0
    assert _ledger_entries(session_factory, replier) == []


def test_unknown_message_or_wrong_topic(session_factory):
    author = make_user(session_factory, "Author")
    replier = make_user(session_factory, "Replier")
    topic_id, message_id = make_topic_with_reply(session_factory, author, replier)
    other_topic_id, _ = make_topic_with_reply(session_factory, author, replier)
    service = _reward_service(session_factory)

    with pytest.raises(MessageNotFoundError):
        service.reward(12345, topic_id, author)
    with pytest.raises(MessageNotFoundError):
        service.reward(message_id, other_topic_id, author)

    assert not _is_rewarded(session_factory, message_id)


def test_failed_credit_rolls_back_reward_flag(session_factory):
    author = make_user(session_factory, "Author")
    with atomic(session_factory) as db:
        # user row without a points account
        replier = UserRepository(db).create_user("ghost@example.com", "Ghost").id
    topic_id, message_id = make_topic_with_reply(session_factory, author, replier)

    with pytest.raises(AccountNotFoundError):
        _reward_service(session_factory).reward(message_id, topic_id, author)

    assert not _is_rewarded(session_factory, message_id)
    with atomic(session_factory) as db:
        assert db.query(PointTransaction).filter(PointTransaction.user_id == replier).count() == 0


def test_reward_amount_comes_from_settings(session_factory):
    author = make_user(session_factory, "Author")
    replier = make_user(session_factory, "Replier")
    topic_id, message_id = make_topic_with_reply(session_factory, author, replier)

    result = _reward_service(session_factory, reward_points=7).reward(message_id, topic_id, author)

    assert result.new_user_points == 7


def test_concurrent_rewards_pay_exactly_once(file_session_factory):
    author = make_user(file_session_factory, "Author")
    replier = make_user(file_session_factory, "Replier")
    topic_id, message_id = make_topic_with_reply(file_session_factory, author, replier)
    service = _reward_service(file_session_factory)
    outcomes = []
    lock = threading.Lock()

    def worker():
        try:
            service.reward(message_id, topic_id, author)
            outcome = "ok"
        except AlreadyRewardedError:
            outcome = "already"
        with lock:
            outcomes.append(outcome)

    threads = [threading.Thread(target=worker) for _ in range(5)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert outcomes.count("ok") == 1
    assert outcomes.count("already") == 4
    assert LedgerService(file_session_factory).get_balance(replier) == 5
    assert len(_ledger_entries(file_session_factory, replier)) == 1
    assert _is_rewarded(file_session_factory, message_id)
