"""
개발용 시드 데이터 스크립트
사용자(포인트 계정 포함), 채팅 주제/댓글, 노트를 초기 데이터로 설정
"""

import sys
import os

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from campuspoints.config import settings
from campuspoints.database.connection import create_db_engine, create_session_factory
from campuspoints.database.session import atomic
from campuspoints.database.tables import create_tables
from campuspoints.repositories.chat_repository import ChatRepository
from campuspoints.repositories.note_repository import NoteRepository
from campuspoints.repositories.user_repository import UserRepository
from campuspoints.schemas.user import UserCreate
from campuspoints.services.ledger_service import LedgerService
from campuspoints.services.user_service import UserService


def seed_users(session_factory):
    """기본 사용자 시드 - 계정이 없으면 생성하고 시작 포인트 적립"""

    default_users = [
        ("alice@example.com", "Alice", "Computer Science", 100),
        ("bob@example.com", "Bob", "Mathematics", 20),
        ("carol@example.com", "Carol", "Physics", 0),
    ]

    user_service = UserService(session_factory)
    ledger_service = LedgerService(session_factory)
    user_ids = {}

    for email, name, department, starting_points in default_users:
        with atomic(session_factory) as db:
            existing = UserRepository(db).get_by_email(email)

        if existing:
            user_ids[email] = existing.id
            print(f"⏭️  이미 존재하는 사용자: {email}")
            continue

        user = user_service.register(
            UserCreate(email=email, name=name, department=department)
        )
        if starting_points:
            ledger_service.earn(user.id, starting_points, "welcome points")
        user_ids[email] = user.id
        print(f"✅ 사용자 추가: {email} ({starting_points} points)")

    return user_ids


def seed_chat_and_notes(session_factory, user_ids):
    """채팅 주제/댓글과 노트 시드"""
    alice = user_ids["alice@example.com"]
    bob = user_ids["bob@example.com"]

    with atomic(session_factory) as db:
        chat_repo = ChatRepository(db)
        topic_id = chat_repo.create_topic(alice, "Midterm study group", "Who wants to review chapter 3?")
        message_id = chat_repo.create_message(topic_id, bob, "I summarized chapter 3 in my notes")

        note_repo = NoteRepository(db)
        note_repo.create_note(bob, "Chapter 3 summary", price=10, file_url="notes/chapter3.pdf")
        note_repo.create_note(bob, "Syllabus", price=0, file_url="notes/syllabus.pdf")

    print(f"✅ 채팅 주제 {topic_id}, 댓글 {message_id} 생성")
    print("✅ 노트 2개 생성 (유료 1, 무료 1)")


def main():
    """시드 데이터 실행"""
    print("🌱 시드 데이터 생성을 시작합니다...")
    engine = create_db_engine(settings)
    create_tables(engine)
    session_factory = create_session_factory(engine)

    try:
        user_ids = seed_users(session_factory)
        seed_chat_and_notes(session_factory, user_ids)
    finally:
        engine.dispose()

    print("🎉 모든 시드 데이터 생성이 완료되었습니다!")


if __name__ == "__main__":
    main()
