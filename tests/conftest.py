import sys
from pathlib import Path
import pytest
from dependency_injector import providers
from fastapi.testclient import TestClient

# Ensure project root is on path for `campuspoints` imports
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from campuspoints.config import Settings
from campuspoints.database.connection import create_db_engine, create_session_factory
from campuspoints.database.session import atomic
from campuspoints.database.tables import create_tables
from campuspoints.repositories.chat_repository import ChatRepository
from campuspoints.repositories.note_repository import NoteRepository
from campuspoints.schemas.user import UserCreate
from campuspoints.services.ledger_service import LedgerService
from campuspoints.services.user_service import UserService


def _build_session_factory(database_url: str):
    engine = create_db_engine(Settings(DATABASE_URL=database_url, DEBUG=False))
    create_tables(engine)
    return engine, create_session_factory(engine)


@pytest.fixture
def session_factory():
    """In-memory SQLite shared through a single connection."""
    engine, factory = _build_session_factory("sqlite://")
    yield factory
    engine.dispose()


@pytest.fixture
def file_session_factory(tmp_path):
    """File-backed SQLite so that worker threads get their own connections."""
    engine, factory = _build_session_factory(f"sqlite:///{tmp_path / 'ledger.db'}")
    yield factory
    engine.dispose()


def make_user(factory, name: str, points: int = 0) -> int:
    user = UserService(factory).register(
        UserCreate(email=f"{name.lower()}@example.com", name=name, department="CS")
    )
    if points:
        LedgerService(factory).earn(user.id, points, "initial points")
    return user.id


def make_topic_with_reply(factory, topic_author_id: int, reply_author_id: int):
    with atomic(factory) as db:
        chat_repo = ChatRepository(db)
        topic_id = chat_repo.create_topic(topic_author_id, "Exam prep")
        message_id = chat_repo.create_message(topic_id, reply_author_id, "Here are my notes")
    return topic_id, message_id


def make_note(factory, author_id: int, title: str, price: int) -> int:
    with atomic(factory) as db:
        note = NoteRepository(db).create_note(
            author_id, title, price, file_url=f"notes/{title}.pdf"
        )
    return note.id


@pytest.fixture
def client(session_factory):
    from campuspoints.main import create_app

    app = create_app()
    app.container.database.session_factory.override(providers.Object(session_factory))
    yield TestClient(app)
    app.container.database.session_factory.reset_override()
