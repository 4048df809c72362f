from dependency_injector import containers, providers

from campuspoints.config import Settings
from campuspoints.database.connection import create_db_engine, create_session_factory
from campuspoints.repositories.chat_repository import ChatRepository
from campuspoints.services.ledger_service import LedgerService
from campuspoints.services.reward_service import RewardService
from campuspoints.services.wallet_service import WalletService
from campuspoints.services.note_service import NoteService
from campuspoints.services.user_service import UserService


class ConfigModule(containers.DeclarativeContainer):
    """Application configuration."""

    config = providers.Singleton(Settings)


class DatabaseModule(containers.DeclarativeContainer):
    """Engine and session factory shared by all services."""

    config = providers.DependenciesContainer()

    engine = providers.Singleton(create_db_engine, settings=config.config)
    session_factory = providers.Singleton(create_session_factory, engine=engine)


class ServiceModule(containers.DeclarativeContainer):
    """Service layer dependencies."""

    config = providers.DependenciesContainer()
    database = providers.DependenciesContainer()

    ledger_service = providers.Factory(
        LedgerService, session_factory=database.session_factory
    )
    reward_service = providers.Factory(
        RewardService,
        session_factory=database.session_factory,
        ledger_service=ledger_service,
        reward_points=config.config.provided.REWARD_POINTS,
        chat_repository_cls=providers.Object(ChatRepository),
    )
    wallet_service = providers.Factory(WalletService, ledger_service=ledger_service)
    note_service = providers.Factory(
        NoteService,
        session_factory=database.session_factory,
        ledger_service=ledger_service,
    )
    user_service = providers.Factory(
        UserService, session_factory=database.session_factory
    )


class Container(containers.DeclarativeContainer):
    """Application container."""

    wiring_config = containers.WiringConfiguration(
        modules=[
            "campuspoints.routers.user_router",
            "campuspoints.routers.wallet_router",
            "campuspoints.routers.chat_router",
            "campuspoints.routers.note_router",
        ],
    )

    config = providers.Container(ConfigModule)
    database = providers.Container(DatabaseModule, config=config)
    services = providers.Container(
        ServiceModule, config=config, database=database
    )
