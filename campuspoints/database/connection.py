from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from campuspoints.config import Settings

_IN_MEMORY_SQLITE_URLS = ("sqlite://", "sqlite:///:memory:")


def create_db_engine(settings: Settings) -> Engine:
    """설정에 맞는 SQLAlchemy 엔진 생성"""
    if settings.is_sqlite:
        engine_kwargs = {
            "connect_args": {
                "check_same_thread": False,
                "timeout": settings.SQLITE_BUSY_TIMEOUT,
            },
            "echo": settings.DEBUG,
        }
        if settings.DATABASE_URL in _IN_MEMORY_SQLITE_URLS:
            # 인메모리 DB는 커넥션 하나를 모든 세션이 공유해야 데이터가 유지됨
            engine_kwargs["poolclass"] = StaticPool
        engine = create_engine(settings.DATABASE_URL, **engine_kwargs)
        enable_sqlite_write_transactions(engine)
        return engine

    return create_engine(
        settings.DATABASE_URL,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_pre_ping=True,  # 연결 유효성 검사
        pool_recycle=3600,  # 1시간마다 연결 재생성
        echo=settings.DEBUG,  # 디버그 모드에서 SQL 로깅
    )


def enable_sqlite_write_transactions(engine: Engine) -> None:
    """SQLite 트랜잭션을 BEGIN IMMEDIATE로 시작하도록 설정

    SQLite는 행 잠금이 없으므로 트랜잭션 시작 시점에 쓰기 잠금을 잡아
    같은 계정에 대한 잔액 갱신과 원장 기록을 직렬화한다.
    다른 쓰기 트랜잭션은 busy timeout 동안 대기한다.
    read_only 실행 옵션이 붙은 연결은 일반 BEGIN으로 시작하여 읽기가
    쓰기 잠금을 기다리지 않는다.
    """

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        # pysqlite의 자동 BEGIN 비활성화 (BEGIN은 아래 begin 이벤트에서 직접 발행)
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        if conn.get_execution_options().get("read_only"):
            conn.exec_driver_sql("BEGIN")
        else:
            conn.exec_driver_sql("BEGIN IMMEDIATE")


def create_session_factory(engine: Engine) -> sessionmaker:
    # Use expire_on_commit=False so results stay readable after the
    # operation's transaction has been committed and the session closed.
    return sessionmaker(
        autoflush=False,
        bind=engine,
        expire_on_commit=False,
    )
