import sys
import os

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from campuspoints.config import settings
from campuspoints.database.connection import create_db_engine
from campuspoints.database.tables import create_tables


def init_db():
    """데이터베이스 초기화"""
    engine = create_db_engine(settings)
    try:
        create_tables(engine)
        print(f"Database initialized successfully: {engine.url.render_as_string(hide_password=True)}")

    except Exception as e:
        print(f"Database initialization failed: {str(e)}")
        raise
    finally:
        engine.dispose()


if __name__ == "__main__":
    init_db()
