from .database import (
    Database,
    create_db_engine,
    normalize_database_url,
)

__all__ = ['Database', 'create_db_engine', 'normalize_database_url']
