from __future__ import annotations
"""Query executors used by reflection and the pipeline runner."""

import logging
from typing import Any, Dict, List, Optional, Protocol

import snowflake.connector
from snowflake.connector import DictCursor
from snowflake.connector.errors import Error as SnowflakeError
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from .exceptions import QueryExecutionError
from .settings import Settings

Row = Dict[str, Any]


def _first_line(sql: str) -> str:
    return sql.strip().split("\n", 1)[0]


class QueryExecutor(Protocol):
    """Submit SQL, get rows back as dicts or a ``QueryExecutionError``."""

    def execute(self, sql: str) -> List[Row]: ...

    def close(self) -> None: ...


class SnowflakeConnection:
    """Wrapper around snowflake.connector for easy mocking."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self._conn = None
        self.logger = logging.getLogger("SnowflakeConnection")

    def connect(self) -> None:
        try:
            self._conn = snowflake.connector.connect(**self.settings.get_snowflake_connection_params())
        except SnowflakeError as e:
            raise QueryExecutionError(f"Failed to connect to Snowflake: {e}", original=e) from e

    def execute(self, sql: str) -> List[Row]:
        if self._conn is None:
            self.connect()
        self.logger.debug(f"Executing: {_first_line(sql)}", extra={"sql": sql})
        cur = self._conn.cursor(DictCursor)
        try:
            cur.execute(sql)
            return cur.fetchall() if cur.description else []
        except SnowflakeError as e:
            raise QueryExecutionError(str(e), sql=sql, original=e) from e
        finally:
            cur.close()

    def close(self) -> None:
        if self._conn:
            self._conn.close()
            self._conn = None


class SQLAlchemyConnection:
    """Executor for engines reached through a SQLAlchemy dialect (Redshift, Teradata)."""

    def __init__(self, url: str, engine: Optional[Engine] = None):
        self.url = url
        self._engine = engine
        self.logger = logging.getLogger("SQLAlchemyConnection")

    def _get_engine(self) -> Engine:
        if self._engine is None:
            self._engine = create_engine(self.url)
        return self._engine

    def execute(self, sql: str) -> List[Row]:
        self.logger.debug(f"Executing: {_first_line(sql)}", extra={"sql": sql})
        try:
            with self._get_engine().begin() as conn:
                result = conn.execute(text(sql))
                if not result.returns_rows:
                    return []
                return [dict(row) for row in result.mappings().all()]
        except SQLAlchemyError as e:
            raise QueryExecutionError(str(e), sql=sql, original=e) from e

    def close(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None


def create_connection(engine_name: str, settings: Settings) -> QueryExecutor:
    """Pick the executor for ``engine_name``."""
    missing = settings.validate_required_credentials(engine_name)
    if missing:
        raise ValueError(f"Missing required environment variables: {', '.join(missing)}")
    if engine_name == "snowflake":
        return SnowflakeConnection(settings)
    return SQLAlchemyConnection(settings.SQLALCHEMY_URL.get_secret_value())
