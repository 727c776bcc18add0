"""
Database connection handling.

A `DatabaseHandle` owns the single active engine of the application. A
new connection replaces the old one under a lock so requests never see a
half-swapped handle.
"""

import threading
from contextlib import contextmanager

from loguru import logger
from sqlalchemy import create_engine, text
from sqlalchemy.engine import URL
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from .config import SCHEMA_MODES
from .errors import ConnectionFailedError, NotConnectedError
from .models import init_schema


class ConnectionConfig:
    """
    Settings submitted on the configuration form. Never persisted.

    Attributes:
        host (str | None): Database server host
        port (int | None): Database server port
        username (str | None): Login name
        password (str | None): Login password
        database (str | None): Database name
    """
    def __init__(self, host=None, port=None, username=None, password=None, database=None):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.database = database

    @classmethod
    def from_form(cls, form):
        """
        Build a config from submitted form values. Blank values count as absent.

        Args:
            form (Mapping): Request form or JSON body

        Returns:
            ConnectionConfig: The parsed settings

        Raises:
            ConnectionFailedError: Port is not a number
        """
        values = {}
        for key in ('host', 'port', 'username', 'password', 'database'):
            value = form.get(key)
            if isinstance(value, str):
                value = value.strip() or None
            values[key] = value

        if values['port'] is not None:
            try:
                values['port'] = int(values['port'])
            except (TypeError, ValueError):
                raise ConnectionFailedError(f"Invalid port {values['port']!r}")
        return cls(**values)

    def to_url(self, driver):
        """
        Args:
            driver (str): SQLAlchemy driver name, e.g. "mysql+pymysql"

        Returns:
            URL: Connection URL for `create_engine`
        """
        return URL.create(
            driver,
            username=self.username,
            password=self.password,
            host=self.host,
            port=self.port,
            database=self.database,
        )

    def __repr__(self):
        # password left out on purpose, this ends up in logs
        return f'<ConnectionConfig {self.username}@{self.host}:{self.port}/{self.database}>'


class DatabaseHandle:
    """
    Owner of the active engine and its session factory

    Only `connect` replaces the engine. Sessions opened before a swap keep
    using the engine they were opened on.
    """
    def __init__(self, driver='mysql+pymysql', schema_mode='reset', connect_timeout=10):
        if schema_mode not in SCHEMA_MODES:
            raise ValueError(f"Unknown schema mode {schema_mode!r}, expected one of {SCHEMA_MODES}")
        self.driver = driver
        self.schema_mode = schema_mode
        self.connect_timeout = connect_timeout
        self._lock = threading.Lock()
        self._engine = None
        self._session_factory = None

    @property
    def connected(self):
        return self._engine is not None

    def _connect_args(self):
        if self.driver.startswith('mysql'):
            return {'connect_timeout': self.connect_timeout}
        return {}

    def connect(self, config):
        """
        Open a connection, prepare the products table and make it the active one

        The previous connection stays active when any step fails.

        Args:
            config (ConnectionConfig): Submitted connection settings

        Raises:
            ConnectionFailedError: The database could not be reached or the
                products table could not be created
        """
        logger.info(f"Connecting to {config!r} using {self.driver}")
        engine = None
        try:
            engine = create_engine(config.to_url(self.driver), connect_args=self._connect_args())
            with engine.connect() as connection:
                connection.execute(text('SELECT 1'))
            init_schema(engine, self.schema_mode)
        except SQLAlchemyError as e:
            if engine is not None:
                engine.dispose()
            logger.error(f"Unable to connect to the database: {e}")
            raise ConnectionFailedError(f"Unable to connect to the database: {e}") from e

        with self._lock:
            previous = self._engine
            self._engine = engine
            self._session_factory = sessionmaker(bind=engine, expire_on_commit=False)
        if previous is not None:
            previous.dispose()
        logger.info("Connection has been established successfully.")

    @contextmanager
    def session(self):
        """
        Yield an ORM session on the current engine, rolled back on error

        Raises:
            NotConnectedError: No connection has been established yet
        """
        with self._lock:
            factory = self._session_factory
        if factory is None:
            raise NotConnectedError()

        session = factory()
        try:
            yield session
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def close(self):
        with self._lock:
            engine = self._engine
            self._engine = None
            self._session_factory = None
        if engine is not None:
            engine.dispose()
