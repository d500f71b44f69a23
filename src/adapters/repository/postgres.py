"""
PostgreSQL repository adapter - Implements RegistrationRepository protocol.

This module provides the PostgreSQL implementation of the domain's
repository port using psycopg3 with raw SQL.

Uniqueness Design:
------------------
The registrations table carries UNIQUE (email, event_name). insert() uses
INSERT ... ON CONFLICT (email, event_name) DO NOTHING RETURNING, so the
duplicate check and the write are one atomic statement. Two concurrent
requests for the same pair cannot both get a row back, regardless of what
their earlier find_by_email_and_event() calls returned.
"""

import logging
from pathlib import Path

from psycopg_pool import ConnectionPool

from src.domain.models import PaymentStatus, Registration

logger = logging.getLogger(__name__)

_COLUMNS = (
    "id, name, email, event_name, contact, role, "
    "payment_status, qr_token, artifact_location, created_at"
)


def _to_registration(row: tuple) -> Registration:
    return Registration(
        id=row[0],
        name=row[1],
        email=row[2],
        event_name=row[3],
        contact=row[4],
        role=row[5],
        payment_status=PaymentStatus(row[6]),
        qr_token=row[7],
        artifact_location=row[8],
        created_at=row[9],
    )


class PostgresRegistrationRepository:
    """
    Implements RegistrationRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries for security.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        """
        Initialize repository with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
        """
        self._pool = pool

    def find_by_email_and_event(self, email: str, event_key: str) -> Registration | None:
        sql = f"SELECT {_COLUMNS} FROM registrations WHERE email = %s AND event_name = %s"

        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(sql, (email, event_key))
            row = cursor.fetchone()
        return _to_registration(row) if row is not None else None

    def insert(self, registration: Registration) -> Registration | None:
        """
        Atomically insert a registration.

        Returns None when the (email, event_name) pair already exists;
        the UNIQUE constraint makes this safe under concurrency.
        """
        sql = f"""
            INSERT INTO registrations (id, name, email, event_name, contact, role, payment_status, created_at)
            VALUES (%s, %s, %s, %s, %s, %s, %s, NOW())
            ON CONFLICT (email, event_name) DO NOTHING
            RETURNING {_COLUMNS}
        """

        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(
                sql,
                (
                    registration.id,
                    registration.name,
                    registration.email,
                    registration.event_name,
                    registration.contact,
                    registration.role,
                    registration.payment_status.value,
                ),
            )
            row = cursor.fetchone()
            conn.commit()
        return _to_registration(row) if row is not None else None

    def update(self, registration: Registration) -> None:
        # payment_status is owned by other systems and never written here
        sql = """
            UPDATE registrations
            SET qr_token = %s, artifact_location = %s
            WHERE id = %s
        """

        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(
                sql, (registration.qr_token, registration.artifact_location, registration.id)
            )
            conn.commit()

    def get(self, registration_id: str) -> Registration | None:
        sql = f"SELECT {_COLUMNS} FROM registrations WHERE id = %s"

        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(sql, (registration_id,))
            row = cursor.fetchone()
        return _to_registration(row) if row is not None else None


def run_migrations(pool: ConnectionPool) -> None:
    """
    Execute all SQL migration files from the migrations directory.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 ConnectionPool instance
    """
    # Structure: src/adapters/repository/postgres.py -> migrations/
    migrations_dir = Path(__file__).parent.parent.parent.parent / "migrations"

    if not migrations_dir.exists():
        logger.warning(f"Migrations directory not found: {migrations_dir}")
        return

    sql_files = sorted(migrations_dir.glob("*.sql"))

    if not sql_files:
        logger.info("No migration files found")
        return

    logger.info(f"Running {len(sql_files)} migration(s)")

    for sql_file in sql_files:
        logger.info(f"Executing migration: {sql_file.name}")
        try:
            sql_content = sql_file.read_text()

            with pool.connection() as conn:
                conn.execute(sql_content)

            logger.info(f"Migration complete: {sql_file.name}")
        except Exception as e:
            logger.error(f"Migration failed: {sql_file.name} - {e}")
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
