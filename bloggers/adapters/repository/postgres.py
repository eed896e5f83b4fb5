"""
PostgreSQL repository adapter - Implements the Collection protocol.

This module provides the PostgreSQL implementation of the domain's
collection port using psycopg3 with raw SQL.

Every operation is a single statement on a pooled connection, so
conditional updates (UPDATE ... WHERE is_confirmed = false) are atomic
without explicit locking. Column names are never taken from input: they
are checked against the table's declared columns and quoted with
psycopg.sql.Identifier.
"""

import logging
from collections.abc import Sequence
from importlib import resources
from typing import Any

from psycopg import errors, sql
from psycopg.rows import dict_row
from psycopg_pool import ConnectionPool

from bloggers.domain.exceptions import DuplicateRecord, StorageError
from bloggers.domain.models import new_id
from bloggers.domain.ports import Filter, Record, Sort, UpdateResult

logger = logging.getLogger(__name__)


def _escape_like(term: str) -> str:
    """Escape LIKE wildcards so the term matches literally."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class PostgresCollection:
    """
    Implements Collection protocol over one table via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries for security.
    """

    def __init__(self, pool: ConnectionPool, table: str, columns: Sequence[str]) -> None:
        """
        Initialize collection with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
            table: Table name
            columns: Record fields stored in the table, excluding id
        """
        self._pool = pool
        self._table = table
        self._columns = tuple(columns)
        self._all_columns = ("id", *self._columns)

    def _identifier(self, column: str) -> sql.Identifier:
        if column not in self._all_columns:
            raise ValueError(f"Unknown column for {self._table}: {column}")
        return sql.Identifier(column)

    def _select(self) -> sql.Composed:
        return sql.SQL("SELECT {} FROM {}").format(
            sql.SQL(", ").join(sql.Identifier(c) for c in self._all_columns),
            sql.Identifier(self._table),
        )

    def _where(self, filter: Filter) -> tuple[sql.Composable, list[Any]]:
        clauses: list[sql.Composable] = []
        params: list[Any] = []
        for column, value in filter.equals.items():
            clauses.append(sql.SQL("{} = %s").format(self._identifier(column)))
            params.append(value)
        if filter.contains_any:
            alternatives = []
            for column, term in filter.contains_any.items():
                alternatives.append(sql.SQL("{}::text ILIKE %s").format(self._identifier(column)))
                params.append(f"%{_escape_like(term)}%")
            clauses.append(sql.SQL("({})").format(sql.SQL(" OR ").join(alternatives)))
        if not clauses:
            return sql.SQL(""), params
        return sql.SQL(" WHERE ") + sql.SQL(" AND ").join(clauses), params

    def find(
        self,
        filter: Filter,
        sort: Sort | None = None,
        skip: int = 0,
        limit: int | None = None,
    ) -> list[Record]:
        where, params = self._where(filter)
        order = sql.SQL(" ORDER BY id ASC")
        if sort is not None:
            direction = sql.SQL("ASC") if sort.direction == "asc" else sql.SQL("DESC")
            order = sql.SQL(" ORDER BY {} {}, id ASC").format(self._identifier(sort.field), direction)
        # LIMIT NULL is unbounded
        query = self._select() + where + order + sql.SQL(" LIMIT %s OFFSET %s")

        with self._pool.connection() as conn, conn.cursor(row_factory=dict_row) as cursor:
            cursor.execute(query, (*params, limit, skip))
            return list(cursor.fetchall())

    def find_one(self, filter: Filter) -> Record | None:
        found = self.find(filter, limit=1)
        return found[0] if found else None

    def count(self, filter: Filter) -> int:
        where, params = self._where(filter)
        query = sql.SQL("SELECT COUNT(*) FROM {}").format(sql.Identifier(self._table)) + where

        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(query, params)
            row = cursor.fetchone()
            return row[0] if row else 0

    def insert(self, record: Record) -> str:
        id = new_id()
        columns = [column for column in self._columns if column in record]
        query = sql.SQL("INSERT INTO {} ({}) VALUES ({})").format(
            sql.Identifier(self._table),
            sql.SQL(", ").join(self._identifier(c) for c in ("id", *columns)),
            sql.SQL(", ").join(sql.Placeholder() for _ in range(len(columns) + 1)),
        )

        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(query, (id, *(record[c] for c in columns)))
                conn.commit()
        except errors.UniqueViolation as exc:
            raise DuplicateRecord(self._duplicate_field(exc)) from exc
        return id

    def find_by_id(self, id: str) -> Record | None:
        return self.find_one(Filter(equals={"id": id}))

    def update_by_id(self, id: str, patch: Record) -> UpdateResult:
        return self.update_where(Filter(equals={"id": id}), patch)

    def update_where(self, filter: Filter, patch: Record) -> UpdateResult:
        if not patch:
            return UpdateResult(matched_count=self.count(filter), modified_count=0)
        where, params = self._where(filter)
        assignments = sql.SQL(", ").join(
            sql.SQL("{} = %s").format(self._identifier(column)) for column in patch
        )
        query = sql.SQL("UPDATE {} SET ").format(sql.Identifier(self._table)) + assignments + where

        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(query, (*patch.values(), *params))
            conn.commit()
            # Postgres reports matched rows; every matched row is rewritten
            return UpdateResult(matched_count=cursor.rowcount, modified_count=cursor.rowcount)

    def delete_by_id(self, id: str) -> int:
        return self.delete_where(Filter(equals={"id": id}))

    def delete_where(self, filter: Filter) -> int:
        where, params = self._where(filter)
        query = sql.SQL("DELETE FROM {}").format(sql.Identifier(self._table)) + where

        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(query, params)
            conn.commit()
            return cursor.rowcount

    def clear(self) -> None:
        self.delete_where(Filter())

    def _duplicate_field(self, exc: errors.UniqueViolation) -> str:
        # Postgres names UNIQUE constraints <table>_<column>_key
        constraint = exc.diag.constraint_name or ""
        for column in self._all_columns:
            if constraint == f"{self._table}_{column}_key":
                return column
        return "id"


MIGRATIONS_PACKAGE = "bloggers.migrations"


def migration_scripts(package: str = MIGRATIONS_PACKAGE) -> list[tuple[str, str]]:
    """
    Load (name, sql) pairs for every *.sql file shipped in package.

    Files are read as package resources, so installed and source trees
    behave the same. Sorted by filename.

    Raises:
        StorageError: If the package holds no migration files
    """
    try:
        root = resources.files(package)
    except ModuleNotFoundError as e:
        raise StorageError(f"Migrations package not found: {package}") from e

    scripts = sorted(
        (entry.name, entry.read_text(encoding="utf-8"))
        for entry in root.iterdir()
        if entry.is_file() and entry.name.endswith(".sql")
    )
    if not scripts:
        raise StorageError(f"No migration files found in {package}")
    return scripts


def run_migrations(pool: ConnectionPool, package: str = MIGRATIONS_PACKAGE) -> None:
    """
    Execute all SQL migration files shipped with the package.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 ConnectionPool instance
        package: Package holding the *.sql files

    Raises:
        StorageError: If no migration is found or a migration fails
    """
    scripts = migration_scripts(package)
    logger.info("Running %d migration(s)", len(scripts))

    for name, sql_content in scripts:
        logger.info("Executing migration: %s", name)
        try:
            with pool.connection() as conn:
                conn.execute(sql_content)
        except errors.Error as e:
            logger.error("Migration failed: %s - %s", name, e)
            raise StorageError(f"Database migration failed: {name}") from e
        logger.info("Migration complete: %s", name)
