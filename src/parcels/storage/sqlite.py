import asyncio
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Sequence

from parcels.errors import ConflictError, ErrorCode, StoreError
from parcels.storage.base import Contains, Eq, Filter, In, Row, Store, check_columns

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS paquetes (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    nombre_cliente TEXT,
    codigo_seguimiento TEXT UNIQUE,
    telefono TEXT,
    tipo_envio_id INTEGER,
    peso_libras NUMERIC,
    tarifa_usd NUMERIC,
    fecha_estado TEXT,
    created_at TEXT NOT NULL DEFAULT (date('now'))
);
CREATE TABLE IF NOT EXISTS historial (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    codigo_seguimiento TEXT NOT NULL UNIQUE,
    estado1 TEXT, fecha1 TEXT,
    estado2 TEXT, fecha2 TEXT,
    estado3 TEXT, fecha3 TEXT,
    estado4 TEXT, fecha4 TEXT
);
CREATE TABLE IF NOT EXISTS recordatorios (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    titulo TEXT,
    descripcion TEXT,
    fecha_limite TEXT
);
"""


def _where(filters: Sequence[Filter]) -> tuple[str, list[Any]]:
    clauses: list[str] = []
    params: list[Any] = []
    for f in filters:
        if isinstance(f, Eq):
            if f.value is None:
                clauses.append(f"{f.column} IS NULL")
            else:
                clauses.append(f"{f.column} = ?")
                params.append(f.value)
        elif isinstance(f, Contains):
            escaped = f.text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
            clauses.append(f"LOWER({f.column}) LIKE ? ESCAPE '\\'")
            params.append(f"%{escaped.lower()}%")
        elif isinstance(f, In):
            if not f.values:
                clauses.append("0")
            else:
                clauses.append(f"{f.column} IN ({', '.join('?' for _ in f.values)})")
                params.extend(f.values)
        else:
            raise TypeError(f"Unsupported filter: {f!r}")
    if not clauses:
        return "", params
    return " WHERE " + " AND ".join(clauses), params


def _filter_columns(filters: Sequence[Filter]) -> list[str]:
    return [f.column for f in filters]


class SQLiteStore(Store):
    """Store backed by a local SQLite file.

    Each primitive runs in a worker thread on its own connection. Updates and
    deletes run inside ``BEGIN IMMEDIATE`` so the filter match and the write
    are atomic with respect to other writers.
    """

    def __init__(self, db_path: Path | str, timeout: float = 10.0):
        self.db_path = Path(db_path)
        self.timeout = timeout

    def init_db(self) -> None:
        """Create tables if they do not exist."""
        with self.get_connection() as conn:
            conn.executescript(SCHEMA_SQL)

    @contextmanager
    def get_connection(self):
        """Get a database connection in autocommit mode."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        try:
            conn = sqlite3.connect(self.db_path, timeout=self.timeout, isolation_level=None)
        except sqlite3.Error as e:
            raise StoreError(f"Cannot open {self.db_path}: {e}") from e
        conn.row_factory = sqlite3.Row
        try:
            yield conn
        except sqlite3.IntegrityError as e:
            raise ConflictError(str(e)) from e
        except sqlite3.OperationalError as e:
            code = ErrorCode.TIMEOUT if "locked" in str(e) else ErrorCode.STORE_ERROR
            raise StoreError(str(e), code=code) from e
        except sqlite3.Error as e:
            raise StoreError(str(e)) from e
        finally:
            conn.close()

    async def find_one(self, table: str, filters: Sequence[Filter]) -> Row | None:
        rows = await asyncio.to_thread(self._select, table, filters, None, None, 1)
        return rows[0] if rows else None

    async def find_many(
        self,
        table: str,
        filters: Sequence[Filter] = (),
        columns: Sequence[str] | None = None,
        order_by: str | None = None,
    ) -> list[Row]:
        return await asyncio.to_thread(self._select, table, filters, columns, order_by, None)

    async def insert(self, table: str, row: Row) -> Row:
        return await asyncio.to_thread(self._insert, table, row)

    async def update(self, table: str, filters: Sequence[Filter], changes: Row) -> list[Row]:
        return await asyncio.to_thread(self._update, table, filters, changes)

    async def delete(self, table: str, filters: Sequence[Filter]) -> list[Row]:
        return await asyncio.to_thread(self._delete, table, filters)

    def _select(
        self,
        table: str,
        filters: Sequence[Filter],
        columns: Sequence[str] | None,
        order_by: str | None,
        limit: int | None,
    ) -> list[Row]:
        check_columns(table, [*(columns or ()), *_filter_columns(filters)])
        projection = ", ".join(columns) if columns else "*"
        where, params = _where(filters)
        sql = f"SELECT {projection} FROM {table}{where}"
        if order_by:
            check_columns(table, [order_by])
            sql += f" ORDER BY {order_by} ASC"
        else:
            sql += " ORDER BY id ASC"
        if limit:
            sql += f" LIMIT {int(limit)}"
        with self.get_connection() as conn:
            return [dict(r) for r in conn.execute(sql, params).fetchall()]

    def _insert(self, table: str, row: Row) -> Row:
        values = {k: v for k, v in row.items() if k != "id" or v is not None}
        check_columns(table, values)
        columns = ", ".join(values)
        placeholders = ", ".join("?" for _ in values)
        with self.get_connection() as conn:
            cursor = conn.execute(
                f"INSERT INTO {table} ({columns}) VALUES ({placeholders})",
                list(values.values()),
            )
            created = conn.execute(
                f"SELECT * FROM {table} WHERE rowid = ?", (cursor.lastrowid,)
            ).fetchone()
            return dict(created)

    def _update(self, table: str, filters: Sequence[Filter], changes: Row) -> list[Row]:
        check_columns(table, [*changes, *_filter_columns(filters)])
        where, params = _where(filters)
        with self.get_connection() as conn:
            conn.execute("BEGIN IMMEDIATE")
            try:
                ids = [r["id"] for r in conn.execute(f"SELECT id FROM {table}{where}", params)]
                if ids and changes:
                    assignments = ", ".join(f"{k} = ?" for k in changes)
                    marks = ", ".join("?" for _ in ids)
                    conn.execute(
                        f"UPDATE {table} SET {assignments} WHERE id IN ({marks})",
                        [*changes.values(), *ids],
                    )
                rows = self._rows_by_id(conn, table, ids)
                conn.execute("COMMIT")
            except BaseException:
                conn.execute("ROLLBACK")
                raise
            return rows

    def _delete(self, table: str, filters: Sequence[Filter]) -> list[Row]:
        check_columns(table, _filter_columns(filters))
        where, params = _where(filters)
        with self.get_connection() as conn:
            conn.execute("BEGIN IMMEDIATE")
            try:
                rows = [dict(r) for r in conn.execute(f"SELECT * FROM {table}{where}", params)]
                conn.execute(f"DELETE FROM {table}{where}", params)
                conn.execute("COMMIT")
            except BaseException:
                conn.execute("ROLLBACK")
                raise
            return rows

    @staticmethod
    def _rows_by_id(conn: sqlite3.Connection, table: str, ids: list[int]) -> list[Row]:
        if not ids:
            return []
        marks = ", ".join("?" for _ in ids)
        rows = conn.execute(
            f"SELECT * FROM {table} WHERE id IN ({marks}) ORDER BY id ASC", ids
        ).fetchall()
        return [dict(r) for r in rows]
