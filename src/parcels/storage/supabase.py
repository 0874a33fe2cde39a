import logging
from typing import Any, Sequence

import httpx

from parcels.errors import ConflictError, ErrorCode, StoreError
from parcels.storage.base import Contains, Eq, Filter, In, Row, Store, check_columns

logger = logging.getLogger(__name__)


def _literal(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _quoted(value: Any) -> str:
    text = _literal(value).replace("\\", "\\\\").replace('"', '\\"')
    return f'"{text}"'


def filter_params(filters: Sequence[Filter]) -> list[tuple[str, str]]:
    """Translate filters into PostgREST query parameters."""
    params: list[tuple[str, str]] = []
    for f in filters:
        if isinstance(f, Eq):
            if f.value is None:
                params.append((f.column, "is.null"))
            else:
                params.append((f.column, f"eq.{_literal(f.value)}"))
        elif isinstance(f, Contains):
            escaped = f.text.replace("%", "\\%").replace("*", "\\*")
            params.append((f.column, f"ilike.*{escaped}*"))
        elif isinstance(f, In):
            params.append((f.column, f"in.({','.join(_quoted(v) for v in f.values)})"))
        else:
            raise TypeError(f"Unsupported filter: {f!r}")
    return params


class SupabaseStore(Store):
    """Store backed by a Supabase project through its PostgREST endpoint."""

    def __init__(
        self,
        url: str,
        service_key: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        if not url or not service_key:
            raise StoreError("Supabase URL and service key are required")
        self.client = httpx.AsyncClient(
            base_url=f"{url.rstrip('/')}/rest/v1",
            headers={
                "apikey": service_key,
                "Authorization": f"Bearer {service_key}",
                "Content-Type": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    async def close(self) -> None:
        await self.client.aclose()

    async def find_one(self, table: str, filters: Sequence[Filter]) -> Row | None:
        rows = await self._select(table, filters, None, None, limit=1)
        return rows[0] if rows else None

    async def find_many(
        self,
        table: str,
        filters: Sequence[Filter] = (),
        columns: Sequence[str] | None = None,
        order_by: str | None = None,
    ) -> list[Row]:
        return await self._select(table, filters, columns, order_by)

    async def insert(self, table: str, row: Row) -> Row:
        values = {k: v for k, v in row.items() if k != "id" or v is not None}
        check_columns(table, values)
        rows = await self._request(
            "POST", table, json=[values], headers={"Prefer": "return=representation"}
        )
        if not rows:
            raise StoreError(f"Insert into {table} returned no row")
        return rows[0]

    async def update(self, table: str, filters: Sequence[Filter], changes: Row) -> list[Row]:
        check_columns(table, [*changes, *(f.column for f in filters)])
        if not changes:
            return await self._select(table, filters, None, None)
        return await self._request(
            "PATCH",
            table,
            params=filter_params(filters),
            json=changes,
            headers={"Prefer": "return=representation"},
        )

    async def delete(self, table: str, filters: Sequence[Filter]) -> list[Row]:
        check_columns(table, [f.column for f in filters])
        return await self._request(
            "DELETE",
            table,
            params=filter_params(filters),
            headers={"Prefer": "return=representation"},
        )

    async def _select(
        self,
        table: str,
        filters: Sequence[Filter],
        columns: Sequence[str] | None,
        order_by: str | None,
        limit: int | None = None,
    ) -> list[Row]:
        check_columns(table, [*(columns or ()), *(f.column for f in filters)])
        params = [("select", ",".join(columns) if columns else "*")]
        params.extend(filter_params(filters))
        if order_by:
            check_columns(table, [order_by])
            params.append(("order", f"{order_by}.asc"))
        if limit:
            params.append(("limit", str(limit)))
        return await self._request("GET", table, params=params)

    async def _request(self, method: str, table: str, **kwargs: Any) -> list[Row]:
        try:
            response = await self.client.request(method, f"/{table}", **kwargs)
        except httpx.TimeoutException as e:
            raise StoreError(f"Supabase {method} {table} timed out", code=ErrorCode.TIMEOUT) from e
        except httpx.HTTPError as e:
            raise StoreError(f"Supabase {method} {table} failed: {e}") from e

        if response.status_code == 409:
            raise ConflictError(_error_message(response))
        if response.status_code >= 400:
            logger.error(f"Supabase error {response.status_code} on {method} {table}")
            raise StoreError(_error_message(response))
        if not response.content:
            return []
        return response.json()


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(body, dict):
        return body.get("message") or str(body)
    return str(body)
