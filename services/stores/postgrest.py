"""
PostgREST client for the hosted (Supabase) database.

PostgREST Documentation: https://postgrest.org/

Authentication: project API key
- Sent as both the ``apikey`` header and a Bearer token

Conventions used:
- GET /rest/v1/<table>?select=...&<col>=<op>.<value>&order=<col>.desc&limit=N
- Single-row reads ask for ``application/vnd.pgrst.object+json``; zero rows
  come back as HTTP 406 with code PGRST116
- Writes send ``Prefer: return=representation`` to get the stored row back
"""

import logging
from typing import Optional

import httpx

from config.settings import Settings, get_settings
from services.stores.base import (
    CONFIG_CODE,
    FILTER_OPERATORS,
    NETWORK_CODE,
    PARSE_CODE,
    TIMEOUT_CODE,
    RemoteStoreClient,
    SelectQuery,
    StoreError,
    StoreResponse,
    split_relation,
)

logger = logging.getLogger(__name__)

OBJECT_MEDIA_TYPE = "application/vnd.pgrst.object+json"


def build_select(expand: dict) -> str:
    """
    Render an expand tree as a PostgREST ``select`` value.

    {"items:weekly_shop_items": {"product:products": {}}} becomes
    ``*,items:weekly_shop_items(*,product:products(*))``.
    """
    parts = ["*"]
    for key, children in expand.items():
        alias, table = split_relation(key)
        embed = table if alias == table else f"{alias}:{table}"
        parts.append(f"{embed}({build_select(children)})")
    return ",".join(parts)


def build_params(query: SelectQuery) -> list[tuple[str, str]]:
    """Query string parameters for a SelectQuery, in a stable order."""
    params = [("select", build_select(query.expand))]
    for f in query.filters:
        if f.operator not in FILTER_OPERATORS:
            raise ValueError(f"Unsupported filter operator: {f.operator}")
        params.append((f.column, f"{f.operator}.{f.value}"))
    if query.order_by:
        direction = "desc" if query.descending else "asc"
        params.append(("order", f"{query.order_by}.{direction}"))
    if query.limit is not None:
        params.append(("limit", str(query.limit)))
    return params


class PostgrestStore(RemoteStoreClient):
    """Store client for a Supabase/PostgREST endpoint."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[httpx.Client] = None
    ):
        self.settings = settings or get_settings()
        self._client = client  # injected client (tests); otherwise one per request

    @property
    def backend_name(self) -> str:
        return "PostgREST"

    def is_configured(self) -> bool:
        """Check if the project URL and API key are set."""
        return bool(self.settings.supabase_url and self.settings.supabase_anon_key)

    def config_issues(self) -> list[str]:
        """Get list of configuration issues."""
        issues = []
        if not self.settings.supabase_url:
            issues.append("Missing SUPABASE_URL")
        if not self.settings.supabase_anon_key:
            issues.append("Missing SUPABASE_ANON_KEY")
        return issues

    def _headers(self, single: bool = False, prefer: Optional[str] = None) -> dict:
        key = self.settings.supabase_anon_key.strip()
        headers = {
            "apikey": key,
            "Authorization": f"Bearer {key}",
            "Accept": OBJECT_MEDIA_TYPE if single else "application/json",
        }
        if prefer:
            headers["Prefer"] = prefer
        return headers

    def _send(self, method: str, url: str, **kwargs) -> httpx.Response:
        if self._client is not None:
            return self._client.request(method, url, **kwargs)
        with httpx.Client(timeout=self.settings.store_timeout_seconds) as client:
            return client.request(method, url, **kwargs)

    def _request(
        self,
        method: str,
        table: str,
        params=None,
        json=None,
        single: bool = False,
        prefer: Optional[str] = None
    ) -> StoreResponse:
        """Send one request and turn the outcome into a StoreResponse."""
        if not self.is_configured():
            message = "; ".join(self.config_issues())
            logger.error(f"PostgREST store not configured: {message}")
            return StoreResponse(error=StoreError(code=CONFIG_CODE, message=message))

        url = f"{self.settings.rest_url}/{table}"
        try:
            response = self._send(
                method,
                url,
                params=params,
                json=json,
                headers=self._headers(single=single, prefer=prefer)
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            error = self._parse_error(e.response)
            if error.is_no_rows:
                logger.debug(f"{method} {table}: no rows")
            else:
                logger.error(f"PostgREST {method} {table} failed: {error.code} - {error.message}")
            return StoreResponse(error=error)
        except httpx.TimeoutException:
            message = "Store request timed out. Please try again."
            logger.error(f"PostgREST {method} {table} timed out")
            return StoreResponse(error=StoreError(code=TIMEOUT_CODE, message=message))
        except httpx.TransportError as e:
            logger.error(f"PostgREST {method} {table} connection error: {e}")
            return StoreResponse(error=StoreError(
                code=NETWORK_CODE,
                message="Could not connect to the store. Check your network connection."
            ))

        if response.status_code == 204 or not response.content:
            return StoreResponse(data=None)

        try:
            return StoreResponse(data=response.json())
        except ValueError as e:
            logger.error(f"PostgREST {method} {table} returned invalid JSON: {e}")
            return StoreResponse(error=StoreError(code=PARSE_CODE, message=str(e)))

    @staticmethod
    def _parse_error(response: httpx.Response) -> StoreError:
        """Read a PostgREST error body ({code, message, details, hint})."""
        try:
            body = response.json()
        except ValueError:
            body = None

        if isinstance(body, dict) and body.get("code"):
            return StoreError(
                code=str(body["code"]),
                message=body.get("message") or response.reason_phrase,
                details=body.get("details"),
                hint=body.get("hint"),
            )
        return StoreError(
            code=f"HTTP{response.status_code}",
            message=response.text or response.reason_phrase
        )

    def select(self, query: SelectQuery) -> StoreResponse:
        return self._request(
            "GET",
            query.table,
            params=build_params(query),
            single=query.single
        )

    def insert(self, table: str, row: dict) -> StoreResponse:
        return self._request(
            "POST",
            table,
            json=row,
            single=True,
            prefer="return=representation"
        )

    def update(self, table: str, row_id: int, values: dict) -> StoreResponse:
        return self._request(
            "PATCH",
            table,
            params=[("id", f"eq.{row_id}")],
            json=values,
            single=True,
            prefer="return=representation"
        )

    def delete(self, table: str, row_id: int) -> StoreResponse:
        return self._request(
            "DELETE",
            table,
            params=[("id", f"eq.{row_id}")]
        )
