from typing import Any

import httpx

from src.config import app_config
from src.core.enums import PropertyStatus
from src.core.models import NormalizedForm, utc_now_iso
from src.logger_setup import get_logger

logger = get_logger(__name__)


class PropertyStoreClient:
    """REST client for the listings table of the backend."""

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: int | None = None,
        table: str = "properties_v2",
    ):
        self.base_url = (base_url or app_config.store_url or "").rstrip("/")
        if not self.base_url:
            raise ValueError("Property store URL is not configured (set STORE_URL)")
        self.api_key = api_key or app_config.store_api_key
        self.timeout = timeout or app_config.store_timeout
        self.table = table

    @property
    def headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["apikey"] = self.api_key
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    @property
    def table_url(self) -> str:
        return f"{self.base_url}/rest/v1/{self.table}"

    def _request(
        self,
        method: str,
        params: dict | None = None,
        json: Any = None,
        headers: dict | None = None,
    ) -> Any:
        with httpx.Client(
            headers={**self.headers, **(headers or {})},
            timeout=self.timeout,
            transport=httpx.HTTPTransport(retries=3),
        ) as client:
            try:
                response = client.request(method, self.table_url, params=params, json=json)
                response.raise_for_status()
                return response.json() if response.content else None
            except (httpx.RequestError, httpx.HTTPStatusError) as e:
                logger.error(f"Error on {method} {self.table_url} params={params}: {e}")
                raise

    def fetch_property(self, property_id: str) -> dict | None:
        rows = self._request("GET", params={"id": f"eq.{property_id}", "select": "*"})
        if not rows:
            logger.info(f"Property {property_id} not found")
            return None
        return rows[0]

    def fetch_properties(self, status: PropertyStatus | str | None = None, limit: int | None = None) -> list[dict]:
        params = {"select": "*", "order": "created_at.desc"}
        if status:
            params["status"] = f"eq.{PropertyStatus(status).value}"
        if limit:
            params["limit"] = str(limit)
        rows = self._request("GET", params=params) or []
        logger.info(f"Fetched {len(rows)} properties (status={status})")
        return rows

    def save_property(self, form: NormalizedForm | dict[str, Any]) -> dict:
        """
        Upsert a normalized listing document.

        The row id comes from ``meta.id``; without one the backend assigns it.
        """
        document = form.to_document() if isinstance(form, NormalizedForm) else form
        meta = document.get("meta") or {}
        row = {
            "property_details": document,
            "flow_type": (document.get("flow") or {}).get("flowType"),
            "status": meta.get("status") or PropertyStatus.DRAFT.value,
            "owner_id": meta.get("owner_id"),
            "updated_at": utc_now_iso(),
        }
        if meta.get("id"):
            row["id"] = meta["id"]

        rows = self._request(
            "POST",
            json=row,
            headers={"Prefer": "resolution=merge-duplicates,return=representation"},
        )
        saved = rows[0] if rows else row
        logger.info(f"Saved property {saved.get('id')} ({row['flow_type']})")
        return saved

    def update_property_status(self, property_id: str, status: PropertyStatus | str) -> dict | None:
        """
        Set the moderation status of a listing.

        Raises:
            ValueError: If ``status`` is not a known property status.
        """
        status = PropertyStatus(status)
        rows = self._request(
            "PATCH",
            params={"id": f"eq.{property_id}"},
            json={"status": status.value, "updated_at": utc_now_iso()},
            headers={"Prefer": "return=representation"},
        )
        logger.info(f"Property {property_id} status set to {status.value}")
        return rows[0] if rows else None
