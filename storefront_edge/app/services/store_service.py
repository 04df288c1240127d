"""
Read-only client for the hosted data store.

The storefront keeps its catalogue in a Postgres database exposed
through a PostgREST interface (``/rest/v1/<table>``).  The edge layer
only needs a point lookup of a single product's preview fields, so
instead of pulling in the full client SDK this module issues one
filtered GET with ``httpx`` and validates the row with pydantic.

Nothing is cached between requests: the admin dashboard can edit a
product at any time and the next crawler fetch should see it.
"""

import asyncio
import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from ..core.config import Settings
from ..schemas.preview import ProductPreview

logger = logging.getLogger(__name__)

PREVIEW_COLUMNS = "title,description,image_url"


class StoreError(Exception):
    """Raised when the data store answers with something unusable."""


class StoreService:
    """Point lookups against the data store's REST interface."""

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        """Create a store client.

        Args:
            settings: Process settings; ``store_url``, ``store_key``,
                ``store_table`` and ``store_timeout`` are used.
            transport: Optional httpx transport.  Tests pass an
                ``httpx.MockTransport`` here.
        """
        self.settings = settings
        self.transport = transport

    @property
    def configured(self) -> bool:
        return self.settings.store_configured

    def _endpoint(self) -> str:
        return f"{self.settings.store_url.rstrip('/')}/rest/v1/{self.settings.store_table}"

    def _headers(self) -> dict:
        return {
            "apikey": self.settings.store_key,
            "Authorization": f"Bearer {self.settings.store_key}",
            "Accept": "application/json",
        }

    async def get_preview(self, record_id: str) -> Optional[ProductPreview]:
        """Fetch the preview fields of one record.

        Returns ``None`` when no row matches ``record_id``.

        Raises:
            StoreError: non-success status, undecodable JSON, a payload
                that is not a list, or a row that fails validation.
            httpx.HTTPError: network failure or a per-phase httpx timeout.

        The whole exchange, body included, is bounded by ``store_timeout``;
        exceeding it raises ``StoreError``.
        """
        params = {"id": f"eq.{record_id}", "select": PREVIEW_COLUMNS}
        async with httpx.AsyncClient(timeout=self.settings.store_timeout, transport=self.transport) as client:
            try:
                response = await asyncio.wait_for(
                    client.get(self._endpoint(), params=params, headers=self._headers()),
                    timeout=self.settings.store_timeout,
                )
            except asyncio.TimeoutError as exc:
                raise StoreError(f"data store did not answer within {self.settings.store_timeout:.1f}s") from exc

        if not response.is_success:
            raise StoreError(f"data store returned HTTP {response.status_code}")

        try:
            rows = response.json()
        except ValueError as exc:
            raise StoreError(f"invalid JSON from data store: {exc}") from exc

        if not isinstance(rows, list):
            raise StoreError("data store payload is not a list")
        if not rows:
            return None

        try:
            return ProductPreview.model_validate(rows[0])
        except ValidationError as exc:
            raise StoreError(f"unusable row for id {record_id}: {exc.error_count()} validation error(s)") from exc
