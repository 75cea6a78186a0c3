"""HTTP client for the external bill-generation API."""

import logging
from typing import Any

import httpx

from zevbill.core.config import settings
from zevbill.models.enums import UserType
from zevbill.schemas.billing import AutoBillingConfig, BillingRequest
from zevbill.schemas.building import BuildingResponse
from zevbill.schemas.custom_item import CustomLineItemResponse
from zevbill.schemas.meter import MeterResponse
from zevbill.schemas.shared_meter import SharedMeterConfigResponse
from zevbill.schemas.user import AdministratorResponse, TenantResponse
from zevbill.services.wizard.errors import SubmissionError

logger = logging.getLogger(__name__)


class BillingApiClient:
    """Async client for the billing backend.

    The same backend serves the reference data the wizard selects from, so
    the client also implements the wizard's ReferenceSource protocol.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url or settings.BILLING_API_URL,
            timeout=timeout if timeout is not None else settings.BILLING_API_TIMEOUT,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _send(self, method: str, url: str, **kwargs: Any) -> Any:
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            raise SubmissionError(f"Billing API unreachable: {exc}") from exc
        if response.is_error:
            message = response.text.strip() or response.reason_phrase
            raise SubmissionError(f"Billing API error {response.status_code}: {message}")
        return response.json()

    async def _get_list(self, url: str, **params: Any) -> list[dict]:
        response = await self._client.get(url, params=params or None)
        response.raise_for_status()
        return response.json()

    # Submission

    async def generate_bills(self, request: BillingRequest) -> list[dict]:
        """Generate invoices now; returns the created invoices."""
        return await self._send("POST", "/billing/generate", json=request.model_dump(mode="json"))

    async def save_auto_billing_config(self, config: AutoBillingConfig) -> dict:
        """Create a schedule, or update it when config.id is set."""
        payload = config.model_dump(mode="json", exclude={"id"})
        if config.id is None:
            return await self._send("POST", "/billing/auto-configs", json=payload)
        return await self._send("PUT", f"/billing/auto-configs/{config.id}", json=payload)

    # Reference data

    async def fetch_buildings(self) -> list[BuildingResponse]:
        return [BuildingResponse.model_validate(b) for b in await self._get_list("/buildings")]

    async def _fetch_users(self) -> list[dict]:
        return await self._get_list("/users", include_inactive="true")

    async def fetch_tenants(self) -> list[TenantResponse]:
        return [
            TenantResponse.model_validate(u)
            for u in await self._fetch_users()
            if u.get("user_type", UserType.REGULAR.value) == UserType.REGULAR.value
        ]

    async def fetch_administrators(self) -> list[AdministratorResponse]:
        return [
            AdministratorResponse.model_validate(u)
            for u in await self._fetch_users()
            if u.get("user_type") == UserType.ADMINISTRATION.value
        ]

    async def fetch_meters(self) -> list[MeterResponse]:
        return [MeterResponse.model_validate(m) for m in await self._get_list("/meters")]

    async def fetch_shared_meters(self) -> list[SharedMeterConfigResponse]:
        return [
            SharedMeterConfigResponse.model_validate(m)
            for m in await self._get_list("/shared-meters")
        ]

    async def fetch_custom_items(self) -> list[CustomLineItemResponse]:
        return [
            CustomLineItemResponse.model_validate(i)
            for i in await self._get_list("/custom-line-items")
        ]
