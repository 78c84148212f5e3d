"""Client for the target application's dev-docs seed endpoints.

The endpoints are tRPC procedures under ``<base_url>/trpc``. Mutations are
POSTed with a JSON body, queries are plain GETs, and successful responses wrap
their payload as ``{"result": {"data": ...}}``.
"""

import logging
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, Field

from .exceptions import SeedClientError, SeedVerificationError

logger = logging.getLogger(__name__)

DOCS_SECRET_HEADER = "X-Docs-Secret"


class EntityCounts(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    users: int = 0
    clients: int = 0
    vendors: int = 0
    products: int = 0
    batches: int = 0
    orders: int = 0
    invoices: int = 0
    pricing_rules: int = Field(default=0, alias="pricingRules")


EXPECTED_COUNTS = EntityCounts(users=1, clients=4, vendors=1, products=5, batches=5, orders=5, invoices=3, pricing_rules=3)


class SeedResult(BaseModel):
    success: bool
    message: str = ""
    counts: EntityCounts = Field(default_factory=EntityCounts)


class VerifyResult(BaseModel):
    ok: bool
    counts: EntityCounts = Field(default_factory=EntityCounts)
    errors: list[str] = Field(default_factory=list)


class InfoResult(BaseModel):
    enabled: bool
    environment: str = ""
    entities: list[str] = Field(default_factory=list)


def assert_counts(actual: EntityCounts, expected: EntityCounts = EXPECTED_COUNTS) -> None:
    """Raise ``SeedVerificationError`` listing every count that differs."""
    mismatches = []
    for name in EntityCounts.model_fields:
        want, got = getattr(expected, name), getattr(actual, name)
        if want != got:
            mismatches.append(f"{name}: expected {want}, got {got}")
    if mismatches:
        raise SeedVerificationError(mismatches)


class DevDocsClient:
    """Async client for the ``devDocs.*`` procedures."""

    def __init__(self, base_url: str, secret: str | None = None, timeout: float = 30.0, transport: httpx.AsyncBaseTransport | None = None):
        headers = {"Content-Type": "application/json"}
        if secret:
            headers[DOCS_SECRET_HEADER] = secret
        self._client = httpx.AsyncClient(
            base_url=f"{base_url.rstrip('/')}/trpc/",
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "DevDocsClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _call(self, method: str, procedure: str, body: Any = None) -> Any:
        if method == "POST":
            response = await self._client.post(procedure, json=body if body is not None else {})
        else:
            response = await self._client.get(procedure)

        if response.is_error:
            raise SeedClientError(
                f"tRPC request failed: {procedure} ({response.status_code})",
                status_code=response.status_code,
                response_body=response.text,
            )

        payload = response.json()
        if isinstance(payload, dict) and isinstance(payload.get("result"), dict) and "data" in payload["result"]:
            return payload["result"]["data"]
        return payload

    async def seed(self) -> SeedResult:
        return SeedResult.model_validate(await self._call("POST", "devDocs.seed"))

    async def reset(self) -> SeedResult:
        return SeedResult.model_validate(await self._call("POST", "devDocs.reset"))

    async def reset_and_seed(self) -> SeedResult:
        return SeedResult.model_validate(await self._call("POST", "devDocs.resetAndSeed"))

    async def verify(self) -> VerifyResult:
        return VerifyResult.model_validate(await self._call("GET", "devDocs.verify"))

    async def info(self) -> InfoResult:
        return InfoResult.model_validate(await self._call("GET", "devDocs.info"))

    async def seed_and_verify(self) -> VerifyResult:
        """Reset and seed fixture data, then check the entity counts.

        Raises:
            SeedClientError: on HTTP errors
            SeedVerificationError: when seeding or verification reports failure
        """
        logger.info("Resetting and seeding docs-bot data")
        seeded = await self.reset_and_seed()
        if not seeded.success:
            raise SeedVerificationError([f"seed failed: {seeded.message}"])
        logger.info(f"Seed complete: {seeded.message}")

        verified = await self.verify()
        if not verified.ok:
            raise SeedVerificationError(verified.errors or ["verify failed: unknown error"])
        assert_counts(verified.counts)
        logger.info("Seed verification passed")
        return verified
