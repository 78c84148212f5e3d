"""Fixture entities the dev-docs seed endpoint creates in the target application.

Every seeded record carries the ``docs-bot-`` prefix so it can be found (and
reset) without touching real data.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SeededUser:
    email: str
    open_id: str


@dataclass(frozen=True)
class SeededParty:
    name: str
    email: str


@dataclass(frozen=True)
class SeededProduct:
    sku: str
    name: str


@dataclass(frozen=True)
class SeededRecord:
    number: str
    status: str | None = None


USER = SeededUser(email="docs-bot@terp.local", open_id="docs-bot-user-001")

CLIENTS = (
    SeededParty("Acme Corp", "docs-bot-acme@example.com"),
    SeededParty("Green Valley", "docs-bot-greenvalley@example.com"),
    SeededParty("Mountain High", "docs-bot-mountainhigh@example.com"),
    SeededParty("Sunset Dispensary", "docs-bot-sunset@example.com"),
)

VENDOR = SeededParty("Rocky Mountain Supplies", "docs-bot-rockymtn@example.com")

PRODUCTS = tuple(SeededProduct(f"docs-bot-SKU-{i:03d}", f"Test Product {i}") for i in range(1, 6))

BATCHES = tuple(SeededRecord(f"docs-bot-BATCH-{i:03d}") for i in range(1, 6))

ORDERS = (
    SeededRecord("docs-bot-ORD-001", "draft"),
    SeededRecord("docs-bot-ORD-002", "pending"),
    SeededRecord("docs-bot-ORD-003", "confirmed"),
    SeededRecord("docs-bot-ORD-004", "shipped"),
    SeededRecord("docs-bot-ORD-005", "delivered"),
)

INVOICES = (
    SeededRecord("docs-bot-INV-001", "draft"),
    SeededRecord("docs-bot-INV-002", "sent"),
    SeededRecord("docs-bot-INV-003", "overdue"),
)
