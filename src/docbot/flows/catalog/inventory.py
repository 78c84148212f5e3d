from ..fixtures import BATCHES
from ..locators import by_css, by_role, by_test_id, by_text, ci
from ..models import FlowModule, FlowSpec
from .base import MenuListFlow, RecordDetailFlow


class InventoryList(MenuListFlow):
    spec = FlowSpec(
        id="inventory-list",
        title="View Inventory",
        description="Navigate to the inventory section to view all product batches and stock levels.",
        module=FlowModule.INVENTORY,
        tags=("inventory", "batches", "stock", "list"),
        preconditions=("You are logged into TERP",),
    )
    menu_label = "Inventory menu"
    menu_strategies = [
        by_test_id("nav-inventory"),
        by_role("link", ci("inventory|batches|stock")),
        by_text(ci("^inventory$")),
        by_css('a[href*="inventory"], a[href*="batches"], [data-nav="inventory"]'),
    ]
    verifications = [
        ("Inventory list loaded", "The inventory view shows all product batches and their current stock levels"),
        ("Review stock levels", "Each batch shows batch number, product, quantity available, and expiration if applicable"),
    ]


class BatchDetail(RecordDetailFlow):
    spec = FlowSpec(
        id="batch-detail",
        title="View Batch Details",
        description="Learn how to view detailed information about a specific inventory batch.",
        module=FlowModule.INVENTORY,
        tags=("inventory", "batches", "detail", "stock"),
        preconditions=("You are logged into TERP", "The batch exists in inventory"),
    )
    list_path = "/inventory"
    list_label = "Inventory page"
    record_label = f"Batch: {BATCHES[0].number}"
    record_key = BATCHES[0].number
    data_attribute = "batch"
    click_notes = "Click on the batch to view details"
    verifications = [
        ("Batch details loaded", "The batch detail page shows quantity, product info, expiration, and transaction history"),
        ("Review batch information", "Check current quantity, receive date, expiration, and any quality notes"),
    ]
