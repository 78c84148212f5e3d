from ..fixtures import INVOICES
from ..locators import by_css, by_role, by_test_id, by_text, ci
from ..models import FlowModule, FlowSpec
from .base import MenuListFlow, RecordDetailFlow, StatusFilterFlow


class InvoiceList(MenuListFlow):
    spec = FlowSpec(
        id="invoice-list",
        title="View Invoices List",
        description="Navigate to the invoices section to view all invoices.",
        module=FlowModule.INVOICES,
        tags=("invoices", "list", "navigation", "billing"),
        preconditions=("You are logged into TERP",),
    )
    menu_label = "Invoices menu"
    menu_strategies = [
        by_test_id("nav-invoices"),
        by_role("link", ci("invoices")),
        by_text(ci("^invoices$")),
        by_css('a[href*="invoices"], [data-nav="invoices"]'),
    ]
    verifications = [
        ("Invoices list loaded", "The invoices list shows all invoices with their status and amounts"),
        ("Review invoice records", "Invoices show number, client, status, due date, and total amount. Click for details."),
    ]


class InvoiceFilterOverdue(StatusFilterFlow):
    spec = FlowSpec(
        id="invoice-filter-overdue",
        title="View Overdue Invoices",
        description="Learn how to filter the invoices list to show only overdue invoices.",
        module=FlowModule.INVOICES,
        tags=("invoices", "filter", "overdue", "billing"),
        preconditions=("You are logged into TERP", "Invoices exist in the system"),
    )
    list_path = "/invoices"
    list_label = "Invoices page"
    filter_test_id = "invoice-status-filter"
    status = "overdue"
    subject = "invoices"
    result_label = "Overdue invoices displayed"
    result_notes = "The list now shows only overdue invoices that require attention"


class InvoiceDetail(RecordDetailFlow):
    spec = FlowSpec(
        id="invoice-detail",
        title="View Invoice Details",
        description="Learn how to view detailed information about a specific invoice.",
        module=FlowModule.INVOICES,
        tags=("invoices", "detail", "view", "billing"),
        preconditions=("You are logged into TERP", "The invoice exists in the system"),
    )
    list_path = "/invoices"
    list_label = "Invoices page"
    record_label = f"Invoice: {INVOICES[0].number}"
    record_key = INVOICES[0].number
    data_attribute = "invoice"
    click_notes = "Click on the invoice to view details"
    verifications = [
        ("Invoice details loaded", "The invoice detail page shows all billing information and line items"),
        (
            "Review invoice information",
            "Check client info, line items, subtotal, taxes, and total. View payment status and history.",
        ),
    ]
