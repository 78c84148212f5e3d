"""Order walkthroughs, including the one flow that creates a record."""

import re

from ..actions import click_with_fallback, navigate_to, verify, wait_for_stable_ui
from ..fixtures import CLIENTS, ORDERS
from ..locators import by_css, by_role, by_test_id, by_text, ci
from ..models import Flow, FlowContext, FlowModule, FlowSpec
from .base import MenuListFlow, RecordDetailFlow, StatusFilterFlow


class OrderList(MenuListFlow):
    spec = FlowSpec(
        id="order-list",
        title="View Orders List",
        description="Navigate to the orders section to view all orders.",
        module=FlowModule.ORDERS,
        tags=("orders", "list", "navigation", "sales"),
        preconditions=("You are logged into TERP",),
    )
    menu_label = "Orders menu"
    menu_strategies = [
        by_test_id("nav-orders"),
        by_role("link", ci("orders")),
        by_text(ci("^orders$")),
        by_css('a[href*="orders"], [data-nav="orders"]'),
    ]
    verifications = [
        ("Orders list loaded", "The orders list shows all orders with their status and key details"),
        ("Review order records", "Orders show order number, client, status, date, and total. Click an order for full details."),
    ]


class OrderFilterStatus(StatusFilterFlow):
    spec = FlowSpec(
        id="order-filter-status",
        title="Filter Orders by Status",
        description="Learn how to filter the orders list to show only orders with a specific status.",
        module=FlowModule.ORDERS,
        tags=("orders", "filter", "status", "search"),
        preconditions=("You are logged into TERP", "Orders exist in the system"),
    )
    list_path = "/orders"
    list_label = "Orders page"
    filter_test_id = "order-status-filter"
    status = "pending"
    subject = "orders"
    result_label = "Filtered results displayed"
    result_notes = 'The list now shows only orders with "Pending" status'


class OrderDetail(RecordDetailFlow):
    spec = FlowSpec(
        id="order-detail",
        title="View Order Details",
        description="Learn how to view detailed information about a specific order.",
        module=FlowModule.ORDERS,
        tags=("orders", "detail", "view", "sales"),
        preconditions=("You are logged into TERP", "The order exists in the system"),
    )
    list_path = "/orders"
    list_label = "Orders page"
    record_label = f"Order: {ORDERS[0].number}"
    record_key = ORDERS[0].number
    data_attribute = "order"
    click_notes = "Click on the order to view details"
    verifications = [
        ("Order details loaded", "The order detail page shows all order information including line items and status"),
        ("Review order information", "Check client info, ordered products, quantities, pricing, and order status history"),
    ]


class OrderCreateDraft(Flow):
    spec = FlowSpec(
        id="order-create-draft",
        title="Create a Draft Order",
        description="Learn how to create a new draft order for a client.",
        module=FlowModule.ORDERS,
        tags=("orders", "create", "draft", "new"),
        preconditions=(
            "You are logged into TERP",
            "Clients exist in the system",
            "Products exist in the catalog",
        ),
        creates_records=True,
    )

    async def execute(self, ctx: FlowContext) -> None:
        client = CLIENTS[0]

        await navigate_to(ctx, ctx.url("/orders"), "Orders page")
        await wait_for_stable_ui(ctx.page)

        await click_with_fallback(
            ctx,
            "New Order button",
            [
                by_test_id("new-order-button"),
                by_role("button", ci("new order|create order|add order")),
                by_text(ci(r"new order|create order|\+ order")),
                by_css('[data-action="new-order"], .new-order-btn'),
            ],
            notes="Click to start creating a new order",
        )

        await wait_for_stable_ui(ctx.page)
        await verify(ctx, "Order form opened", "The new order form allows you to select a client and add products")

        await click_with_fallback(
            ctx,
            "Select client",
            [
                by_test_id("client-select"),
                by_role("combobox", ci("client")),
                by_css('select[name*="client"], [data-field="client"]'),
            ],
            notes="Open the client dropdown",
        )
        await click_with_fallback(
            ctx,
            f"Client: {client.name}",
            [by_text(ci(re.escape(client.name))), by_css(f'option:has-text("{client.name}")')],
            notes="Select the client for this order",
        )
        await wait_for_stable_ui(ctx.page)

        # Line-item entry differs between deployments, so only the step is documented
        await ctx.recorder.record_step(
            ctx.page, "click", "Add product to order", notes="Add products by searching or selecting from the catalog"
        )

        await click_with_fallback(
            ctx,
            "Save as Draft",
            [
                by_test_id("save-draft-button"),
                by_role("button", ci("save|draft|create")),
                by_text(ci("save|draft")),
                by_css('[data-action="save-draft"], .save-btn'),
            ],
            notes="Save the order as a draft for later",
        )

        await wait_for_stable_ui(ctx.page)
        await verify(ctx, "Draft order created", "The order has been saved as a draft. You can edit it later before submitting.")
