"""Client list, search and detail walkthroughs."""

from ..actions import fill_with_fallback, navigate_to, verify, wait_for_stable_ui
from ..fixtures import CLIENTS
from ..locators import by_css, by_placeholder, by_role, by_test_id, by_text, ci
from ..models import Flow, FlowContext, FlowModule, FlowSpec
from .base import MenuListFlow, RecordDetailFlow


class ClientList(MenuListFlow):
    spec = FlowSpec(
        id="client-list",
        title="View Client List",
        description="Navigate to the clients section and view the list of all clients.",
        module=FlowModule.CLIENTS,
        tags=("clients", "list", "navigation"),
        preconditions=("You are logged into TERP",),
    )
    menu_label = "Clients menu"
    menu_strategies = [
        by_test_id("nav-clients"),
        by_role("link", ci("clients")),
        by_text(ci("^clients$")),
        by_css('a[href*="clients"], [data-nav="clients"]'),
    ]
    verifications = [
        ("Clients list loaded", "The clients list shows all registered clients"),
        ("View client records", "Each row shows client name, email, and key information. Click a client to see details."),
    ]


class ClientSearch(Flow):
    spec = FlowSpec(
        id="client-search",
        title="Search for Clients",
        description="Learn how to search for clients by name or email in TERP.",
        module=FlowModule.CLIENTS,
        tags=("clients", "search", "find"),
        preconditions=("You are logged into TERP", "Clients exist in the system"),
    )

    search_term = "docs-bot-acme"

    async def execute(self, ctx: FlowContext) -> None:
        await navigate_to(ctx, ctx.url("/clients"), "Clients page")
        await wait_for_stable_ui(ctx.page)

        await fill_with_fallback(
            ctx,
            "Search clients",
            self.search_term,
            [
                by_placeholder("Search"),
                by_test_id("client-search"),
                by_css('input[type="search"], input[placeholder*="search" i], .search-input'),
            ],
            notes=f'Searching for "{self.search_term}"',
        )

        await wait_for_stable_ui(ctx.page)
        # Client-side filtering debounces
        await ctx.page.wait_for_timeout(500)
        await verify(ctx, "Search results displayed", f'Results are filtered to show clients matching "{self.search_term}"')


class ClientDetail(RecordDetailFlow):
    spec = FlowSpec(
        id="client-detail",
        title="View Client Details",
        description="Learn how to view detailed information about a specific client.",
        module=FlowModule.CLIENTS,
        tags=("clients", "detail", "view"),
        preconditions=("You are logged into TERP", "The client exists in the system"),
    )
    list_path = "/clients"
    list_label = "Clients page"
    record_label = f"Client: {CLIENTS[0].name}"
    record_key = CLIENTS[0].email
    data_attribute = "client"
    click_notes = "Click on the client row to view details"
    verifications = [
        (
            "Client details loaded",
            "The client detail page shows complete information including contact details, orders, and history",
        ),
        ("Review client information", "Review contact information, order history, and any notes about this client"),
    ]
