from ..actions import navigate_to, verify, wait_for_stable_ui
from ..models import Flow, FlowContext, FlowModule, FlowSpec


class DashboardOverview(Flow):
    spec = FlowSpec(
        id="dashboard-overview",
        title="Dashboard Overview",
        description="Learn about the main TERP dashboard and its key features.",
        module=FlowModule.DASHBOARD,
        tags=("dashboard", "overview", "navigation", "getting-started"),
        preconditions=("You are logged into TERP",),
    )

    async def execute(self, ctx: FlowContext) -> None:
        await navigate_to(ctx, ctx.url("/dashboard"), "Main Dashboard")
        await wait_for_stable_ui(ctx.page)
        await verify(ctx, "Dashboard loaded", "The main dashboard displays key metrics and recent activity")
        await verify(ctx, "View key metrics", "The top section shows important business metrics at a glance")
        await verify(ctx, "Navigation sidebar", "Use the sidebar on the left to navigate to different sections of TERP")
        await verify(ctx, "Recent activity", "The activity section shows your most recent actions and updates")
