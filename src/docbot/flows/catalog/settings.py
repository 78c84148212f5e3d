from ..locators import by_css, by_role, by_test_id, by_text, ci
from ..models import FlowModule, FlowSpec
from .base import MenuListFlow


class SettingsBasic(MenuListFlow):
    spec = FlowSpec(
        id="settings-basic",
        title="Navigate Settings",
        description="Learn how to access and navigate the TERP settings area.",
        module=FlowModule.SETTINGS,
        tags=("settings", "preferences", "configuration", "navigation"),
        preconditions=("You are logged into TERP", "You have admin access"),
    )
    menu_label = "Settings menu"
    menu_strategies = [
        by_test_id("nav-settings"),
        by_role("link", ci("settings")),
        by_text(ci("^settings$")),
        by_css('a[href*="settings"], [data-nav="settings"], .settings-link'),
    ]
    verifications = [
        ("Settings page loaded", "The settings page shows various configuration options for your TERP account"),
        ("View settings sections", "Settings may include profile, company info, notifications, and system preferences"),
        ("Navigate settings sections", "Click on different sections in the sidebar to access specific settings"),
    ]
