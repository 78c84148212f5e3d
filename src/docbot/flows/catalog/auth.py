"""Login and logout walkthroughs."""

import re

from ..actions import (
    click_by_role,
    click_with_fallback,
    fill_with_fallback,
    navigate_to,
    open_home,
    verify,
    wait_for_navigation,
    wait_for_stable_ui,
)
from ..fixtures import USER
from ..locators import by_css, by_label, by_placeholder, by_role, by_test_id, by_text, ci
from ..models import Flow, FlowContext, FlowModule, FlowSpec, UserRole


class AuthLogin(Flow):
    spec = FlowSpec(
        id="auth-login",
        title="How to Log In to TERP",
        description="Step-by-step guide for logging into the TERP application with your credentials.",
        module=FlowModule.AUTHENTICATION,
        role=UserRole.ADMIN,
        tags=("login", "authentication", "getting-started"),
        preconditions=("You have a valid TERP account", "You know your email and password"),
        requires_auth=False,
    )

    async def execute(self, ctx: FlowContext) -> None:
        target = ctx.settings.target
        await navigate_to(ctx, ctx.url("/login"), "TERP Login Page")
        await wait_for_stable_ui(ctx.page)

        await fill_with_fallback(
            ctx,
            "Email address",
            target.email or USER.email,
            [by_label("Email"), by_placeholder("Email"), by_css('input[type="email"], input[name="email"]')],
        )
        await fill_with_fallback(
            ctx,
            "Password",
            target.get_password() or "password",
            [by_label("Password"), by_placeholder("Password"), by_css('input[type="password"], input[name="password"]')],
        )
        await click_by_role(ctx, "button", ci("sign in|log in|submit"))

        await wait_for_navigation(ctx, re.compile(r"/(dashboard|home)?$"), "Dashboard loaded")
        await wait_for_stable_ui(ctx.page)
        await verify(ctx, "Successfully logged in", "Dashboard or home page is now visible")


class AuthLogout(Flow):
    spec = FlowSpec(
        id="auth-logout",
        title="How to Log Out of TERP",
        description="Step-by-step guide for safely logging out of the TERP application.",
        module=FlowModule.AUTHENTICATION,
        tags=("logout", "authentication", "security"),
        preconditions=("You are currently logged into TERP",),
    )

    async def execute(self, ctx: FlowContext) -> None:
        await open_home(ctx, "Navigate to TERP home", "Starting from the main page")

        await click_with_fallback(
            ctx,
            "User menu",
            [
                by_test_id("user-menu"),
                by_role("button", ci("user|account|profile|menu")),
                by_css('[data-testid="user-menu"], .user-menu, .avatar, [aria-label*="user"], [aria-label*="account"]'),
            ],
        )
        await wait_for_stable_ui(ctx.page)

        await click_with_fallback(
            ctx,
            "Logout button",
            [
                by_test_id("logout-button"),
                by_role("menuitem", ci("log ?out|sign ?out")),
                by_text(ci("log ?out|sign ?out")),
                by_css('[data-testid="logout"], .logout, [href*="logout"]'),
            ],
        )

        await wait_for_navigation(ctx, re.compile(r"/login"), "Redirected to login page", timeout_ms=15_000)
        await wait_for_stable_ui(ctx.page)
        await verify(ctx, "Successfully logged out", "Login page is now visible")
