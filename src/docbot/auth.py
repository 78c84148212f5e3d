"""Interactive-free login that saves a reusable browser session."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright

from .exceptions import AuthenticationError

if TYPE_CHECKING:
    from playwright.async_api import Page

    from .config import AppSettings

logger = logging.getLogger(__name__)

EMAIL_SELECTOR = 'input[type="email"], input[name="email"], input[id*="email"]'
PASSWORD_SELECTOR = 'input[type="password"], input[name="password"], input[id*="password"]'
SUBMIT_SELECTOR = 'button[type="submit"]'
FAILURE_SCREENSHOT = "auth-failure.png"


def left_login_page(url: str) -> bool:
    return "login" not in url


async def log_in(page: Page, base_url: str, email: str, password: str, timeout_ms: int) -> None:
    """Submit the login form and wait until the app navigates away from it."""
    await page.goto(f"{base_url.rstrip('/')}/login", timeout=timeout_ms)
    await page.wait_for_load_state("networkidle")
    await page.locator(EMAIL_SELECTOR).first.fill(email)
    await page.locator(PASSWORD_SELECTOR).first.fill(password)
    await page.locator(SUBMIT_SELECTOR).first.click()
    await page.wait_for_url(left_login_page, timeout=timeout_ms)
    await page.wait_for_load_state("networkidle")


async def authenticate(settings: AppSettings) -> Path:
    """Log in with the configured credentials and save the session state.

    Any previous state file is removed first, so a failed login never leaves
    a stale session behind.

    Returns:
        Path of the saved storage state.

    Raises:
        ConfigurationError: if email or password is not configured
        AuthenticationError: if the login does not complete
    """
    settings.validate_auth_config()

    auth_file = settings.output.auth_file
    auth_file.parent.mkdir(parents=True, exist_ok=True)
    auth_file.unlink(missing_ok=True)

    base_url = settings.target.base_url
    timeout_ms = settings.browser.navigation_timeout_ms
    logger.info(f"Authenticating against {base_url} as {settings.target.email}")

    async with async_playwright() as playwright:
        browser = await playwright.chromium.launch(headless=settings.browser.headless)
        try:
            context = await browser.new_context(
                viewport={"width": settings.browser.viewport_width, "height": settings.browser.viewport_height},
            )
            page = await context.new_page()
            try:
                await log_in(page, base_url, settings.target.email, settings.target.get_password(), timeout_ms)
            except PlaywrightError as e:
                screenshot = auth_file.parent / FAILURE_SCREENSHOT
                try:
                    await page.screenshot(path=str(screenshot))
                    logger.info(f"Failure screenshot saved to {screenshot}")
                except PlaywrightError as shot_error:
                    logger.debug(f"Could not capture failure screenshot: {shot_error}")
                raise AuthenticationError(f"Login failed at {page.url}: {e}") from e

            await context.storage_state(path=str(auth_file))
            logger.info(f"Auth state saved to {auth_file}")
            return auth_file
        finally:
            await browser.close()
