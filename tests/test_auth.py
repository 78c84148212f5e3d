"""Tests for the login procedure."""

import pytest

from docbot.auth import EMAIL_SELECTOR, PASSWORD_SELECTOR, SUBMIT_SELECTOR, authenticate, left_login_page, log_in
from docbot.exceptions import ConfigurationError


def test_left_login_page():
    assert left_login_page("http://app.test/dashboard")
    assert not left_login_page("http://app.test/login?next=/")


async def test_log_in_fills_form(page):
    await log_in(page, "http://app.test/", "docs@example.com", "pw", timeout_ms=1000)

    assert page.actions[0] == ("goto", "http://app.test/login")
    assert ("fill", f"css={EMAIL_SELECTOR}", "docs@example.com") in page.actions
    assert ("fill", f"css={PASSWORD_SELECTOR}", "pw") in page.actions
    assert ("click", f"css={SUBMIT_SELECTOR}") in page.actions
    assert page.actions[-1][0] == "wait_for_url"


async def test_authenticate_requires_credentials(settings):
    settings.output.auth_file.parent.mkdir(parents=True)
    settings.output.auth_file.write_text("{}")

    with pytest.raises(ConfigurationError):
        await authenticate(settings)
    # Validation happens before the old session is touched
    assert settings.output.auth_file.exists()
