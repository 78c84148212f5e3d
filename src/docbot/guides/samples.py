"""Hand-written sample guides for working on the viewer without a recorded run."""

from ..utils import iso_timestamp
from .models import Guide, GuideMetadata, GuideStep
from .store import GuideStore

# (id, title, description, category, tags, steps as (title, description, action, selector))
_SAMPLES = (
    (
        "login-to-terp",
        "How to Log In to TERP",
        "Step-by-step guide for logging into the TERP application",
        "Getting Started",
        ["login", "authentication", "getting-started"],
        [
            ("Navigate to TERP", "Open your web browser and go to the TERP login page.", "navigate", None),
            ("Enter your email", "Type your email address in the email field.", "fill", 'input[type="email"]'),
            ("Enter your password", "Type your password in the password field.", "fill", 'input[type="password"]'),
            ("Click Sign In", "Click the Sign In button to access your account.", "click", 'button[type="submit"]'),
        ],
    ),
    (
        "dashboard-overview",
        "Dashboard Overview",
        "Learn about the main dashboard and its features",
        "Getting Started",
        ["dashboard", "overview", "navigation"],
        [
            ("Access the Dashboard", "After logging in, you will be taken to the main dashboard.", None, None),
            ("View Recent Activity", "The recent activity section shows your latest actions and updates.", None, None),
            ("Navigate Using the Sidebar", "Use the sidebar menu to access different sections of TERP.", None, None),
        ],
    ),
    (
        "create-new-record",
        "Creating a New Record",
        "How to create a new record in TERP",
        "Records",
        ["records", "create", "data-entry"],
        [
            ("Click New Record", 'Click the "New Record" button in the top right corner.', "click", None),
            ("Fill in Required Fields", "Complete all required fields marked with an asterisk (*).", "fill", None),
            ("Add Optional Information", "Fill in any additional optional fields as needed.", "fill", None),
            ("Save the Record", "Click the Save button to create your new record.", "click", None),
        ],
    ),
)


def sample_guides(now: str | None = None) -> list[Guide]:
    now = now or iso_timestamp()
    guides = []
    for guide_id, title, description, category, tags, steps in _SAMPLES:
        guides.append(
            Guide(
                metadata=GuideMetadata(
                    id=guide_id,
                    title=title,
                    description=description,
                    category=category,
                    tags=tags,
                    created_at=now,
                    updated_at=now,
                ),
                steps=[
                    GuideStep(order=order, title=step_title, description=step_description, action=action, selector=selector)
                    for order, (step_title, step_description, action, selector) in enumerate(steps, start=1)
                ],
            )
        )
    return guides


def seed_sample_guides(store: GuideStore) -> list[Guide]:
    """Write the sample guides into ``store``, replacing same-id guides."""
    guides = sample_guides()
    for guide in guides:
        store.save(guide)
    return guides
