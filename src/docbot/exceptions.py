"""Custom exceptions for docbot."""


class DocBotError(Exception):
    """Base exception for docbot errors."""

    pass


class ConfigurationError(DocBotError):
    """Raised when required configuration is missing or invalid."""

    pass


class BrowserLaunchError(DocBotError):
    """Raised when the browser cannot be started. Fatal for a run."""

    pass


class AuthRequiredError(DocBotError):
    """Raised when a flow needs a saved session and none is available."""

    def __init__(self, flow_id: str, message: str):
        super().__init__(message)
        self.flow_id = flow_id


class FlowFailedError(DocBotError):
    """Raised when a flow returns but its recording contains a failed step."""

    pass


class ElementNotFoundError(DocBotError):
    """Raised when none of the locator strategies matched an element."""

    pass


class AuthenticationError(DocBotError):
    """Raised when logging into the target application fails."""

    pass


class SeedClientError(DocBotError):
    """Raised when a dev-docs endpoint answers with a non-success status."""

    def __init__(self, message: str, status_code: int, response_body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body


class SeedVerificationError(DocBotError):
    """Raised when seeded entity counts do not match expectations."""

    def __init__(self, mismatches: list[str]):
        super().__init__("Seed verification failed:\n" + "\n".join(f"  - {m}" for m in mismatches))
        self.mismatches = mismatches
