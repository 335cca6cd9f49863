"""
Domain errors shared by the server and the generation client.

Route handlers translate these into HTTP responses; the HTTP client translates
HTTP responses back into them, so both sides of the API speak the same
taxonomy.
"""


class PersonaMorphError(Exception):
    """Base class for all application errors."""


class DuplicateIdentityError(PersonaMorphError):
    """A user with the requested username already exists."""

    def __init__(self, username: str | None = None):
        self.username = username
        super().__init__("Username already exists")


class InvalidCredentialsError(PersonaMorphError):
    """Unknown username or wrong password. Never says which."""

    def __init__(self):
        super().__init__("Invalid credentials")


class UnauthenticatedError(PersonaMorphError):
    """No usable session for the request."""

    def __init__(self, reason: str = "Unauthorized"):
        self.reason = reason
        super().__init__(reason)


class StorageFailure(PersonaMorphError):
    """Unexpected persistence error."""


class GenerationFailure(PersonaMorphError):
    """The generation service did not produce an image for a style."""


class RunInProgressError(PersonaMorphError):
    """A generation run is already processing."""


class InvalidTransitionError(PersonaMorphError):
    """A generation task was asked to move along an edge its state machine lacks."""

    def __init__(self, style_id: str, current: str, target: str):
        self.style_id = style_id
        self.current = current
        self.target = target
        super().__init__(
            f"Task '{style_id}' cannot move from '{current}' to '{target}'"
        )
