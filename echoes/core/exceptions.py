"""Error types raised by the game core and its persistence layer."""


class EchoesError(Exception):
    """Base class for all game errors. None of them are fatal."""


class DuplicateUsernameError(EchoesError):
    def __init__(self, username: str):
        self.username = username
        super().__init__(
            f"Username '{username}' already exists. Please choose another one."
        )


class MalformedLevelError(EchoesError):
    """A content file does not describe valid leaders and levels."""

    def __init__(self, source: str, detail: str):
        self.source = source
        self.detail = detail
        super().__init__(f"Malformed content in {source}: {detail}")


class PersistenceUnavailableError(EchoesError):
    """Loading or saving durable state failed."""
