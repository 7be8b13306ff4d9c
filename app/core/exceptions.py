"""Exception types shared by the session and document layers."""


class ConfigurationError(RuntimeError):
    """Raised when required deployment configuration (secret, credentials, PINs) is missing."""


class PersistenceError(Exception):
    """Raised when the primary write of a versioned document fails."""

    def __init__(self, document: str, message: str = "Failed to persist document"):
        super().__init__(f"{message}: {document}")
        self.document = document


class VersionConflictError(PersistenceError):
    """Raised when a write names an expected version that is no longer current."""

    def __init__(self, document: str, expected_version: int, current_version: int):
        super().__init__(
            document,
            f"Expected version {expected_version} but found {current_version}",
        )
        self.expected_version = expected_version
        self.current_version = current_version
