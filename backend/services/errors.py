"""Exceptions raised by the match-scoring engine and its storage boundary."""


class MatchingError(Exception):
    """Base class for match-scoring errors."""


class NotFound(MatchingError):
    def __init__(self, what: str, ident: str) -> None:
        super().__init__(f"{what} not found: {ident}")
        self.what = what
        self.ident = ident


class EmbeddingUnavailable(MatchingError):
    """The embedding model failed to load or to encode text."""


class InvalidProfile(MatchingError):
    """A profile document is missing a field a scorer needs."""

    def __init__(self, kind: str, ident: str | None, detail: str) -> None:
        super().__init__(f"Invalid {kind} profile {ident or '<no id>'}: {detail}")
        self.kind = kind
        self.ident = ident


class MatchStoreError(MatchingError):
    """The match store failed to read or write records."""
