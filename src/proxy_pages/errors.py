"""Exception hierarchy for proxy-pages."""


class ProxyPagesError(Exception):
    """Base exception for all proxy-pages errors."""

    pass


class DatabaseMissingError(ProxyPagesError):
    """The card database file is absent or cannot be read."""

    pass


class InputMissingError(ProxyPagesError):
    """No decklist text was supplied (no file and nothing piped in)."""

    pass


class FetchError(ProxyPagesError):
    """Downloading a single card image failed."""

    def __init__(self, uri: str, reason: str):
        """Record the URI that failed and why."""
        super().__init__(f"Failed to fetch {uri}: {reason}")
        self.uri = uri
        self.reason = reason
