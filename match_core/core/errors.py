from __future__ import annotations


class DataUnavailableError(RuntimeError):
    """A read-only collaborator store failed or returned a malformed record."""

    def __init__(self, source: str, message: str | None = None) -> None:
        self.source = source
        super().__init__(message or f"{source} is unavailable")
