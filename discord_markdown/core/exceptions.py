"""Custom exceptions for discord-markdown."""

from __future__ import annotations


class DiscordMarkdownError(Exception):
    """Base exception for all discord-markdown errors.

    Parsing and rendering never raise these; they come from the tooling
    around the core (config loading, command line).

    Attributes:
        is_fatal: If True, the error is unrecoverable and the user should be
                  prompted to take corrective action (e.g. a broken config file).
    """

    def __init__(
        self,
        message: str,
        is_fatal: bool = False,
        *args: object,
    ) -> None:
        super().__init__(message, *args)
        self.is_fatal = is_fatal


class ResolverConfigError(DiscordMarkdownError):
    """Raised when a resolver config cannot be read or validated."""

    def __init__(self, message: str, *args: object) -> None:
        super().__init__(message, True, *args)
