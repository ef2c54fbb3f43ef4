"""Exceptions raised by the monster parsing pipeline and its fetch helper."""

from __future__ import annotations


class MonsterParseError(ValueError):
    """Base class for every failure that prevents a record from being built.

    Attributes:
        url -- the source URL involved in the failure ("" when unknown)
    """

    default_message = "The monster could not be parsed."

    def __init__(self, message: str | None = None, url: str = "") -> None:
        super().__init__(message or self.default_message)
        self.url = url


class InvalidUrlError(MonsterParseError):
    """The input string cannot be parsed as a URL."""

    default_message = "Enter a valid D&D Beyond monster URL."


class UnsupportedSourceError(MonsterParseError):
    """The URL is on the wrong host or lacks a monster path segment."""

    default_message = "Enter a D&D Beyond monster URL."


class EmptyContentError(MonsterParseError):
    """The fetched page body is blank."""

    default_message = "No monster content was returned from D&D Beyond."


class NameNotFoundError(MonsterParseError):
    """No monster link line was found before the stat block ended."""

    default_message = "Failed to detect the monster name from the fetched content."


class FetchError(RuntimeError):
    """Raised when a monster page cannot be retrieved.

    Attributes:
        url    -- the URL that failed
        status -- HTTP status code (0 if no response was received)
    """

    def __init__(self, message: str, url: str = "", status: int = 0) -> None:
        super().__init__(message)
        self.url = url
        self.status = status
