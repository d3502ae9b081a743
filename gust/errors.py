"""Exceptions raised by gust."""

from __future__ import annotations


class GustError(Exception):
    """Base class for every error gust reports to the user."""

    prefix = "Error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.prefix}: {self.message}"


class UserError(GustError):
    """The user asked for something that cannot be done."""

    prefix = "Error"


class ProjectParsingError(GustError):
    """The project's stored state is missing or malformed."""

    prefix = "Project parsing error"