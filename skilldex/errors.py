"""Exception types for skilldex."""

from __future__ import annotations

from pathlib import Path


class SkilldexError(Exception):
    """Base class for all skilldex errors."""


class ParseError(SkilldexError, ValueError):
    """A document header is malformed or carries invalid fields."""

    def __init__(self, reason: str, source: str | Path | None = None):
        self.reason = reason
        self.source = str(source) if source is not None else None
        if self.source:
            super().__init__(f"{self.source}: {reason}")
        else:
            super().__init__(reason)


class MissingHeaderError(ParseError):
    """The text has no front-matter block at all."""


class RegistryInitError(SkilldexError):
    """The registry could not be built from the given root."""


class RegistryNotReady(SkilldexError, RuntimeError):
    """A query was issued before the registry was initialized."""


class NotFound(SkilldexError, LookupError):
    """No document is registered under the requested name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Skill not found: {name}")
