"""Data models for skill documents."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from skilldex.utils.helpers import hash_content


class ReferenceKind(str, Enum):
    """Where a reference points."""
    LOCAL = "local"
    DOCUMENTATION = "documentation"
    REPOSITORY = "repository"


class SkillReference(BaseModel):
    """A pointer from a skill document to a sub-document or external page."""
    model_config = ConfigDict(frozen=True)

    name: str
    locator: str = Field(min_length=1)
    kind: ReferenceKind = ReferenceKind.LOCAL


class SkillDocument(BaseModel):
    """A single skill document: front-matter metadata plus opaque body.

    Documents are immutable once loaded.
    """
    model_config = ConfigDict(frozen=True)

    name: str
    domain: str = "general"
    description: str = ""
    tags: tuple[str, ...] = Field(min_length=1)
    references: tuple[SkillReference, ...] = ()
    body: str = ""
    source: str | None = None

    @field_validator("tags")
    @classmethod
    def _normalize_tags(cls, tags: tuple[str, ...]) -> tuple[str, ...]:
        seen: list[str] = []
        for tag in tags:
            tag = tag.strip().lower()
            if tag and tag not in seen:
                seen.append(tag)
        if not seen:
            raise ValueError("tags must contain at least one non-blank keyword")
        return tuple(seen)

    @property
    def checksum(self) -> str:
        """SHA256 of the document body."""
        return hash_content(self.body)


class SkillMatch(BaseModel):
    """A ranked query hit."""
    name: str
    score: int
    matched_tags: list[str] = Field(default_factory=list)
    matched_terms: list[str] = Field(default_factory=list)
