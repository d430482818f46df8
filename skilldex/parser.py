"""Front-matter parser for skill documents.

A skill document is Markdown preceded by a YAML header:

```markdown
---
name: ci-cd
domain: devops
description: "Build, test and deploy pipelines with GitHub Actions"
tags: [pipelines, devops, github-actions]
references:
  - references/workflows.md
  - name: GitHub Actions docs
    url: https://docs.github.com/actions
---

# CI/CD
...
```
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from pathlib import Path, PurePosixPath
from typing import Any
from urllib.parse import urlparse

import yaml
from pydantic import BaseModel, Field, ValidationError

from skilldex.errors import MissingHeaderError, ParseError
from skilldex.models import ReferenceKind, SkillDocument, SkillReference

DEFAULT_MARKER = "---"
DEFAULT_DOMAIN = "general"

# lowercase, digits, hyphens
NAME_RE = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")
MAX_NAME_LENGTH = 64

CODE_HOSTS = {"github.com", "gitlab.com", "bitbucket.org", "codeberg.org"}

REFERENCES_DIR = "references"


class ParsedHeader(BaseModel):
    """Raw front-matter mapping plus the body that follows it."""
    frontmatter: dict[str, Any] = Field(default_factory=dict)
    body: str = ""


def parse_header(
    text: str,
    marker: str = DEFAULT_MARKER,
    source: str | Path | None = None,
) -> ParsedHeader | ParseError:
    """Split text into header mapping and body.

    Returns a ParseError value instead of raising so callers can branch on
    the result type.
    """
    lines = text.lstrip("\ufeff").splitlines(keepends=True)
    if not lines or lines[0].rstrip() != marker:
        return MissingHeaderError("no front-matter block", source)

    end = None
    for i in range(1, len(lines)):
        if lines[i].rstrip() == marker:
            end = i
            break
    if end is None:
        return ParseError("unterminated front-matter block", source)

    try:
        fields = yaml.safe_load("".join(lines[1:end]))
    except (yaml.YAMLError, ValueError) as e:
        # SafeLoader raises plain ValueError for values like an impossible date
        return ParseError(f"invalid YAML in front-matter: {e}", source)

    if fields is None:
        fields = {}
    if not isinstance(fields, dict):
        return ParseError(
            f"front-matter must be a mapping, got {type(fields).__name__}", source
        )

    try:
        return ParsedHeader(frontmatter=fields, body="".join(lines[end + 1:]).strip())
    except ValidationError:
        return ParseError("front-matter keys must be strings", source)


def classify_locator(locator: str) -> ReferenceKind:
    """Infer the reference kind from its locator."""
    parsed = urlparse(locator)
    if parsed.scheme in ("http", "https") and parsed.netloc:
        host = parsed.netloc.lower().split(":")[0]
        if host.startswith("www."):
            host = host[4:]
        if host in CODE_HOSTS:
            return ReferenceKind.REPOSITORY
        return ReferenceKind.DOCUMENTATION
    return ReferenceKind.LOCAL


def _check_local_locator(locator: str, source: str | Path | None) -> str:
    """Validate a local locator is a relative path inside the document folder."""
    path = PurePosixPath(locator.replace("\\", "/"))
    if path.is_absolute() or re.match(r"^[A-Za-z]:", locator):
        raise ParseError(f"local reference must be a relative path: {locator}", source)
    depth = 0
    for part in path.parts:
        if part == "..":
            depth -= 1
        elif part != ".":
            depth += 1
        if depth < 0:
            raise ParseError(f"local reference escapes document folder: {locator}", source)
    return str(path)


def _parse_reference(raw: Any, source: str | Path | None) -> SkillReference:
    if isinstance(raw, str):
        raw = {"locator": raw}
    if not isinstance(raw, dict):
        raise ParseError(f"reference must be a string or mapping, got {raw!r}", source)

    locator = raw.get("locator") or raw.get("path") or raw.get("url") or ""
    if not isinstance(locator, str) or not locator.strip():
        raise ParseError(f"reference has no locator: {raw!r}", source)
    locator = locator.strip()

    try:
        inferred = classify_locator(locator)
    except ValueError:
        raise ParseError(f"invalid URL: {locator}", source)

    kind_value = raw.get("kind")
    if kind_value is None:
        kind = inferred
    else:
        try:
            kind = ReferenceKind(str(kind_value).lower())
        except ValueError:
            raise ParseError(f"unknown reference kind: {kind_value}", source)

    if kind is ReferenceKind.LOCAL:
        locator = _check_local_locator(locator, source)
    elif inferred is ReferenceKind.LOCAL:
        raise ParseError(f"{kind.value} reference needs a URL: {locator}", source)

    name = raw.get("name") or locator.rstrip("/").rsplit("/", 1)[-1]
    return SkillReference(name=str(name), locator=locator, kind=kind)


def _parse_tags(raw: Any, source: str | Path | None) -> list[str]:
    if isinstance(raw, str):
        raw = raw.split(",")
    if not isinstance(raw, list):
        raise ParseError("tags must be a list of keywords", source)
    if not raw:
        raise ParseError("tags must not be empty", source)
    tags = []
    for tag in raw:
        if isinstance(tag, bool) or not isinstance(tag, (str, int)):
            raise ParseError(f"invalid tag: {tag!r}", source)
        tags.append(str(tag))
    return tags


def parse_document(
    text: str,
    source: str | Path | None = None,
    marker: str = DEFAULT_MARKER,
    local_references: Iterable[str] = (),
) -> SkillDocument:
    """Parse document text into a SkillDocument.

    Args:
        text: Full document text
        source: Where the text came from, used in error messages
        marker: Front-matter delimiter line
        local_references: Extra local locators discovered next to the file;
            appended after the header's own references unless already listed

    Raises:
        ParseError: Header is missing or malformed, or a field is invalid
    """
    header = parse_header(text, marker=marker, source=source)
    if isinstance(header, ParseError):
        raise header

    fm = header.frontmatter

    name = fm.get("name")
    if not isinstance(name, str) or not name.strip():
        raise ParseError("missing required field: name", source)
    name = name.strip()
    if not NAME_RE.match(name) or len(name) > MAX_NAME_LENGTH:
        raise ParseError(f"invalid name: {name}", source)

    domain = fm.get("domain")
    if domain is None:
        domain = DEFAULT_DOMAIN
    elif not isinstance(domain, str) or not domain.strip():
        raise ParseError("domain must be a non-empty string", source)

    description = fm.get("description")
    if description is None:
        description = ""
    if not isinstance(description, str):
        raise ParseError("description must be a string", source)

    raw_tags = fm.get("tags")
    tags = [domain] if raw_tags is None else _parse_tags(raw_tags, source)

    raw_refs = fm.get("references")
    if raw_refs is None:
        raw_refs = []
    if not isinstance(raw_refs, list):
        raise ParseError("references must be a list", source)
    references = [_parse_reference(ref, source) for ref in raw_refs]

    listed = {ref.locator for ref in references}
    for locator in local_references:
        if locator not in listed:
            references.append(SkillReference(
                name=locator.rsplit("/", 1)[-1],
                locator=locator,
                kind=ReferenceKind.LOCAL,
            ))
            listed.add(locator)

    try:
        return SkillDocument(
            name=name,
            domain=domain.strip().lower(),
            description=description.strip(),
            tags=tags,
            references=references,
            body=header.body,
            source=str(source) if source is not None else None,
        )
    except ValidationError as e:
        raise ParseError(f"invalid document: {e}", source) from e


def find_local_references(document_path: Path) -> list[str]:
    """List files under the document's sibling references/ folder."""
    refs_dir = document_path.parent / REFERENCES_DIR
    if not refs_dir.is_dir():
        return []
    return [
        f.relative_to(document_path.parent).as_posix()
        for f in sorted(refs_dir.rglob("*"))
        if f.is_file()
    ]


def parse_file(path: str | Path, marker: str = DEFAULT_MARKER) -> SkillDocument:
    """Read and parse a document file.

    Raises:
        ParseError: Header is missing or malformed
        OSError: File cannot be read
    """
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    local_refs = []
    if path.parent.name != REFERENCES_DIR:
        local_refs = find_local_references(path)
    return parse_document(text, source=path, marker=marker, local_references=local_refs)
