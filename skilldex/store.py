"""In-memory document store populated from a directory tree."""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator
from pathlib import Path

from skilldex.errors import MissingHeaderError, ParseError
from skilldex.models import SkillDocument
from skilldex.parser import DEFAULT_MARKER, parse_file
from skilldex.utils import get_logger

logger = get_logger(__name__)

DEFAULT_EXTENSION = ".md"
DEFAULT_EXCLUDE_DIRS = (".git", "node_modules", "__pycache__")


class DocumentStore:
    """Holds skill documents keyed by name.

    Example:
        >>> store = DocumentStore()
        >>> store.load("skills")
        >>> store.get("docker")
    """

    def __init__(
        self,
        extension: str = DEFAULT_EXTENSION,
        marker: str = DEFAULT_MARKER,
        exclude_dirs: Iterable[str] = DEFAULT_EXCLUDE_DIRS,
        disabled: Iterable[str] = (),
    ):
        self.extension = extension if extension.startswith(".") else f".{extension}"
        self.marker = marker
        self.exclude_dirs = set(exclude_dirs)
        self.disabled = set(disabled)
        self._documents: dict[str, SkillDocument] = {}
        self.warnings: list[str] = []
        self.skipped: dict[str, str] = {}
        self.ignored: list[str] = []

    def empty_copy(self) -> "DocumentStore":
        """New empty store with the same discovery settings."""
        return DocumentStore(
            extension=self.extension,
            marker=self.marker,
            exclude_dirs=self.exclude_dirs,
            disabled=self.disabled,
        )

    def _iter_files(self, root: Path) -> Iterator[Path]:
        for dirpath, dirnames, filenames in os.walk(root):
            dirnames[:] = sorted(d for d in dirnames if d not in self.exclude_dirs)
            for filename in sorted(filenames):
                if filename.lower().endswith(self.extension.lower()):
                    yield Path(dirpath) / filename

    def load(self, directory: str | Path) -> int:
        """Parse every eligible file under directory into the store.

        Files that fail to parse are logged and skipped.

        Args:
            directory: Root of the skill tree

        Returns:
            Number of documents inserted by this call
        """
        root = Path(directory)
        loaded = 0

        for path in self._iter_files(root):
            try:
                doc = parse_file(path, marker=self.marker)
            except MissingHeaderError as e:
                logger.debug("Ignoring %s: %s", path, e.reason)
                self.ignored.append(str(path))
                continue
            except ParseError as e:
                logger.warning("Skipping malformed document %s: %s", path, e.reason)
                self.skipped[str(path)] = e.reason
                continue
            except (OSError, UnicodeDecodeError) as e:
                logger.warning("Failed to read %s: %s", path, e)
                self.skipped[str(path)] = str(e)
                continue

            if doc.name in self.disabled:
                logger.debug("Skill '%s' is disabled", doc.name)
                continue

            self.add(doc)
            loaded += 1

        logger.info("Loaded %d skill document(s) from %s", loaded, root)
        return loaded

    def add(self, doc: SkillDocument) -> None:
        """Insert a document; a later document replaces an earlier one of the same name."""
        previous = self._documents.pop(doc.name, None)
        if previous is not None:
            message = (
                f"Duplicate skill name '{doc.name}': "
                f"{doc.source} replaces {previous.source}"
            )
            logger.warning(message)
            self.warnings.append(message)
        self._documents[doc.name] = doc

    def get(self, name: str) -> SkillDocument | None:
        """Get a document by name, or None."""
        return self._documents.get(name)

    def list_documents(self) -> Iterator[SkillDocument]:
        """Iterate documents in insertion order."""
        yield from self._documents.values()

    def names(self) -> list[str]:
        return list(self._documents)

    def __len__(self) -> int:
        return len(self._documents)

    def __contains__(self, name: object) -> bool:
        return name in self._documents

    def __iter__(self) -> Iterator[SkillDocument]:
        return self.list_documents()
