"""Skill registry: the read-only catalog queried by agents and the CLI."""

from __future__ import annotations

from collections.abc import Iterator
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from skilldex.errors import NotFound, RegistryInitError, RegistryNotReady
from skilldex.matcher import RelevanceMatcher
from skilldex.models import SkillDocument, SkillMatch
from skilldex.store import DocumentStore
from skilldex.utils import get_logger

if TYPE_CHECKING:
    from skilldex.config import Config

logger = get_logger(__name__)


class RegistryState(str, Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"


class SkillRegistry:
    """Load a skill tree once and answer lookups against it.

    A registry moves from UNINITIALIZED to READY on a successful
    ``initialize`` and never goes back; build a new instance to reload.
    Once READY nothing is mutated, so the instance can be shared across
    threads.

    Example:
        >>> registry = SkillRegistry()
        >>> registry.initialize("skills")
        >>> [m.name for m in registry.find("devops pipeline")]
        ['ci-cd', 'docker']
        >>> registry.get_by_name("docker").domain
        'devops'
    """

    def __init__(
        self,
        store: DocumentStore | None = None,
        matcher: RelevanceMatcher | None = None,
        max_results: int | None = None,
    ):
        self._store_template = store
        self._store: DocumentStore | None = None
        self.matcher = matcher or RelevanceMatcher()
        self.max_results = max_results
        self.state = RegistryState.UNINITIALIZED
        self.root: Path | None = None

    @classmethod
    def from_config(cls, config: "Config", root: str | Path | None = None) -> "SkillRegistry":
        """Create and initialize a registry from configuration.

        Args:
            config: Loaded configuration
            root: Skill tree root, overriding ``config.skills.root``

        Returns:
            READY registry

        Raises:
            RegistryInitError: Root is missing or holds no valid documents
        """
        skills_cfg = config.skills
        registry = cls(
            store=DocumentStore(
                extension=skills_cfg.extension,
                marker=skills_cfg.marker,
                exclude_dirs=skills_cfg.exclude_dirs,
                disabled=skills_cfg.disabled_skills,
            ),
            matcher=RelevanceMatcher(
                tag_weight=config.matcher.tag_weight,
                description_weight=config.matcher.description_weight,
            ),
            max_results=config.matcher.max_results,
        )
        registry.initialize(root if root is not None else skills_cfg.root)
        return registry

    def _new_store(self) -> DocumentStore:
        # A passed-in store only supplies settings; every attempt loads into a fresh one
        if self._store_template is None:
            return DocumentStore()
        return self._store_template.empty_copy()

    def initialize(self, root_path: str | Path) -> None:
        """Load every document under root_path.

        The registry only becomes READY when at least one document loads.

        Raises:
            RegistryInitError: Already initialized, root missing, or no valid documents
        """
        if self.state is RegistryState.READY:
            raise RegistryInitError(
                f"Registry already initialized from {self.root}; create a new instance"
            )

        root = Path(root_path).expanduser()
        if not root.exists():
            raise RegistryInitError(f"Skill root does not exist: {root}")
        if not root.is_dir():
            raise RegistryInitError(f"Skill root is not a directory: {root}")

        store = self._new_store()
        store.load(root)
        if not len(store):
            raise RegistryInitError(f"No valid skill documents found under {root}")

        self._store = store
        self.root = root
        self.state = RegistryState.READY
        logger.info(
            "Skill registry ready",
            extra={"root": str(root), "skills": len(store)},
        )

    def _ready_store(self) -> DocumentStore:
        if self.state is not RegistryState.READY or self._store is None:
            raise RegistryNotReady("Skill registry is not initialized")
        return self._store

    @property
    def store(self) -> DocumentStore:
        return self._ready_store()

    @property
    def is_ready(self) -> bool:
        return self.state is RegistryState.READY

    def find(self, query: str, limit: int | None = None) -> list[SkillMatch]:
        """Rank documents against a free-text query.

        Args:
            query: Task description or keywords
            limit: Maximum matches; defaults to the configured max_results

        Returns:
            Matches by descending score then name; empty when nothing matches
        """
        store = self._ready_store()
        if limit is None:
            limit = self.max_results
        return self.matcher.rank(query, store.list_documents(), limit=limit)

    def get_by_name(self, name: str) -> SkillDocument:
        """Get a document by name.

        Raises:
            NotFound: No document with that name
        """
        doc = self._ready_store().get(name)
        if doc is None:
            raise NotFound(name)
        return doc

    def list_documents(self) -> Iterator[SkillDocument]:
        return self._ready_store().list_documents()

    def names(self) -> list[str]:
        return self._ready_store().names()

    def __len__(self) -> int:
        return len(self._ready_store())

    def __contains__(self, name: object) -> bool:
        return name in self._ready_store()

    def format_skills_for_prompt(self, names: list[str] | None = None) -> str:
        """Generate a compact skill index for a system prompt.

        Args:
            names: Restrict the index to these skills, e.g. the names from a
                ``find`` result; unknown names are ignored

        Returns:
            Markdown list, or empty string when there is nothing to list
        """
        store = self._ready_store()
        if names is None:
            docs = list(store.list_documents())
        else:
            docs = [d for d in (store.get(n) for n in names) if d is not None]
        if not docs:
            return ""

        lines = [
            "## Available Skills",
            "The following reference documents are available. "
            "Ask for a skill by name to get its full content.\n",
        ]
        for doc in docs:
            lines.append(f"- **{doc.name}** ({doc.domain}): {doc.description}")

        return "\n".join(lines)
