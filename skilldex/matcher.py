"""Keyword relevance matching of free-text queries to skill documents."""

from __future__ import annotations

import re
from collections.abc import Iterable

from skilldex.models import SkillDocument, SkillMatch

TOKEN_RE = re.compile(r"[a-z0-9]+")

STOPWORDS = frozenset({
    "a", "an", "and", "are", "as", "at", "be", "by", "for", "from", "how",
    "i", "in", "into", "is", "it", "me", "my", "of", "on", "or", "the",
    "this", "to", "use", "using", "want", "what", "when", "with", "you",
})


def _fold_plural(token: str) -> str:
    if len(token) > 3 and token.endswith("s") and not token.endswith("ss"):
        if token.endswith("ies") and len(token) > 4:
            return token[:-3] + "y"
        return token[:-1]
    return token


def tokenize(text: str) -> set[str]:
    """Lowercase word set with stopwords dropped and simple plurals folded.

    >>> sorted(tokenize("CI/CD pipelines for the Docker images"))
    ['cd', 'ci', 'docker', 'image', 'pipeline']
    """
    return {
        _fold_plural(token)
        for token in TOKEN_RE.findall(text.lower())
        if len(token) > 1 and token not in STOPWORDS
    }


class RelevanceMatcher:
    """Score documents by token overlap with a query.

    Each distinct query token earns ``tag_weight`` when it appears among a
    document's tag tokens and ``description_weight`` when it appears among its
    description tokens.
    """

    def __init__(self, tag_weight: int = 2, description_weight: int = 1):
        if tag_weight < 0 or description_weight < 0:
            raise ValueError("weights must be non-negative")
        self.tag_weight = tag_weight
        self.description_weight = description_weight

    def score(self, query_tokens: set[str], doc: SkillDocument) -> SkillMatch:
        tag_tokens = tokenize(" ".join(doc.tags))
        desc_tokens = tokenize(doc.description)

        matched_tags = sorted(query_tokens & tag_tokens)
        matched_terms = sorted(query_tokens & desc_tokens)
        total = (
            len(matched_tags) * self.tag_weight
            + len(matched_terms) * self.description_weight
        )
        return SkillMatch(
            name=doc.name,
            score=total,
            matched_tags=matched_tags,
            matched_terms=matched_terms,
        )

    def rank(
        self,
        query: str,
        documents: Iterable[SkillDocument],
        limit: int | None = None,
    ) -> list[SkillMatch]:
        """Rank documents against query.

        Returns matches with a positive score, highest first, ties broken by
        name. An empty list means nothing matched.
        """
        query_tokens = tokenize(query)
        if not query_tokens:
            return []

        matches = [self.score(query_tokens, doc) for doc in documents]
        matches = [m for m in matches if m.score > 0]
        matches.sort(key=lambda m: (-m.score, m.name))

        if limit is not None:
            matches = matches[:max(limit, 0)]
        return matches
