"""Skill matching, activation, and on-demand detail loading."""

from __future__ import annotations

import logging

from skill_selector.config import LoadedContext, SkillBundle, SkillMatch
from skill_selector.errors import DetailNotFoundError, SkillNotFoundError
from skill_selector.registry import SkillRegistry
from skill_selector.scoring import LexicalOverlapScorer, Scorer

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 0.1
DEFAULT_DETAIL_THRESHOLD = 0.2


class SkillSelector:
    """Map task descriptions to bundles and disclose their content.

    The selector holds no session state. Every operation that changes what
    a session can see takes a ``LoadedContext`` and returns the updated one;
    a failed operation raises before anything is built, so the caller's
    context is never partially changed.

    Example::

        selector = SkillSelector(registry)
        ctx = LoadedContext()
        for name in selector.match("publish my build"):
            ctx = selector.activate(name, ctx)
        ctx = selector.load_detail("build", "nix-expressions", ctx)

    Args:
        registry: Bundles to select from.
        scorer: Relevance strategy. Defaults to ``LexicalOverlapScorer``.
        threshold: Minimum score for a bundle to be matched.
        detail_threshold: Minimum score for a detail to be suggested.
        max_matches: Optional cap on the number of matched bundles.
    """

    def __init__(
        self,
        registry: SkillRegistry,
        scorer: Scorer | None = None,
        *,
        threshold: float = DEFAULT_THRESHOLD,
        detail_threshold: float = DEFAULT_DETAIL_THRESHOLD,
        max_matches: int | None = None,
    ) -> None:
        self._registry = registry
        self._scorer = scorer or LexicalOverlapScorer()
        self._threshold = threshold
        self._detail_threshold = detail_threshold
        self._max_matches = max_matches

    @property
    def registry(self) -> SkillRegistry:
        """Get the registry this selector reads from."""
        return self._registry

    @property
    def scorer(self) -> Scorer:
        """Get the relevance strategy."""
        return self._scorer

    @property
    def threshold(self) -> float:
        """Get the minimum bundle score."""
        return self._threshold

    # ------------------------------------------------------------------
    # Matching
    # ------------------------------------------------------------------

    def score(self, task_text: str) -> list[SkillMatch]:
        """Score every registered bundle against ``task_text``.

        Args:
            task_text: Free-text task description.

        Returns:
            One ``SkillMatch`` per bundle, in registration order.
        """
        return [
            SkillMatch(name=bundle.name, score=self._scorer.score(task_text, bundle))
            for bundle in self._registry
        ]

    def match(self, task_text: str, limit: int | None = None) -> list[str]:
        """Return the bundles relevant to ``task_text``, best first.

        Bundles with a positive score at or above the threshold are returned
        sorted by score, highest first; equal scores keep registration order.
        Empty or whitespace-only text matches nothing. An empty result is a
        normal outcome, never an error.

        Args:
            task_text: Free-text task description.
            limit: Maximum number of names to return. Falls back to the
                selector's ``max_matches``.

        Returns:
            Candidate bundle names.

        Raises:
            ValueError: If ``limit`` is negative.
        """
        if limit is not None and limit < 0:
            raise ValueError(f"limit must be non-negative, got {limit}")

        if not task_text or not task_text.strip():
            logger.debug("Empty task text, no skills matched")
            return []

        candidates = [
            m for m in self.score(task_text) if m.score > 0 and m.score >= self._threshold
        ]
        # sorted() is stable, so ties stay in registration order.
        candidates = sorted(candidates, key=lambda m: m.score, reverse=True)

        limit = limit if limit is not None else self._max_matches
        if limit is not None:
            candidates = candidates[:limit]

        logger.debug(
            "Matched %d skill(s): %s",
            len(candidates),
            ", ".join(f"{m.name}={m.score:.3f}" for m in candidates) or "none",
        )
        return [m.name for m in candidates]

    # ------------------------------------------------------------------
    # Activation
    # ------------------------------------------------------------------

    def activate(self, name: str, context: LoadedContext) -> LoadedContext:
        """Activate a bundle, adding its summary to the context.

        Activating an already-active bundle returns ``context`` itself.

        Args:
            name: Bundle to activate.
            context: Current session context.

        Returns:
            The updated context.

        Raises:
            SkillNotFoundError: If the bundle is not registered.
        """
        bundle = self._registry.require(name)

        if context.is_active(name):
            return context

        logger.debug("Activating skill '%s'", name)
        return context.with_summary(name, bundle.summary_document)

    def load_detail(self, name: str, topic: str, context: LoadedContext) -> LoadedContext:
        """Load one detail document of an active bundle into the context.

        Loading a detail that is already loaded returns ``context`` itself.

        Args:
            name: Bundle owning the detail.
            topic: Detail topic label.
            context: Current session context.

        Returns:
            The updated context.

        Raises:
            SkillNotFoundError: If the bundle is not registered or not active.
            DetailNotFoundError: If the bundle has no such topic.
        """
        bundle = self._active_bundle(name, context)

        doc = bundle.detail(topic)
        if doc is None:
            raise DetailNotFoundError(name=name, topic=topic)

        if context.is_loaded(name, topic):
            return context

        logger.debug("Loading detail '%s' of skill '%s'", topic, name)
        return context.with_detail(name, topic, doc.content)

    def suggest_details(self, name: str, task_text: str) -> list[str]:
        """Suggest which detail documents of a bundle a task needs.

        Only topics the summary cross-references are considered. Each is
        scored on its topic label and load hint; topics at or above the
        detail threshold are returned best first, ties in authored order.

        Args:
            name: Bundle to inspect.
            task_text: Free-text task description.

        Returns:
            Suggested topic labels.

        Raises:
            SkillNotFoundError: If the bundle is not registered.
        """
        bundle = self._registry.require(name)
        if not task_text or not task_text.strip():
            return []

        referenced = bundle.cross_references()
        scored = [
            (doc.topic, self._scorer.score_detail(task_text, doc))
            for doc in bundle.detail_documents
            if doc.topic in referenced
        ]
        scored = [item for item in scored if item[1] > 0 and item[1] >= self._detail_threshold]
        scored.sort(key=lambda item: item[1], reverse=True)
        return [topic for topic, _ in scored]

    def _active_bundle(self, name: str, context: LoadedContext) -> SkillBundle:
        bundle = self._registry.require(name)
        if not context.is_active(name):
            raise SkillNotFoundError(name=name, reason="skill is not active in this session")
        return bundle

    def __repr__(self) -> str:
        return (
            f"SkillSelector(skills={len(self._registry)}, scorer={self._scorer!r}, "
            f"threshold={self._threshold})"
        )
