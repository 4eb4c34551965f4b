"""Per-session facade over the selector.

A ``SkillSession`` owns the ``LoadedContext`` of one interaction and runs
the host control flow: match the request, activate the relevant bundles,
then disclose the detail documents the request needs.
"""

from __future__ import annotations

import logging

from skill_selector.config import LoadedContext
from skill_selector.registry import SkillRegistry
from skill_selector.scoring import Scorer
from skill_selector.selector import SkillSelector
from skill_selector.settings import SelectorSettings

logger = logging.getLogger(__name__)


class SkillSession:
    """Documentation context accumulated during one interaction.

    The registry is shared; the context belongs to this session alone and
    only grows until ``reset()``.

    Example::

        session = SkillSession(registry)
        activated = session.handle("containerize and publish my build")
        prompt_fragment = session.render()

    Args:
        registry: Shared bundle registry.
        settings: Selection thresholds and behavior. Uses defaults if ``None``.
        scorer: Relevance strategy passed to the selector.
    """

    def __init__(
        self,
        registry: SkillRegistry,
        settings: SelectorSettings | None = None,
        scorer: Scorer | None = None,
    ) -> None:
        self._settings = settings or SelectorSettings()
        self._selector = SkillSelector(
            registry,
            scorer,
            threshold=self._settings.threshold,
            detail_threshold=self._settings.detail_threshold,
            max_matches=self._settings.max_matches,
        )
        self._context = LoadedContext()

    @property
    def selector(self) -> SkillSelector:
        """Get the underlying selector."""
        return self._selector

    @property
    def registry(self) -> SkillRegistry:
        """Get the shared registry."""
        return self._selector.registry

    @property
    def context(self) -> LoadedContext:
        """Get the current context."""
        return self._context

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def match(self, task_text: str) -> list[str]:
        """Candidate bundle names for ``task_text``, best first."""
        return self._selector.match(task_text)

    def activate(self, name: str) -> LoadedContext:
        """Activate a bundle in this session.

        Raises:
            SkillNotFoundError: If the bundle is not registered.
        """
        self._context = self._selector.activate(name, self._context)
        return self._context

    def load_detail(self, name: str, topic: str) -> LoadedContext:
        """Load a detail document of an active bundle.

        Raises:
            SkillNotFoundError: If the bundle is unknown or not active.
            DetailNotFoundError: If the topic does not exist.
        """
        self._context = self._selector.load_detail(name, topic, self._context)
        return self._context

    def suggest_details(self, name: str, task_text: str) -> list[str]:
        """Detail topics of ``name`` that ``task_text`` appears to need."""
        return self._selector.suggest_details(name, task_text)

    def handle(self, task_text: str) -> list[str]:
        """Match ``task_text`` and load the guidance it needs.

        Every candidate bundle is activated; several bundles may be active
        at once. When ``auto_load_details`` is enabled, suggested detail
        documents of each activated bundle are loaded as well.

        Args:
            task_text: Free-text task description.

        Returns:
            Names of the matched bundles, best first. Empty when no bundle
            is relevant, in which case the context is unchanged.
        """
        names = self.match(task_text)
        if not names:
            logger.info("No specialized guidance for task")
            return []

        for name in names:
            self.activate(name)
            if self._settings.auto_load_details:
                for topic in self.suggest_details(name, task_text):
                    self.load_detail(name, topic)

        logger.info("Activated skill(s): %s", ", ".join(names))
        return names

    def render(self) -> str:
        """Visible material of this session as one prompt fragment."""
        return self._context.render()

    def reset(self) -> None:
        """Start over with an empty context."""
        self._context = LoadedContext()

    def __repr__(self) -> str:
        return (
            f"SkillSession(active={list(self._context.active_bundles)}, "
            f"details={len(self._context.loaded_detail_keys)})"
        )
