"""Skill selection and context loading for agent hosts.

Picks the documentation skill bundles relevant to a request and discloses
their detail documents on demand, at most once per session.

Quick Start:
    >>> from skill_selector import SkillSession, load_registry
    >>> registry = load_registry()  # scans SKILL_SELECTOR_SKILLS_DIRS
    >>> session = SkillSession(registry)
    >>> session.handle("containerize and publish my build")
    >>> prompt_fragment = session.render()

Classes:
    SkillRegistry: Immutable, validated catalog of bundles.
    SkillSelector: Stateless matching, activation, and detail loading.
    SkillSession: Per-session facade owning a ``LoadedContext``.
    SkillBundle: Bundle reference data.
    DetailDocument: On-demand document within a bundle.
    LoadedContext: Documentation accumulated in a session.
    SelectorSettings: Configuration from env, ``.env`` and TOML.

Exceptions:
    SkillError: Base exception for all selector errors.
    SkillNotFoundError: Unknown bundle, or bundle not active.
    DetailNotFoundError: Unknown topic within a bundle.
    SkillParseError: SKILL.md frontmatter YAML has syntax errors.
    SkillValidationError: A bundle breaks a registry invariant.
    SkillLoadError: Permission denied or disk errors during loading.
    SkillConflictError: Duplicate bundle names.
"""

from __future__ import annotations

from skill_selector.config import (
    ContextEntry,
    DetailDocument,
    LoadedContext,
    SkillBundle,
    SkillMatch,
    ValidationResult,
)
from skill_selector.discovery import discover_bundles, load_registry
from skill_selector.errors import (
    DetailNotFoundError,
    SkillConflictError,
    SkillError,
    SkillLoadError,
    SkillNotFoundError,
    SkillParseError,
    SkillValidationError,
)
from skill_selector.loader import load_bundle
from skill_selector.observability import setup_logging
from skill_selector.registry import SkillRegistry
from skill_selector.scoring import CallableScorer, LexicalOverlapScorer, Scorer
from skill_selector.selector import SkillSelector
from skill_selector.session import SkillSession
from skill_selector.settings import LoggingConfig, SelectorSettings
from skill_selector.validator import validate, validate_bundle

__all__ = [
    "CallableScorer",
    "ContextEntry",
    "DetailDocument",
    "DetailNotFoundError",
    "LexicalOverlapScorer",
    "LoadedContext",
    "LoggingConfig",
    "Scorer",
    "SelectorSettings",
    "SkillBundle",
    "SkillConflictError",
    "SkillError",
    "SkillLoadError",
    "SkillMatch",
    "SkillNotFoundError",
    "SkillParseError",
    "SkillRegistry",
    "SkillSelector",
    "SkillSession",
    "SkillValidationError",
    "ValidationResult",
    "__version__",
    "discover_bundles",
    "load_bundle",
    "load_registry",
    "setup_logging",
    "validate",
    "validate_bundle",
]

__version__ = "0.1.0"
