"""Relevance scoring strategies.

The selector only relies on one property of a scorer: a higher score means
a more relevant bundle. ``LexicalOverlapScorer`` is the default; any other
strategy (embeddings, keyword tables) can be plugged in by subclassing
``Scorer`` or wrapping a function with ``CallableScorer``.
"""

from __future__ import annotations

import math
import re
from abc import ABC, abstractmethod
from collections.abc import Callable
from functools import lru_cache

from skill_selector.config import DetailDocument, SkillBundle

_TOKEN_PATTERN = re.compile(r"[a-z0-9]+")

_STOP_WORDS = frozenset(
    {
        "a", "about", "all", "also", "an", "and", "any", "are", "as", "at",
        "be", "but", "by", "can", "could", "do", "does", "for", "from", "get",
        "have", "help", "how", "i", "if", "in", "into", "is", "it", "its",
        "just", "let", "like", "me", "my", "need", "no", "not", "of", "on",
        "or", "our", "please", "should", "so", "some", "that", "the", "their",
        "them", "then", "there", "these", "this", "those", "to", "up", "use",
        "using", "want", "was", "we", "what", "when", "where", "which", "while",
        "who", "why", "will", "with", "would", "you", "your",
    }
)  # fmt: skip

# (suffix, replacement) pairs, longest first within each tier. At most one
# inflectional and then one derivational suffix is stripped.
_INFLECTIONAL_SUFFIXES: tuple[tuple[str, str], ...] = (
    ("ings", ""),
    ("ies", "y"),
    ("ied", "y"),
    ("ing", ""),
    ("ed", ""),
    ("es", ""),
    ("s", ""),
)
_DERIVATIONAL_SUFFIXES: tuple[tuple[str, str], ...] = (
    ("ation", ""),
    ("ment", ""),
    ("ness", ""),
    ("ize", ""),
    ("iz", ""),
)

_MIN_STEM_LENGTH = 3


def _strip_suffix(word: str, suffixes: tuple[tuple[str, str], ...]) -> str:
    for suffix, replacement in suffixes:
        if not word.endswith(suffix) or len(word) - len(suffix) < _MIN_STEM_LENGTH:
            continue
        if suffix == "s" and word.endswith("ss"):
            continue
        return word[: -len(suffix)] + replacement
    return word


def stem(word: str) -> str:
    """Reduce ``word`` to a crude stem so inflections compare equal.

    Examples:
        >>> stem("publishing") == stem("publish")
        True
        >>> stem("packaging") == stem("package")
        True
        >>> stem("environments") == stem("environment")
        True
    """
    word = _strip_suffix(word, _INFLECTIONAL_SUFFIXES)
    word = _strip_suffix(word, _DERIVATIONAL_SUFFIXES)
    if word.endswith("e") and len(word) > _MIN_STEM_LENGTH:
        word = word[:-1]
    return word


@lru_cache(maxsize=1024)
def terms(text: str) -> frozenset[str]:
    """Return the stemmed, stop-word-free term set of ``text``."""
    return frozenset(
        stem(token)
        for token in _TOKEN_PATTERN.findall(text.lower())
        if token not in _STOP_WORDS and len(token) > 1
    )


def trigger_text(bundle: SkillBundle) -> str:
    """Text a bundle is matched against: trigger description plus keywords."""
    return " ".join((bundle.trigger_description, *bundle.keywords))


def detail_text(doc: DetailDocument) -> str:
    """Text a detail document is matched against: topic label plus load hint."""
    return f"{doc.topic.replace('-', ' ').replace('_', ' ')} {doc.load_hint}"


class Scorer(ABC):
    """Strategy that rates how relevant a piece of text is to a task."""

    @abstractmethod
    def score_text(self, task_text: str, target_text: str) -> float:
        """Score ``target_text`` against ``task_text``; higher is more relevant."""

    def score(self, task_text: str, bundle: SkillBundle) -> float:
        """Score a bundle's trigger against ``task_text``."""
        return self.score_text(task_text, trigger_text(bundle))

    def score_detail(self, task_text: str, doc: DetailDocument) -> float:
        """Score a detail document's topic and hint against ``task_text``."""
        return self.score_text(task_text, detail_text(doc))


class LexicalOverlapScorer(Scorer):
    """Binary cosine similarity over stemmed term sets.

    The score is ``|task ∩ target| / sqrt(|task| * |target|)``, in
    ``[0, 1]``. Text with no meaningful terms scores 0.
    """

    def score_text(self, task_text: str, target_text: str) -> float:
        task_terms = terms(task_text)
        target_terms = terms(target_text)
        if not task_terms or not target_terms:
            return 0.0
        overlap = len(task_terms & target_terms)
        return overlap / math.sqrt(len(task_terms) * len(target_terms))

    def __repr__(self) -> str:
        return "LexicalOverlapScorer()"


class CallableScorer(LexicalOverlapScorer):
    """Adapt a plain ``(task_text, bundle) -> float`` function.

    The function scores bundles. Detail documents are scored with
    ``detail_func`` when given, otherwise lexically.

    Example::

        scorer = CallableScorer(lambda task, bundle: embed_sim(task, bundle.trigger_description))
    """

    def __init__(
        self,
        func: Callable[[str, SkillBundle], float],
        detail_func: Callable[[str, DetailDocument], float] | None = None,
    ) -> None:
        self._func = func
        self._detail_func = detail_func

    def score(self, task_text: str, bundle: SkillBundle) -> float:
        return float(self._func(task_text, bundle))

    def score_detail(self, task_text: str, doc: DetailDocument) -> float:
        if self._detail_func is None:
            return super().score_detail(task_text, doc)
        return float(self._detail_func(task_text, doc))

    def __repr__(self) -> str:
        name = getattr(self._func, "__name__", repr(self._func))
        return f"CallableScorer({name})"
