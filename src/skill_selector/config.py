"""Skill bundle data models and session context."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath

from pydantic import BaseModel, ConfigDict, Field

# Markdown link targets: [label](target "optional title")
_LINK_PATTERN = re.compile(r"\[[^\]]*\]\(\s*<?([^)\s>]+)>?(?:\s+\"[^\"]*\")?\s*\)")

# Bare mentions such as `references/nix-expressions.md`
_REFERENCE_PATH_PATTERN = re.compile(r"references/([\w.-]+)\.md")


class DetailDocument(BaseModel):
    """A secondary document of a bundle, loaded only on demand.

    Attributes:
        topic: Topic label, unique within its bundle.
        content: Document text.
        load_hint: Short text describing when the document is needed.
        path: Source file, when loaded from disk.
    """

    model_config = ConfigDict(frozen=True)

    topic: str
    content: str
    load_hint: str = ""
    path: Path | None = None


class SkillBundle(BaseModel):
    """A named, self-contained set of guidance documents for one task domain.

    Bundles are immutable reference data: authored once, validated when the
    registry is built, and only read at request time.

    Attributes:
        name: Unique bundle identifier.
        trigger_description: Text describing when the bundle applies.
        summary_document: Always-loaded top-level guide.
        detail_documents: Documents disclosed on demand, in authored order.
        keywords: Extra trigger terms used for relevance scoring.
        path: Source directory, when loaded from disk.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    trigger_description: str
    summary_document: str
    detail_documents: tuple[DetailDocument, ...] = ()
    keywords: tuple[str, ...] = Field(default=())
    path: Path | None = None

    @property
    def topics(self) -> list[str]:
        """Topic labels in authored order."""
        return [doc.topic for doc in self.detail_documents]

    def detail(self, topic: str) -> DetailDocument | None:
        """Return the detail document for ``topic``, or ``None``."""
        for doc in self.detail_documents:
            if doc.topic == topic:
                return doc
        return None

    def cross_references(self) -> frozenset[str]:
        """Return the topic labels referenced from the summary document.

        A topic counts as referenced when a Markdown link target or a bare
        ``references/<topic>.md`` mention in the summary resolves to its
        label. Link anchors and query strings are ignored.

        Returns:
            The referenced topics that exist in this bundle.
        """
        mentioned: set[str] = set()

        for target in _LINK_PATTERN.findall(self.summary_document):
            target = target.split("#", 1)[0].split("?", 1)[0]
            if not target:
                continue
            stem = PurePosixPath(target).name
            if stem.endswith(".md"):
                stem = stem[: -len(".md")]
            mentioned.add(stem)

        mentioned.update(_REFERENCE_PATH_PATTERN.findall(self.summary_document))

        return frozenset(topic for topic in self.topics if topic in mentioned)


@dataclass(frozen=True)
class ContextEntry:
    """One piece of material visible to the model.

    Attributes:
        bundle: Bundle the material came from.
        topic: Detail topic, or ``None`` for the bundle summary.
        content: The material itself.
    """

    bundle: str
    topic: str | None
    content: str


@dataclass(frozen=True)
class LoadedContext:
    """Documentation accumulated during one session.

    Contexts are values: every operation that adds material returns a new
    context and leaves the original untouched. Nothing is ever evicted.

    Attributes:
        active_bundles: Activated bundle names in activation order.
        loaded_detail_keys: ``(bundle, topic)`` pairs already materialized.
        entries: Visible material in load order.
    """

    active_bundles: tuple[str, ...] = ()
    loaded_detail_keys: tuple[tuple[str, str], ...] = ()
    entries: tuple[ContextEntry, ...] = ()

    def is_active(self, name: str) -> bool:
        """Return whether ``name`` has been activated."""
        return name in self.active_bundles

    def is_loaded(self, name: str, topic: str) -> bool:
        """Return whether the detail ``(name, topic)`` has been loaded."""
        return (name, topic) in self.loaded_detail_keys

    def with_summary(self, name: str, content: str) -> LoadedContext:
        """Return a copy with the bundle activated and its summary appended."""
        return LoadedContext(
            active_bundles=(*self.active_bundles, name),
            loaded_detail_keys=self.loaded_detail_keys,
            entries=(*self.entries, ContextEntry(bundle=name, topic=None, content=content)),
        )

    def with_detail(self, name: str, topic: str, content: str) -> LoadedContext:
        """Return a copy with the detail recorded and its content appended."""
        return LoadedContext(
            active_bundles=self.active_bundles,
            loaded_detail_keys=(*self.loaded_detail_keys, (name, topic)),
            entries=(*self.entries, ContextEntry(bundle=name, topic=topic, content=content)),
        )

    def render(self, separator: str = "\n\n") -> str:
        """Join the visible material into a single prompt fragment."""
        return separator.join(entry.content for entry in self.entries)


@dataclass(frozen=True)
class SkillMatch:
    """Relevance score of one bundle for a task.

    Attributes:
        name: Bundle name.
        score: Relevance score, higher is more relevant.
    """

    name: str
    score: float


@dataclass
class ValidationResult:
    """Result from validating a bundle.

    Attributes:
        valid: Whether the bundle passed validation.
        errors: List of validation error messages.
        warnings: List of validation warnings.
        skill_path: Path to the validated bundle, if available.
    """

    valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    skill_path: Path | None = None
