"""Immutable skill bundle registry."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from types import MappingProxyType

from skill_selector.config import SkillBundle
from skill_selector.errors import (
    SkillConflictError,
    SkillNotFoundError,
    SkillValidationError,
)
from skill_selector.validator import validate_bundle


class SkillRegistry:
    """Read-only catalog of skill bundles.

    The registry is built once from a fixed set of bundles and never
    changes afterwards, so a single instance can be shared by any number of
    sessions. Every bundle is validated on construction; a registry that
    exists is known to satisfy the naming, uniqueness and orphan-document
    invariants.

    Iteration and listing follow registration order, which is also the
    tie-break order for matching.

    Example::

        registry = SkillRegistry([build_bundle, sharing_bundle])
        registry.require("build").summary_document

    Args:
        bundles: Bundles to register, in priority order.

    Raises:
        SkillConflictError: If two bundles share a name.
        SkillValidationError: If a bundle breaks a registry invariant.
    """

    def __init__(self, bundles: Iterable[SkillBundle] = ()) -> None:
        skills: dict[str, SkillBundle] = {}

        for bundle in bundles:
            if bundle.name in skills:
                existing = skills[bundle.name]
                raise SkillConflictError(
                    name=bundle.name,
                    paths=[
                        str(existing.path or "<memory>"),
                        str(bundle.path or "<memory>"),
                    ],
                )

            result = validate_bundle(bundle)
            if not result.valid:
                raise SkillValidationError(
                    name=bundle.name,
                    errors=result.errors,
                    path=bundle.path,
                )

            skills[bundle.name] = bundle

        self._skills = MappingProxyType(skills)

    def get(self, name: str) -> SkillBundle | None:
        """Get a bundle by name, or ``None`` if it is not registered."""
        return self._skills.get(name)

    def require(self, name: str) -> SkillBundle:
        """Get a bundle by name.

        Raises:
            SkillNotFoundError: If the bundle is not registered.
        """
        bundle = self._skills.get(name)
        if bundle is None:
            raise SkillNotFoundError(name=name)
        return bundle

    def has(self, name: str) -> bool:
        """Check if a bundle is registered."""
        return name in self._skills

    def names(self) -> list[str]:
        """Registered bundle names in registration order."""
        return list(self._skills)

    def list(self) -> list[SkillBundle]:
        """Registered bundles in registration order."""
        return list(self._skills.values())

    def __contains__(self, name: object) -> bool:
        return name in self._skills

    def __iter__(self) -> Iterator[SkillBundle]:
        return iter(self._skills.values())

    def __len__(self) -> int:
        """Return the number of registered bundles."""
        return len(self._skills)

    def __repr__(self) -> str:
        """Return a string representation of the registry."""
        return f"SkillRegistry(skills={self.names()})"
