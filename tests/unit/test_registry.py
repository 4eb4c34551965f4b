"""Tests for the immutable skill registry."""

from __future__ import annotations

import pytest

from skill_selector.config import DetailDocument, SkillBundle
from skill_selector.errors import (
    SkillConflictError,
    SkillNotFoundError,
    SkillValidationError,
)
from skill_selector.registry import SkillRegistry


def _make_bundle(name: str, trigger: str = "a trigger") -> SkillBundle:
    """Create a minimal valid bundle."""
    return SkillBundle(name=name, trigger_description=trigger, summary_document=f"# {name}")


class TestSkillRegistryInit:
    """Tests for registry construction."""

    def test_empty_registry(self) -> None:
        """Test that a registry can be empty."""
        registry = SkillRegistry()

        assert len(registry) == 0
        assert registry.list() == []
        assert repr(registry) == "SkillRegistry(skills=[])"

    def test_registration_order_kept(self) -> None:
        """Test names and iteration follow registration order."""
        registry = SkillRegistry([_make_bundle("zeta"), _make_bundle("alpha")])

        assert registry.names() == ["zeta", "alpha"]
        assert [b.name for b in registry] == ["zeta", "alpha"]

    def test_accepts_generator(self) -> None:
        """Test any iterable of bundles is accepted."""
        registry = SkillRegistry(_make_bundle(n) for n in ("a", "b"))
        assert len(registry) == 2

    def test_duplicate_name_conflicts(self) -> None:
        """Test two bundles with one name are rejected."""
        with pytest.raises(SkillConflictError) as exc_info:
            SkillRegistry([_make_bundle("build"), _make_bundle("build")])

        assert exc_info.value.name == "build"
        assert "not unique in the registry" in str(exc_info.value)

    def test_orphan_rejected_at_load_time(self) -> None:
        """Test an orphan detail document fails construction."""
        bundle = SkillBundle(
            name="build",
            trigger_description="packaging",
            summary_document="# Build\n\nNo references.",
            detail_documents=(DetailDocument(topic="nix-expressions", content="..."),),
        )

        with pytest.raises(SkillValidationError) as exc_info:
            SkillRegistry([bundle])

        assert exc_info.value.name == "build"
        assert "nix-expressions" in exc_info.value.errors[0]

    def test_invalid_bundle_rejected(self) -> None:
        """Test any validation error fails construction."""
        with pytest.raises(SkillValidationError):
            SkillRegistry([_make_bundle("Bad Name")])


class TestSkillRegistryLookup:
    """Tests for registry lookups."""

    def test_get(self, registry: SkillRegistry, build_bundle: SkillBundle) -> None:
        """Test get() returns the bundle or None."""
        assert registry.get("build") is build_bundle
        assert registry.get("missing") is None

    def test_require(self, registry: SkillRegistry) -> None:
        """Test require() raises for unknown names."""
        assert registry.require("sharing").name == "sharing"

        with pytest.raises(SkillNotFoundError):
            registry.require("missing")

    def test_has_and_contains(self, registry: SkillRegistry) -> None:
        """Test membership checks."""
        assert registry.has("build")
        assert "sharing" in registry
        assert "missing" not in registry

    def test_isolated_registries(self, build_bundle: SkillBundle) -> None:
        """Test registries do not share state."""
        first = SkillRegistry([build_bundle])
        second = SkillRegistry()

        assert first.has("build")
        assert not second.has("build")

    def test_no_mutation_api(self, registry: SkillRegistry) -> None:
        """Test the registry exposes no way to add or remove bundles."""
        assert not hasattr(registry, "register")
        assert not hasattr(registry, "deregister")
        with pytest.raises(TypeError):
            registry._skills["x"] = None  # type: ignore[index]
