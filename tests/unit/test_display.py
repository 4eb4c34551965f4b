"""Tests for Rich rendering of loaded skills."""

from __future__ import annotations

from rich.console import Console

from skill_selector.config import LoadedContext
from skill_selector.display import render_context
from skill_selector.registry import SkillRegistry
from skill_selector.session import SkillSession
from skill_selector.settings import SelectorSettings


def _console() -> Console:
    return Console(width=120)


class TestRenderContext:
    """Tests for render_context()."""

    def test_empty_session(self, registry: SkillRegistry) -> None:
        """Test an empty session renders a placeholder panel."""
        output = render_context(SkillSession(registry), console=_console())
        assert "No skills loaded" in output

    def test_session_table(self, registry: SkillRegistry) -> None:
        """Test active skills and loaded details appear in the table."""
        session = SkillSession(registry, SelectorSettings(skills_dirs=[]))
        session.handle("I want to containerize and publish my build")

        output = render_context(session, console=_console())

        assert "Loaded Skills" in output
        assert "build" in output
        assert "containers" in output
        assert "publishing" in output

    def test_bare_context_with_registry(self, registry: SkillRegistry) -> None:
        """Test a bare context renders using the given registry."""
        ctx = LoadedContext().with_summary("build", "# Build")

        output = render_context(ctx, registry, console=_console())

        assert "packaging and build steps" in output
        assert "-" in output

    def test_bare_context_without_registry(self) -> None:
        """Test a context renders even without bundle metadata."""
        ctx = LoadedContext().with_summary("build", "# Build")
        output = render_context(ctx, console=_console())

        assert "build" in output
        assert "?" in output
