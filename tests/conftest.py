"""Shared test fixtures and configuration for skill-selector tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from skill_selector.config import DetailDocument, SkillBundle
from skill_selector.registry import SkillRegistry

# ---------------------------------------------------------------------------
# In-memory bundles
# ---------------------------------------------------------------------------

BUILD_SUMMARY = """\
# Build

Packaging guidance for reproducible builds.

- Writing derivations: [Nix expressions](references/nix-expressions.md)
- Images: see `references/containers.md`
"""

SHARING_SUMMARY = """\
# Sharing

Compose environments and share them. Publishing is covered in
[publishing](references/publishing.md "Publishing guide").
"""


@pytest.fixture
def build_bundle() -> SkillBundle:
    """Bundle about packaging and build steps with two detail documents."""
    return SkillBundle(
        name="build",
        trigger_description="packaging and build steps",
        summary_document=BUILD_SUMMARY,
        detail_documents=(
            DetailDocument(
                topic="nix-expressions",
                content="# Nix expressions\n\nWrite a default.nix.",
                load_hint="writing nix expressions and derivations",
            ),
            DetailDocument(
                topic="containers",
                content="# Containers\n\nUse the container builder.",
                load_hint="building OCI container images",
            ),
        ),
    )


@pytest.fixture
def sharing_bundle() -> SkillBundle:
    """Bundle about composing and publishing environments."""
    return SkillBundle(
        name="sharing",
        trigger_description="composing and publishing environments",
        summary_document=SHARING_SUMMARY,
        detail_documents=(
            DetailDocument(
                topic="publishing",
                content="# Publishing\n\nPush the environment.",
                load_hint="push environments to a registry",
            ),
        ),
    )


@pytest.fixture
def registry(build_bundle: SkillBundle, sharing_bundle: SkillBundle) -> SkillRegistry:
    """Registry holding ``build`` then ``sharing``."""
    return SkillRegistry([build_bundle, sharing_bundle])


# ---------------------------------------------------------------------------
# On-disk bundles
# ---------------------------------------------------------------------------


def write_skill(
    base_dir: Path,
    name: str,
    description: str = "A sample skill",
    body: str | None = None,
    extra_frontmatter: str = "",
    references: dict[str, str] | None = None,
) -> Path:
    """Create ``base_dir/name/SKILL.md`` plus optional reference files.

    Returns:
        The bundle directory.
    """
    skill_dir = base_dir / name
    skill_dir.mkdir(parents=True, exist_ok=True)
    references = references or {}

    if body is None:
        links = "\n".join(f"- [{topic}](references/{topic}.md)" for topic in references)
        body = f"# {name}\n\nGuide for {name}.\n\n{links}\n"

    (skill_dir / "SKILL.md").write_text(
        f"---\nname: {name}\ndescription: {description}\n{extra_frontmatter}---\n\n{body}",
        encoding="utf-8",
    )

    if references:
        refs_dir = skill_dir / "references"
        refs_dir.mkdir(exist_ok=True)
        for topic, content in references.items():
            (refs_dir / f"{topic}.md").write_text(content, encoding="utf-8")

    return skill_dir


@pytest.fixture
def sample_skill_dir(tmp_path: Path) -> Path:
    """Create a skills directory with two valid bundles.

    Structure::

        skills/
            build/
                SKILL.md
                references/
                    containers.md
                    nix-expressions.md
            sharing/
                SKILL.md
                references/
                    publishing.md

    Returns:
        Path to the ``skills/`` directory.
    """
    skills_dir = tmp_path / "skills"
    write_skill(
        skills_dir,
        "build",
        description="packaging and build steps",
        extra_frontmatter=(
            "keywords:\n  - derivation\n"
            "details:\n  nix-expressions: writing nix expressions and derivations\n"
        ),
        references={
            "nix-expressions": "# Nix expressions\n\nWrite a default.nix.\n",
            "containers": "# Building OCI container images\n\nUse the builder.\n",
        },
    )
    write_skill(
        skills_dir,
        "sharing",
        description="composing and publishing environments",
        references={"publishing": "# Push environments to a registry\n"},
    )
    return skills_dir


@pytest.fixture
def skill_writer():
    """Factory fixture exposing ``write_skill`` to tests.

    Usage::

        def test_something(tmp_path, skill_writer):
            skill_dir = skill_writer(tmp_path, "my-skill")
    """
    return write_skill
