"""Tests for bundle validation."""

from __future__ import annotations

from pathlib import Path

from skill_selector.config import DetailDocument, SkillBundle
from skill_selector.validator import validate, validate_bundle


def _bundle(**overrides: object) -> SkillBundle:
    fields: dict[str, object] = {
        "name": "demo",
        "trigger_description": "demo trigger",
        "summary_document": "See [setup](references/setup.md).",
        "detail_documents": (DetailDocument(topic="setup", content="Setup steps."),),
    }
    fields.update(overrides)
    return SkillBundle(**fields)


class TestValidateBundle:
    """Tests for validate_bundle()."""

    def test_valid_bundle(self, build_bundle: SkillBundle) -> None:
        """Test a well-formed bundle passes."""
        result = validate_bundle(build_bundle)

        assert result.valid
        assert result.errors == []

    def test_orphan_detail(self) -> None:
        """Test a detail the summary never references is an error."""
        bundle = _bundle(
            detail_documents=(
                DetailDocument(topic="setup", content="Setup steps."),
                DetailDocument(topic="orphan", content="Nobody links here."),
            )
        )
        result = validate_bundle(bundle)

        assert not result.valid
        assert result.errors == [
            "Detail document 'orphan' is not referenced from the summary document"
        ]

    def test_duplicate_topic(self) -> None:
        """Test a topic used twice is an error."""
        doc = DetailDocument(topic="setup", content="Setup steps.")
        result = validate_bundle(_bundle(detail_documents=(doc, doc)))

        assert not result.valid
        assert any("Duplicate detail topic 'setup'" in e for e in result.errors)

    def test_invalid_name(self) -> None:
        """Test names outside the lowercase-hyphen format are errors."""
        for name in ("Demo", "-demo", "demo-", "demo_skill", "a" * 65, ""):
            result = validate_bundle(_bundle(name=name))
            assert not result.valid, name

    def test_empty_trigger(self) -> None:
        """Test a blank trigger description is an error."""
        result = validate_bundle(_bundle(trigger_description="   "))
        assert "Trigger description must not be empty" in result.errors

    def test_empty_summary(self) -> None:
        """Test a blank summary is an error (and orphans every detail)."""
        result = validate_bundle(_bundle(summary_document=""))
        assert "Summary document must not be empty" in result.errors

    def test_empty_detail_warns(self) -> None:
        """Test an empty detail document is only a warning."""
        result = validate_bundle(
            _bundle(detail_documents=(DetailDocument(topic="setup", content=" "),))
        )

        assert result.valid
        assert result.warnings == ["Detail document 'setup' is empty"]

    def test_large_summary_warns(self) -> None:
        """Test an oversized summary is only a warning."""
        summary = "See [setup](references/setup.md). " + "x" * 30000
        result = validate_bundle(_bundle(summary_document=summary))

        assert result.valid
        assert len(result.warnings) == 1
        assert "tokens" in result.warnings[0]


class TestValidatePath:
    """Tests for validate() on directories."""

    def test_valid_directory(self, sample_skill_dir: Path) -> None:
        """Test a valid bundle directory passes."""
        result = validate(sample_skill_dir / "build")

        assert result.valid
        assert result.skill_path == sample_skill_dir / "build"

    def test_skill_file_path(self, sample_skill_dir: Path) -> None:
        """Test passing the SKILL.md file resolves its directory."""
        result = validate(sample_skill_dir / "build" / "SKILL.md")
        assert result.skill_path == sample_skill_dir / "build"

    def test_missing_skill_file(self, tmp_path: Path) -> None:
        """Test a directory without SKILL.md is reported, not raised."""
        empty = tmp_path / "empty"
        empty.mkdir()
        result = validate(empty)

        assert not result.valid
        assert "not found" in result.errors[0]

    def test_orphan_on_disk(self, tmp_path: Path, skill_writer) -> None:
        """Test a reference file the summary never links to is reported."""
        skill_dir = skill_writer(
            tmp_path,
            "demo",
            body="# Demo\n\nNo links here.\n",
            references={"orphan": "# Orphan\n"},
        )
        result = validate(skill_dir)

        assert not result.valid
        assert "'orphan' is not referenced" in result.errors[0]
