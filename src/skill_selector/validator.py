"""Bundle validation.

Checks the invariants a registry relies on: well-formed unique names,
non-empty triggers, unique topics, and no orphan detail documents.
"""

from __future__ import annotations

import re
from collections import Counter
from pathlib import Path

from skill_selector.config import SkillBundle, ValidationResult
from skill_selector.errors import SkillError

# Name format: lowercase alphanumeric + hyphens, max 64 chars
_NAME_PATTERN = re.compile(r"^[a-z0-9]([a-z0-9-]*[a-z0-9])?$")
_NAME_MAX_LENGTH = 64

# Summaries past this many estimated tokens (chars / 4) get a warning.
_LARGE_SUMMARY_TOKEN_THRESHOLD = 5000


def validate_bundle(bundle: SkillBundle) -> ValidationResult:
    """Validate an in-memory bundle.

    Does not raise; all issues are returned as errors and warnings.

    Args:
        bundle: Bundle to check.

    Returns:
        ValidationResult with valid flag, errors, and warnings.
    """
    errors: list[str] = []
    warnings: list[str] = []

    name = bundle.name
    if not name:
        errors.append("Field 'name' must not be empty")
    elif len(name) > _NAME_MAX_LENGTH:
        errors.append(
            f"Field 'name' exceeds maximum length of {_NAME_MAX_LENGTH} characters "
            f"(got {len(name)})"
        )
    elif not _NAME_PATTERN.match(name):
        errors.append(
            f"Field 'name' must be lowercase alphanumeric with hyphens "
            f"(pattern: {_NAME_PATTERN.pattern}), got '{name}'"
        )

    if not bundle.trigger_description.strip():
        errors.append("Trigger description must not be empty")

    if not bundle.summary_document.strip():
        errors.append("Summary document must not be empty")
    elif len(bundle.summary_document) // 4 > _LARGE_SUMMARY_TOKEN_THRESHOLD:
        warnings.append(
            f"Summary is approximately {len(bundle.summary_document) // 4} tokens "
            f"(recommended: <{_LARGE_SUMMARY_TOKEN_THRESHOLD}); consider moving "
            "material into detail documents"
        )

    counts = Counter(bundle.topics)
    for topic, count in counts.items():
        if not topic:
            errors.append("Detail document topic must not be empty")
        elif count > 1:
            errors.append(f"Duplicate detail topic '{topic}' ({count} occurrences)")

    referenced = bundle.cross_references()
    for topic in counts:
        if topic and topic not in referenced:
            errors.append(
                f"Detail document '{topic}' is not referenced from the summary document"
            )

    for doc in bundle.detail_documents:
        if not doc.content.strip():
            warnings.append(f"Detail document '{doc.topic}' is empty")

    return ValidationResult(
        valid=len(errors) == 0,
        errors=errors,
        warnings=warnings,
        skill_path=bundle.path,
    )


def validate(path: Path) -> ValidationResult:
    """Validate a bundle directory or SKILL.md file.

    Loads the bundle from disk and runs ``validate_bundle`` on it. Load
    failures are reported as errors rather than raised.

    Args:
        path: Path to a bundle directory or its SKILL.md file.

    Returns:
        ValidationResult with valid flag, errors, warnings, and skill_path.
    """
    from skill_selector.loader import load_bundle

    skill_dir = path if path.is_dir() else path.parent

    try:
        bundle = load_bundle(path)
    except SkillError as exc:
        return ValidationResult(valid=False, errors=[exc.message], skill_path=skill_dir)

    result = validate_bundle(bundle)
    result.skill_path = skill_dir
    return result
