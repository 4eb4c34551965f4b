"""SKILL.md bundle loader and parser.

A bundle on disk is a directory holding a ``SKILL.md`` file (YAML
frontmatter plus the summary document) and an optional ``references/``
directory of Markdown detail documents::

    build/
        SKILL.md
        references/
            nix-expressions.md
            containers.md

Frontmatter fields:
- ``name`` (required): bundle name, must match the directory name.
- ``description`` (required): trigger description used for matching.
- ``keywords``: extra trigger terms.
- ``details``: mapping of topic to load hint; also fixes detail order.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from skill_selector.config import DetailDocument, SkillBundle
from skill_selector.errors import (
    SkillLoadError,
    SkillNotFoundError,
    SkillParseError,
    SkillValidationError,
)

logger = logging.getLogger(__name__)

SKILL_FILE = "SKILL.md"
REFERENCES_DIR = "references"

# Required frontmatter fields.
_REQUIRED_FIELDS = ("name", "description")


def _split_frontmatter(content: str, path: Path) -> tuple[str, str]:
    """Split SKILL.md content into frontmatter YAML and markdown body.

    Expects content beginning with ``---`` on the first line and a closing
    ``---`` delimiter. Only the first pair of markers is used, so horizontal
    rules (``---``) in the body are preserved.

    Args:
        content: Raw file content.
        path: File path (for error messages).

    Returns:
        Tuple of (frontmatter_yaml, body). The body is stripped and may be
        empty.

    Raises:
        SkillParseError: If the ``---`` delimiters are missing or malformed.
    """
    skill_name = path.parent.name or path.stem

    stripped = content.lstrip()
    if not stripped.startswith("---"):
        raise SkillParseError(
            name=skill_name,
            path=path,
            detail="Missing opening '---' frontmatter delimiter",
        )

    lines = stripped.split("\n")[1:]
    closing_idx = next((i for i, line in enumerate(lines) if line.strip() == "---"), None)

    if closing_idx is None:
        raise SkillParseError(
            name=skill_name,
            path=path,
            detail="Missing closing '---' frontmatter delimiter",
        )

    frontmatter_yaml = "\n".join(lines[:closing_idx])
    body = "\n".join(lines[closing_idx + 1 :]).strip()
    return frontmatter_yaml, body


def _parse_yaml(yaml_str: str, path: Path) -> dict[str, Any]:
    """Parse YAML frontmatter string into a dictionary.

    Args:
        yaml_str: Raw YAML string extracted from frontmatter.
        path: File path (for error messages).

    Returns:
        Parsed dictionary of frontmatter fields.

    Raises:
        SkillParseError: If the YAML is syntactically invalid or not a mapping.
    """
    skill_name = path.parent.name or path.stem

    try:
        data = yaml.safe_load(yaml_str)
    except yaml.YAMLError as exc:
        mark = getattr(exc, "problem_mark", None)
        if mark is None:
            raise SkillParseError(name=skill_name, path=path, detail=str(exc)) from exc
        problem = getattr(exc, "problem", exc)
        raise SkillParseError(
            name=skill_name,
            path=path,
            detail=f"YAML syntax error at column {mark.column + 1}: {problem}",
            line=mark.line + 1,
        ) from exc

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise SkillParseError(
            name=skill_name,
            path=path,
            detail="Frontmatter must be a YAML mapping, got " + type(data).__name__,
        )

    return data


def _validate_frontmatter(data: dict[str, Any], path: Path) -> None:
    """Check required fields, field types, and the name-directory match.

    Raises:
        SkillValidationError: If any check fails.
    """
    errors: list[str] = []

    for field_name in _REQUIRED_FIELDS:
        if not data.get(field_name):
            errors.append(f"Missing required field: {field_name}")

    for field_name in _REQUIRED_FIELDS:
        value = data.get(field_name)
        if value and not isinstance(value, str):
            errors.append(f"Field '{field_name}' must be a string, got {type(value).__name__}")

    keywords = data.get("keywords")
    if keywords is not None and (
        not isinstance(keywords, list) or not all(isinstance(k, str) for k in keywords)
    ):
        errors.append("Field 'keywords' must be a list of strings")

    details = data.get("details")
    if details is not None and (
        not isinstance(details, dict)
        or not all(isinstance(k, str) and isinstance(v, str | None) for k, v in details.items())
    ):
        errors.append("Field 'details' must be a mapping of topic to load hint")

    name = data.get("name")
    parent_dir_name = path.parent.name
    if isinstance(name, str) and parent_dir_name and name != parent_dir_name:
        errors.append(f"Name '{name}' does not match parent directory '{parent_dir_name}'")

    if errors:
        error_name = str(name) if name else parent_dir_name or "unknown"
        raise SkillValidationError(name=error_name, errors=errors, path=path)


def _read_file(path: Path, skill_name: str, topic: str | None = None) -> str:
    """Read a bundle file, handling not-found and permission errors.

    Raises:
        SkillNotFoundError: If the file does not exist.
        SkillLoadError: On permission denied or other IO errors.
    """
    if not path.exists():
        raise SkillNotFoundError(name=skill_name, path=path)

    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SkillLoadError(name=skill_name, path=path, cause=exc, topic=topic) from exc


def _default_hint(content: str) -> str:
    """Use the first heading, or failing that the first non-empty line."""
    lines = [line.strip() for line in content.splitlines() if line.strip()]
    for text in lines:
        if text.startswith("#"):
            return text.lstrip("#").strip()
    return lines[0] if lines else ""


def _load_details(
    skill_dir: Path,
    name: str,
    hints: dict[str, str | None],
    skill_file: Path,
) -> tuple[DetailDocument, ...]:
    """Read ``references/*.md`` into detail documents.

    Topics listed in the ``details`` frontmatter come first, in the order
    given; remaining files follow sorted by name.

    Raises:
        SkillValidationError: If ``details`` names a topic with no file.
    """
    refs_dir = skill_dir / REFERENCES_DIR
    files: dict[str, Path] = {}
    if refs_dir.is_dir():
        files = {p.stem: p for p in sorted(refs_dir.glob("*.md")) if p.is_file()}

    missing = [topic for topic in hints if topic not in files]
    if missing:
        raise SkillValidationError(
            name=name,
            errors=[f"Detail '{topic}' has no file {REFERENCES_DIR}/{topic}.md" for topic in missing],
            path=skill_file,
        )

    ordered = list(hints) + [topic for topic in files if topic not in hints]

    documents: list[DetailDocument] = []
    for topic in ordered:
        file_path = files[topic]
        content = _read_file(file_path, name, topic)
        documents.append(
            DetailDocument(
                topic=topic,
                content=content,
                load_hint=hints.get(topic) or _default_hint(content),
                path=file_path,
            )
        )
    return tuple(documents)


def load_bundle(path: str | Path) -> SkillBundle:
    """Load a bundle from its directory or SKILL.md file.

    Only the file format is checked here. Registry invariants such as the
    orphan-document rule are enforced by ``validate_bundle`` when the
    registry is built.

    Args:
        path: Bundle directory or path to its SKILL.md file.

    Returns:
        The loaded ``SkillBundle``.

    Raises:
        SkillNotFoundError: If SKILL.md does not exist.
        SkillLoadError: On permission denied or other IO errors.
        SkillParseError: If frontmatter delimiters or YAML syntax is invalid.
        SkillValidationError: If frontmatter fields are missing or invalid.
    """
    path = Path(path)
    if path.is_dir():
        skill_dir = path
        skill_file = path / SKILL_FILE
    else:
        skill_dir = path.parent
        skill_file = path

    content = _read_file(skill_file, skill_dir.name)
    frontmatter_yaml, body = _split_frontmatter(content, skill_file)
    data = _parse_yaml(frontmatter_yaml, skill_file)
    _validate_frontmatter(data, skill_file)

    name = data["name"]
    details = _load_details(skill_dir, name, data.get("details") or {}, skill_file)

    logger.debug("Loaded skill '%s' with %d detail document(s)", name, len(details))

    return SkillBundle(
        name=name,
        trigger_description=data["description"],
        summary_document=body,
        detail_documents=details,
        keywords=tuple(data.get("keywords") or ()),
        path=skill_dir,
    )
