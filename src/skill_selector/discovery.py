"""Bundle discovery from configured directories.

Scans each configured directory for ``*/SKILL.md`` bundles, in order, and
builds a validated registry from the result. Directories listed first have
registration priority, which is also the tie-break order for matching.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from skill_selector.config import SkillBundle
from skill_selector.errors import SkillConflictError, SkillError
from skill_selector.loader import SKILL_FILE, load_bundle
from skill_selector.registry import SkillRegistry
from skill_selector.settings import SelectorSettings

logger = logging.getLogger(__name__)


def scan_directory(path: Path) -> list[SkillBundle]:
    """Load every bundle found directly under ``path``.

    Individual load failures are logged and skipped without aborting.

    Args:
        path: Directory to scan for ``*/SKILL.md`` files.

    Returns:
        Bundles found in the directory, sorted by directory name.
    """
    bundles: list[SkillBundle] = []

    if not path.exists():
        logger.debug("Skills directory does not exist, skipping: %s", path)
        return bundles

    if not path.is_dir():
        logger.warning("Skills path is not a directory, skipping: %s", path)
        return bundles

    try:
        skill_files = sorted(path.glob(f"*/{SKILL_FILE}"))
    except PermissionError:
        logger.warning("Permission denied scanning directory: %s", path)
        return bundles

    for skill_md in skill_files:
        try:
            bundles.append(load_bundle(skill_md))
        except SkillError as exc:
            logger.error("Failed to load skill from %s: %s", skill_md, exc)

    return bundles


def discover_bundles(dirs: Iterable[Path]) -> list[SkillBundle]:
    """Discover bundles across several directories.

    Args:
        dirs: Directories to scan, in priority order.

    Returns:
        All discovered bundles, in scan order.

    Raises:
        SkillConflictError: If two directories provide the same bundle name.
    """
    result: list[SkillBundle] = []
    seen: dict[str, SkillBundle] = {}

    for directory in dirs:
        for bundle in scan_directory(Path(directory)):
            if bundle.name in seen:
                raise SkillConflictError(
                    name=bundle.name,
                    paths=[str(seen[bundle.name].path), str(bundle.path)],
                    scope="skills directories",
                )
            seen[bundle.name] = bundle
            result.append(bundle)

    return result


def load_registry(settings: SelectorSettings | None = None) -> SkillRegistry:
    """Build a registry from the directories named in ``settings``.

    Args:
        settings: Selector settings. Loaded from the environment if ``None``.

    Returns:
        A validated registry.

    Raises:
        SkillConflictError: If two bundles share a name.
        SkillValidationError: If a bundle breaks a registry invariant.
    """
    settings = settings or SelectorSettings()
    bundles = discover_bundles(settings.skills_dirs)
    registry = SkillRegistry(bundles)
    logger.info(
        "Loaded %d skill(s) from %d director%s",
        len(registry),
        len(settings.skills_dirs),
        "y" if len(settings.skills_dirs) == 1 else "ies",
    )
    return registry
