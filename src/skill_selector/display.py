"""Rich rendering of a session's loaded documentation."""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from skill_selector.config import LoadedContext
from skill_selector.registry import SkillRegistry
from skill_selector.session import SkillSession


def render_context(
    source: SkillSession | LoadedContext,
    registry: SkillRegistry | None = None,
    *,
    console: Console | None = None,
) -> str:
    """Print a table of active bundles and their loaded details.

    Args:
        source: A session, or a bare context together with its registry.
        registry: Registry for a bare context; taken from the session otherwise.
        console: Optional Rich Console; its width is reused for output.

    Returns:
        The rendered text captured from the console.
    """
    if isinstance(source, SkillSession):
        context = source.context
        registry = registry or source.registry
    else:
        context = source

    console = _ensure_console(console)

    if not context.active_bundles:
        console.print(Panel("No skills loaded", title="Loaded Skills", expand=False))
        return console.export_text()

    table = Table(title="Loaded Skills")
    table.add_column("Skill", style="bold cyan")
    table.add_column("Trigger")
    table.add_column("Details", style="green")
    table.add_column("Available", justify="right")

    for name in context.active_bundles:
        bundle = registry.get(name) if registry is not None else None
        loaded = [topic for owner, topic in context.loaded_detail_keys if owner == name]
        table.add_row(
            name,
            bundle.trigger_description if bundle is not None else "",
            ", ".join(loaded) or "-",
            str(len(bundle.detail_documents)) if bundle is not None else "?",
        )

    console.print(table)
    return console.export_text()


def _ensure_console(console: Console | None) -> Console:
    """Return a recording console sharing the width of ``console``."""
    if console is not None:
        return Console(record=True, width=console.width)
    return Console(record=True)
