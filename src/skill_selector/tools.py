"""pydantic-ai tools exposing a session to an agent host.

The tool functions never raise selector errors. A missing bundle or topic
is reported back to the model as "no specialized guidance" so the run can
continue without it.

Example::

    from pydantic_ai import Agent

    session = SkillSession(registry)
    agent = Agent("openai:gpt-4o", tools=build_tools(session))
"""

from __future__ import annotations

import logging

from pydantic_ai import Tool

from skill_selector.errors import SkillNotFoundError
from skill_selector.session import SkillSession

logger = logging.getLogger(__name__)

NO_GUIDANCE = "No specialized guidance available"


def _describe_skills(session: SkillSession) -> str:
    lines = [
        f"- {bundle.name}: {bundle.trigger_description}" for bundle in session.registry
    ]
    return "\n".join(lines) if lines else "(no skills registered)"


def build_tools(session: SkillSession) -> list[Tool]:
    """Create ``match_skills``, ``activate_skill`` and ``load_skill_detail`` tools.

    Args:
        session: Session whose context the tools read and extend.

    Returns:
        Tools ready to pass to a pydantic-ai ``Agent``.
    """

    def match_skills(task: str) -> str:
        """Find the skills relevant to a task description."""
        names = session.match(task)
        if not names:
            return f"{NO_GUIDANCE} for this task."
        return "Relevant skills (best first): " + ", ".join(names)

    def activate_skill(name: str) -> str:
        """Load a skill's guide into the conversation."""
        try:
            session.activate(name)
        except SkillNotFoundError as exc:
            logger.warning("Model requested unknown skill: %s", exc.message)
            return f"{NO_GUIDANCE}: {exc.message}"

        bundle = session.registry.require(name)
        content = bundle.summary_document
        if bundle.topics:
            content += "\n\nDetail topics: " + ", ".join(bundle.topics)
        return content

    def load_skill_detail(name: str, topic: str) -> str:
        """Load one detail document of an activated skill."""
        try:
            session.load_detail(name, topic)
        except SkillNotFoundError as exc:
            logger.warning("Model requested unavailable detail: %s", exc.message)
            return f"{NO_GUIDANCE}: {exc.message}"

        doc = session.registry.require(name).detail(topic)
        return doc.content if doc is not None else ""

    return [
        Tool(
            match_skills,
            name="match_skills",
            description="Find the skills relevant to a task description.",
        ),
        Tool(
            activate_skill,
            name="activate_skill",
            description=(
                "Load a skill's guide into the conversation. Available skills:\n"
                + _describe_skills(session)
            ),
        ),
        Tool(
            load_skill_detail,
            name="load_skill_detail",
            description=(
                "Load one detail document of an activated skill. "
                "Call activate_skill first."
            ),
        ),
    ]
