"""Skill selector exceptions."""

from __future__ import annotations

from pathlib import Path


class SkillError(Exception):
    """Base exception for all skill selector errors.

    All custom exceptions in the package inherit from this class, allowing
    hosts to catch every selector error with a single handler.

    Attributes:
        message: Human-readable error message.
    """

    def __init__(self, message: str) -> None:
        """Initialize the error.

        Args:
            message: Human-readable error message.
        """
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return f"{type(self).__name__}({self.message!r})"


class SkillNotFoundError(SkillError):
    """Raised when a skill bundle cannot be found or is not usable.

    Covers unknown bundle names, missing SKILL.md files, and detail
    lookups against a bundle that is not active in the session.

    Attributes:
        name: Bundle name that was not found.
        path: Filesystem path or logical location that was checked.
        reason: Optional explanation appended to the message.
    """

    def __init__(self, name: str, path: str | Path = "<registry>", reason: str = "") -> None:
        """Initialize the error.

        Args:
            name: Bundle name that was not found.
            path: Filesystem path or logical location that was checked.
            reason: Optional explanation appended to the message.
        """
        self.name = name
        self.path = Path(path)
        self.reason = reason
        suffix = f": {reason}" if reason else ""
        SkillError.__init__(self, f"Skill '{name}' not found at {self.path}{suffix}")

    def __reduce__(self) -> tuple:
        """Support pickling by returning constructor arguments."""
        return (type(self), (self.name, str(self.path), self.reason))

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return (
            f"{type(self).__name__}(name={self.name!r}, "
            f"path={str(self.path)!r}, reason={self.reason!r})"
        )


class DetailNotFoundError(SkillNotFoundError):
    """Raised when a topic does not exist within a bundle.

    Attributes:
        name: Bundle name that was searched.
        topic: Topic label that was requested.
    """

    def __init__(self, name: str, topic: str) -> None:
        """Initialize the error.

        Args:
            name: Bundle name that was searched.
            topic: Topic label that was requested.
        """
        self.name = name
        self.topic = topic
        self.path = Path("<registry>")
        self.reason = f"no detail document '{topic}'"
        SkillError.__init__(self, f"Detail '{topic}' not found in skill '{name}'")

    def __reduce__(self) -> tuple:
        """Support pickling by returning constructor arguments."""
        return (type(self), (self.name, self.topic))

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return f"{type(self).__name__}(name={self.name!r}, topic={self.topic!r})"


class SkillParseError(SkillError):
    """Raised when a bundle's frontmatter cannot be parsed.

    Covers missing ``---`` delimiters, YAML syntax errors and frontmatter
    that is not a mapping.

    Attributes:
        name: Bundle name whose frontmatter failed to parse.
        path: Filesystem path of the summary document.
        detail: Description of the parse error.
        line: 1-based frontmatter line of a YAML syntax error, if known.
    """

    def __init__(
        self,
        name: str,
        path: str | Path,
        detail: str,
        line: int | None = None,
    ) -> None:
        """Initialize the error.

        Args:
            name: Bundle name whose frontmatter failed to parse.
            path: Filesystem path of the summary document.
            detail: Description of the parse error.
            line: 1-based frontmatter line of a YAML syntax error, if known.
        """
        self.name = name
        self.path = Path(path)
        self.detail = detail
        self.line = line
        where = f"{self.path}, line {line}" if line is not None else str(self.path)
        super().__init__(f"Malformed frontmatter in bundle '{name}' ({where}): {detail}")

    def __reduce__(self) -> tuple:
        """Support pickling by returning constructor arguments."""
        return (type(self), (self.name, str(self.path), self.detail, self.line))

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return (
            f"{type(self).__name__}(name={self.name!r}, "
            f"path={str(self.path)!r}, detail={self.detail!r}, line={self.line!r})"
        )


class SkillValidationError(SkillError):
    """Raised when a bundle definition breaks a registry invariant.

    Orphan detail documents, malformed names, empty triggers and duplicate
    topics all surface here, at load time rather than request time.

    Attributes:
        name: Bundle name that failed validation.
        errors: List of validation error messages.
        path: Filesystem path of the bundle, if available.
    """

    def __init__(
        self,
        name: str,
        errors: list[str],
        path: str | Path | None = None,
    ) -> None:
        """Initialize the error.

        Args:
            name: Bundle name that failed validation.
            errors: List of validation error messages.
            path: Filesystem path of the bundle, if available.
        """
        self.name = name
        self.errors = list(errors)
        self.path = Path(path) if path is not None else None
        error_list = "; ".join(errors)
        source = f" ({self.path})" if self.path else ""
        count = len(self.errors)
        super().__init__(
            f"Bundle '{name}'{source} cannot be registered, "
            f"{count} problem{'s' if count != 1 else ''}: {error_list}"
        )

    def __reduce__(self) -> tuple:
        """Support pickling by returning constructor arguments."""
        return (type(self), (self.name, self.errors, str(self.path) if self.path else None))

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return (
            f"{type(self).__name__}(name={self.name!r}, "
            f"errors={self.errors!r}, path={str(self.path) if self.path else None!r})"
        )


class SkillLoadError(SkillError):
    """Raised on permission denied or disk errors while reading a bundle.

    Attributes:
        name: Bundle name that failed to load.
        path: Filesystem path that could not be read.
        cause: Original exception that caused the load failure.
        topic: Detail topic being read, or ``None`` for the summary document.
    """

    def __init__(
        self,
        name: str,
        path: str | Path,
        cause: Exception | None = None,
        topic: str | None = None,
    ) -> None:
        """Initialize the error.

        Args:
            name: Bundle name that failed to load.
            path: Filesystem path that could not be read.
            cause: Original exception that caused the load failure.
            topic: Detail topic being read, or ``None`` for the summary.
        """
        self.name = name
        self.path = Path(path)
        self.cause = cause
        self.topic = topic
        document = f"detail '{topic}'" if topic is not None else "summary"
        cause_str = f" ({cause})" if cause else ""
        super().__init__(
            f"Could not read {document} of bundle '{name}' from {self.path}{cause_str}"
        )

    def __reduce__(self) -> tuple:
        """Support pickling by returning constructor arguments."""
        return (_rebuild_skill_load_error, (self.name, str(self.path), self.cause, self.topic))

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return (
            f"{type(self).__name__}(name={self.name!r}, path={str(self.path)!r}, "
            f"cause={self.cause!r}, topic={self.topic!r})"
        )


class SkillConflictError(SkillError):
    """Raised when two bundles share a name.

    Attributes:
        name: Bundle name that has duplicates.
        paths: Source locations of the duplicates.
        scope: Where the clash was found, a registry or the skills directories.
    """

    def __init__(
        self,
        name: str,
        paths: list[str | Path],
        scope: str = "registry",
    ) -> None:
        """Initialize the error.

        Args:
            name: Bundle name that has duplicates.
            paths: Source locations of the duplicates.
            scope: Where the clash was found.
        """
        self.name = name
        self.paths = [Path(p) for p in paths]
        self.scope = scope
        path_list = ", ".join(str(p) for p in self.paths)
        super().__init__(f"Bundle name '{name}' is not unique in the {scope}: {path_list}")

    def __reduce__(self) -> tuple:
        """Support pickling by returning constructor arguments."""
        return (type(self), (self.name, [str(p) for p in self.paths], self.scope))

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        path_strs = [str(p) for p in self.paths]
        return (
            f"{type(self).__name__}(name={self.name!r}, paths={path_strs!r}, "
            f"scope={self.scope!r})"
        )


def _rebuild_skill_load_error(
    name: str,
    path: str,
    cause: Exception | None,
    topic: str | None = None,
) -> SkillLoadError:
    """Rebuild a SkillLoadError from pickled arguments."""
    return SkillLoadError(name, path, cause=cause, topic=topic)
