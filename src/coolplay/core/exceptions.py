from __future__ import annotations

from typing import Any, Dict, Mapping


class CoolplayError(Exception):
    """Base exception for coolplay."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class ConfigError(CoolplayError, ValueError):
    """Raised when configuration cannot be loaded or fails validation."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        CoolplayError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class WorkspaceError(CoolplayError, RuntimeError):
    """Raised when the workspace root cannot be resolved."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        CoolplayError.__init__(self, message, context=context)
        RuntimeError.__init__(self, message)


class StoreError(CoolplayError):
    """Raised when a metadata store rejects an operation."""


class NoActiveFileError(StoreError):
    """Raised when an operation needs an active file and none is set."""


class RuleNotFoundError(StoreError, KeyError):
    """Raised when a rule id is not known to the rules store."""

    def __init__(self, rule_id: str) -> None:
        StoreError.__init__(self, f"Rule not found: {rule_id}", context={"rule_id": rule_id})
        KeyError.__init__(self, rule_id)

    def __str__(self) -> str:
        return f"Rule not found: {self.context['rule_id']}"


class MarkerError(CoolplayError, ValueError):
    """Raised for invalid marker arguments (e.g. a tag outside the pattern table)."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        CoolplayError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class MarkerToggleError(CoolplayError):
    """Raised when a marker toggle cannot read or persist its source file."""

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        line: int | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        ctx = dict(context or {})
        if path:
            ctx["path"] = path
        if line is not None:
            ctx["line"] = line
        super().__init__(message, context=ctx)


__all__ = [
    "CoolplayError",
    "ConfigError",
    "WorkspaceError",
    "StoreError",
    "NoActiveFileError",
    "RuleNotFoundError",
    "MarkerError",
    "MarkerToggleError",
]
