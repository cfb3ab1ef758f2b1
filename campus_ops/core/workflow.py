# campus_ops/core/workflow.py
# One table per entity: {action: {"from": [...], "to": status}}.
#   booking.status = BOOKING_WORKFLOW.target("approve", booking.status)
import logging
from enum import Enum
from typing import Iterable

from campus_ops.core.errors import InvalidStateError

logger = logging.getLogger(__name__)


class Workflow:
    """Lookup over an ``{action: {"from": [...], "to": status}}`` table."""

    def __init__(self, resource: str, transitions: dict[str, dict], terminal: Iterable[Enum] = ()):
        self.resource = resource
        self.transitions = transitions
        self.terminal = frozenset(terminal)

    def allows(self, action: str, current: Enum) -> bool:
        rule = self.transitions.get(action)
        return bool(rule) and current in rule["from"]

    def target(self, action: str, current: Enum) -> Enum:
        """Return the status ``action`` leads to, or raise InvalidStateError."""
        rule = self.transitions.get(action)
        if rule is None:
            raise InvalidStateError(self.resource, current.value, action, "unknown action")
        if not self.allows(action, current):
            logger.warning(
                f"{self.resource} transition refused: {action} from {current.value}",
                extra={"error_code": "INVALID_STATE", "status": current.value},
            )
            reason = "status is final" if current in self.terminal else None
            raise InvalidStateError(self.resource, current.value, action, reason)
        return rule["to"]

    def action_for(self, current: Enum, target: Enum, actions: Iterable[str]) -> str:
        """Find which of ``actions`` moves ``current`` to ``target``.

        Used by status-driven updates, where the caller names the target
        state rather than the action.
        """
        for action in actions:
            rule = self.transitions[action]
            if rule["to"] == target and current in rule["from"]:
                return action
        raise InvalidStateError(
            self.resource, current.value, f"move to {target.value}",
            "status is final" if current in self.terminal else "transition not allowed",
        )

    def edges(self, actions: Iterable[str] | None = None) -> set[tuple[Enum, Enum]]:
        """All (from, to) pairs declared for ``actions`` (default: every action)."""
        names = self.transitions if actions is None else actions
        return {
            (source, self.transitions[name]["to"])
            for name in names
            for source in self.transitions[name]["from"]
        }
