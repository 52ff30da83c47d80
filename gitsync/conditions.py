"""Typed status conditions for a resource.

A condition is a named health signal for one aspect of a resource, with a
tri-state status and a reason and message explaining it. A `ConditionSet`
holds at most one condition per type, always sorted by type so the serialized
form is stable across reconciliation passes that observe the same state.

The last transition time of a condition only moves when the condition
actually changes. Re-asserting the same condition is a no-op so that watchers
do not see spurious updates on every pass.
"""

from dataclasses import dataclass, field, replace
import datetime
from enum import StrEnum
import logging
from typing import TYPE_CHECKING

from mashumaro import field_options
from mashumaro.config import BaseConfig

from . import context
from .base import BaseManifest, format_time, parse_time

__all__ = [
    "ConditionStatus",
    "ConditionType",
    "Condition",
    "ConditionSet",
    "CONFIGURED",
]

_LOGGER = logging.getLogger(__name__)


ConditionType = str

# Has the status True when the resource has a valid configuration.
CONFIGURED: ConditionType = "Configured"

REASON_UNKNOWN = "Unknown"
REASON_SUCCESSFUL = "Successful"


class ConditionStatus(StrEnum):
    """Status of a condition."""

    TRUE = "True"
    FALSE = "False"
    UNKNOWN = "Unknown"


@dataclass
class Condition(BaseManifest):
    """An observation of one aspect of the current state of a resource."""

    type: ConditionType
    """The type of condition, unique within a ConditionSet."""

    status: ConditionStatus
    """The status of the condition."""

    reason: str
    """A short machine readable explanation for the status."""

    message: str = ""
    """A human readable message with details about the status."""

    last_transition_time: datetime.datetime | None = field(
        metadata=field_options(
            alias="lastTransitionTime",
            serialize=format_time,
            deserialize=parse_time,
        ),
        default=None,
    )
    """The last time the type, status, reason or message changed."""

    def __str__(self) -> str:
        """Return a short description of the condition."""
        if self.message:
            return f"{self.type}={self.status} ({self.reason}: {self.message})"
        return f"{self.type}={self.status} ({self.reason})"

    class Config(BaseConfig):
        omit_none = True
        serialize_by_alias = True


class ConditionSet:
    """An ordered set of conditions with at most one condition per type.

    Mixed into a status dataclass that declares the `conditions` field, so the
    status controls where the conditions appear when serialized.
    """

    if TYPE_CHECKING:
        conditions: list[Condition]

    def upsert(self, condition: Condition) -> bool:
        """Insert or replace the condition of the same type.

        The existing last transition time is kept when the condition is
        otherwise identical, in which case nothing is changed. Returns True
        when the set was updated.
        """
        conditions: list[Condition] = []
        for existing in self.conditions:
            if existing.type != condition.type:
                conditions.append(existing)
                continue
            condition = replace(
                condition, last_transition_time=existing.last_transition_time
            )
            if condition == existing:
                return False
        condition = replace(condition, last_transition_time=context.now())
        conditions.append(condition)
        conditions.sort(key=lambda c: c.type)
        _LOGGER.debug("Updating condition %s", condition)
        self.conditions = conditions
        return True

    def initialize_conditions(self, *condition_types: ConditionType) -> None:
        """Initialize the conditions to Unknown."""
        for condition_type in condition_types:
            self.upsert(
                Condition(
                    type=condition_type,
                    status=ConditionStatus.UNKNOWN,
                    reason=REASON_UNKNOWN,
                )
            )

    def _mark(
        self,
        condition_type: ConditionType,
        status: ConditionStatus,
        reason: str,
        message: str,
    ) -> bool:
        return self.upsert(
            Condition(
                type=condition_type,
                status=status,
                reason=reason,
                message=message,
            )
        )

    def mark_condition_true(self, condition_type: ConditionType) -> bool:
        """Set the status of the condition type to True."""
        return self._mark(
            condition_type, ConditionStatus.TRUE, REASON_SUCCESSFUL, REASON_SUCCESSFUL
        )

    def mark_condition_false(
        self, condition_type: ConditionType, reason: str, message: str
    ) -> bool:
        """Set the status of the condition type to False."""
        return self._mark(condition_type, ConditionStatus.FALSE, reason, message)

    def mark_condition_unknown(
        self, condition_type: ConditionType, reason: str, message: str
    ) -> bool:
        """Set the status of the condition type to Unknown."""
        return self._mark(condition_type, ConditionStatus.UNKNOWN, reason, message)

    def get_condition(self, condition_type: ConditionType) -> Condition | None:
        """Return the condition of the given type, if present."""
        for condition in self.conditions:
            if condition.type == condition_type:
                return condition
        return None

    def is_condition_true(self, condition_type: ConditionType) -> bool:
        """Return True if the condition of the given type has status True."""
        if (condition := self.get_condition(condition_type)) is None:
            return False
        return condition.status == ConditionStatus.TRUE
