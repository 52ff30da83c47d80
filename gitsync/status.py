"""Observed status of a GitSync resource.

The status tracks a coarse lifecycle phase alongside the `Configured`
condition. The `mark_*` methods update both together and are the entry points
a reconciler uses at the end of a pass. No transition is terminal: a Failed
resource returns to Running once the reconciler calls `mark_running` again.
"""

from dataclasses import dataclass, field
import datetime
from enum import StrEnum
import logging

from mashumaro import field_options
from mashumaro.config import BaseConfig

from . import context
from .base import BaseManifest, format_time, parse_time
from .conditions import CONFIGURED, Condition, ConditionSet

__all__ = [
    "Phase",
    "CommitStatus",
    "GitSyncStatus",
]

_LOGGER = logging.getLogger(__name__)


class Phase(StrEnum):
    """Lifecycle phase of a GitSync."""

    UNSET = ""
    PENDING = "Pending"
    RUNNING = "Running"
    FAILED = "Failed"
    NOT_APPLICABLE = "NotApplicable"
    """This cluster is not listed as a destination."""


@dataclass
class CommitStatus(BaseManifest):
    """The outcome of the last attempt to sync a Git commit."""

    hash: str
    """Hash of the git commit."""

    synced: bool
    """Whether the sync went through."""

    sync_time: datetime.datetime = field(
        metadata=field_options(
            alias="syncTime",
            serialize=format_time,
            deserialize=parse_time,
        )
    )
    """The last time a sync of this commit was attempted, successful or not."""

    error: str = ""
    """The error that occurred when attempting the sync, if any."""

    class Config(BaseConfig):
        omit_none = True
        omit_default = True
        serialize_by_alias = True


@dataclass
class GitSyncStatus(ConditionSet, BaseManifest):
    """The observed state of a GitSync."""

    phase: Phase = Phase.UNSET
    """The current lifecycle phase."""

    conditions: list[Condition] = field(default_factory=list)
    """The latest observations of the current state, sorted by type."""

    message: str = ""
    """A message describing the phase, set on failure."""

    commit_status: CommitStatus | None = field(
        metadata=field_options(alias="commitStatus"), default=None
    )
    """The last commit processed and its sync status."""

    def set_phase(self, phase: Phase, message: str) -> None:
        """Set the phase and message, regardless of the current phase."""
        if phase != self.phase:
            _LOGGER.debug("Phase changed from '%s' to '%s'", self.phase, phase)
        self.phase = phase
        self.message = message

    def init_conditions(self) -> None:
        """Set the conditions to Unknown and the phase to Pending.

        This resets a Configured condition that is already True or False, so
        it should only be called once when the status is first created.
        """
        self.initialize_conditions(CONFIGURED)
        self.set_phase(Phase.PENDING, "")

    def mark_running(self) -> None:
        """Mark the GitSync as Running."""
        self.mark_condition_true(CONFIGURED)
        self.set_phase(Phase.RUNNING, "")

    def mark_failed(self, reason: str, message: str) -> None:
        """Mark the GitSync as Failed."""
        self.mark_condition_false(CONFIGURED, reason, message)
        self.set_phase(Phase.FAILED, message)

    def mark_not_applicable(self, reason: str, message: str) -> None:
        """Mark the GitSync as not applicable to this cluster."""
        self.mark_condition_false(CONFIGURED, reason, message)
        self.set_phase(Phase.NOT_APPLICABLE, message)

    def record_commit(
        self, commit_hash: str, synced: bool, error: str | None = None
    ) -> CommitStatus:
        """Replace the commit status with the outcome of a sync attempt."""
        self.commit_status = CommitStatus(
            hash=commit_hash,
            synced=synced,
            sync_time=context.now(),
            error=error or "",
        )
        _LOGGER.debug(
            "Recorded commit %s (synced=%s, error=%s)", commit_hash, synced, error
        )
        return self.commit_status

    class Config(BaseConfig):
        omit_none = True
        omit_default = True
        serialize_by_alias = True
