"""Representation of a GitSync resource.

A GitSync mirrors the resources found at a path in a Git repository into a
destination cluster and namespace. Objects are parsed from the Kubernetes
documents that declare them, and their status may be serialized back in the
same shape.
"""

from dataclasses import dataclass, field
import logging
from typing import Any, ClassVar

from mashumaro import field_options
from mashumaro.config import BaseConfig
from mashumaro.exceptions import InvalidFieldValue, MissingField
import yaml

from .base import BaseManifest
from .exceptions import InputException
from .status import GitSyncStatus

__all__ = [
    "RepositoryPath",
    "Destination",
    "GitSyncSpec",
    "GitSync",
    "parse_gitsync_status",
]

_LOGGER = logging.getLogger(__name__)


GITSYNC_KIND = "GitSync"


def _get_str(doc: dict[str, Any], key: str, kind: str) -> str:
    """Return a required string field from a document."""
    if (value := doc.get(key)) is None:
        raise InputException(f"Invalid {kind} missing {key}: {doc}")
    if not isinstance(value, str):
        raise InputException(f"Invalid {kind} expected string {key}: {doc}")
    return value


@dataclass
class RepositoryPath(BaseManifest):
    """A path within a Git repository."""

    name: str
    """A unique name for the path."""

    repo_url: str = field(metadata=field_options(alias="repoUrl"))
    """The URL of the repository."""

    target_revision: str = field(metadata=field_options(alias="targetRevision"))
    """The branch, tag or commit hash to sync to."""

    path: str = ""
    """The path from the root of the repository to the resources.

    An empty path means the root directory. May be a file or a directory, and
    every yaml file within it is synced.
    """

    @classmethod
    def parse_doc(cls, doc: dict[str, Any]) -> "RepositoryPath":
        """Parse a RepositoryPath from the spec of a GitSync."""
        return cls(
            name=_get_str(doc, "name", "repositoryPath"),
            repo_url=_get_str(doc, "repoUrl", "repositoryPath"),
            path=doc.get("path") or "",
            target_revision=_get_str(doc, "targetRevision", "repositoryPath"),
        )


@dataclass
class Destination(BaseManifest):
    """The cluster to sync to."""

    cluster: str
    """The name of the destination cluster."""

    namespace: str = ""
    """The namespace for resources that do not specify their own.

    Empty for resources at the cluster level.
    """

    @classmethod
    def parse_doc(cls, doc: dict[str, Any]) -> "Destination":
        """Parse a Destination from the spec of a GitSync."""
        return cls(
            cluster=_get_str(doc, "cluster", "destination"),
            namespace=doc.get("namespace") or "",
        )

    class Config(BaseConfig):
        omit_none = True
        omit_default = True
        serialize_by_alias = True


@dataclass
class GitSyncSpec(BaseManifest):
    """The desired state of a GitSync."""

    repository_path: RepositoryPath = field(
        metadata=field_options(alias="repositoryPath")
    )
    """The Git repository path to watch."""

    destination: Destination
    """The cluster and namespace to sync to."""

    def contains_cluster_destination(self, cluster: str) -> bool:
        """Return True if the cluster matches the destination."""
        return self.destination.cluster == cluster

    def get_destination_namespace(self, cluster: str) -> str:
        """Return the destination namespace for the cluster, or empty if not found."""
        if self.destination.cluster == cluster:
            return self.destination.namespace
        return ""


@dataclass
class GitSync(BaseManifest):
    """A representation of a GitSync resource."""

    kind: ClassVar[str] = GITSYNC_KIND
    """The kind of the object."""

    name: str
    """The name of the GitSync."""

    namespace: str
    """The namespace that owns the GitSync."""

    spec: GitSyncSpec
    """The desired state."""

    status: GitSyncStatus = field(default_factory=GitSyncStatus)
    """The observed state."""

    @classmethod
    def parse_doc(cls, doc: dict[str, Any]) -> "GitSync":
        """Parse a GitSync from a kubernetes resource object."""
        if not doc.get("apiVersion"):
            raise InputException(f"Invalid object missing apiVersion: {doc}")
        if doc.get("kind") != GITSYNC_KIND:
            raise InputException(f"Invalid object expected kind {GITSYNC_KIND}: {doc}")
        if not (metadata := doc.get("metadata")):
            raise InputException(f"Invalid {cls} missing metadata: {doc}")
        if not (name := metadata.get("name")):
            raise InputException(f"Invalid {cls} missing metadata.name: {doc}")
        if not (namespace := metadata.get("namespace")):
            raise InputException(f"Invalid {cls} missing metadata.namespace: {doc}")
        if not (spec := doc.get("spec")):
            raise InputException(f"Invalid {cls} missing spec: {doc}")
        if not (repository_path := spec.get("repositoryPath")):
            raise InputException(f"Invalid {cls} missing spec.repositoryPath: {doc}")
        if not (destination := spec.get("destination")):
            raise InputException(f"Invalid {cls} missing spec.destination: {doc}")
        if (status := doc.get("status")) is None:
            status = {}
        return cls(
            name=name,
            namespace=namespace,
            spec=GitSyncSpec(
                repository_path=RepositoryPath.parse_doc(repository_path),
                destination=Destination.parse_doc(destination),
            ),
            status=parse_gitsync_status(status),
        )

    @classmethod
    def parse_yaml(cls, content: str) -> "GitSync":
        """Parse a GitSync from a yaml document."""
        doc = yaml.safe_load(content)
        if not isinstance(doc, dict):
            raise InputException(f"Invalid {cls} expected a yaml object: {content}")
        return cls.parse_doc(doc)

    @property
    def namespaced_name(self) -> str:
        """Return the namespace and name concatenated as an id."""
        return f"{self.namespace}/{self.name}"

    def __str__(self) -> str:
        """Return the general purpose string representation."""
        return self.namespaced_name


def parse_gitsync_status(doc: dict[str, Any]) -> GitSyncStatus:
    """Parse a serialized GitSyncStatus, e.g. to resume from persisted state."""
    if not isinstance(doc, dict):
        raise InputException(f"Invalid status expected an object: {doc}")
    try:
        status = GitSyncStatus.from_dict(doc)
    except (MissingField, InvalidFieldValue) as err:
        raise InputException(f"Invalid status: {err}") from err
    condition_types = [condition.type for condition in status.conditions]
    if len(set(condition_types)) != len(condition_types):
        raise InputException(
            f"Invalid status with duplicate condition types: {condition_types}"
        )
    status.conditions.sort(key=lambda c: c.type)
    _LOGGER.debug(
        "Parsed status in phase '%s' with %d conditions",
        status.phase,
        len(status.conditions),
    )
    return status
