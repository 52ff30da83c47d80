"""Base classes for serializable resource and status objects."""

from dataclasses import dataclass
import datetime
from typing import Any

from mashumaro import DataClassDictMixin
from mashumaro.codecs.yaml import YAMLEncoder
from mashumaro.config import BaseConfig
import yaml

__all__ = [
    "BaseManifest",
    "format_time",
    "parse_time",
]

# Kubernetes serializes timestamps as RFC 3339 in UTC with second precision
TIME_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def format_time(value: datetime.datetime | None) -> str | None:
    """Serialize a timestamp in the format used by the Kubernetes API."""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=datetime.timezone.utc)
    return value.astimezone(datetime.timezone.utc).strftime(TIME_FORMAT)


def parse_time(value: str | None) -> datetime.datetime | None:
    """Parse a timestamp serialized by `format_time`."""
    if value is None:
        return None
    result = datetime.datetime.fromisoformat(value)
    if result.tzinfo is None:
        result = result.replace(tzinfo=datetime.timezone.utc)
    return result


def _dump_yaml(data: Any) -> str:
    """Dump yaml keeping fields in the order they are declared."""
    return yaml.dump(data, sort_keys=False)


@dataclass
class BaseManifest(DataClassDictMixin):
    """Base class for all serializable objects."""

    def compact_dict(self) -> dict[str, Any]:
        """Return a compact dictionary representation of the object."""
        return self.to_dict()

    def yaml(self) -> str:
        """Return a YAML string representation of the object."""
        encoder = YAMLEncoder(self.__class__, post_encoder_func=_dump_yaml)
        return encoder.encode(self)  # type: ignore[return-value]

    class Config(BaseConfig):
        omit_none = True
        serialize_by_alias = True
