"""Custom resource types the describe command knows how to address.

Type hints are resolved against this fixed table rather than through API
discovery, so only kinds listed here can be described.
"""
from dataclasses import dataclass, field
from typing import List, Tuple

from .errors import LocatorError


@dataclass(frozen=True)
class ResourceType:
    """Group/version/plural mapping for one custom resource kind."""
    group: str
    version: str
    plural: str
    kind: str
    singular: str = ''
    short_names: Tuple[str, ...] = field(default_factory=tuple)
    namespaced: bool = True

    @property
    def api_version(self) -> str:
        return f"{self.group}/{self.version}"

    @property
    def qualified_name(self) -> str:
        """Resource name in ``plural.group`` form, as kubectl prints it."""
        return f"{self.plural}.{self.group}"

    def matches(self, hint: str) -> bool:
        hint = hint.lower()
        names = {self.plural, self.singular or self.kind.lower(), self.kind.lower(), *self.short_names}
        if hint in names:
            return True
        # plural.group, singular.group and kind.version.group forms
        return any(
            hint in (f"{name}.{self.group}", f"{name}.{self.version}.{self.group}")
            for name in names
        )


INNODB_CLUSTER = ResourceType(
    group="mysql.oracle.com",
    version="v2",
    plural="innodbclusters",
    kind="InnoDBCluster",
    singular="innodbcluster",
    short_names=("ic", "ics"),
)

KNOWN_TYPES: List[ResourceType] = [INNODB_CLUSTER]


def resolve_type(hint: str) -> ResourceType:
    """Map a type hint to a known resource type.

    Raises:
        LocatorError: If no known type matches the hint
    """
    for resource_type in KNOWN_TYPES:
        if resource_type.matches(hint):
            return resource_type
    raise LocatorError(f"the server doesn't have a resource type \"{hint}\"")
