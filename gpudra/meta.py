"""Object metadata and API group/version identifiers shared by all resources."""

from __future__ import annotations

from dataclasses import dataclass, field

__all__ = [
    "OwnerReference",
    "ObjectMeta",
    "ListMeta",
    "TypeMeta",
    "GroupVersion",
    "GroupResource",
]


@dataclass
class OwnerReference:
    """Identifies an object that owns another one."""

    api_version: str = ""
    kind: str = ""
    name: str = ""
    uid: str = ""
    controller: bool | None = None
    block_owner_deletion: bool | None = None


@dataclass
class ObjectMeta:
    """Metadata carried by every stored object."""

    name: str = ""
    namespace: str = ""
    uid: str = ""
    resource_version: str = ""
    labels: dict[str, str] = field(default_factory=dict)
    annotations: dict[str, str] = field(default_factory=dict)
    owner_references: list[OwnerReference] = field(default_factory=list)


@dataclass
class ListMeta:
    """Metadata carried by a list of objects."""

    resource_version: str = ""
    continue_token: str = ""
    remaining_item_count: int | None = None


@dataclass
class TypeMeta:
    """The kind and API version an object is serialised as."""

    kind: str = ""
    api_version: str = ""


@dataclass(frozen=True)
class GroupResource:
    """A resource name qualified by its API group."""

    group: str
    resource: str


@dataclass(frozen=True)
class GroupVersion:
    """An API group together with one of its versions."""

    group: str
    version: str

    def with_resource(self, resource: str) -> GroupResource:
        """Qualify a resource name with this group."""
        return GroupResource(self.group, resource)

    def __str__(self) -> str:
        return f"{self.group}/{self.version}" if self.group else self.version