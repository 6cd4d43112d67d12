"""Node allocation state: the devices a node offers, and those allocated and prepared."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from gpudra.meta import (
    GroupResource,
    GroupVersion,
    ListMeta,
    ObjectMeta,
    OwnerReference,
    TypeMeta,
)
from gpudra.sharing import GpuSharing, MigDeviceSharing

__all__ = [
    "GROUP_NAME",
    "VERSION",
    "SCHEME_GROUP_VERSION",
    "DeviceType",
    "NodeAllocationStateStatus",
    "ClaimInfo",
    "MigDevicePlacement",
    "AllocatableGpu",
    "AllocatableMigDevice",
    "AllocatableDevice",
    "AllocatedGpu",
    "AllocatedMigDevice",
    "AllocatedGpus",
    "AllocatedMigDevices",
    "AllocatedDevices",
    "PreparedGpu",
    "PreparedMigDevice",
    "PreparedGpus",
    "PreparedMigDevices",
    "PreparedDevices",
    "NodeAllocationStateSpec",
    "NodeAllocationState",
    "NodeAllocationStateList",
    "NodeAllocationStateConfig",
    "KNOWN_TYPES",
    "new_node_allocation_state",
    "resource",
]

GROUP_NAME = "nas.gpu.resource.nvidia.com"
VERSION = "v1alpha1"
SCHEME_GROUP_VERSION = GroupVersion(GROUP_NAME, VERSION)


class DeviceType(str, enum.Enum):
    GPU = "gpu"
    MIG = "mig"
    UNKNOWN = "unknown"


class NodeAllocationStateStatus(str, enum.Enum):
    READY = "Ready"
    NOT_READY = "NotReady"


def _device_type(gpu: object, mig: object) -> DeviceType:
    if gpu is not None:
        return DeviceType.GPU
    if mig is not None:
        return DeviceType.MIG
    return DeviceType.UNKNOWN


@dataclass
class ClaimInfo:
    namespace: str
    name: str
    uid: str


@dataclass
class MigDevicePlacement:
    start: int
    size: int


@dataclass
class AllocatableGpu:
    index: int
    uuid: str
    mig_enabled: bool
    memory_bytes: int
    product_name: str
    brand: str
    architecture: str
    cuda_compute_capability: str


@dataclass
class AllocatableMigDevice:
    profile: str
    parent_product_name: str
    placements: list[MigDevicePlacement] = field(default_factory=list)


@dataclass
class AllocatableDevice:
    gpu: AllocatableGpu | None = None
    mig: AllocatableMigDevice | None = None

    def device_type(self) -> DeviceType:
        return _device_type(self.gpu, self.mig)


@dataclass
class AllocatedGpu:
    uuid: str = ""


@dataclass
class AllocatedMigDevice:
    profile: str
    parent_uuid: str
    placement: MigDevicePlacement


@dataclass
class AllocatedGpus:
    devices: list[AllocatedGpu] = field(default_factory=list)
    sharing: GpuSharing | None = None


@dataclass
class AllocatedMigDevices:
    devices: list[AllocatedMigDevice] = field(default_factory=list)
    sharing: MigDeviceSharing | None = None


@dataclass
class AllocatedDevices:
    claim_info: ClaimInfo | None = None
    gpu: AllocatedGpus | None = None
    mig: AllocatedMigDevices | None = None

    def device_type(self) -> DeviceType:
        return _device_type(self.gpu, self.mig)


@dataclass
class PreparedGpu:
    uuid: str


@dataclass
class PreparedMigDevice:
    uuid: str
    profile: str
    parent_uuid: str
    placement: MigDevicePlacement


@dataclass
class PreparedGpus:
    devices: list[PreparedGpu] = field(default_factory=list)


@dataclass
class PreparedMigDevices:
    devices: list[PreparedMigDevice] = field(default_factory=list)


@dataclass
class PreparedDevices:
    gpu: PreparedGpus | None = None
    mig: PreparedMigDevices | None = None

    def device_type(self) -> DeviceType:
        return _device_type(self.gpu, self.mig)


@dataclass
class NodeAllocationStateSpec:
    allocatable_devices: list[AllocatableDevice] = field(default_factory=list)
    allocated_claims: dict[str, AllocatedDevices] = field(default_factory=dict)
    prepared_claims: dict[str, PreparedDevices] = field(default_factory=dict)


@dataclass
class NodeAllocationState:
    """The state required for allocation on a node."""

    type_meta: TypeMeta = field(default_factory=TypeMeta)
    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: NodeAllocationStateSpec = field(default_factory=NodeAllocationStateSpec)
    status: str = ""


@dataclass
class NodeAllocationStateList:
    type_meta: TypeMeta = field(default_factory=TypeMeta)
    metadata: ListMeta = field(default_factory=ListMeta)
    items: list[NodeAllocationState] = field(default_factory=list)


@dataclass
class NodeAllocationStateConfig:
    name: str
    namespace: str
    owner: OwnerReference | None = None


KNOWN_TYPES = (NodeAllocationState, NodeAllocationStateList)


def new_node_allocation_state(config: NodeAllocationStateConfig) -> NodeAllocationState:
    """Create an empty node allocation state named and owned as configured."""
    metadata = ObjectMeta(name=config.name, namespace=config.namespace)
    if config.owner is not None:
        metadata.owner_references = [config.owner]
    return NodeAllocationState(metadata=metadata)


def resource(resource: str) -> GroupResource:
    """Qualify a resource name with this API group."""
    return SCHEME_GROUP_VERSION.with_resource(resource)