"""Claim and device-class parameters for GPU, MIG device and compute-instance claims."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field

from gpudra.gpuselector import GpuSelector
from gpudra.meta import GroupResource, GroupVersion, ListMeta, ObjectMeta, TypeMeta
from gpudra.sharing import GpuSharing, MigDeviceSharing

__all__ = [
    "GROUP_NAME",
    "VERSION",
    "GPU_CLAIM_PARAMETERS_KIND",
    "MIG_DEVICE_CLAIM_PARAMETERS_KIND",
    "SCHEME_GROUP_VERSION",
    "ComputeInstanceClaimParametersSpec",
    "ComputeInstanceClaimParameters",
    "ComputeInstanceClaimParametersList",
    "DeviceClassParametersSpec",
    "DeviceClassParameters",
    "DeviceClassParametersList",
    "GpuClaimParametersSpec",
    "GpuClaimParameters",
    "GpuClaimParametersList",
    "MigDeviceClaimParametersSpec",
    "MigDeviceClaimParameters",
    "MigDeviceClaimParametersList",
    "KNOWN_TYPES",
    "update_device_class_parameters_spec_with_defaults",
    "update_gpu_claim_parameters_spec_with_defaults",
    "update_mig_device_claim_parameters_spec_with_defaults",
    "resource",
]

GROUP_NAME = "gpu.resource.nvidia.com"
VERSION = "v1alpha1"

GPU_CLAIM_PARAMETERS_KIND = "GpuClaimParameters"
MIG_DEVICE_CLAIM_PARAMETERS_KIND = "MigDeviceClaimParameters"

SCHEME_GROUP_VERSION = GroupVersion(GROUP_NAME, VERSION)


@dataclass
class ComputeInstanceClaimParametersSpec:
    profile: str = ""
    mig_device_claim_parameters_name: str = ""


@dataclass
class ComputeInstanceClaimParameters:
    """Parameters given when claiming a compute instance."""

    type_meta: TypeMeta = field(default_factory=TypeMeta)
    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: ComputeInstanceClaimParametersSpec = field(
        default_factory=ComputeInstanceClaimParametersSpec
    )


@dataclass
class ComputeInstanceClaimParametersList:
    type_meta: TypeMeta = field(default_factory=TypeMeta)
    metadata: ListMeta = field(default_factory=ListMeta)
    items: list[ComputeInstanceClaimParameters] = field(default_factory=list)


@dataclass
class DeviceClassParametersSpec:
    shareable: bool | None = None


@dataclass
class DeviceClassParameters:
    """Parameters given when creating a resource class for this driver."""

    type_meta: TypeMeta = field(default_factory=TypeMeta)
    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: DeviceClassParametersSpec = field(default_factory=DeviceClassParametersSpec)


@dataclass
class DeviceClassParametersList:
    type_meta: TypeMeta = field(default_factory=TypeMeta)
    metadata: ListMeta = field(default_factory=ListMeta)
    items: list[DeviceClassParameters] = field(default_factory=list)


@dataclass
class GpuClaimParametersSpec:
    count: int | None = None
    selector: GpuSelector | None = None
    sharing: GpuSharing | None = None


@dataclass
class GpuClaimParameters:
    """Parameters given when claiming GPUs."""

    type_meta: TypeMeta = field(default_factory=TypeMeta)
    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: GpuClaimParametersSpec = field(default_factory=GpuClaimParametersSpec)


@dataclass
class GpuClaimParametersList:
    type_meta: TypeMeta = field(default_factory=TypeMeta)
    metadata: ListMeta = field(default_factory=ListMeta)
    items: list[GpuClaimParameters] = field(default_factory=list)


@dataclass
class MigDeviceClaimParametersSpec:
    profile: str = ""
    sharing: MigDeviceSharing | None = None
    gpu_claim_parameters_name: str = ""


@dataclass
class MigDeviceClaimParameters:
    """Parameters given when claiming a MIG device."""

    type_meta: TypeMeta = field(default_factory=TypeMeta)
    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: MigDeviceClaimParametersSpec = field(default_factory=MigDeviceClaimParametersSpec)


@dataclass
class MigDeviceClaimParametersList:
    type_meta: TypeMeta = field(default_factory=TypeMeta)
    metadata: ListMeta = field(default_factory=ListMeta)
    items: list[MigDeviceClaimParameters] = field(default_factory=list)


KNOWN_TYPES = (
    DeviceClassParameters,
    DeviceClassParametersList,
    GpuClaimParameters,
    GpuClaimParametersList,
    MigDeviceClaimParameters,
    MigDeviceClaimParametersList,
    ComputeInstanceClaimParameters,
    ComputeInstanceClaimParametersList,
)


def update_device_class_parameters_spec_with_defaults(
    spec: DeviceClassParametersSpec | None,
) -> DeviceClassParametersSpec:
    """Return a copy of spec with unset fields defaulted; shareable defaults to True."""
    result = copy.deepcopy(spec) if spec is not None else DeviceClassParametersSpec()
    if result.shareable is None:
        result.shareable = True
    return result


def update_gpu_claim_parameters_spec_with_defaults(
    spec: GpuClaimParametersSpec | None,
) -> GpuClaimParametersSpec:
    """Return a copy of spec with unset fields defaulted; count defaults to 1."""
    result = copy.deepcopy(spec) if spec is not None else GpuClaimParametersSpec()
    if result.count is None:
        result.count = 1
    return result


def update_mig_device_claim_parameters_spec_with_defaults(
    spec: MigDeviceClaimParametersSpec | None,
) -> MigDeviceClaimParametersSpec:
    """Return a copy of spec, or an empty spec if none is given."""
    return copy.deepcopy(spec) if spec is not None else MigDeviceClaimParametersSpec()


def resource(resource: str) -> GroupResource:
    """Qualify a resource name with this API group."""
    return SCHEME_GROUP_VERSION.with_resource(resource)