from gpudra.meta import GroupResource, OwnerReference
from gpudra.nas import (
    GROUP_NAME,
    SCHEME_GROUP_VERSION,
    VERSION,
    AllocatableDevice,
    AllocatableGpu,
    AllocatableMigDevice,
    AllocatedDevices,
    AllocatedGpu,
    AllocatedGpus,
    AllocatedMigDevice,
    AllocatedMigDevices,
    ClaimInfo,
    DeviceType,
    MigDevicePlacement,
    NodeAllocationStateConfig,
    NodeAllocationStateStatus,
    PreparedDevices,
    PreparedGpu,
    PreparedGpus,
    PreparedMigDevices,
    new_node_allocation_state,
    resource,
)


def _gpu():
    return AllocatableGpu(
        index=0,
        uuid="GPU-example-0",
        mig_enabled=False,
        memory_bytes=1 << 30,
        product_name="Example GPU",
        brand="Example",
        architecture="Example",
        cuda_compute_capability="8.0",
    )


def test_resource_uses_nas_group():
    result = resource("nodeallocationstates")
    assert result.group == "nas.gpu.resource.nvidia.com"
    assert result.group == GROUP_NAME == SCHEME_GROUP_VERSION.group
    assert SCHEME_GROUP_VERSION.version == VERSION == "v1alpha1"


def test_status_can_be_set_on_new_state():
    nas = new_node_allocation_state(NodeAllocationStateConfig("node-a", "gpu-ns"))
    nas.status = NodeAllocationStateStatus.READY
    assert nas.status == "Ready"
    nas.status = NodeAllocationStateStatus.NOT_READY
    assert nas.status == "NotReady"


def test_allocatable_device_type():
    assert AllocatableDevice(gpu=_gpu()).device_type() is DeviceType.GPU
    mig = AllocatableMigDevice("1g.5gb", "Example GPU", [MigDevicePlacement(0, 1)])
    assert AllocatableDevice(mig=mig).device_type() is DeviceType.MIG
    assert AllocatableDevice().device_type() == "unknown"


def test_allocated_devices_type():
    info = ClaimInfo("default", "claim", "uid-1")
    gpus = AllocatedDevices(claim_info=info, gpu=AllocatedGpus([AllocatedGpu("GPU-example-0")]))
    assert gpus.device_type() == "gpu"
    migs = AllocatedDevices(
        claim_info=info,
        mig=AllocatedMigDevices(
            [AllocatedMigDevice("1g.5gb", "GPU-example-0", MigDevicePlacement(0, 1))]
        ),
    )
    assert migs.device_type() == "mig"
    assert AllocatedDevices(claim_info=info).device_type() is DeviceType.UNKNOWN


def test_prepared_devices_type():
    assert PreparedDevices(gpu=PreparedGpus([PreparedGpu("GPU-example-0")])).device_type() == "gpu"
    assert PreparedDevices(mig=PreparedMigDevices()).device_type() == "mig"
    assert PreparedDevices().device_type() == "unknown"


def test_new_node_allocation_state_without_owner():
    nas = new_node_allocation_state(NodeAllocationStateConfig("node-a", "gpu-ns"))
    assert nas.metadata.name == "node-a"
    assert nas.metadata.namespace == "gpu-ns"
    assert nas.metadata.owner_references == []
    assert nas.spec.allocated_claims == {}
    assert nas.status == ""


def test_new_node_allocation_state_with_owner():
    owner = OwnerReference(api_version="v1", kind="Node", name="node-a", uid="uid-1")
    nas = new_node_allocation_state(NodeAllocationStateConfig("node-a", "gpu-ns", owner))
    assert nas.metadata.owner_references == [owner]


def test_resource_is_in_group():
    assert resource("nodeallocationstates") == GroupResource(GROUP_NAME, "nodeallocationstates")


def test_spec_defaults_are_independent():
    a = new_node_allocation_state(NodeAllocationStateConfig("a", "ns"))
    b = new_node_allocation_state(NodeAllocationStateConfig("b", "ns"))
    a.spec.allocatable_devices.append(AllocatableDevice(gpu=_gpu()))
    assert b.spec.allocatable_devices == []