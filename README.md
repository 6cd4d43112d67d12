# gpudra

Data types and matching logic for allocating GPUs and MIG devices to
workloads in a cluster. The package describes what a claim asks for, what a
node can offer and has handed out, and how selectors match device
properties. It has no dependencies outside the standard library.

## Install

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `gpudra.quantity`: resource quantities such as `"1Gi"`, `"500m"` or
  `"3e6"`. `parse_quantity` reads one into a `Quantity`, which keeps the
  exact amount (rounded up to nanounits) and the notation it was written in
  (`QuantityFormat`). `Quantity.value()` rounds the amount away from zero to
  an integer, `Quantity.compare()` returns -1, 0 or 1, and `str()` gives the
  canonical form. Unparsable input raises `QuantityError`.
- `gpudra.semver`: `is_valid` checks a `v`-prefixed semantic version such as
  `"v1.2.3-rc.1"`; `compare` orders two of them, ignoring build metadata and
  treating an invalid version as less than any valid one.
- `gpudra.selector`: generic boolean selectors. A `Selector` holds either a
  properties object or a list of nested selectors joined with *and*
  (`match_all`) or *or* (`match_any`); a selector with none of these matches
  nothing. Property matchers: `IntProperty`, `StringProperty`,
  `BoolProperty`, `GlobProperty` (case-insensitive, `*` matches any run of
  characters, matched anywhere in the value), `QuantityComparator` and
  `VersionComparator`. The comparators take a `ComparisonOperator`
  (`Equals`, `LessThan`, `LessThanOrEqualTo`, `GreaterThan`,
  `GreaterThanOrEqualTo`); `VersionComparator` adds a leading `v` where it is
  missing and raises `ValueError` on an empty version.
  `check_compare_value` and `wildcard_to_regex` are the helpers behind them.
- `gpudra.gpuselector`: `GpuSelector` and `GpuSelectorProperties` for picking
  GPUs by index, UUID, MIG mode, memory, product name, brand, architecture,
  CUDA compute capability, driver version and CUDA runtime version.
  `GpuSelector.to_selector()` turns one into a generic `Selector`.
- `gpudra.sharing`: sharing strategies (`GpuSharingStrategy`) for GPUs
  (`GpuSharing`) and MIG devices (`MigDeviceSharing`), with
  `TimeSlicingConfig`, `TimeSliceDuration` and `MpsConfig`. The module-level
  `is_time_slicing`, `is_mps`, `get_time_slicing_config` and `get_mps_config`
  also accept `None`, meaning time-slicing with the default time slice.
  `normalize_pinned_memory_limits` turns MPS pinned memory limits into
  `"<n>M"` strings keyed by device index. Inconsistent requests raise
  `SharingError`.
- `gpudra.nas`: the per-node allocation state: allocatable, allocated and
  prepared GPUs and MIG devices, `NodeAllocationState` and its list, the
  `DeviceType` and `NodeAllocationStateStatus` enums,
  `new_node_allocation_state` to build an empty state from a
  `NodeAllocationStateConfig`, and `resource` to qualify a resource name with
  the group `nas.gpu.resource.nvidia.com`.
- `gpudra.gpu`: device-class, GPU claim, MIG device claim and compute-instance
  claim parameter types; `update_device_class_parameters_spec_with_defaults`
  (shareable defaults to `True`), `update_gpu_claim_parameters_spec_with_defaults`
  (count defaults to 1) and `update_mig_device_claim_parameters_spec_with_defaults`,
  each returning a copy; and `resource` for the group
  `gpu.resource.nvidia.com`.
- `gpudra.meta`: `ObjectMeta`, `ListMeta`, `TypeMeta`, `OwnerReference`,
  `GroupVersion` and `GroupResource`.

## Examples

```python
from gpudra.quantity import parse_quantity
from gpudra.sharing import normalize_pinned_memory_limits

limits = normalize_pinned_memory_limits(
    {"0": parse_quantity("1Gi")},
    ["GPU-0000"],
    parse_quantity("2Gi"),
)
assert limits == {"0": "1024M"}
```

```python
from gpudra.selector import GlobProperty

assert GlobProperty("*A100*").matches("NVIDIA a100-SXM4-40GB")
```

```python
from gpudra.gpuselector import GpuSelector, GpuSelectorProperties
from gpudra.selector import IntProperty

selector = GpuSelector(
    or_expression=[
        GpuSelector(GpuSelectorProperties(index=IntProperty(0))),
        GpuSelector(GpuSelectorProperties(index=IntProperty(1))),
    ]
)
assert selector.matches(lambda p: p.index.matches(1))
```

## What it does not do

The package holds types and logic only. It does not talk to a cluster API
server, and it does not store, serialise, fetch or watch these objects. It
does not discover or configure GPUs, start MPS daemons or prepare devices, and
it has no command-line tool.