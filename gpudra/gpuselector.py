"""Selectors that pick GPUs by their properties."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from gpudra.selector import (
    BoolProperty,
    GlobProperty,
    IntProperty,
    QuantityComparator,
    Selector,
    StringProperty,
    VersionComparator,
)

__all__ = ["GpuSelectorProperties", "GpuSelector"]


@dataclass
class GpuSelectorProperties:
    """The GPU properties that can be selected upon; unset ones are None."""

    index: IntProperty | None = None
    uuid: StringProperty | None = None
    mig_enabled: BoolProperty | None = None
    memory: QuantityComparator | None = None
    product_name: GlobProperty | None = None
    brand: GlobProperty | None = None
    architecture: GlobProperty | None = None
    cuda_compute_capability: VersionComparator | None = None
    driver_version: VersionComparator | None = None
    cuda_runtime_version: VersionComparator | None = None


@dataclass
class GpuSelector:
    """A single set of GPU properties, or nested selectors combined with and/or."""

    properties: GpuSelectorProperties | None = None
    and_expression: list[GpuSelector] = field(default_factory=list)
    or_expression: list[GpuSelector] = field(default_factory=list)

    def to_selector(self) -> Selector[GpuSelectorProperties]:
        """Convert into a generic selector; empty expression lists become unset."""
        return Selector(
            properties=self.properties,
            and_expression=[e.to_selector() for e in self.and_expression] or None,
            or_expression=[e.to_selector() for e in self.or_expression] or None,
        )

    def matches(self, compare: Callable[[GpuSelectorProperties], bool]) -> bool:
        """Evaluate the expression, passing each properties object to compare."""
        return self.to_selector().matches(compare)