"""Flow registry: the fixed, ordered set of documentable flows."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING

from .models import Flow, FlowModule

if TYPE_CHECKING:
    from .models import FlowSpec


class FlowRegistry:
    """Read-only, ordered table of flows keyed by id.

    Built once from an explicit list. Lookups never raise: an unknown id is
    ``None``, an unknown tag or module is an empty list.
    """

    def __init__(self, flows: Iterable[Flow]):
        self._flows: dict[str, Flow] = {}
        for flow in flows:
            if flow.spec.id in self._flows:
                raise ValueError(f"Duplicate flow id: {flow.spec.id}")
            self._flows[flow.spec.id] = flow

    def __len__(self) -> int:
        return len(self._flows)

    def __iter__(self) -> Iterator[Flow]:
        return iter(self._flows.values())

    def __contains__(self, flow_id: object) -> bool:
        return flow_id in self._flows

    def count(self) -> int:
        return len(self._flows)

    def all(self) -> list[Flow]:
        return list(self._flows.values())

    def specs(self) -> list[FlowSpec]:
        return [flow.spec for flow in self._flows.values()]

    def get(self, flow_id: str) -> Flow | None:
        return self._flows.get(flow_id)

    def by_tag(self, tag: str) -> list[Flow]:
        return [flow for flow in self._flows.values() if flow.spec.has_tag(tag)]

    def by_module(self, module: FlowModule | str) -> list[Flow]:
        """Flows of ``module``. Accepts the enum or its exact value."""
        name = module.value if isinstance(module, FlowModule) else module
        return [flow for flow in self._flows.values() if flow.spec.module.value == name]

    def requiring_auth(self) -> list[Flow]:
        return [flow for flow in self._flows.values() if flow.spec.requires_auth]

    def not_requiring_auth(self) -> list[Flow]:
        return [flow for flow in self._flows.values() if not flow.spec.requires_auth]

    def tags(self) -> list[str]:
        """Distinct tags across all flows, sorted."""
        return sorted({tag for flow in self._flows.values() for tag in flow.spec.tags})

    def modules(self) -> list[FlowModule]:
        """Distinct modules in registration order."""
        seen: dict[FlowModule, None] = {}
        for flow in self._flows.values():
            seen.setdefault(flow.spec.module, None)
        return list(seen)

    def summary(self) -> dict[str, list[str]]:
        """Flow ids grouped by module value, in registration order."""
        grouped: dict[str, list[str]] = {}
        for flow in self._flows.values():
            grouped.setdefault(flow.spec.module.value, []).append(flow.spec.id)
        return grouped


def default_registry() -> FlowRegistry:
    """Registry of the built-in catalog."""
    from .catalog import BUILTIN_FLOWS

    return FlowRegistry(flow_cls() for flow_cls in BUILTIN_FLOWS)
