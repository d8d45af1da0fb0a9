"""
Method-set resolution across the inheritance and interface hierarchy.

Computes the overridable methods an implementation has to provide, one per
override slot, in a stable discovery order.
"""

from dataclasses import dataclass
from itertools import chain
from typing import Dict, List, Tuple

from ...logging_config import get_logger
from ..core.types import JavaType, MethodInfo

logger = get_logger(__name__)


@dataclass(frozen=True)
class MethodKey:
    """Canonical method identity: name, arity and ordered parameter types."""

    name: str
    parameter_count: int
    parameter_types: Tuple[str, ...]

    @classmethod
    def of(cls, method: MethodInfo) -> "MethodKey":
        return cls(
            name=method.name,
            parameter_count=len(method.parameter_types),
            parameter_types=tuple(t.name for t in method.parameter_types),
        )

    @property
    def slot(self) -> Tuple[str, int]:
        """Bucket of keys that may be equivalent to each other."""
        return self.name, self.parameter_count


def are_equivalent(first: MethodInfo, second: MethodInfo) -> bool:
    """
    Check whether two methods occupy the same override slot.

    Names and arity must match; then, parameter by parameter, one type has
    to be assignable from the other in either direction. This is looser than
    the language's override rules and can merge distinct overloads.
    """
    if first.name != second.name:
        return False
    if len(first.parameter_types) != len(second.parameter_types):
        return False
    return all(
        a.is_assignable_from(b) or b.is_assignable_from(a)
        for a, b in zip(first.parameter_types, second.parameter_types)
    )


class MethodSetResolver:
    """Resolves the de-duplicated set of methods to stub for a target type."""

    def candidates(self, target: JavaType) -> List[MethodInfo]:
        """
        Collect methods keyed by MethodKey, first seen wins.

        Declared methods of the target (any visibility) are seen before the
        public methods reachable through inheritance.
        """
        by_key: Dict[MethodKey, MethodInfo] = {}
        for method in chain(target.declared_methods(), target.public_methods()):
            by_key.setdefault(MethodKey.of(method), method)
        return list(by_key.values())

    def merge_equivalent(self, methods: List[MethodInfo]) -> List[MethodInfo]:
        """Drop every method equivalent to an earlier one."""
        merged, _ = self._merge(methods)
        return merged

    def approximate_merges(self, target: JavaType) -> List[Tuple[MethodInfo, MethodInfo]]:
        """
        Pairs (kept, dropped) merged although their parameter types differ.

        These are the merges decided by assignability rather than by equal
        keys, i.e. the ones that may have folded distinct overloads together.
        """
        _, merges = self._merge(self.candidates(target))
        return merges

    def _merge(
        self, methods: List[MethodInfo]
    ) -> Tuple[List[MethodInfo], List[Tuple[MethodInfo, MethodInfo]]]:
        buckets: Dict[Tuple[str, int], List[MethodInfo]] = {}
        merged = []
        merges = []
        for method in methods:
            bucket = buckets.setdefault(MethodKey.of(method).slot, [])
            kept = next((m for m in bucket if are_equivalent(m, method)), None)
            if kept is not None:
                logger.debug("Merged %s into %s", method.signature(), kept.signature())
                merges.append((kept, method))
                continue
            bucket.append(method)
            merged.append(method)
        return merged, merges

    def resolve(self, target: JavaType) -> List[MethodInfo]:
        """
        Resolve the methods to override.

        Returns:
            Ordered, duplicate-free methods, excluding final and native ones
        """
        merged = self.merge_equivalent(self.candidates(target))
        resolved = [m for m in merged if not (m.is_final or m.is_native)]
        logger.debug(
            "Resolved %d of %d candidate methods for %s",
            len(resolved),
            len(merged),
            target.name,
        )
        return resolved
