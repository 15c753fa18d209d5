"""
Item Registry — the immutable name -> Item mapping.

The registry is the context every relational query is evaluated in:
a NamedType only means something once it can be looked up here.

Built once, in one step, from a list of items:

    registry = ItemRegistry.build([point, shape, tree])

The build either returns a complete registry or raises DuplicateName.
There is no incremental insert/remove; rebuild to change.
"""

import logging
from collections import defaultdict, deque
from typing import Callable, Dict, FrozenSet, Iterable, Iterator, List, Optional, Set

from typegraph.errors import DuplicateName
from typegraph.identifiers import Identifier
from typegraph.model import (
    Item,
    item_contains_unboxed,
    item_is_defaultable,
    item_types,
)
from typegraph.type_expressions import named_types_in

logger = logging.getLogger(__name__)


class ItemRegistry:
    """
    Read-only mapping from item name to Item, iterated in name order.

    References to names that are not registered are allowed. Queries
    treat them as non-defaultable and non-containing;
    dangling_references() lists them.

    ItemRegistry(items) and ItemRegistry.build(items) are the same
    operation: items are inserted in order and the first repeated name
    raises DuplicateName.
    """

    def __init__(self, items: Iterable[Item] = ()):
        mapping: Dict[str, Item] = {}
        for item in items:
            if not isinstance(item, Item):
                raise TypeError(f"Expected an Item, got {type(item).__name__}")
            if item.name in mapping:
                raise DuplicateName(item.name, scope="item registry")
            mapping[item.name] = item
        self._items: Dict[str, Item] = dict(sorted(mapping.items()))

        # referenced name -> items mentioning it anywhere, boxed or not
        dependents: Dict[str, List[Item]] = defaultdict(list)
        for item in self._items.values():
            for name in {n for typ in item_types(item) for n in named_types_in(typ)}:
                dependents[name].append(item)
        self._dependents: Dict[str, List[Item]] = dict(dependents)

        logger.debug("Built item registry with %d items", len(self._items))

    @classmethod
    def build(cls, items: Iterable[Item]) -> "ItemRegistry":
        """
        Build a registry from items, in order.

        Raises:
            DuplicateName: On the first item whose name is already taken.
                No partial registry is returned.
        """
        return cls(items)

    def lookup(self, name: str) -> Optional[Item]:
        """Return the item called `name`, or None. Never raises."""
        return self._items.get(name)

    def names(self) -> List[Identifier]:
        return [item.name for item in self._items.values()]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Item]:
        return iter(self._items.values())

    def __contains__(self, name: object) -> bool:
        return name in self._items

    def __repr__(self) -> str:
        return f"ItemRegistry({self.names()!r})"

    def _least_fixed_point(self, holds: Callable[[Item, Set[str]], bool]) -> FrozenSet[str]:
        """
        Smallest set of item names closed under `holds`.

        holds(item, known) must be monotone in `known`. Starting from the
        empty set, an item is added once it holds given the names proven
        so far; only the items referencing a newly added name are
        re-checked. Each item is re-evaluated at most once per distinct
        name it references, so the cost is bounded by the registry size.
        """
        known: Set[str] = set()
        pending = deque(self._items.values())
        while pending:
            item = pending.popleft()
            if item.name in known or not holds(item, known):
                continue
            known.add(item.name)
            pending.extend(d for d in self._dependents.get(item.name, ()) if d.name not in known)
        return frozenset(known)

    def defaultable_names(self) -> FrozenSet[str]:
        """Names of every registered item that admits a default value."""
        return self._least_fixed_point(
            lambda item, known: item_is_defaultable(item, self, known))

    def names_containing(self, target: str) -> FrozenSet[str]:
        """Names of every registered item that contains `target` without indirection."""
        return self._least_fixed_point(
            lambda item, known: item_contains_unboxed(item, target, self, known))

    def named_types(self) -> List[Identifier]:
        """
        Every name the registry mentions: each item's references
        followed by the item's own name, in item order.
        """
        names: List[Identifier] = []
        for item in self:
            names.extend(item.named_type_references())
            names.append(item.name)
        return names

    def dangling_references(self) -> Dict[Identifier, List[Identifier]]:
        """Map of item name -> referenced names that are not registered."""
        dangling: Dict[Identifier, List[Identifier]] = {}
        for item in self:
            missing = [ref for ref in item.named_type_references() if ref not in self._items]
            if missing:
                dangling[item.name] = missing
        return dangling

    def recursive_items(self) -> List[Identifier]:
        """Names of items that contain themselves without indirection."""
        return [item.name for item in self if item.name in self.names_containing(item.name)]


__all__ = ["ItemRegistry"]
