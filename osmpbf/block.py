# © Copyright 2024 Mikołaj Kuranowski
# SPDX-License-Identifier: GPL-3.0-or-later

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Callable, Collection, FrozenSet, Iterator, List, Optional, Sequence, Union

from .dense import DenseNode, DenseNodeIter
from .elements import NANO, Node, Relation, Way
from .pbf import osmformat_pb2
from .stringtable import str_from_stringtable

Element = Union[Node, DenseNode, Way, Relation]
"""Element represents a single OpenStreetMap element from a :py:class:`PrimitiveBlock`:
a :py:class:`Node`, :py:class:`DenseNode`, :py:class:`Way` or :py:class:`Relation`.

Node and DenseNode differ only in their storage; code handling nodes should usually
handle both.
"""

SUPPORTED_FEATURES: FrozenSet[str] = frozenset(
    {"OsmSchema-V0.6", "DenseNodes", "HistoricalInformation", "LocationsOnWays"}
)
"""Required features of a :py:class:`HeaderBlock` which can be decoded by this library."""


@dataclass(frozen=True)
class BoundingBox:
    """BoundingBox of the data in a file, in degrees."""

    left: float
    right: float
    top: float
    bottom: float


class HeaderBlock:
    """HeaderBlock contains metadata about the following :py:class:`PrimitiveBlock` instances."""

    def __init__(self, header: osmformat_pb2.HeaderBlock) -> None:
        self.header = header

    @property
    def required_features(self) -> List[str]:
        """required_features lists features a parser needs to implement
        to correctly decode the following blocks."""
        return list(self.header.required_features)

    @property
    def optional_features(self) -> List[str]:
        """optional_features lists features a parser can choose to ignore."""
        return list(self.header.optional_features)

    def unsupported_features(self, supported: Collection[str] = SUPPORTED_FEATURES) -> List[str]:
        return sorted(f for f in self.header.required_features if f not in supported)

    @property
    def bbox(self) -> Optional[BoundingBox]:
        if not self.header.HasField("bbox"):
            return None
        b = self.header.bbox
        return BoundingBox(NANO * b.left, NANO * b.right, NANO * b.top, NANO * b.bottom)

    @property
    def writing_program(self) -> Optional[str]:
        return self.header.writingprogram if self.header.HasField("writingprogram") else None

    @property
    def source(self) -> Optional[str]:
        return self.header.source if self.header.HasField("source") else None

    @property
    def replication_timestamp(self) -> Optional[int]:
        """replication_timestamp is the osmosis replication timestamp, in seconds since the epoch."""
        if self.header.HasField("osmosis_replication_timestamp"):
            return self.header.osmosis_replication_timestamp
        return None

    @property
    def replication_sequence_number(self) -> Optional[int]:
        if self.header.HasField("osmosis_replication_sequence_number"):
            return self.header.osmosis_replication_sequence_number
        return None

    @property
    def replication_base_url(self) -> Optional[str]:
        if self.header.HasField("osmosis_replication_base_url"):
            return self.header.osmosis_replication_base_url
        return None

    def __repr__(self) -> str:
        return f"HeaderBlock(required_features={self.required_features!r})"


class PrimitiveBlock:
    """PrimitiveBlock is the unit of map data in an OSM PBF file.
    It contains a string table and a sequence of :py:class:`PrimitiveGroup`.

    All elements produced by a PrimitiveBlock are views over its data,
    and must not be used after the PrimitiveBlock is discarded.
    The block itself is never modified.
    """

    def __init__(self, block: osmformat_pb2.PrimitiveBlock) -> None:
        self.block = block

    def elements(self) -> "BlockElementsIter":
        """elements iterates over all elements of this block.

        Groups are visited in stored order, and inside each group dense nodes come first,
        followed by nodes, ways and relations.
        """
        return BlockElementsIter(self.block)

    def __iter__(self) -> Iterator[Element]:
        return self.elements()

    def groups(self) -> Iterator["PrimitiveGroup"]:
        return (PrimitiveGroup(self.block, group) for group in self.block.primitivegroup)

    def for_each_element(self, f: Callable[[Element], Any]) -> None:
        """for_each_element calls ``f`` on every element of this block,
        in the same order as :py:meth:`elements`."""
        for group in self.groups():
            for dense_node in group.dense_nodes():
                f(dense_node)
            for node in group.nodes():
                f(node)
            for way in group.ways():
                f(way)
            for relation in group.relations():
                f(relation)

    @property
    def granularity(self) -> int:
        """granularity of coordinates, in nanodegrees per stored unit."""
        return self.block.granularity

    @property
    def lat_offset(self) -> int:
        return self.block.lat_offset

    @property
    def lon_offset(self) -> int:
        return self.block.lon_offset

    @property
    def date_granularity(self) -> int:
        """date_granularity of timestamps, in milliseconds per stored unit."""
        return self.block.date_granularity

    def raw_stringtable(self) -> Sequence[bytes]:
        """raw_stringtable returns the string table of this block. Elements don't store strings
        directly, only indices into this table. By convention, the strings are UTF-8 encoded,
        but that is not guaranteed; use :py:meth:`string` to get checked strings.
        """
        return self.block.stringtable.s

    def string(self, index: int) -> str:
        """string resolves an index into the string table. Raises :py:exc:`StringtableError`
        if there is no such entry or the entry is not valid UTF-8."""
        return str_from_stringtable(self.block, index)

    def __repr__(self) -> str:
        return f"PrimitiveBlock(groups={len(self.block.primitivegroup)})"


class PrimitiveGroup:
    """PrimitiveGroup contains a sequence of elements, usually of a single type."""

    def __init__(
        self,
        block: osmformat_pb2.PrimitiveBlock,
        group: osmformat_pb2.PrimitiveGroup,
    ) -> None:
        self._block = block
        self.group = group

    def dense_nodes(self) -> DenseNodeIter:
        return DenseNodeIter(self._block, self.group.dense)

    def nodes(self) -> Iterator[Node]:
        return (Node(self._block, n) for n in self.group.nodes)

    def ways(self) -> Iterator[Way]:
        return (Way(self._block, w) for w in self.group.ways)

    def relations(self) -> Iterator[Relation]:
        return (Relation(self._block, r) for r in self.group.relations)

    def __len__(self) -> int:
        """Returns the number of elements in this group."""
        dense = self.group.dense
        return (
            min(len(dense.id), len(dense.lat), len(dense.lon))
            + len(self.group.nodes)
            + len(self.group.ways)
            + len(self.group.relations)
        )


class _ElementsIterState(Enum):
    ADVANCE_GROUP = auto()
    DENSE_NODE = auto()
    NODE = auto()
    WAY = auto()
    RELATION = auto()


class BlockElementsIter:
    """BlockElementsIter iterates over the elements of a :py:class:`PrimitiveBlock`.

    A state machine walks through groups, and in each group through dense nodes,
    nodes, ways and relations, in that order.
    """

    def __init__(self, block: osmformat_pb2.PrimitiveBlock) -> None:
        self._block = block
        self._state = _ElementsIterState.ADVANCE_GROUP
        self._groups = iter(block.primitivegroup)
        self._dense_nodes = DenseNodeIter.empty(block)
        self._nodes: Iterator[osmformat_pb2.Node] = iter(())
        self._ways: Iterator[osmformat_pb2.Way] = iter(())
        self._relations: Iterator[osmformat_pb2.Relation] = iter(())

    def __iter__(self) -> Iterator[Element]:
        return self

    def __next__(self) -> Element:
        while True:
            element = self._step()
            if element is not None:
                return element

    def _step(self) -> Optional[Element]:
        """_step either produces an element, or moves to the next state and returns None.
        Raises StopIteration once all groups are exhausted.
        """
        if self._state is _ElementsIterState.ADVANCE_GROUP:
            group = next(self._groups, None)
            if group is None:
                raise StopIteration

            self._dense_nodes = DenseNodeIter(self._block, group.dense)
            self._nodes = iter(group.nodes)
            self._ways = iter(group.ways)
            self._relations = iter(group.relations)
            self._state = _ElementsIterState.DENSE_NODE
            return None

        elif self._state is _ElementsIterState.DENSE_NODE:
            dense_node = next(self._dense_nodes, None)
            if dense_node is None:
                self._state = _ElementsIterState.NODE
            return dense_node

        elif self._state is _ElementsIterState.NODE:
            node = next(self._nodes, None)
            if node is None:
                self._state = _ElementsIterState.WAY
                return None
            return Node(self._block, node)

        elif self._state is _ElementsIterState.WAY:
            way = next(self._ways, None)
            if way is None:
                self._state = _ElementsIterState.RELATION
                return None
            return Way(self._block, way)

        else:
            relation = next(self._relations, None)
            if relation is None:
                self._state = _ElementsIterState.ADVANCE_GROUP
                return None
            return Relation(self._block, relation)
