# © Copyright 2024 Mikołaj Kuranowski
# SPDX-License-Identifier: GPL-3.0-or-later

from dataclasses import dataclass, field
from enum import IntEnum
from logging import getLogger
from typing import Iterable, Iterator, Optional, Sequence, Tuple

from .delta import DeltaDecoder, WayRefIter
from .error import StringtableError
from .pbf import osmformat_pb2
from .stringtable import str_from_stringtable

logger = getLogger("osmpbf.elements")

Position = Tuple[float, float]
"""Position describes the physical location of a node,
in WGS84 degrees, first latitude, then longitude.
"""

NANO = 1e-9


def nano_to_degrees(nano: int) -> float:
    return NANO * nano


class TagIter:
    """TagIter iterates over the tags of an element, as (key, value) string pairs.

    Keys and values are consumed in lock-step; surplus entries of the longer
    index array are ignored. If any key or value fails to resolve through the string table,
    the iteration silently stops at that tag, and doesn't resume.
    Use ``raw_tags()`` of the element to access all index pairs.
    """

    def __init__(
        self,
        block: osmformat_pb2.PrimitiveBlock,
        key_indices: Iterable[int],
        val_indices: Iterable[int],
    ) -> None:
        self._block = block
        self._pairs: Iterator[Tuple[int, int]] = zip(key_indices, val_indices)

    def __iter__(self) -> Iterator[Tuple[str, str]]:
        return self

    def __next__(self) -> Tuple[str, str]:
        key_index, val_index = next(self._pairs)
        try:
            return (
                str_from_stringtable(self._block, key_index),
                str_from_stringtable(self._block, val_index),
            )
        except StringtableError as e:
            logger.debug("Stopping tag iteration: %s", e)
            self._pairs = iter(())
            raise StopIteration from None


class RelMemberType(IntEnum):
    """RelMemberType is the type of the element referenced by a relation member."""

    NODE = osmformat_pb2.Relation.NODE
    WAY = osmformat_pb2.Relation.WAY
    RELATION = osmformat_pb2.Relation.RELATION


@dataclass(frozen=True)
class RelMember:
    """RelMember represents a single member of a
    `OpenStreetMap relation <https://wiki.openstreetmap.org/wiki/Relation>`_.
    """

    role_sid: int
    """role_sid is the string table index of the member's role."""

    member_id: int
    member_type: RelMemberType
    block: osmformat_pb2.PrimitiveBlock = field(repr=False, compare=False)

    def role(self) -> str:
        """role resolves the role of the member. Raises :py:exc:`StringtableError`
        if the role can't be resolved."""
        return str_from_stringtable(self.block, self.role_sid)


class RelMemberIter:
    """RelMemberIter iterates over the members of a relation.

    Role indices, member ID deltas and member types are consumed in lock-step,
    and the iteration stops as soon as any of them runs out.
    """

    def __init__(self, block: osmformat_pb2.PrimitiveBlock, osmrel: osmformat_pb2.Relation) -> None:
        self._block = block
        self._member_ids = DeltaDecoder(osmrel.memids)
        self._members = zip(osmrel.roles_sid, self._member_ids, osmrel.types)

    def __iter__(self) -> Iterator[RelMember]:
        return self

    def __next__(self) -> RelMember:
        role_sid, member_id, member_type = next(self._members)
        return RelMember(role_sid, member_id, RelMemberType(member_type), self._block)


class Info:
    """Info holds optional metadata of an element.

    Every field is independently optional; absent fields are reported as None.
    """

    def __init__(self, block: osmformat_pb2.PrimitiveBlock, info: osmformat_pb2.Info) -> None:
        self._block = block
        self._info = info

    @property
    def version(self) -> Optional[int]:
        return self._info.version if self._info.HasField("version") else None

    @property
    def timestamp(self) -> Optional[int]:
        """timestamp is the raw timestamp, in units of the block's date granularity."""
        return self._info.timestamp if self._info.HasField("timestamp") else None

    @property
    def milli_timestamp(self) -> Optional[int]:
        """milli_timestamp is the time of the last modification in milliseconds since the epoch."""
        if self._info.HasField("timestamp"):
            return self._info.timestamp * self._block.date_granularity
        return None

    @property
    def changeset(self) -> Optional[int]:
        return self._info.changeset if self._info.HasField("changeset") else None

    @property
    def uid(self) -> Optional[int]:
        return self._info.uid if self._info.HasField("uid") else None

    def user(self) -> Optional[str]:
        """user returns the name of the user who last modified the element.
        Raises :py:exc:`StringtableError` if the name can't be resolved.
        """
        if self._info.HasField("user_sid"):
            return str_from_stringtable(self._block, self._info.user_sid)
        return None

    @property
    def visible(self) -> bool:
        """visible is only relevant for files with historical information.
        If the flag is not present, the element is assumed to be visible.
        """
        if self._info.HasField("visible"):
            return self._info.visible
        return True

    def __repr__(self) -> str:
        return (
            f"Info(version={self.version!r}, timestamp={self.timestamp!r}, "
            f"changeset={self.changeset!r}, uid={self.uid!r}, visible={self.visible!r})"
        )


class Node:
    """Node represents a single `OpenStreetMap node <https://wiki.openstreetmap.org/wiki/Node>`_,
    stored as a separate message in a block.

    Node is a view over a decoded :py:class:`osmpbf.PrimitiveBlock` and must not be kept
    past the block's lifetime. See also :py:class:`osmpbf.DenseNode`.
    """

    def __init__(self, block: osmformat_pb2.PrimitiveBlock, osmnode: osmformat_pb2.Node) -> None:
        self._block = block
        self._node = osmnode

    @property
    def id(self) -> int:
        """id of the node. Negative IDs are used for elements not yet uploaded to the OSM server."""
        return self._node.id

    def tags(self) -> TagIter:
        return TagIter(self._block, self._node.keys, self._node.vals)

    def raw_tags(self) -> Iterator[Tuple[int, int]]:
        """raw_tags iterates over (key, value) string table indices of the node's tags."""
        return zip(self._node.keys, self._node.vals)

    def info(self) -> Info:
        return Info(self._block, self._node.info)

    @property
    def lat_nano(self) -> int:
        return self._block.lat_offset + self._block.granularity * self._node.lat

    @property
    def lon_nano(self) -> int:
        return self._block.lon_offset + self._block.granularity * self._node.lon

    @property
    def lat(self) -> float:
        return nano_to_degrees(self.lat_nano)

    @property
    def lon(self) -> float:
        return nano_to_degrees(self.lon_nano)

    @property
    def position(self) -> Position:
        return self.lat, self.lon

    def raw_stringtable(self) -> Sequence[bytes]:
        return self._block.stringtable.s

    def __repr__(self) -> str:
        return f"Node(id={self.id}, position={self.position!r})"


class Way:
    """Way represents a single `OpenStreetMap way <https://wiki.openstreetmap.org/wiki/Way>`_.

    Way is a view over a decoded :py:class:`osmpbf.PrimitiveBlock` and must not be kept
    past the block's lifetime.
    """

    def __init__(self, block: osmformat_pb2.PrimitiveBlock, osmway: osmformat_pb2.Way) -> None:
        self._block = block
        self._way = osmway

    @property
    def id(self) -> int:
        return self._way.id

    def tags(self) -> TagIter:
        return TagIter(self._block, self._way.keys, self._way.vals)

    def raw_tags(self) -> Iterator[Tuple[int, int]]:
        return zip(self._way.keys, self._way.vals)

    def info(self) -> Info:
        return Info(self._block, self._way.info)

    def refs(self) -> WayRefIter:
        """refs iterates over the IDs of nodes referenced by this way."""
        return WayRefIter(self._way.refs)

    def raw_refs(self) -> Sequence[int]:
        """raw_refs returns the delta-coded node IDs, as stored in the file."""
        return self._way.refs

    def node_locations(self) -> Iterator[Position]:
        """node_locations iterates over positions of the referenced nodes.
        Only available in files with the "LocationsOnWays" feature, otherwise empty.
        """
        for lat, lon in zip(DeltaDecoder(self._way.lat), DeltaDecoder(self._way.lon)):
            yield (
                nano_to_degrees(self._block.lat_offset + self._block.granularity * lat),
                nano_to_degrees(self._block.lon_offset + self._block.granularity * lon),
            )

    def raw_stringtable(self) -> Sequence[bytes]:
        return self._block.stringtable.s

    def __repr__(self) -> str:
        return f"Way(id={self.id})"


class Relation:
    """Relation represents a single
    `OpenStreetMap relation <https://wiki.openstreetmap.org/wiki/Relation>`_.

    Relation is a view over a decoded :py:class:`osmpbf.PrimitiveBlock` and must not be kept
    past the block's lifetime.
    """

    def __init__(self, block: osmformat_pb2.PrimitiveBlock, osmrel: osmformat_pb2.Relation) -> None:
        self._block = block
        self._rel = osmrel

    @property
    def id(self) -> int:
        return self._rel.id

    def tags(self) -> TagIter:
        return TagIter(self._block, self._rel.keys, self._rel.vals)

    def raw_tags(self) -> Iterator[Tuple[int, int]]:
        return zip(self._rel.keys, self._rel.vals)

    def info(self) -> Info:
        return Info(self._block, self._rel.info)

    def members(self) -> RelMemberIter:
        return RelMemberIter(self._block, self._rel)

    def raw_stringtable(self) -> Sequence[bytes]:
        return self._block.stringtable.s

    def __repr__(self) -> str:
        return f"Relation(id={self.id})"
