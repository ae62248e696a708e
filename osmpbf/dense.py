# © Copyright 2024 Mikołaj Kuranowski
# SPDX-License-Identifier: GPL-3.0-or-later

from dataclasses import dataclass, field
from typing import Iterator, Optional, Sequence, Tuple

from .delta import DeltaDecoder
from .elements import Position, TagIter, nano_to_degrees
from .pbf import osmformat_pb2
from .stringtable import str_from_stringtable


@dataclass(frozen=True)
class DenseNodeInfo:
    """DenseNodeInfo holds metadata of a :py:class:`DenseNode`.

    Unlike :py:class:`osmpbf.Info`, all fields except ``visible`` are always present.
    """

    block: osmformat_pb2.PrimitiveBlock = field(repr=False, compare=False)
    version: int
    timestamp: int
    """timestamp is the raw timestamp, in units of the block's date granularity."""

    changeset: int
    uid: int
    user_sid: int
    visible: bool = True
    """visible is only relevant for files with historical information,
    and defaults to True if the file doesn't carry visibility flags."""

    @property
    def milli_timestamp(self) -> int:
        """milli_timestamp is the time of the last modification in milliseconds since the epoch."""
        return self.timestamp * self.block.date_granularity

    def user(self) -> str:
        """user returns the name of the user who last modified the node.
        Raises :py:exc:`StringtableError` if the name can't be resolved.
        """
        return str_from_stringtable(self.block, self.user_sid)


class DenseNode:
    """DenseNode represents a single `OpenStreetMap node <https://wiki.openstreetmap.org/wiki/Node>`_,
    stored in the columnar "dense" encoding.

    DenseNode is a view over a decoded :py:class:`osmpbf.PrimitiveBlock` and must not be kept
    past the block's lifetime.
    """

    def __init__(
        self,
        block: osmformat_pb2.PrimitiveBlock,
        id: int,
        lat: int,
        lon: int,
        keys_vals: Sequence[int],
        keys_vals_range: Tuple[int, int],
        info: Optional[DenseNodeInfo] = None,
    ) -> None:
        self._block = block
        self._id = id
        self._lat = lat
        self._lon = lon
        self._keys_vals = keys_vals
        self._keys_vals_range = keys_vals_range
        self._info = info

    @property
    def id(self) -> int:
        return self._id

    def tags(self) -> TagIter:
        """tags iterates over (key, value) string pairs, with the same
        truncation rules as :py:class:`osmpbf.TagIter`."""
        start, end = self._keys_vals_range
        kv = self._keys_vals
        return TagIter(
            self._block,
            (kv[i] for i in range(start, end, 2)),
            (kv[i] for i in range(start + 1, end, 2)),
        )

    def raw_tags(self) -> Iterator[Tuple[int, int]]:
        start, end = self._keys_vals_range
        kv = self._keys_vals
        return ((kv[i], kv[i + 1]) for i in range(start, end, 2))

    def raw_keys_vals(self) -> Sequence[int]:
        """raw_keys_vals returns the flattened key and value string table indices of this node,
        without the terminating zero."""
        start, end = self._keys_vals_range
        return self._keys_vals[start:end]

    def info(self) -> Optional[DenseNodeInfo]:
        return self._info

    @property
    def lat_nano(self) -> int:
        return self._block.lat_offset + self._block.granularity * self._lat

    @property
    def lon_nano(self) -> int:
        return self._block.lon_offset + self._block.granularity * self._lon

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
        return f"DenseNode(id={self.id}, position={self.position!r})"


class DenseNodeIter:
    """DenseNodeIter decodes the nodes of a ``DenseNodes`` message.

    IDs, latitudes and longitudes are delta-coded columns, consumed in lock-step;
    the iteration stops as soon as any of them runs out.

    Tags of all nodes are stored in a single flat ``keys_vals`` array:
    each node has zero or more (key, value) index pairs followed by a single 0.
    If the array is empty, none of the nodes has tags.
    """

    def __init__(self, block: osmformat_pb2.PrimitiveBlock, dense: osmformat_pb2.DenseNodes) -> None:
        self._block = block
        self._nodes = zip(DeltaDecoder(dense.id), DeltaDecoder(dense.lat), DeltaDecoder(dense.lon))
        self._keys_vals = dense.keys_vals
        self._keys_vals_index = 0

        self._info: Optional[Iterator[Tuple[int, int, int, int, int]]] = None
        self._visible: Iterator[bool] = iter(())
        if dense.HasField("denseinfo"):
            dinfo = dense.denseinfo
            self._info = zip(
                dinfo.version,
                DeltaDecoder(dinfo.timestamp),
                DeltaDecoder(dinfo.changeset),
                DeltaDecoder(dinfo.uid),
                DeltaDecoder(dinfo.user_sid),
            )
            self._visible = iter(dinfo.visible)

    @classmethod
    def empty(cls, block: osmformat_pb2.PrimitiveBlock) -> "DenseNodeIter":
        return cls(block, osmformat_pb2.DenseNodes())

    def __iter__(self) -> Iterator[DenseNode]:
        return self

    def __next__(self) -> DenseNode:
        id, lat, lon = next(self._nodes)
        return DenseNode(
            self._block,
            id,
            lat,
            lon,
            self._keys_vals,
            self._next_keys_vals_range(),
            self._next_info(),
        )

    def _next_keys_vals_range(self) -> Tuple[int, int]:
        kv = self._keys_vals
        start = self._keys_vals_index
        end = start
        while end + 1 < len(kv) and kv[end] != 0:
            end += 2

        # Skip over the terminating zero (or a dangling key without a value)
        self._keys_vals_index = min(end + 1, len(kv))
        return start, end

    def _next_info(self) -> Optional[DenseNodeInfo]:
        if self._info is None:
            return None

        row = next(self._info, None)
        if row is None:
            # One of the columns ran out; the rest can't be aligned with nodes anymore
            self._info = None
            return None

        version, timestamp, changeset, uid, user_sid = row
        return DenseNodeInfo(
            self._block,
            version,
            timestamp,
            changeset,
            uid,
            user_sid,
            next(self._visible, True),
        )
