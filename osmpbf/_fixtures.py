# © Copyright 2024 Mikołaj Kuranowski
# SPDX-License-Identifier: GPL-3.0-or-later

"""Helpers for building OSM PBF data in memory, used by the test suite."""

import lzma
import struct
import zlib
from typing import Iterable, Literal, Sequence, Union

from google.protobuf.message import Message

from .pbf import fileformat_pb2, osmformat_pb2

Compression = Literal["raw", "zlib", "lzma"]

STRINGS = [
    "",
    "highway",
    "primary",
    "name",
    "Main Street",
    "type",
    "restriction",
    "from",
    "via",
    "to",
    "ref",
    "1",
    "alice",
]


def string_table(strings: Iterable[Union[str, bytes]]) -> osmformat_pb2.StringTable:
    return osmformat_pb2.StringTable(
        s=[s.encode("utf-8") if isinstance(s, str) else s for s in strings]
    )


def primitive_block(
    groups: Sequence[osmformat_pb2.PrimitiveGroup] = (),
    strings: Iterable[Union[str, bytes]] = STRINGS,
    **kwargs: int,
) -> osmformat_pb2.PrimitiveBlock:
    return osmformat_pb2.PrimitiveBlock(
        stringtable=string_table(strings),
        primitivegroup=groups,
        **kwargs,
    )


def blob_content(message: Message, compression: Compression = "zlib") -> fileformat_pb2.Blob:
    data = message.SerializeToString()
    if compression == "raw":
        return fileformat_pb2.Blob(raw=data, raw_size=len(data))
    elif compression == "zlib":
        return fileformat_pb2.Blob(zlib_data=zlib.compress(data), raw_size=len(data))
    else:
        return fileformat_pb2.Blob(lzma_data=lzma.compress(data), raw_size=len(data))


def frame(type: str, content: fileformat_pb2.Blob) -> bytes:
    """frame serializes a single record: BlobHeader length, BlobHeader and the Blob."""
    content_data = content.SerializeToString()
    header_data = fileformat_pb2.BlobHeader(
        type=type,
        datasize=len(content_data),
    ).SerializeToString()
    return struct.pack("!L", len(header_data)) + header_data + content_data


def header_frame(
    required_features: Sequence[str] = ("OsmSchema-V0.6", "DenseNodes"),
    compression: Compression = "zlib",
) -> bytes:
    header = osmformat_pb2.HeaderBlock(
        required_features=required_features,
        optional_features=["Sort.Type_then_ID"],
        writingprogram="osmpbf-tests",
    )
    return frame("OSMHeader", blob_content(header, compression))


def data_frame(block: osmformat_pb2.PrimitiveBlock, compression: Compression = "zlib") -> bytes:
    return frame("OSMData", blob_content(block, compression))


def sample_blocks() -> Sequence[osmformat_pb2.PrimitiveBlock]:
    """sample_blocks returns 2 blocks with the following elements:

    * dense nodes 1 (ref=1), 2 (no tags) and 3 (name=Main Street, highway=primary),
    * node -1 (no tags),
    * way 100 through nodes 1, 2 and 3 (highway=primary),
    * relation 200 with members: way 100 (from), node 2 (via), way 100 (to) (type=restriction).

    The first block has separate groups for dense nodes, nodes and ways;
    the second block has the relation.
    """
    dense = osmformat_pb2.DenseNodes(
        id=[1, 1, 1],
        lat=[520000000, 100, 100],
        lon=[210000000, -100, -100],
        keys_vals=[10, 11, 0, 0, 3, 4, 1, 2, 0],
        denseinfo=osmformat_pb2.DenseInfo(
            version=[1, 2, 3],
            timestamp=[1700000000, 10, 10],
            changeset=[5, 1, 1],
            uid=[42, 0, 0],
            user_sid=[12, 0, 0],
        ),
    )
    node = osmformat_pb2.Node(id=-1, lat=520001000, lon=210001000)
    way = osmformat_pb2.Way(id=100, keys=[1], vals=[2], refs=[1, 1, 1])
    relation = osmformat_pb2.Relation(
        id=200,
        keys=[5],
        vals=[6],
        roles_sid=[7, 8, 9],
        memids=[100, -98, 98],
        types=[
            osmformat_pb2.Relation.WAY,
            osmformat_pb2.Relation.NODE,
            osmformat_pb2.Relation.WAY,
        ],
    )

    return [
        primitive_block(
            [
                osmformat_pb2.PrimitiveGroup(dense=dense),
                osmformat_pb2.PrimitiveGroup(nodes=[node]),
                osmformat_pb2.PrimitiveGroup(ways=[way]),
            ],
            granularity=1,
        ),
        primitive_block([osmformat_pb2.PrimitiveGroup(relations=[relation])]),
    ]


def sample_file(compression: Compression = "zlib") -> bytes:
    """sample_file returns a complete OSM PBF file with a header and :py:func:`sample_blocks`."""
    return header_frame(compression=compression) + b"".join(
        data_frame(block, compression) for block in sample_blocks()
    )
