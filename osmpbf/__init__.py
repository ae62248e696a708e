# © Copyright 2024 Mikołaj Kuranowski
# SPDX-License-Identifier: GPL-3.0-or-later

"""Streaming reader of OpenStreetMap PBF files"""

__title__ = "osmpbf"
__description__ = "Streaming reader of OpenStreetMap PBF files"
__url__ = "https://github.com/MKuranowski/osmpbf"
__author__ = "Mikołaj Kuranowski"
__copyright__ = "© Copyright 2024 Mikołaj Kuranowski"
__license__ = "GPL-3.0-or-later"
__version__ = "1.0.0"
__email__ = "mkuranowski+pypackages@gmail.com"

from .blob import (
    DEFAULT_BUFFER_SIZE,
    MAX_BLOB_HEADER_SIZE,
    MAX_BLOB_MESSAGE_SIZE,
    Blob,
    BlobDecode,
    BlobReader,
    BlobType,
    ByteOffset,
    UnknownBlob,
    decode_blob,
)
from .block import (
    SUPPORTED_FEATURES,
    BlockElementsIter,
    BoundingBox,
    Element,
    HeaderBlock,
    PrimitiveBlock,
    PrimitiveGroup,
)
from .delta import DeltaDecoder, WayRefIter
from .dense import DenseNode, DenseNodeInfo, DenseNodeIter
from .elements import (
    Info,
    Node,
    Position,
    Relation,
    RelMember,
    RelMemberIter,
    RelMemberType,
    TagIter,
    Way,
)
from .error import (
    BlobError,
    EmptyBlob,
    HeaderTooBig,
    InvalidHeaderSize,
    MessageTooBig,
    PBFError,
    ProtobufError,
    StringtableError,
    StringtableIndexOutOfBounds,
    StringtableUtf8,
    UnsupportedCompression,
    UnsupportedFeatures,
)
from .reader import ElementReader
from .stringtable import str_from_stringtable

__all__ = [
    "Blob",
    "BlobDecode",
    "BlobError",
    "BlobReader",
    "BlobType",
    "BlockElementsIter",
    "BoundingBox",
    "ByteOffset",
    "decode_blob",
    "DEFAULT_BUFFER_SIZE",
    "DeltaDecoder",
    "DenseNode",
    "DenseNodeInfo",
    "DenseNodeIter",
    "Element",
    "ElementReader",
    "EmptyBlob",
    "HeaderBlock",
    "HeaderTooBig",
    "Info",
    "InvalidHeaderSize",
    "MAX_BLOB_HEADER_SIZE",
    "MAX_BLOB_MESSAGE_SIZE",
    "MessageTooBig",
    "Node",
    "PBFError",
    "Position",
    "PrimitiveBlock",
    "PrimitiveGroup",
    "ProtobufError",
    "Relation",
    "RelMember",
    "RelMemberIter",
    "RelMemberType",
    "str_from_stringtable",
    "StringtableError",
    "StringtableIndexOutOfBounds",
    "StringtableUtf8",
    "SUPPORTED_FEATURES",
    "TagIter",
    "UnknownBlob",
    "UnsupportedCompression",
    "UnsupportedFeatures",
    "Way",
    "WayRefIter",
]
