# © Copyright 2024 Mikołaj Kuranowski
# SPDX-License-Identifier: GPL-3.0-or-later

"""Exceptions raised when reading `OSM PBF <https://wiki.openstreetmap.org/wiki/PBF_Format>`_ files.

All of them derive from :py:class:`PBFError`. New subclasses may be added in the future,
so code handling these errors should always have a fallback for :py:class:`PBFError`.
"""

from typing import Iterable, List


class PBFError(ValueError):
    """Base for all exceptions raised on invalid
    `OSM PBF <https://wiki.openstreetmap.org/wiki/PBF_Format>`_ encoding."""

    pass


class BlobError(PBFError):
    """Exception raised on an invalid outer framing or content of a blob."""

    pass


class InvalidHeaderSize(BlobError):
    """The 4-byte BlobHeader length could not be read."""

    def __init__(self) -> None:
        super().__init__("blob header size could not be decoded")


class HeaderTooBig(BlobError):
    """The BlobHeader length is not below :py:const:`osmpbf.blob.MAX_BLOB_HEADER_SIZE`."""

    size: int

    def __init__(self, size: int) -> None:
        super().__init__(f"blob header is too big: {size} bytes")
        self.size = size


class MessageTooBig(BlobError):
    """The (decompressed) blob content is bigger than
    :py:const:`osmpbf.blob.MAX_BLOB_MESSAGE_SIZE`.

    For compressed blobs decompression stops right after crossing the limit,
    so ``size`` is only a lower bound on the real content size.
    """

    size: int

    def __init__(self, size: int) -> None:
        super().__init__(f"blob message is too big: {size} bytes")
        self.size = size


class EmptyBlob(BlobError):
    """The blob has none of the data fields."""

    def __init__(self) -> None:
        super().__init__("blob is missing fields 'raw' and 'zlib_data'")


class UnsupportedCompression(BlobError):
    """The blob content uses a compression which can't be decoded, like LZ4 or ZSTD."""

    compression: str

    def __init__(self, compression: str) -> None:
        super().__init__(f"blob uses unsupported compression, {compression}")
        self.compression = compression


class ProtobufError(PBFError):
    """A protobuf message could not be decoded.

    ``location`` describes which message failed, e.g. ``"blob header"``,
    ``"blob content"`` or ``"blob zlib data"``.
    """

    location: str

    def __init__(self, location: str, reason: str) -> None:
        super().__init__(f"protobuf error at {location!r}: {reason}")
        self.location = location


class StringtableError(PBFError):
    """Base for errors when looking up strings in the string table of a block."""

    index: int

    def __init__(self, msg: str, index: int) -> None:
        super().__init__(msg)
        self.index = index


class StringtableIndexOutOfBounds(StringtableError):
    """An element refers to a string table entry which does not exist."""

    def __init__(self, index: int) -> None:
        super().__init__(f"stringtable index out of bounds: {index}", index)


class StringtableUtf8(StringtableError):
    """A string table entry is not valid UTF-8.
    The underlying UnicodeDecodeError is available as ``__cause__``."""

    def __init__(self, index: int, reason: str) -> None:
        super().__init__(f"invalid UTF-8 at string table index {index}: {reason}", index)


class UnsupportedFeatures(PBFError):
    """A HeaderBlock requires features this library can't handle."""

    features: List[str]

    def __init__(self, features: Iterable[str]) -> None:
        self.features = sorted(features)
        super().__init__("HeaderBlock requests unsupported features: " + ", ".join(self.features))
