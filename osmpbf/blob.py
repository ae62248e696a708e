# © Copyright 2024 Mikołaj Kuranowski
# SPDX-License-Identifier: GPL-3.0-or-later

import bz2
import io
import lzma
import struct
import zlib
from dataclasses import dataclass
from enum import Enum, auto
from logging import getLogger
from os import PathLike
from typing import IO, Any, Iterator, NewType, Optional, Type, TypeVar, Union

from google.protobuf.message import DecodeError, Message
from typing_extensions import Self

from .block import HeaderBlock, PrimitiveBlock
from .error import (
    EmptyBlob,
    HeaderTooBig,
    InvalidHeaderSize,
    MessageTooBig,
    PBFError,
    ProtobufError,
    UnsupportedCompression,
)
from .pbf import fileformat_pb2, osmformat_pb2

logger = getLogger("osmpbf.blob")

MAX_BLOB_HEADER_SIZE = 64 * 1024
"""Maximum allowed size of a BlobHeader, in bytes. Headers of this size or bigger
are rejected with :py:exc:`HeaderTooBig`."""

MAX_BLOB_MESSAGE_SIZE = 32 * 1024 * 1024
"""Maximum allowed size of the uncompressed content of a Blob, in bytes.
Bigger blobs are rejected with :py:exc:`MessageTooBig`.

For compressed blobs the limit is enforced while decompressing,
regardless of the size declared in the blob itself.
"""

DEFAULT_BUFFER_SIZE = io.DEFAULT_BUFFER_SIZE
"""Default value for ``buffering`` argument of :py:meth:`BlobReader.from_path`,
`io.DEFAULT_BUFFER_SIZE <https://docs.python.org/3/library/io.html#io.DEFAULT_BUFFER_SIZE>`_.
"""

ByteOffset = NewType("ByteOffset", int)
"""ByteOffset is a position in a stream, in bytes from its start."""

_M = TypeVar("_M", bound=Message)


class BlobType(Enum):
    """BlobType is the type of content of a :py:class:`Blob`."""

    OSM_HEADER = auto()
    """The blob contains a :py:class:`HeaderBlock`."""

    OSM_DATA = auto()
    """The blob contains a :py:class:`PrimitiveBlock`."""

    UNKNOWN = auto()
    """The blob contains something else. Such blobs should be ignored."""


_BLOB_TYPES = {
    "OSMHeader": BlobType.OSM_HEADER,
    "OSMData": BlobType.OSM_DATA,
}


@dataclass(frozen=True)
class UnknownBlob:
    """UnknownBlob is the result of decoding a blob with an unknown type.
    It is not an error - readers should skip blobs they don't understand."""

    type: str


BlobDecode = Union[HeaderBlock, PrimitiveBlock, UnknownBlob]
"""BlobDecode is the result of :py:meth:`Blob.decode`."""


def parse_message(message_type: Type[_M], data: bytes, location: str) -> _M:
    """parse_message decodes ``data`` as a protobuf message of the provided type.
    Decoding failures are raised as :py:exc:`ProtobufError` tagged with ``location``.
    """
    message = message_type()
    try:
        message.ParseFromString(data)
    except (DecodeError, UnicodeDecodeError) as e:
        raise ProtobufError(location, str(e)) from e
    return message


def _decompress(decompressor: Any, data: bytes, location: str) -> bytes:
    # Ask for one byte over the limit to tell apart content of exactly
    # MAX_BLOB_MESSAGE_SIZE bytes from bigger content.
    try:
        decompressed = decompressor.decompress(data, MAX_BLOB_MESSAGE_SIZE + 1)
    except (zlib.error, lzma.LZMAError, OSError, EOFError) as e:
        raise ProtobufError(location, str(e)) from e

    if len(decompressed) > MAX_BLOB_MESSAGE_SIZE:
        raise MessageTooBig(len(decompressed))
    elif not decompressor.eof:
        raise ProtobufError(location, "compressed stream ended unexpectedly")
    return decompressed


def decode_blob(blob: fileformat_pb2.Blob, message_type: Type[_M]) -> _M:
    """decode_blob decompresses the content of a blob and decodes it as ``message_type``.

    Raw content is rejected if it has :py:const:`MAX_BLOB_MESSAGE_SIZE` or more bytes,
    compressed content is decompressed up to :py:const:`MAX_BLOB_MESSAGE_SIZE` bytes;
    content over the limit raises :py:exc:`MessageTooBig`.

    This function only depends on its arguments, and may be called concurrently
    on distinct blobs.
    """
    if blob.HasField("raw"):
        size = len(blob.raw)
        if size >= MAX_BLOB_MESSAGE_SIZE:
            raise MessageTooBig(size)
        return parse_message(message_type, blob.raw, "raw blob data")

    elif blob.HasField("zlib_data"):
        data = _decompress(zlib.decompressobj(), blob.zlib_data, "blob zlib data")
        return parse_message(message_type, data, "blob zlib data")

    elif blob.HasField("lzma_data"):
        data = _decompress(lzma.LZMADecompressor(), blob.lzma_data, "blob lzma data")
        return parse_message(message_type, data, "blob lzma data")

    elif blob.HasField("OBSOLETE_bzip2_data"):
        data = _decompress(bz2.BZ2Decompressor(), blob.OBSOLETE_bzip2_data, "blob bzip2 data")
        return parse_message(message_type, data, "blob bzip2 data")

    elif blob.HasField("lz4_data"):
        raise UnsupportedCompression("LZ4")

    elif blob.HasField("zstd_data"):
        raise UnsupportedCompression("ZSTD")

    raise EmptyBlob()


@dataclass(frozen=True, eq=False)
class Blob:
    """Blob is a single framed record of an OSM PBF file,
    with a header and the (usually compressed) content.

    Decoding is not cached, and may be repeated any number of times.
    Blobs are compared and hashed by identity.
    """

    header: fileformat_pb2.BlobHeader
    content: fileformat_pb2.Blob
    offset: Optional[ByteOffset] = None
    """offset of the blob from the start of its stream,
    or None if the blob was read without offset tracking."""

    @property
    def type(self) -> str:
        """type is the raw type string from the blob's header."""
        return self.header.type

    def get_type(self) -> BlobType:
        """get_type returns the type of the blob, without decoding its content."""
        return _BLOB_TYPES.get(self.header.type, BlobType.UNKNOWN)

    def decode(self) -> BlobDecode:
        """decode decodes the content of the blob, based on its type.
        This might involve an expensive decompression step.
        """
        blob_type = self.get_type()
        if blob_type is BlobType.OSM_HEADER:
            return self.to_headerblock()
        elif blob_type is BlobType.OSM_DATA:
            return self.to_primitiveblock()
        return UnknownBlob(self.header.type)

    def to_headerblock(self) -> HeaderBlock:
        """to_headerblock decodes the content of the blob as a :py:class:`HeaderBlock`,
        regardless of the blob's type."""
        return HeaderBlock(decode_blob(self.content, osmformat_pb2.HeaderBlock))

    def to_primitiveblock(self) -> PrimitiveBlock:
        """to_primitiveblock decodes the content of the blob as a :py:class:`PrimitiveBlock`,
        regardless of the blob's type."""
        return PrimitiveBlock(decode_blob(self.content, osmformat_pb2.PrimitiveBlock))


class BlobReader:
    """BlobReader iterates over the :py:class:`Blob` records of an
    `OSM PBF <https://wiki.openstreetmap.org/wiki/PBF_Format>`_ stream.

    Each record consists of a 4-byte big-endian BlobHeader length, the BlobHeader
    and the Blob itself. Only the framing is decoded - blob contents are decoded
    on demand with :py:meth:`Blob.decode`.

    After raising any :py:exc:`PBFError` the reader stops, as the position of the following
    record can't be trusted anymore; further iteration yields nothing.

    Offsets of blobs are only tracked if the reader was created with :py:meth:`new_seekable`
    or :py:meth:`from_path`; otherwise every blob has a ``None`` offset.
    """

    reader: IO[bytes]

    offset: Optional[ByteOffset]
    """offset of the next record from the start of the stream, if tracked."""

    def __init__(self, reader: IO[bytes]) -> None:
        self.reader = reader
        self.offset = None
        self._last_blob_ok = True
        self._close_reader = False

    @classmethod
    def new_seekable(cls, reader: IO[bytes]) -> Self:
        """Creates a BlobReader tracking offsets, starting from the current position
        of the provided seekable stream."""
        blob_reader = cls(reader)
        blob_reader.offset = ByteOffset(reader.tell())
        return blob_reader

    @classmethod
    def from_path(
        cls,
        path: Union[str, "PathLike[str]"],
        buffering: int = DEFAULT_BUFFER_SIZE,
    ) -> Self:
        """Opens the file at the provided path and creates a seekable BlobReader over it.
        The file is closed by :py:meth:`close`, or when used as a context manager.
        """
        blob_reader = cls.new_seekable(open(path, mode="rb", buffering=buffering))
        blob_reader._close_reader = True
        return blob_reader

    def close(self) -> None:
        """close closes the underlying file, if it was opened by :py:meth:`from_path`."""
        if self._close_reader:
            self.reader.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *_: Any) -> None:
        self.close()

    def __iter__(self) -> Iterator[Blob]:
        return self

    def __next__(self) -> Blob:
        if not self._last_blob_ok:
            raise StopIteration

        try:
            blob = self._read_blob()
        except PBFError as e:
            logger.debug("Stopping blob iteration at offset %s: %s", self.offset, e)
            self._last_blob_ok = False
            self.offset = None
            raise

        if blob is None:
            raise StopIteration
        return blob

    def seek(self, offset: ByteOffset) -> None:
        """seek moves the underlying stream to the provided offset, which must be the start
        of a record (as reported by :py:attr:`Blob.offset`).
        Requires a seekable stream; enables offset tracking.
        """
        self.seek_raw(offset, io.SEEK_SET)

    def seek_raw(self, offset: int, whence: int = io.SEEK_SET) -> ByteOffset:
        """seek_raw moves the underlying stream, with the same arguments as
        `IOBase.seek <https://docs.python.org/3/library/io.html#io.IOBase.seek>`_,
        and returns the new absolute position."""
        logger.debug("Seeking to %d (whence=%d)", offset, whence)
        try:
            new_offset = ByteOffset(self.reader.seek(offset, whence))
        except OSError:
            self.offset = None
            raise
        self.offset = new_offset
        return new_offset

    def _read_blob(self) -> Optional[Blob]:
        start_offset = self.offset

        try:
            header_size_bytes = self.reader.read(4)
        except OSError as e:
            raise InvalidHeaderSize() from e

        if len(header_size_bytes) == 0:
            return None
        elif len(header_size_bytes) != 4:
            raise InvalidHeaderSize()

        header_size: int = struct.unpack("!L", header_size_bytes)[0]
        if header_size >= MAX_BLOB_HEADER_SIZE:
            raise HeaderTooBig(header_size)

        header = self._read_message(header_size, fileformat_pb2.BlobHeader, "blob header")
        if not isinstance(header.type, str):
            raise ProtobufError("blob header", f"type is not valid UTF-8: {header.type!r}")
        if header.datasize < 0:
            raise ProtobufError("blob header", f"negative datasize: {header.datasize}")

        content = self._read_message(header.datasize, fileformat_pb2.Blob, "blob content")

        if self.offset is not None:
            self.offset = ByteOffset(self.offset + 4 + header_size + header.datasize)

        return Blob(header, content, start_offset)

    def _read_message(self, size: int, message_type: Type[_M], location: str) -> _M:
        try:
            data = self.reader.read(size)
        except OSError as e:
            raise ProtobufError(location, str(e)) from e

        if len(data) != size:
            raise ProtobufError(
                location,
                f"unexpected end of stream: expected {size} bytes, got {len(data)}",
            )

        return parse_message(message_type, data, location)
