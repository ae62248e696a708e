# © Copyright 2024 Mikołaj Kuranowski
# SPDX-License-Identifier: GPL-3.0-or-later

import bz2
import io
import lzma
import os
import struct
import tempfile
import zlib
from typing import List
from unittest import TestCase

from ._fixtures import blob_content, frame, header_frame, sample_blocks, sample_file
from .blob import (
    MAX_BLOB_HEADER_SIZE,
    MAX_BLOB_MESSAGE_SIZE,
    Blob,
    BlobReader,
    BlobType,
    ByteOffset,
    UnknownBlob,
    decode_blob,
)
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


def record_offsets(data: bytes) -> List[int]:
    offsets: List[int] = []
    offset = 0
    while offset < len(data):
        offsets.append(offset)
        header_size = struct.unpack("!L", data[offset : offset + 4])[0]
        header = fileformat_pb2.BlobHeader()
        header.ParseFromString(data[offset + 4 : offset + 4 + header_size])
        offset += 4 + header_size + header.datasize
    return offsets


def serialized_block_of_size(size: int) -> bytes:
    # A PrimitiveBlock with a single string: 2 tags and 2 4-byte lengths, then the string
    block = osmformat_pb2.PrimitiveBlock(
        stringtable=osmformat_pb2.StringTable(s=[bytes(size - 10)]),
    )
    return block.SerializeToString()


class TestBlobReader(TestCase):
    def test(self) -> None:
        blobs = list(BlobReader(io.BytesIO(sample_file())))
        self.assertListEqual(
            [b.get_type() for b in blobs],
            [BlobType.OSM_HEADER, BlobType.OSM_DATA, BlobType.OSM_DATA],
        )
        self.assertListEqual([b.type for b in blobs], ["OSMHeader", "OSMData", "OSMData"])
        self.assertListEqual([b.offset for b in blobs], [None, None, None])

    def test_offsets(self) -> None:
        data = sample_file()
        reader = BlobReader.new_seekable(io.BytesIO(data))
        blobs = list(reader)

        self.assertListEqual([b.offset for b in blobs], record_offsets(data))
        self.assertEqual(blobs[0].offset, 0)
        self.assertEqual(reader.offset, len(data))

    def test_offsets_start_at_stream_position(self) -> None:
        data = sample_file()
        stream = io.BytesIO(b"garbage" + data)
        stream.seek(7)
        blobs = list(BlobReader.new_seekable(stream))
        self.assertListEqual([b.offset for b in blobs], [o + 7 for o in record_offsets(data)])

    def test_seek(self) -> None:
        reader = BlobReader.new_seekable(io.BytesIO(sample_file()))
        blobs = list(reader)
        last = blobs[-1]
        assert last.offset is not None

        reader.seek(last.offset)
        again = next(reader)
        self.assertEqual(again.offset, last.offset)
        self.assertEqual(again.content, last.content)
        self.assertIsNone(next(reader, None))

        reader.seek(ByteOffset(0))
        self.assertIs(next(reader).get_type(), BlobType.OSM_HEADER)

    def test_seek_raw(self) -> None:
        data = sample_file()
        reader = BlobReader(io.BytesIO(data))
        self.assertIsNone(reader.offset)

        self.assertEqual(reader.seek_raw(0, io.SEEK_END), len(data))
        self.assertEqual(reader.offset, len(data))
        self.assertIsNone(next(reader, None))

    def test_empty_stream(self) -> None:
        self.assertListEqual(list(BlobReader(io.BytesIO(b""))), [])

    def test_truncated_header_size(self) -> None:
        reader = BlobReader.new_seekable(io.BytesIO(header_frame() + b"\x00\x00"))
        self.assertIs(next(reader).get_type(), BlobType.OSM_HEADER)

        with self.assertRaises(InvalidHeaderSize):
            next(reader)
        self.assertIsNone(reader.offset)
        self.assertIsNone(next(reader, None))

    def test_header_too_big(self) -> None:
        data = struct.pack("!L", MAX_BLOB_HEADER_SIZE) + b"\x00" * 16 + sample_file()
        reader = BlobReader(io.BytesIO(data))

        with self.assertRaises(HeaderTooBig) as ctx:
            next(reader)
        self.assertEqual(ctx.exception.size, MAX_BLOB_HEADER_SIZE)

        # The reader must stop, even if more data follows
        self.assertIsNone(next(reader, None))

    def test_header_just_below_limit(self) -> None:
        content = blob_content(sample_blocks()[1]).SerializeToString()
        base_size = fileformat_pb2.BlobHeader(type="OSMData", datasize=len(content)).ByteSize()
        # indexdata adds a 1-byte tag and a 3-byte length before the padding
        padding = MAX_BLOB_HEADER_SIZE - 1 - base_size - 4
        header = fileformat_pb2.BlobHeader(
            type="OSMData",
            indexdata=bytes(padding),
            datasize=len(content),
        ).SerializeToString()
        self.assertEqual(len(header), MAX_BLOB_HEADER_SIZE - 1)

        data = struct.pack("!L", len(header)) + header + content
        blobs = list(BlobReader(io.BytesIO(data)))
        self.assertEqual(len(blobs), 1)
        self.assertListEqual([e.id for e in blobs[0].to_primitiveblock().elements()], [200])

    def test_invalid_utf8_type(self) -> None:
        header = b"\x0a\x02\xff\xfe\x18\x00"
        reader = BlobReader(io.BytesIO(struct.pack("!L", len(header)) + header + sample_file()))

        with self.assertRaises(ProtobufError) as ctx:
            next(reader)
        self.assertEqual(ctx.exception.location, "blob header")
        self.assertIsNone(next(reader, None))

    def test_truncated_header(self) -> None:
        data = header_frame()
        with self.assertRaises(ProtobufError) as ctx:
            next(BlobReader(io.BytesIO(data[:6])))
        self.assertEqual(ctx.exception.location, "blob header")

    def test_invalid_header(self) -> None:
        data = struct.pack("!L", 3) + b"\xff\xff\xff"
        with self.assertRaises(ProtobufError) as ctx:
            next(BlobReader(io.BytesIO(data)))
        self.assertEqual(ctx.exception.location, "blob header")

    def test_truncated_content(self) -> None:
        reader = BlobReader(io.BytesIO(sample_file()[:-10]))
        next(reader)
        next(reader)

        with self.assertRaises(ProtobufError) as ctx:
            next(reader)
        self.assertEqual(ctx.exception.location, "blob content")
        self.assertIsNone(next(reader, None))

    def test_negative_datasize(self) -> None:
        header = fileformat_pb2.BlobHeader(type="OSMData", datasize=-1).SerializeToString()
        data = struct.pack("!L", len(header)) + header
        with self.assertRaises(ProtobufError):
            next(BlobReader(io.BytesIO(data)))

    def test_unknown_blobs_do_not_stop_iteration(self) -> None:
        data = (
            header_frame()
            + frame("FooBar", fileformat_pb2.Blob(raw=b"\x01\x02\x03"))
            + sample_file()
        )
        blobs = list(BlobReader(io.BytesIO(data)))

        self.assertEqual(len(blobs), 5)
        self.assertIs(blobs[1].get_type(), BlobType.UNKNOWN)
        self.assertEqual(blobs[1].decode(), UnknownBlob("FooBar"))

    def test_from_path(self) -> None:
        data = sample_file()
        with tempfile.TemporaryDirectory() as temp_dir:
            path = os.path.join(temp_dir, "sample.osm.pbf")
            with open(path, "wb") as f:
                f.write(data)

            with BlobReader.from_path(path) as reader:
                blobs = list(reader)
            self.assertTrue(reader.reader.closed)

        self.assertListEqual([b.offset for b in blobs], record_offsets(data))

    def test_close_does_not_close_foreign_streams(self) -> None:
        stream = io.BytesIO(sample_file())
        with BlobReader(stream) as reader:
            next(reader)
        self.assertFalse(stream.closed)


class TestBlobDecode(TestCase):
    def test_header(self) -> None:
        blob = next(BlobReader(io.BytesIO(header_frame())))
        header = blob.decode()

        assert isinstance(header, HeaderBlock)
        self.assertListEqual(header.required_features, ["OsmSchema-V0.6", "DenseNodes"])
        self.assertListEqual(header.optional_features, ["Sort.Type_then_ID"])
        self.assertEqual(header.writing_program, "osmpbf-tests")

    def test_compressions(self) -> None:
        for compression in ("raw", "zlib", "lzma"):
            with self.subTest(compression=compression):
                blobs = list(BlobReader(io.BytesIO(sample_file(compression))))
                block = blobs[1].decode()
                assert isinstance(block, PrimitiveBlock)
                self.assertListEqual(
                    [e.id for e in block.elements()],
                    [1, 2, 3, -1, 100],
                )

    def test_bzip2(self) -> None:
        data = sample_blocks()[1].SerializeToString()
        blob = Blob(
            fileformat_pb2.BlobHeader(type="OSMData", datasize=0),
            fileformat_pb2.Blob(OBSOLETE_bzip2_data=bz2.compress(data), raw_size=len(data)),
        )
        self.assertListEqual([e.id for e in blob.to_primitiveblock().elements()], [200])

    def test_decode_ignores_declared_type(self) -> None:
        blob = Blob(
            fileformat_pb2.BlobHeader(type="FooBar", datasize=0),
            blob_content(sample_blocks()[1]),
        )
        self.assertIsInstance(blob.decode(), UnknownBlob)
        self.assertListEqual([e.id for e in blob.to_primitiveblock().elements()], [200])

    def test_blob_identity(self) -> None:
        blob = Blob(fileformat_pb2.BlobHeader(type="OSMData", datasize=0), fileformat_pb2.Blob())
        same_content = Blob(blob.header, blob.content)

        self.assertEqual(blob, blob)
        self.assertNotEqual(blob, same_content)
        self.assertEqual(len({blob, blob, same_content}), 2)

    def test_empty(self) -> None:
        with self.assertRaises(EmptyBlob):
            decode_blob(fileformat_pb2.Blob(raw_size=10), osmformat_pb2.PrimitiveBlock)

    def test_unsupported_compression(self) -> None:
        with self.assertRaises(UnsupportedCompression) as ctx:
            decode_blob(fileformat_pb2.Blob(lz4_data=b"\x00"), osmformat_pb2.PrimitiveBlock)
        self.assertEqual(ctx.exception.compression, "LZ4")

        with self.assertRaises(UnsupportedCompression) as ctx:
            decode_blob(fileformat_pb2.Blob(zstd_data=b"\x00"), osmformat_pb2.PrimitiveBlock)
        self.assertEqual(ctx.exception.compression, "ZSTD")

    def test_raw_too_big(self) -> None:
        blob = fileformat_pb2.Blob(raw=bytes(MAX_BLOB_MESSAGE_SIZE))
        with self.assertRaises(MessageTooBig):
            decode_blob(blob, osmformat_pb2.PrimitiveBlock)

    def test_zlib_bomb(self) -> None:
        # raw_size lies about the content size
        blob = fileformat_pb2.Blob(
            zlib_data=zlib.compress(bytes(MAX_BLOB_MESSAGE_SIZE + 1)),
            raw_size=100,
        )
        with self.assertRaises(MessageTooBig):
            decode_blob(blob, osmformat_pb2.PrimitiveBlock)

    def test_lzma_bomb(self) -> None:
        blob = fileformat_pb2.Blob(lzma_data=lzma.compress(bytes(MAX_BLOB_MESSAGE_SIZE + 1)))
        with self.assertRaises(MessageTooBig):
            decode_blob(blob, osmformat_pb2.PrimitiveBlock)

    def test_bzip2_bomb(self) -> None:
        blob = fileformat_pb2.Blob(
            OBSOLETE_bzip2_data=bz2.compress(bytes(MAX_BLOB_MESSAGE_SIZE + 1)),
        )
        with self.assertRaises(MessageTooBig):
            decode_blob(blob, osmformat_pb2.PrimitiveBlock)

    def test_raw_just_below_limit(self) -> None:
        data = serialized_block_of_size(MAX_BLOB_MESSAGE_SIZE - 1)
        self.assertEqual(len(data), MAX_BLOB_MESSAGE_SIZE - 1)

        block = decode_blob(fileformat_pb2.Blob(raw=data), osmformat_pb2.PrimitiveBlock)
        self.assertEqual(len(block.stringtable.s[0]), MAX_BLOB_MESSAGE_SIZE - 11)

    def test_zlib_at_limit(self) -> None:
        data = serialized_block_of_size(MAX_BLOB_MESSAGE_SIZE)
        self.assertEqual(len(data), MAX_BLOB_MESSAGE_SIZE)

        blob = fileformat_pb2.Blob(zlib_data=zlib.compress(data), raw_size=len(data))
        block = decode_blob(blob, osmformat_pb2.PrimitiveBlock)
        self.assertEqual(len(block.stringtable.s[0]), MAX_BLOB_MESSAGE_SIZE - 10)

    def test_truncated_zlib(self) -> None:
        data = zlib.compress(sample_blocks()[0].SerializeToString())
        blob = fileformat_pb2.Blob(zlib_data=data[: len(data) // 2])
        with self.assertRaises(ProtobufError) as ctx:
            decode_blob(blob, osmformat_pb2.PrimitiveBlock)
        self.assertEqual(ctx.exception.location, "blob zlib data")

    def test_invalid_zlib(self) -> None:
        blob = fileformat_pb2.Blob(zlib_data=b"definitely not zlib")
        with self.assertRaises(ProtobufError):
            decode_blob(blob, osmformat_pb2.PrimitiveBlock)

    def test_invalid_message(self) -> None:
        blob = fileformat_pb2.Blob(raw=b"\xff\xff\xff\xff")
        with self.assertRaises(ProtobufError) as ctx:
            decode_blob(blob, osmformat_pb2.PrimitiveBlock)
        self.assertEqual(ctx.exception.location, "raw blob data")

    def test_errors_are_pbf_errors(self) -> None:
        with self.assertRaises(PBFError):
            decode_blob(fileformat_pb2.Blob(), osmformat_pb2.HeaderBlock)
