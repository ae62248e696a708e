# © Copyright 2024 Mikołaj Kuranowski
# SPDX-License-Identifier: GPL-3.0-or-later

from typing import List, Tuple
from unittest import TestCase

from ._fixtures import primitive_block, sample_blocks
from .block import BlockElementsIter, Element, HeaderBlock, PrimitiveBlock
from .dense import DenseNode
from .elements import Node, Relation, Way
from .error import StringtableIndexOutOfBounds, StringtableUtf8
from .pbf import osmformat_pb2


def describe(element: Element) -> Tuple[str, int]:
    return type(element).__name__, element.id


def mixed_block() -> PrimitiveBlock:
    # Producers usually put a single element type in a group,
    # but all of them must be handled in any group.
    return PrimitiveBlock(
        primitive_block(
            [
                osmformat_pb2.PrimitiveGroup(
                    relations=[osmformat_pb2.Relation(id=30)],
                    ways=[osmformat_pb2.Way(id=20), osmformat_pb2.Way(id=21)],
                    nodes=[osmformat_pb2.Node(id=10, lat=0, lon=0)],
                    dense=osmformat_pb2.DenseNodes(id=[1, 1], lat=[0, 0], lon=[0, 0]),
                ),
                osmformat_pb2.PrimitiveGroup(),
                osmformat_pb2.PrimitiveGroup(ways=[osmformat_pb2.Way(id=22)]),
                osmformat_pb2.PrimitiveGroup(dense=osmformat_pb2.DenseNodes(id=[3], lat=[0], lon=[0])),
            ]
        )
    )


MIXED_BLOCK_ELEMENTS = [
    ("DenseNode", 1),
    ("DenseNode", 2),
    ("Node", 10),
    ("Way", 20),
    ("Way", 21),
    ("Relation", 30),
    ("Way", 22),
    ("DenseNode", 3),
]


class TestPrimitiveBlock(TestCase):
    def test_elements(self) -> None:
        block = mixed_block()
        self.assertListEqual([describe(e) for e in block.elements()], MIXED_BLOCK_ELEMENTS)

    def test_iter(self) -> None:
        block = mixed_block()
        self.assertListEqual([describe(e) for e in block], MIXED_BLOCK_ELEMENTS)

    def test_elements_types(self) -> None:
        elements = list(mixed_block().elements())
        self.assertIsInstance(elements[0], DenseNode)
        self.assertIsInstance(elements[2], Node)
        self.assertIsInstance(elements[3], Way)
        self.assertIsInstance(elements[5], Relation)

    def test_for_each_element(self) -> None:
        got: List[Tuple[str, int]] = []
        mixed_block().for_each_element(lambda e: got.append(describe(e)))
        self.assertListEqual(got, MIXED_BLOCK_ELEMENTS)

    def test_groups(self) -> None:
        groups = list(mixed_block().groups())
        self.assertListEqual([len(g) for g in groups], [6, 0, 1, 1])
        self.assertEqual(sum(len(g) for g in groups), len(MIXED_BLOCK_ELEMENTS))

        self.assertListEqual([n.id for n in groups[0].dense_nodes()], [1, 2])
        self.assertListEqual([n.id for n in groups[0].nodes()], [10])
        self.assertListEqual([w.id for w in groups[0].ways()], [20, 21])
        self.assertListEqual([r.id for r in groups[0].relations()], [30])
        self.assertListEqual(list(groups[1].dense_nodes()), [])

    def test_empty(self) -> None:
        block = PrimitiveBlock(primitive_block())
        self.assertListEqual(list(block.elements()), [])
        self.assertListEqual(list(block.groups()), [])

    def test_only_empty_groups(self) -> None:
        block = PrimitiveBlock(
            primitive_block([osmformat_pb2.PrimitiveGroup(), osmformat_pb2.PrimitiveGroup()])
        )
        self.assertListEqual(list(block.elements()), [])

    def test_elements_iter_stays_exhausted(self) -> None:
        it = BlockElementsIter(sample_blocks()[1])
        self.assertEqual(describe(next(it)), ("Relation", 200))
        self.assertIsNone(next(it, None))
        self.assertIsNone(next(it, None))

    def test_sample_block(self) -> None:
        block = PrimitiveBlock(sample_blocks()[0])
        elements = list(block.elements())
        self.assertListEqual(
            [describe(e) for e in elements],
            [("DenseNode", 1), ("DenseNode", 2), ("DenseNode", 3), ("Node", -1), ("Way", 100)],
        )

        way = elements[4]
        assert isinstance(way, Way)
        self.assertListEqual(list(way.refs()), [1, 2, 3])
        self.assertDictEqual(dict(way.tags()), {"highway": "primary"})

    def test_properties(self) -> None:
        block = PrimitiveBlock(primitive_block(granularity=1000, lat_offset=5, lon_offset=-5))
        self.assertEqual(block.granularity, 1000)
        self.assertEqual(block.lat_offset, 5)
        self.assertEqual(block.lon_offset, -5)
        self.assertEqual(block.date_granularity, 1000)

    def test_string(self) -> None:
        block = PrimitiveBlock(primitive_block(strings=["", "highway", b"\xff"]))
        self.assertEqual(block.string(1), "highway")
        self.assertListEqual(list(block.raw_stringtable()), [b"", b"highway", b"\xff"])
        with self.assertRaises(StringtableUtf8):
            block.string(2)
        with self.assertRaises(StringtableIndexOutOfBounds):
            block.string(3)


class TestHeaderBlock(TestCase):
    def test(self) -> None:
        header = HeaderBlock(
            osmformat_pb2.HeaderBlock(
                bbox=osmformat_pb2.HeaderBBox(
                    left=20_000_000_000,
                    right=21_000_000_000,
                    top=53_000_000_000,
                    bottom=52_000_000_000,
                ),
                required_features=["OsmSchema-V0.6", "DenseNodes"],
                optional_features=["Sort.Type_then_ID"],
                writingprogram="osmium/1.16.0",
                osmosis_replication_timestamp=1_700_000_000,
                osmosis_replication_sequence_number=42,
                osmosis_replication_base_url="https://planet.openstreetmap.org/replication/minute",
            )
        )

        self.assertListEqual(header.required_features, ["OsmSchema-V0.6", "DenseNodes"])
        self.assertListEqual(header.optional_features, ["Sort.Type_then_ID"])
        self.assertListEqual(header.unsupported_features(), [])
        self.assertEqual(header.writing_program, "osmium/1.16.0")
        self.assertIsNone(header.source)
        self.assertEqual(header.replication_timestamp, 1_700_000_000)
        self.assertEqual(header.replication_sequence_number, 42)
        self.assertEqual(
            header.replication_base_url,
            "https://planet.openstreetmap.org/replication/minute",
        )

        bbox = header.bbox
        assert bbox is not None
        self.assertAlmostEqual(bbox.left, 20.0)
        self.assertAlmostEqual(bbox.right, 21.0)
        self.assertAlmostEqual(bbox.top, 53.0)
        self.assertAlmostEqual(bbox.bottom, 52.0)

    def test_empty(self) -> None:
        header = HeaderBlock(osmformat_pb2.HeaderBlock())
        self.assertListEqual(header.required_features, [])
        self.assertListEqual(header.optional_features, [])
        self.assertIsNone(header.bbox)
        self.assertIsNone(header.writing_program)
        self.assertIsNone(header.replication_timestamp)

    def test_unsupported_features(self) -> None:
        header = HeaderBlock(
            osmformat_pb2.HeaderBlock(
                required_features=["OsmSchema-V0.6", "Has_Metadata_v2", "DenseNodes", "Abc"],
            )
        )
        self.assertListEqual(header.unsupported_features(), ["Abc", "Has_Metadata_v2"])
        self.assertListEqual(header.unsupported_features({"Abc", "Has_Metadata_v2"}), [
            "DenseNodes",
            "OsmSchema-V0.6",
        ])
