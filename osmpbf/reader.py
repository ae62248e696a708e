# © Copyright 2024 Mikołaj Kuranowski
# SPDX-License-Identifier: GPL-3.0-or-later

import os
from collections import deque
from concurrent.futures import Executor, Future, ProcessPoolExecutor
from logging import getLogger
from os import PathLike
from typing import IO, Any, Callable, Collection, Deque, Iterator, Optional, TypeVar, Union

from typing_extensions import Self

from .blob import DEFAULT_BUFFER_SIZE, Blob, BlobReader, BlobType
from .block import SUPPORTED_FEATURES, Element, PrimitiveBlock
from .error import UnsupportedFeatures

logger = getLogger("osmpbf.reader")

_T = TypeVar("_T")


def _map_reduce_blob(
    blob: Blob,
    map_op: Callable[[Element], _T],
    identity: Callable[[], _T],
    reduce_op: Callable[[_T, _T], _T],
) -> _T:
    result = identity()
    for element in blob.to_primitiveblock().elements():
        result = reduce_op(result, map_op(element))
    return result


class ElementReader:
    """ElementReader reads all elements from an
    `OSM PBF <https://wiki.openstreetmap.org/wiki/PBF_Format>`_ file.

    HeaderBlocks are checked against ``supported_features`` (raising
    :py:exc:`UnsupportedFeatures` on unknown required features), and blobs of unknown
    types are skipped.

    Usage::

        with ElementReader.from_path("monaco-latest.osm.pbf") as reader:
            for element in reader.elements():
                if isinstance(element, osmpbf.Way):
                    print(element.id, list(element.refs()))
    """

    blob_reader: BlobReader
    supported_features: Collection[str]

    def __init__(
        self,
        buf: Union[IO[bytes], BlobReader],
        supported_features: Collection[str] = SUPPORTED_FEATURES,
    ) -> None:
        self.blob_reader = buf if isinstance(buf, BlobReader) else BlobReader(buf)
        self.supported_features = supported_features

    @classmethod
    def from_path(
        cls,
        path: Union[str, "PathLike[str]"],
        buffering: int = DEFAULT_BUFFER_SIZE,
        supported_features: Collection[str] = SUPPORTED_FEATURES,
    ) -> Self:
        return cls(BlobReader.from_path(path, buffering), supported_features)

    def close(self) -> None:
        self.blob_reader.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *_: Any) -> None:
        self.close()

    def blocks(self) -> Iterator[PrimitiveBlock]:
        """blocks decodes all OSMData blobs, in file order."""
        for blob in self._data_blobs():
            yield blob.to_primitiveblock()

    def elements(self) -> Iterator[Element]:
        """elements generates all elements of the file, in file order.

        Elements are views which keep their whole block alive - to keep memory usage bounded,
        store data extracted from the elements, not the elements themselves.
        """
        for block in self.blocks():
            yield from block.elements()

    def __iter__(self) -> Iterator[Element]:
        return self.elements()

    def for_each(self, f: Callable[[Element], Any]) -> None:
        """for_each calls ``f`` on every element of the file, in file order."""
        for block in self.blocks():
            block.for_each_element(f)

    def par_map_reduce(
        self,
        map_op: Callable[[Element], _T],
        identity: Callable[[], _T],
        reduce_op: Callable[[_T, _T], _T],
        executor: Optional[Executor] = None,
        max_pending: Optional[int] = None,
    ) -> _T:
        """par_map_reduce calls ``map_op`` on every element and combines the results
        with ``reduce_op``, starting from values returned by ``identity``.

        Blobs are read sequentially, but decoded and processed on the ``executor``,
        by default a new `ProcessPoolExecutor
        <https://docs.python.org/3/library/concurrent.futures.html#processpoolexecutor>`_.
        In that case all callables must be picklable. Partial results are reduced
        in file order, but ``reduce_op`` should still be associative.

        At most ``max_pending`` blobs (by default twice the number of CPUs) are submitted
        to the executor at any time.
        """
        own_executor = executor is None
        if executor is None:
            executor = ProcessPoolExecutor()

        if max_pending is None:
            max_pending = 2 * (os.cpu_count() or 1)

        result = identity()
        pending: Deque["Future[_T]"] = deque()
        try:
            for blob in self._data_blobs():
                pending.append(executor.submit(_map_reduce_blob, blob, map_op, identity, reduce_op))
                if len(pending) >= max_pending:
                    result = reduce_op(result, pending.popleft().result())

            while pending:
                result = reduce_op(result, pending.popleft().result())

        finally:
            for future in pending:
                future.cancel()
            if own_executor:
                executor.shutdown()

        return result

    def _data_blobs(self) -> Iterator[Blob]:
        for blob in self.blob_reader:
            blob_type = blob.get_type()
            if blob_type is BlobType.OSM_DATA:
                yield blob
            elif blob_type is BlobType.OSM_HEADER:
                self._check_header(blob)
            else:
                logger.warning("Skipping blob of unknown type %r", blob.type)

    def _check_header(self, blob: Blob) -> None:
        unsupported = blob.to_headerblock().unsupported_features(self.supported_features)
        if unsupported:
            raise UnsupportedFeatures(unsupported)
