# © Copyright 2024 Mikołaj Kuranowski
# SPDX-License-Identifier: GPL-3.0-or-later

from typing import Iterator, Sequence


class DeltaDecoder:
    """DeltaDecoder reconstructs absolute values from a sequence of deltas,
    by keeping a running sum (starting at ``start``, 0 by default).

    The values only make sense when consumed in order, from the first delta.
    """

    current: int
    """current is the last produced absolute value, or ``start`` if nothing was produced."""

    def __init__(self, deltas: Sequence[int], start: int = 0) -> None:
        self._deltas = iter(deltas)
        self._remaining = len(deltas)
        self.current = start

    def __iter__(self) -> Iterator[int]:
        return self

    def __next__(self) -> int:
        delta = next(self._deltas)
        self._remaining -= 1
        self.current += delta
        return self.current

    def __length_hint__(self) -> int:
        return self._remaining


WayRefIter = DeltaDecoder
"""WayRefIter iterates over absolute node IDs of a :py:class:`osmpbf.Way`."""
