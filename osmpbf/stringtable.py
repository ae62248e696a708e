# © Copyright 2024 Mikołaj Kuranowski
# SPDX-License-Identifier: GPL-3.0-or-later

from .error import StringtableIndexOutOfBounds, StringtableUtf8
from .pbf import osmformat_pb2


def str_from_stringtable(block: osmformat_pb2.PrimitiveBlock, index: int) -> str:
    """str_from_stringtable resolves a string table ``index`` of the provided block.

    Raises :py:exc:`StringtableIndexOutOfBounds` if there is no such entry
    and :py:exc:`StringtableUtf8` if the entry is not valid UTF-8. Both errors
    only concern this single lookup; the block stays usable afterwards.
    """
    table = block.stringtable.s
    if index < 0 or index >= len(table):
        raise StringtableIndexOutOfBounds(index)

    try:
        return table[index].decode("utf-8")
    except UnicodeDecodeError as e:
        raise StringtableUtf8(index, e.reason) from e
