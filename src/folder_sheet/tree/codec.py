"""Conversion between a folder tree and indented worksheet rows.

Layout: column 0 holds the root label on the first row only, and column k
holds the name of the depth-k ancestor. Each row carries the full path of
one leaf folder; interior folders appear as the shared prefix of their
descendants' rows.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from folder_sheet.tree.models import FolderNode

logger = logging.getLogger(__name__)

ROOT_LABEL = "Drive"
DECODE_ROOT_NAME = "root"

PathKey = tuple[str, ...]


class MalformedRowError(ValueError):
    """Raised by strict decoding when a row skips an ancestor cell."""

    def __init__(self, row_index: int, column: int) -> None:
        super().__init__(
            f"Row {row_index + 1} has a value in column {column + 1} after an empty ancestor cell"
        )
        self.row_index = row_index
        self.column = column


# ------------------------------------------------------------------
# Encode
# ------------------------------------------------------------------


def encode(root: FolderNode, start_row: int = 0, root_label: str = ROOT_LABEL) -> list[list[str]]:
    """Encode a tree into ragged rows.

    The root's own name is never written; root_label takes its place in
    column 0 of the first row.

    Args:
        root: Tree root, usually the snapshot of the remote top-level folder.
        start_row: Absolute row index the first row will be written at.
        root_label: Sentinel placed in column 0 of the first row.

    Returns:
        Rows in pre-order, one per leaf folder. A root without children
        yields a single row holding only the label.
    """
    rows: list[list[str]] = [[root_label]]
    row = start_row
    for child in root.children:
        row = encode_into(child, rows, [], row, start_row=start_row)
    return rows


def encode_into(
    node: FolderNode,
    rows: list[list[str]],
    path: list[str],
    row: int,
    *,
    start_row: int = 0,
) -> int:
    """Write node and its subtree into rows starting at absolute index row.

    ``path`` holds the names of node's ancestors below the root. Each call
    extends its own copy so sibling branches never see each other's
    entries. A node writes its path into the current row; its first child
    then extends that same row, and only a leaf moves on to the next one.

    Args:
        node: Subtree to encode. Must not be the root.
        rows: Output list; row ``r`` lives at ``rows[r - start_row]``.
        path: Ancestor names accumulated so far.
        row: Absolute index of the row to write.
        start_row: Absolute index of ``rows[0]``.

    Returns:
        Absolute index one past the last row written.
    """
    path = [*path, node.name]
    _put_row(rows, row - start_row, path)
    if not node.children:
        return row + 1
    for child in node.children:
        row = encode_into(child, rows, path, row, start_row=start_row)
    return row


def _put_row(rows: list[list[str]], index: int, path: list[str]) -> None:
    """Store path from column 1 of rows[index], keeping the column 0 cell."""
    while len(rows) <= index:
        rows.append([""])
    rows[index] = [rows[index][0], *path]


def pad_rows(rows: Sequence[Sequence[str]], width: int | None = None) -> list[list[str]]:
    """Right-pad ragged rows with empty strings to a common width.

    Args:
        rows: Rows of possibly different lengths.
        width: Target width; defaults to the longest row.

    Returns:
        New rectangular list of rows.
    """
    if width is None:
        width = max((len(r) for r in rows), default=0)
    return [list(r) + [""] * (width - len(r)) for r in rows]


# ------------------------------------------------------------------
# Decode
# ------------------------------------------------------------------


def _cell_text(value: Any) -> str:
    """Return the stripped text of a cell, or "" for an empty one."""
    if value is None:
        return ""
    return str(value).strip()


def decode(rows: Sequence[Sequence[Any]], strict: bool = False) -> FolderNode:
    """Parse worksheet rows back into a tree.

    Column 0 is ignored. Rows sharing a prefix of values collapse onto the
    same node, so the tree holds one node per distinct prefix. Empty cells
    are skipped without resetting the walk; a row that leaves an ancestor
    cell empty is attributed to the last ancestor seen and logged, or
    rejected when strict is set.

    Args:
        rows: Worksheet values, ragged rows allowed.
        strict: Raise MalformedRowError instead of logging a gap.

    Returns:
        A synthetic root named "root" whose children are the top-level folders.

    Raises:
        MalformedRowError: If strict is set and a row skips an ancestor cell.
    """
    root = FolderNode(name=DECODE_ROOT_NAME, synthetic=True)
    nodes: dict[PathKey, FolderNode] = {(): root}

    for row_index, row in enumerate(rows):
        parent = root
        key: PathKey = ()
        skipped = False
        reported = False
        for column in range(1, len(row)):
            name = _cell_text(row[column])
            if not name:
                skipped = True
                continue
            if skipped and not reported:
                if strict:
                    raise MalformedRowError(row_index, column)
                logger.warning(
                    "[decode] row skips an ancestor cell; row:%d;column:%d;parent:%s",
                    row_index + 1,
                    column + 1,
                    parent.name,
                )
                reported = True
            key = (*key, name)
            node = nodes.get(key)
            if node is None:
                node = parent.add_child(FolderNode(name=name))
                nodes[key] = node
            parent = node

    return root
