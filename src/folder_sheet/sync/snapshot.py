"""Build an in-memory tree from the folders of a drive."""

from __future__ import annotations

from typing import TYPE_CHECKING

from folder_sheet.tree.models import FolderNode

if TYPE_CHECKING:
    from folder_sheet.graph.models import DriveFolder
    from folder_sheet.sync.protocols import FolderStore


def snapshot(folder_store: FolderStore, remote_root: DriveFolder) -> FolderNode:
    """Mirror the folder hierarchy below remote_root.

    Args:
        folder_store: Store to list folders from.
        remote_root: Folder to start from. Its name becomes the root's name.

    Returns:
        Tree whose children follow the order the store lists them in.
    """
    root = FolderNode(name=remote_root.name or remote_root.id)
    stack: list[tuple[DriveFolder, FolderNode]] = [(remote_root, root)]
    while stack:
        folder, node = stack.pop()
        for child in folder_store.children(folder):
            stack.append((child, node.add_child(FolderNode(name=child.name))))
    return root
