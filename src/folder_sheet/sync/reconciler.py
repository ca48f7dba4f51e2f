"""Create the folders of a decoded tree that are missing from the drive."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from folder_sheet.graph.models import DriveFolder
    from folder_sheet.sync.protocols import FolderStore
    from folder_sheet.tree.models import FolderNode

logger = logging.getLogger(__name__)


@dataclass
class ReconcileResult:
    """Outcome of one reconcile pass.

    Attributes:
        created: Number of folders created.
        existing: Number of folders that were already present.
        created_paths: Slash-joined paths, relative to the starting folder,
            of the folders created, in creation order.
    """

    created: int = 0
    existing: int = 0
    created_paths: list[str] = field(default_factory=list)


class Reconciler:
    """Walks a local tree against the drive and creates what is missing.

    Only ever creates. Folders already present are matched by name under
    their resolved parent and left untouched. Store errors propagate and
    stop the walk; folders created before the failure stay in place.
    """

    def __init__(self, folder_store: FolderStore) -> None:
        self._store = folder_store

    def reconcile(self, remote_parent: DriveFolder, local_node: FolderNode) -> ReconcileResult:
        """Make sure local_node and every folder under it exist under remote_parent.

        A synthetic node, such as the root returned by decode(), is not
        created; its children are reconciled directly against remote_parent.
        Any other node is matched or created itself.

        Args:
            remote_parent: Drive folder that local_node belongs in.
            local_node: Tree to reconcile, usually the root returned by decode().

        Returns:
            Counts of created and pre-existing folders.
        """
        result = ReconcileResult()
        self._reconcile(remote_parent, local_node, [], result)
        logger.info(
            "[reconcile] reconcile complete; parent_id:%s;created:%d;existing:%d",
            remote_parent.id,
            result.created,
            result.existing,
        )
        return result

    def _reconcile(
        self,
        remote_parent: DriveFolder,
        local_node: FolderNode,
        path: list[str],
        result: ReconcileResult,
    ) -> None:
        if local_node.synthetic:
            for child in local_node.children:
                self._reconcile(remote_parent, child, path, result)
            return

        path = [*path, local_node.name]
        matches = self._store.children_named(remote_parent, local_node.name)
        if matches:
            if len(matches) > 1:
                logger.warning(
                    "[reconcile] duplicate folder names, using the first; "
                    "parent_id:%s;name:%s;count:%d",
                    remote_parent.id,
                    local_node.name,
                    len(matches),
                )
            folder = matches[0]
            result.existing += 1
        else:
            folder = self._store.create_child(remote_parent, local_node.name)
            result.created += 1
            result.created_paths.append("/".join(path))

        for child in local_node.children:
            self._reconcile(folder, child, path, result)
