"""Sync processor — orchestrates import (drive to sheet) and push (sheet to drive)."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from typing import TYPE_CHECKING, Any

from folder_sheet.graph.client import graph_client_from_config
from folder_sheet.graph.folders import ResolutionError, folder_store_from_config
from folder_sheet.graph.workbook import worksheet_store_from_config
from folder_sheet.notify import LoggingNotifier
from folder_sheet.sync.reconciler import Reconciler
from folder_sheet.sync.snapshot import snapshot
from folder_sheet.tree.codec import ROOT_LABEL, decode, encode

if TYPE_CHECKING:
    from folder_sheet.config import AppConfig
    from folder_sheet.graph.models import DriveFolder
    from folder_sheet.notify import NotificationSink
    from folder_sheet.sync.protocols import FolderStore, TabularStore
    from folder_sheet.tree.models import FolderNode

logger = logging.getLogger(__name__)

OPERATION_IMPORT = "import"
OPERATION_PUSH = "push"


@dataclass
class SyncResult:
    """Summary of a completed import or push."""

    operation: str
    root_id: str
    rows_written: int = 0
    folders_created: int = 0
    folders_existing: int = 0
    created_paths: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class SyncProcessor:
    """Runs import and push between one worksheet and one drive folder."""

    def __init__(
        self,
        folder_store: FolderStore,
        tabular_store: TabularStore,
        notifier: NotificationSink | None = None,
        root_label: str = ROOT_LABEL,
        strict_rows: bool = False,
        emphasize_columns: bool = True,
    ) -> None:
        """Initialise the sync processor.

        Args:
            folder_store: Drive folder store (GraphFolderStore in production).
            tabular_store: Worksheet store (GraphWorksheetStore in production).
            notifier: Sink for fatal failures; logs only when omitted.
            root_label: Label written in column A of the first row on import.
            strict_rows: Reject rows that skip an ancestor cell on push.
            emphasize_columns: Style the label and top-level columns after import.
        """
        self._folders = folder_store
        self._table = tabular_store
        self._notifier = notifier if notifier is not None else LoggingNotifier()
        self._root_label = root_label
        self._strict_rows = strict_rows
        self._emphasize_columns = emphasize_columns

    def default_root_id(self) -> str:
        """Return the folder ID named by the worksheet, the usual root convention."""
        return self._table.worksheet

    def import_tree(self, root_id: str | None = None) -> SyncResult | None:
        """Replace the worksheet contents with the folder tree below root_id.

        Steps:
            1. Resolve the root folder (notify and stop on failure).
            2. Snapshot its folder hierarchy.
            3. Encode the tree into rows.
            4. Clear the worksheet and write the rows from A1.
            5. Optionally style the label and top-level columns.

        Args:
            root_id: Drive item ID of the top-level folder; defaults to the
                worksheet name.

        Returns:
            SyncResult, or None when the root could not be resolved.
        """
        root_id = root_id or self.default_root_id()
        logger.info("[import_tree] starting import; root_id:%s", root_id)
        remote_root = self._resolve(root_id)
        if remote_root is None:
            return None

        tree = snapshot(self._folders, remote_root)
        rows = encode(tree, root_label=self._root_label)
        self._table.clear()
        self._table.write_block(0, 0, rows)
        if self._emphasize_columns:
            self._table.emphasize_columns(len(rows))

        logger.info(
            "[import_tree] import complete; root_id:%s;folder_count:%d;row_count:%d",
            root_id,
            _folder_count(tree),
            len(rows),
        )
        return SyncResult(operation=OPERATION_IMPORT, root_id=root_id, rows_written=len(rows))

    def push(self, root_id: str | None = None) -> SyncResult | None:
        """Create every folder listed in the worksheet that is missing below root_id.

        The root is resolved before the worksheet is read, so nothing is
        created when resolution fails. A failed creation stops the push;
        folders created before it are kept.

        Args:
            root_id: Drive item ID of the top-level folder; defaults to the
                worksheet name.

        Returns:
            SyncResult, or None when the root could not be resolved.

        Raises:
            MalformedRowError: If strict_rows is set and a row skips an ancestor.
            GraphApiError: If the drive rejects a folder creation.
        """
        root_id = root_id or self.default_root_id()
        logger.info("[push] starting push; root_id:%s", root_id)
        remote_root = self._resolve(root_id)
        if remote_root is None:
            return None

        rows = self._table.read_all_rows()
        tree = decode(rows, strict=self._strict_rows)
        logger.info(
            "[push] worksheet decoded; row_count:%d;folder_count:%d",
            len(rows),
            _folder_count(tree),
        )
        outcome = Reconciler(self._folders).reconcile(remote_root, tree)

        logger.info(
            "[push] push complete; root_id:%s;created:%d;existing:%d",
            root_id,
            outcome.created,
            outcome.existing,
        )
        return SyncResult(
            operation=OPERATION_PUSH,
            root_id=root_id,
            folders_created=outcome.created,
            folders_existing=outcome.existing,
            created_paths=outcome.created_paths,
        )

    def _resolve(self, root_id: str) -> DriveFolder | None:
        try:
            return self._folders.resolve_root(root_id)
        except ResolutionError as exc:
            self._notifier.notify_fatal(str(exc))
            return None


def _folder_count(tree: FolderNode) -> int:
    """Count the folders below tree, not counting tree itself."""
    return sum(1 for _ in tree.walk()) - 1


def sync_processor_from_config(
    config: AppConfig,
    worksheet: str | None = None,
    notifier: NotificationSink | None = None,
) -> SyncProcessor:
    """Construct a SyncProcessor from application configuration.

    Creates a GraphClient and both Graph-backed stores from the config, then
    wires them into a SyncProcessor.

    Args:
        config: Application configuration instance.
        worksheet: Worksheet to sync; defaults to config.default_worksheet.
        notifier: Sink for fatal failures.

    Returns:
        Configured SyncProcessor instance.
    """
    client = graph_client_from_config(config)
    return SyncProcessor(
        folder_store=folder_store_from_config(client, config),
        tabular_store=worksheet_store_from_config(client, config, worksheet),
        notifier=notifier,
        root_label=config.root_label,
        strict_rows=config.strict_rows,
        emphasize_columns=config.emphasize_columns,
    )
