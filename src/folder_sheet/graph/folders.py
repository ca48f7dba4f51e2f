"""OneDrive folder store: resolve, list and create folders via Microsoft Graph."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

from folder_sheet.graph.client import GRAPH_BASE_URL, GraphApiError, GraphClient
from folder_sheet.graph.models import (
    FIELD_CONFLICT_BEHAVIOR,
    FIELD_FOLDER,
    FIELD_ID,
    FIELD_NAME,
    ODATA_NEXT_LINK,
    ODATA_VALUE,
    DriveFolder,
)

if TYPE_CHECKING:
    from folder_sheet.config import AppConfig

logger = logging.getLogger(__name__)

DRIVE_ROOT_ID = "root"


class ResolutionError(Exception):
    """Raised when the top-level folder of a sync cannot be resolved."""

    def __init__(self, folder_id: str, message: str) -> None:
        super().__init__(message)
        self.folder_id = folder_id


class FolderNotFoundError(ResolutionError):
    """The folder does not exist, or the item is not a folder."""


class FolderAccessDeniedError(ResolutionError):
    """The application may not read the folder."""


class GraphFolderStore:
    """Folder-only view of a user's OneDrive."""

    def __init__(self, graph_client: GraphClient, drive_user: str) -> None:
        """Initialise the folder store.

        Args:
            graph_client: Authenticated GraphClient instance.
            drive_user: UPN or object ID of the user whose OneDrive holds the tree.
                Required when using app permissions (client credentials flow)
                where /me is not available.
        """
        self._graph = graph_client
        self._drive_user = drive_user
        # Sub-folder listings by parent ID, filled by children_named and
        # extended by create_child. Stores are built per request.
        self._listings: dict[str, list[DriveFolder]] = {}

    def _item_path(self, folder_id: str) -> str:
        base = f"/users/{self._drive_user}/drive"
        if folder_id == DRIVE_ROOT_ID:
            return f"{base}/root"
        return f"{base}/items/{quote(folder_id, safe='!')}"

    def resolve_root(self, folder_id: str) -> DriveFolder:
        """Look up the folder a sync starts from.

        Args:
            folder_id: Drive item ID, or "root" for the top of the drive.

        Returns:
            The resolved DriveFolder.

        Raises:
            FolderNotFoundError: If no such item exists or it is not a folder.
            FolderAccessDeniedError: If Graph refuses access to the item.
            GraphApiError: For any other non-2xx response.
        """
        try:
            raw = self._graph.get(self._item_path(folder_id))
        except GraphApiError as exc:
            if exc.status_code == 404:
                raise FolderNotFoundError(
                    folder_id, f"Folder '{folder_id}' was not found"
                ) from exc
            if exc.status_code in (401, 403):
                raise FolderAccessDeniedError(
                    folder_id, f"Access to folder '{folder_id}' was denied"
                ) from exc
            raise

        if FIELD_FOLDER not in raw:
            raise FolderNotFoundError(folder_id, f"Item '{folder_id}' is not a folder")
        folder = self._parse_folder(raw)
        logger.info("[resolve_root] resolved folder; folder_id:%s;name:%s", folder.id, folder.name)
        return folder

    def children(self, folder: DriveFolder) -> list[DriveFolder]:
        """List every sub-folder of folder, ordered by name.

        Follows @odata.nextLink pagination. Files are skipped.

        Args:
            folder: Parent folder.

        Returns:
            Sub-folders of folder.
        """
        folders: list[DriveFolder] = []
        next_path: str | None = f"{self._item_path(folder.id)}/children?$orderby=name"
        while next_path is not None:
            response = self._graph.get(next_path)
            for raw in response.get(ODATA_VALUE, []):
                if FIELD_FOLDER in raw:
                    folders.append(self._parse_folder(raw))
            link = response.get(ODATA_NEXT_LINK)
            next_path = self._relative_path(link) if link else None
        return folders

    def children_named(self, folder: DriveFolder, name: str) -> list[DriveFolder]:
        """Return the sub-folders of folder called name, ignoring case.

        OneDrive names are case-insensitive, so "Reports" and "reports" name
        the same folder. The first lookup under a parent lists it once;
        later lookups under that parent reuse the listing.

        Args:
            folder: Parent folder.
            name: Folder name to match.

        Returns:
            Matching sub-folders; possibly empty, possibly more than one.
        """
        listing = self._listings.get(folder.id)
        if listing is None:
            listing = self.children(folder)
            self._listings[folder.id] = listing
        wanted = name.casefold()
        return [child for child in listing if child.name.casefold() == wanted]

    def create_child(self, folder: DriveFolder, name: str) -> DriveFolder:
        """Create a sub-folder called name.

        Creation fails rather than renaming when Graph finds a clash.

        Args:
            folder: Parent folder.
            name: Name of the new folder.

        Returns:
            The created DriveFolder.

        Raises:
            GraphApiError: If Graph rejects the creation.
        """
        raw = self._graph.post(
            f"{self._item_path(folder.id)}/children",
            {FIELD_NAME: name, FIELD_FOLDER: {}, FIELD_CONFLICT_BEHAVIOR: "fail"},
        )
        created = self._parse_folder(raw)
        if folder.id in self._listings:
            self._listings[folder.id].append(created)
        self._listings[created.id] = []
        logger.info(
            "[create_child] created folder; parent_id:%s;folder_id:%s;name:%s",
            folder.id,
            created.id,
            created.name,
        )
        return created

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _parse_folder(raw: dict[str, Any]) -> DriveFolder:
        """Map a raw Graph API item dict to a DriveFolder."""
        return DriveFolder(id=raw.get(FIELD_ID, ""), name=raw.get(FIELD_NAME, ""))

    @staticmethod
    def _relative_path(full_url: str) -> str:
        """Convert a full Graph API URL to a relative path for GraphClient.get()."""
        prefix = GRAPH_BASE_URL
        if full_url.startswith(prefix):
            return full_url[len(prefix) :]
        return full_url


def folder_store_from_config(graph_client: GraphClient, config: AppConfig) -> GraphFolderStore:
    """Construct a GraphFolderStore from application configuration.

    Args:
        graph_client: Authenticated GraphClient instance.
        config: Application configuration instance.

    Returns:
        Configured GraphFolderStore instance.
    """
    return GraphFolderStore(graph_client=graph_client, drive_user=config.drive_user)
