"""In-memory stand-ins for the drive and the worksheet."""

from __future__ import annotations

from collections.abc import Sequence

from folder_sheet.graph.client import GraphApiError
from folder_sheet.graph.folders import FolderNotFoundError
from folder_sheet.graph.models import DriveFolder
from folder_sheet.tree.codec import pad_rows


class FakeFolderStore:
    """Folder tree kept in dicts; records every creation."""

    def __init__(self, root_name: str = "root-folder", root_id: str = "root-id") -> None:
        self.root = DriveFolder(id=root_id, name=root_name)
        self._folders: dict[str, DriveFolder] = {root_id: self.root}
        self._children: dict[str, list[DriveFolder]] = {root_id: []}
        self._next_id = 1
        self.created: list[tuple[str, str]] = []
        self.fail_on: set[str] = set()

    def add(self, parent: DriveFolder, name: str) -> DriveFolder:
        folder = DriveFolder(id=f"f{self._next_id}", name=name)
        self._next_id += 1
        self._folders[folder.id] = folder
        self._children[folder.id] = []
        self._children[parent.id].append(folder)
        return folder

    def resolve_root(self, folder_id: str) -> DriveFolder:
        if folder_id not in self._folders:
            raise FolderNotFoundError(folder_id, f"Folder '{folder_id}' was not found")
        return self._folders[folder_id]

    def children(self, folder: DriveFolder) -> list[DriveFolder]:
        return list(self._children[folder.id])

    def children_named(self, folder: DriveFolder, name: str) -> list[DriveFolder]:
        return [
            child
            for child in self._children[folder.id]
            if child.name.casefold() == name.casefold()
        ]

    def create_child(self, folder: DriveFolder, name: str) -> DriveFolder:
        if name in self.fail_on:
            raise GraphApiError(409, f"Cannot create {name}")
        self.created.append((folder.id, name))
        return self.add(folder, name)

    def paths(self, folder: DriveFolder | None = None, prefix: str = "") -> list[str]:
        """Return every folder path below folder in listing order."""
        folder = folder or self.root
        result: list[str] = []
        for child in self._children[folder.id]:
            path = f"{prefix}{child.name}"
            result.append(path)
            result.extend(self.paths(child, f"{path}/"))
        return result


class FakeTabularStore:
    """Worksheet kept as a list of rows."""

    def __init__(self, rows: Sequence[Sequence[str]] = (), worksheet: str = "root-id") -> None:
        self.rows: list[list[str]] = [list(r) for r in rows]
        self.worksheet = worksheet
        self.cleared = 0
        self.emphasized: list[int] = []

    def read_all_rows(self) -> list[list[str]]:
        return pad_rows(self.rows)

    def write_block(self, start_row: int, start_column: int, rows: Sequence[Sequence[str]]) -> None:
        block = pad_rows(rows)
        for offset, values in enumerate(block):
            index = start_row + offset
            while len(self.rows) <= index:
                self.rows.append([])
            row = self.rows[index]
            end = start_column + len(values)
            if len(row) < end:
                row.extend([""] * (end - len(row)))
            row[start_column:end] = values

    def clear(self) -> None:
        self.cleared += 1
        self.rows = []

    def emphasize_columns(self, row_count: int) -> None:
        self.emphasized.append(row_count)
