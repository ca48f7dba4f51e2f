"""Structural types for the stores the sync stages talk to."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from folder_sheet.graph.models import DriveFolder


class FolderStore(Protocol):
    def resolve_root(self, folder_id: str) -> DriveFolder: ...

    def children(self, folder: DriveFolder) -> list[DriveFolder]: ...

    def children_named(self, folder: DriveFolder, name: str) -> list[DriveFolder]: ...

    def create_child(self, folder: DriveFolder, name: str) -> DriveFolder: ...


class TabularStore(Protocol):
    worksheet: str

    def read_all_rows(self) -> list[list[str]]: ...

    def write_block(
        self, start_row: int, start_column: int, rows: Sequence[Sequence[str]]
    ) -> None: ...

    def clear(self) -> None: ...

    def emphasize_columns(self, row_count: int) -> None: ...
