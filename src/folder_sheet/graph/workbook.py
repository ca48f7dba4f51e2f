"""Excel worksheet store backed by the Microsoft Graph workbook API."""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

from folder_sheet.graph.client import GraphClient
from folder_sheet.graph.models import FIELD_ADDRESS, FIELD_VALUES
from folder_sheet.tree.codec import pad_rows

if TYPE_CHECKING:
    from folder_sheet.config import AppConfig

logger = logging.getLogger(__name__)

_A1_CELL = re.compile(r"^\$?([A-Za-z]+)\$?(\d+)$")


def column_letter(index: int) -> str:
    """Convert a zero-based column index to its A1 letters (0 -> A, 26 -> AA)."""
    if index < 0:
        raise ValueError(f"Column index must not be negative: {index}")
    letters = ""
    index += 1
    while index:
        index, remainder = divmod(index - 1, 26)
        letters = chr(ord("A") + remainder) + letters
    return letters


def column_index(letters: str) -> int:
    """Convert A1 column letters to a zero-based index (A -> 0, AA -> 26)."""
    index = 0
    for ch in letters.upper():
        index = index * 26 + (ord(ch) - ord("A") + 1)
    return index - 1


def a1_range(start_row: int, start_column: int, height: int, width: int) -> str:
    """Return the A1 address of a block given zero-based origin and size."""
    first = f"{column_letter(start_column)}{start_row + 1}"
    last = f"{column_letter(start_column + width - 1)}{start_row + height}"
    return first if first == last else f"{first}:{last}"


def parse_a1_origin(address: str) -> tuple[int, int]:
    """Return the zero-based (row, column) of the top-left cell of an address.

    Accepts sheet-qualified addresses such as ``'My Sheet'!B2:D5``.

    Raises:
        ValueError: If the address has no recognisable top-left cell.
    """
    cell = address.rsplit("!", 1)[-1].split(":", 1)[0]
    match = _A1_CELL.match(cell)
    if match is None:
        raise ValueError(f"Unrecognised A1 address: {address!r}")
    return int(match.group(2)) - 1, column_index(match.group(1))


def cell_to_text(value: Any) -> str:
    """Render a workbook cell value the way Excel displays it."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class GraphWorksheetStore:
    """Reads and writes one worksheet of a workbook stored in OneDrive."""

    def __init__(
        self,
        graph_client: GraphClient,
        drive_user: str,
        workbook_item_id: str,
        worksheet: str,
    ) -> None:
        """Initialise the worksheet store.

        Args:
            graph_client: Authenticated GraphClient instance.
            drive_user: UPN or object ID of the user whose OneDrive holds the workbook.
            workbook_item_id: Drive item ID of the .xlsx workbook.
            worksheet: Worksheet name.
        """
        self._graph = graph_client
        self._drive_user = drive_user
        self._workbook_item_id = workbook_item_id
        self.worksheet = worksheet

    @property
    def _sheet_path(self) -> str:
        return (
            f"/users/{self._drive_user}/drive/items/{self._workbook_item_id}"
            f"/workbook/worksheets/{quote(self.worksheet, safe='')}"
        )

    def _range_path(self, address: str) -> str:
        return f"{self._sheet_path}/range(address='{address}')"

    def _used_range(self) -> dict[str, Any]:
        return self._graph.get(f"{self._sheet_path}/usedRange(valuesOnly=true)")

    def read_all_rows(self) -> list[list[str]]:
        """Read every row of the worksheet as text, anchored at cell A1.

        Rows and columns above or left of the used range come back as
        empty cells, and ragged rows are right-padded.

        Returns:
            Rectangular list of rows; empty for a blank worksheet.
        """
        response = self._used_range()
        values: list[list[Any]] = response.get(FIELD_VALUES) or []
        top, left = parse_a1_origin(response.get(FIELD_ADDRESS, "A1"))

        rows = [[""] * left + [cell_to_text(v) for v in row] for row in values]
        rows = [[""]] * top + rows
        if all(not cell for row in rows for cell in row):
            rows = []
        else:
            rows = pad_rows(rows)
        logger.info(
            "[read_all_rows] read worksheet; worksheet:%s;row_count:%d",
            self.worksheet,
            len(rows),
        )
        return rows

    def write_block(self, start_row: int, start_column: int, rows: Sequence[Sequence[str]]) -> None:
        """Overwrite a rectangular block of cells.

        Args:
            start_row: Zero-based row of the block's top-left cell.
            start_column: Zero-based column of the block's top-left cell.
            rows: Values to write; ragged rows are right-padded with "".
        """
        block = pad_rows(rows)
        if not block or not block[0]:
            return
        address = a1_range(start_row, start_column, len(block), len(block[0]))
        self._graph.patch(self._range_path(address), {FIELD_VALUES: block})
        logger.info(
            "[write_block] wrote block; worksheet:%s;address:%s;row_count:%d",
            self.worksheet,
            address,
            len(block),
        )

    def clear(self) -> None:
        """Remove all contents and formatting from the used range."""
        address = self._used_range().get(FIELD_ADDRESS, "")
        if not address:
            return
        cells = address.rsplit("!", 1)[-1]
        self._graph.post(f"{self._range_path(cells)}/clear", {"applyTo": "All"})
        logger.info("[clear] cleared worksheet; worksheet:%s;address:%s", self.worksheet, cells)

    def emphasize_columns(self, row_count: int) -> None:
        """Italicize the label column and bold the top-level folder column.

        Args:
            row_count: Number of rows, from row 1, to format.
        """
        if row_count <= 0:
            return
        label_cells = a1_range(0, 0, row_count, 1)
        top_level_cells = a1_range(0, 1, row_count, 1)
        self._graph.patch(f"{self._range_path(label_cells)}/format/font", {"italic": True})
        self._graph.patch(f"{self._range_path(top_level_cells)}/format/font", {"bold": True})


def worksheet_store_from_config(
    graph_client: GraphClient, config: AppConfig, worksheet: str | None = None
) -> GraphWorksheetStore:
    """Construct a GraphWorksheetStore from application configuration.

    Args:
        graph_client: Authenticated GraphClient instance.
        config: Application configuration instance.
        worksheet: Worksheet name; defaults to config.default_worksheet.

    Returns:
        Configured GraphWorksheetStore instance.
    """
    return GraphWorksheetStore(
        graph_client=graph_client,
        drive_user=config.drive_user,
        workbook_item_id=config.workbook_item_id,
        worksheet=worksheet or config.default_worksheet,
    )
