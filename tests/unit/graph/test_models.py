"""Unit tests for graph/models.py — data model instantiation and field access."""

import dataclasses

import pytest

from folder_sheet.graph.models import DriveFolder


class TestDriveFolder:
    def test_instantiation_with_all_fields(self) -> None:
        folder = DriveFolder(id="folder-001", name="Projects")
        assert folder.id == "folder-001"
        assert folder.name == "Projects"

    def test_equality(self) -> None:
        assert DriveFolder("1", "A") == DriveFolder("1", "A")
        assert DriveFolder("1", "A") != DriveFolder("2", "A")

    def test_is_immutable(self) -> None:
        folder = DriveFolder("1", "A")
        with pytest.raises(dataclasses.FrozenInstanceError):
            folder.name = "B"  # type: ignore[misc]

    def test_repr_contains_name(self) -> None:
        assert "Projects" in repr(DriveFolder("1", "Projects"))
