"""Data models for Microsoft Graph drive folders."""

from dataclasses import dataclass

# Graph API JSON field names
FIELD_ID = "id"
FIELD_NAME = "name"
FIELD_FOLDER = "folder"
FIELD_CONFLICT_BEHAVIOR = "@microsoft.graph.conflictBehavior"
FIELD_VALUES = "values"
FIELD_ADDRESS = "address"

# OData response keys
ODATA_NEXT_LINK = "@odata.nextLink"
ODATA_VALUE = "value"


@dataclass(frozen=True)
class DriveFolder:
    """Handle to a OneDrive folder: enough to list it and create inside it."""

    id: str
    name: str
