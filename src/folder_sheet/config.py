"""Application configuration loaded from environment variables."""

import os
from dataclasses import dataclass

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})


def _env_flag(name: str, default: bool) -> bool:
    """Read a boolean environment variable, falling back to default when unset."""
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUE_VALUES


@dataclass(frozen=True)
class AppConfig:
    """Centralized application configuration.

    Required fields have no defaults and will cause a KeyError at startup
    if the corresponding environment variable is missing. Domain constants
    have sensible defaults but can be overridden via environment variables.
    """

    # Required: no defaults, fail at startup if missing
    client_id: str
    client_secret: str
    tenant_id: str
    drive_user: str
    workbook_item_id: str

    # Domain constants: defaults provided, overridable via env
    default_worksheet: str = "Sheet1"
    root_label: str = "Drive"
    strict_rows: bool = False
    emphasize_columns: bool = True


def load_config() -> AppConfig:
    """Construct an AppConfig from environment variables.

    Required environment variables:
        FS_CLIENT_ID: Azure AD application (client) ID.
        FS_CLIENT_SECRET: Azure AD application client secret.
        FS_TENANT_ID: Azure AD tenant ID.
        FS_DRIVE_USER: UPN or object ID of the OneDrive user that owns the tree.
        FS_WORKBOOK_ITEM_ID: Drive item ID of the Excel workbook holding the outline.

    Optional environment variables (with defaults):
        FS_DEFAULT_WORKSHEET: Worksheet used when a request names none (default: Sheet1).
        FS_ROOT_LABEL: Label written in column A of the first row (default: Drive).
        FS_STRICT_ROWS: Reject rows with skipped ancestor cells on push (default: false).
        FS_EMPHASIZE_COLUMNS: Italicize column A and bold column B after import
            (default: true).

    Returns:
        Configured AppConfig instance.
    """
    return AppConfig(
        client_id=os.environ["FS_CLIENT_ID"],
        client_secret=os.environ["FS_CLIENT_SECRET"],
        tenant_id=os.environ["FS_TENANT_ID"],
        drive_user=os.environ["FS_DRIVE_USER"],
        workbook_item_id=os.environ["FS_WORKBOOK_ITEM_ID"],
        default_worksheet=os.environ.get("FS_DEFAULT_WORKSHEET", "Sheet1"),
        root_label=os.environ.get("FS_ROOT_LABEL", "Drive"),
        strict_rows=_env_flag("FS_STRICT_ROWS", False),
        emphasize_columns=_env_flag("FS_EMPHASIZE_COLUMNS", True),
    )
