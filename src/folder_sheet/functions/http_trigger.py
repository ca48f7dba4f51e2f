"""HTTP trigger blueprint — health check, import and push endpoints."""

import json
import logging
from typing import Any

import azure.functions as func

from folder_sheet import __version__
from folder_sheet.config import load_config
from folder_sheet.notify import CollectingNotifier
from folder_sheet.orchestration.processor import (
    OPERATION_IMPORT,
    OPERATION_PUSH,
    sync_processor_from_config,
)
from folder_sheet.tree.codec import MalformedRowError

logger = logging.getLogger(__name__)

bp = func.Blueprint()


def _json_response(payload: dict[str, Any], status_code: int) -> func.HttpResponse:
    body = json.dumps(payload)
    return func.HttpResponse(body, status_code=status_code, mimetype="application/json")


def _run_sync(req: func.HttpRequest, operation: str) -> func.HttpResponse:
    """Run an import or push for the worksheet and root named in the request.

    Query parameters:
        worksheet: Worksheet to sync (defaults to FS_DEFAULT_WORKSHEET).
        root: Drive item ID of the top-level folder (defaults to the worksheet name).
    """
    worksheet = req.params.get("worksheet") or None
    root_id = req.params.get("root") or None
    logger.info("[%s] sync requested; worksheet:%s;root_id:%s", operation, worksheet, root_id)

    try:
        config = load_config()
        notifier = CollectingNotifier()
        processor = sync_processor_from_config(config, worksheet=worksheet, notifier=notifier)
        if operation == OPERATION_IMPORT:
            result = processor.import_tree(root_id)
        else:
            result = processor.push(root_id)

        if result is None:
            message = notifier.messages[-1] if notifier.messages else "Root folder not resolved"
            return _json_response({"status": "error", "message": message}, 404)
        return _json_response({"status": "ok", **result.to_dict()}, 200)

    except MalformedRowError as exc:
        logger.warning("[%s] worksheet rejected; reason:%s", operation, exc)
        return _json_response({"status": "error", "message": str(exc)}, 400)

    except Exception:
        logger.error("[%s] sync failed", operation, exc_info=True)
        return _json_response({"status": "error", "message": "Internal server error"}, 500)


@bp.route(route="health", methods=["GET"], auth_level=func.AuthLevel.ANONYMOUS)
def health_check(req: func.HttpRequest) -> func.HttpResponse:
    """Health check endpoint. Returns service status and version."""
    logger.info("[health_check] health check requested")

    try:
        return _json_response({"status": "ok", "version": __version__}, 200)

    except Exception:
        logger.error("[health_check] health check failed", exc_info=True)
        return _json_response({"status": "error", "message": "Internal server error"}, 500)


@bp.route(route="import", methods=["POST"], auth_level=func.AuthLevel.FUNCTION)
def import_folders(req: func.HttpRequest) -> func.HttpResponse:
    """Snapshot the drive folder tree into the worksheet, replacing its contents."""
    return _run_sync(req, OPERATION_IMPORT)


@bp.route(route="push", methods=["POST"], auth_level=func.AuthLevel.FUNCTION)
def push_folders(req: func.HttpRequest) -> func.HttpResponse:
    """Create the folders listed in the worksheet that are missing from the drive.

    Never renames, moves or deletes anything. Running it twice against an
    unchanged worksheet creates nothing the second time.
    """
    return _run_sync(req, OPERATION_PUSH)
