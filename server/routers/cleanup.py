from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, StreamingResponse
from starlette.datastructures import UploadFile
from typing import List, Tuple
import asyncio
import itertools
import logging
import re

from ..dependencies import get_workspace
from ..state import ScanResponse, DeleteResponse, StatsResponse, MessageResponse, ErrorResponse
from src.config import Config
from src.core.archiver import iter_clean_zip
from src.core.cleaner import delete_hidden
from src.core.errors import UnsafePathError
from src.core.scanner import scan, summarize, collect_stats
from src.core.workspace import Workspace, normalize_relative_path

logger = logging.getLogger(__name__)

router = APIRouter(tags=["cleanup"])

# Field names that carry the relative path in the part's filename instead
GENERIC_FIELD_NAMES = {"files", "file"}

# Multipart clients escape control characters and quotes in names as %XX (HTML form encoding)
FORM_NAME_ESCAPE = re.compile(r"%(0[0-9A-Fa-f]|1[0-9A-Fa-f]|22)")


def _error_response(status_code: int, message: str, error=None) -> JSONResponse:
    body = ErrorResponse(message=message, error=str(error) if error is not None else None)
    return JSONResponse(status_code=status_code, content=body.model_dump())


def unescape_form_name(name: str) -> str:
    """Undo the %0D / %0A / %22 style escaping browsers and requests apply to part names."""
    return FORM_NAME_ESCAPE.sub(lambda m: chr(int(m.group(1), 16)), name)


def _upload_path(field_name: str, upload: UploadFile) -> str:
    if field_name in GENERIC_FIELD_NAMES and upload.filename:
        return unescape_form_name(upload.filename)
    return unescape_form_name(field_name)


def _materialize_and_scan(workspace: Workspace, uploads: List[Tuple[str, UploadFile]]) -> dict:
    # Reject bad paths before anything on disk changes
    uploads = [(normalize_relative_path(rel), upload) for rel, upload in uploads]

    with workspace.lock:
        if uploads:
            # A new upload replaces whatever the previous one left behind
            workspace.reset()
            try:
                for rel, upload in uploads:
                    workspace.save_upload(rel, upload.file)
            except Exception:
                # Never leave a half-written upload behind
                workspace.reset()
                raise
            logger.info("Stored %d uploaded files in %s", len(uploads), workspace.root_dir)
        results = scan(workspace.root_dir)

    summary = summarize(results)
    return {
        "success": True,
        "results": {rel: entry.to_dict() for rel, entry in results.items()},
        "summary": summary.to_dict(),
    }


@router.post("/scan", response_model=ScanResponse, responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}})
async def scan_upload(request: Request, workspace: Workspace = Depends(get_workspace)):
    """
    Store the uploaded files under their relative paths and classify them.
    Without any file parts, re-scans what is already in the upload root.
    """
    form = None
    try:
        form = await request.form(max_files=Config.MAX_UPLOAD_FILES, max_fields=Config.MAX_UPLOAD_FILES)
        uploads = [
            (_upload_path(key, value), value)
            for key, value in form.multi_items()
            if isinstance(value, UploadFile)
        ]

        # Disk I/O off the event loop
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, _materialize_and_scan, workspace, uploads)

    except UnsafePathError as e:
        return _error_response(400, "Invalid upload path", e)
    except Exception as e:
        logger.exception("Scan failed")
        return _error_response(500, "Error while scanning files", e)
    finally:
        if form is not None:
            await form.close()


@router.post("/delete-hidden", response_model=DeleteResponse, responses={500: {"model": ErrorResponse}})
def delete_hidden_files(workspace: Workspace = Depends(get_workspace)):
    """Delete every hidden file and directory in the upload root."""
    try:
        with workspace.lock:
            deleted = delete_hidden(workspace.root_dir)
        return {
            "success": True,
            "message": f"{len(deleted)} hidden item(s) deleted successfully.",
            "deleted": deleted,
        }
    except Exception as e:
        logger.exception("Delete failed")
        return _error_response(500, "Error deleting hidden files", e)


@router.get("/download-clean", responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}})
def download_clean(workspace: Workspace = Depends(get_workspace)):
    """Stream a zip of the clean files."""
    if not workspace.exists():
        return _error_response(404, "No uploaded files to download", "Upload root not found")

    chunks = iter_clean_zip(workspace.root_dir)
    try:
        # Build the first chunk now so early failures still get a proper 500
        first = next(chunks, b"")
    except Exception as e:
        logger.exception("Archive creation failed")
        return _error_response(500, "Error creating clean archive", e)

    logger.info("Streaming clean archive for %s", workspace.root_dir)
    return StreamingResponse(
        itertools.chain([first], chunks),
        media_type="application/zip",
        headers={"Content-Disposition": f'attachment; filename="{Config.ZIP_FILENAME}"'},
    )


@router.get("/stats", response_model=StatsResponse, responses={500: {"model": ErrorResponse}})
def get_stats(workspace: Workspace = Depends(get_workspace)):
    """Counts and byte totals for hidden vs clean files."""
    try:
        return {"success": True, "stats": collect_stats(workspace.root_dir).to_dict()}
    except Exception as e:
        logger.exception("Stats failed")
        return _error_response(500, "Error collecting stats", e)


@router.post("/clear", response_model=MessageResponse, responses={500: {"model": ErrorResponse}})
def clear_uploads(workspace: Workspace = Depends(get_workspace)):
    """Empty and recreate the upload root."""
    try:
        with workspace.lock:
            workspace.reset()
        return {"success": True, "message": "Upload directory cleared."}
    except Exception as e:
        logger.exception("Clear failed")
        return _error_response(500, "Error clearing upload directory", e)
