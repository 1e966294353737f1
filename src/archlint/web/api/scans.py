"""REST API for the scan tool."""

from __future__ import annotations

import threading

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from archlint.plugin import MANIFEST, handle_scan
from archlint.scanner.errors import ScanCancelled, WorkspaceError

router = APIRouter(tags=["scans"])


class ScanRequest(BaseModel):
    workspace_root: str = ""


@router.get("/manifest")
def get_manifest():
    return MANIFEST


@router.post("/tools/scan")
def scan(body: ScanRequest, request: Request):
    config = request.app.state.config
    cancel = threading.Event()
    timer = None
    if config.scan_timeout:
        timer = threading.Timer(config.scan_timeout, cancel.set)
        timer.start()
    try:
        return handle_scan(
            {"workspace_root": body.workspace_root},
            engine=request.app.state.engine,
            cancel_event=cancel,
        )
    except WorkspaceError as e:
        return JSONResponse(status_code=400, content={"detail": str(e)})
    except ScanCancelled as e:
        return JSONResponse(status_code=408, content={"detail": str(e)})
    finally:
        if timer:
            timer.cancel()
