import asyncio
from collections.abc import Awaitable
from datetime import datetime, timezone
from typing import TypeVar

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from starlette.requests import ClientDisconnect

from app.api.responses import error_response, pipeline_response
from app.api.upload_reader import BodyTooLargeError, MalformedUploadError, UploadReader
from app.logging.logger import Log
from app.processor.classifier import Rejected
from app.processor.models import UploadedDocument
from app.processor.processor import Processor

T = TypeVar("T")

DISCONNECT_POLL_SECONDS = 0.5
UPLOAD_FIELD = "cv"

router = APIRouter(prefix="/api")


class ClientDisconnectedError(Exception):
    """Raised when the caller goes away before processing finishes."""


async def run_until_disconnected(request: Request, work: Awaitable[T]) -> T:
    """Await work, cancelling it if the client disconnects first."""
    task = asyncio.ensure_future(work)
    try:
        while True:
            done, _ = await asyncio.wait({task}, timeout=DISCONNECT_POLL_SECONDS)
            if done:
                return task.result()
            if await request.is_disconnected():
                raise ClientDisconnectedError()
    finally:
        if not task.done():
            task.cancel()


@router.post("/upload")
async def upload(request: Request) -> JSONResponse:
    processor: Processor = request.app.state.processor
    reader = UploadReader(UPLOAD_FIELD, processor.max_upload_size_bytes)

    try:
        part = await reader.read(request)
    except BodyTooLargeError as exc:
        rejection = processor.reject_oversized()
        Log.warning(f"Upload rejected before reading: {exc}")
        return error_response(400, rejection.reason)
    except MalformedUploadError as exc:
        Log.warning(f"Malformed upload: {exc}")
        return error_response(400, "Malformed multipart upload")
    except ClientDisconnect:
        Log.warning("Client disconnected during upload")
        return error_response(499, "Client closed request")

    if part is None:
        return error_response(400, "No file uploaded")

    filename = part.filename or "upload"
    decision = processor.classify(part.content_type, len(part.content))
    if isinstance(decision, Rejected):
        Log.warning(f"Upload {filename} rejected: {decision.reason}")
        return error_response(400, decision.reason)

    document = UploadedDocument(
        content=part.content, mime_type=part.content_type, filename=filename
    )
    try:
        result = await run_until_disconnected(request, processor.process(document))
    except ClientDisconnectedError:
        Log.warning(f"Client disconnected, abandoned processing of {filename}")
        return error_response(499, "Client closed request")
    except Exception as exc:
        Log.exception(f"Upload error: {exc}")
        return error_response(500, str(exc) or "Failed to process file")

    if not result.success:
        Log.warning(f"Upload {filename} failed with {result.http_status}: {result.error_message}")
    return pipeline_response(result)


@router.get("/health")
async def health() -> dict[str, str]:
    return {
        "status": "ok",
        "message": "CV Analyzer API is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/test")
async def test_route() -> dict[str, object]:
    return {
        "success": True,
        "data": {"name": "Test Endpoint", "description": "This is a test route"},
    }


@router.get("/error")
async def error_route() -> JSONResponse:
    return error_response(500, "This is a test error")
