"""
Document API

Provides document creation and retrieval endpoints.
"""

import json
import logging
import sys
from typing import Any, Optional

from fastapi import APIRouter, BackgroundTasks, Request
from fastapi.responses import Response
from starlette.datastructures import UploadFile
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.formparsers import MultiPartException
from starlette.requests import ClientDisconnect

from haste.api.deps import DocumentServiceDep, NotifierDep
from haste.common.errors import AppError, DocumentTooLargeError, InvalidDocumentError
from haste.domain.document import DocumentCreateResponse, MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Documents"])

JSON_MEDIA_TYPE = "application/json"
RAW_MEDIA_TYPE = "text/plain; charset=UTF-8"

# nginx's "client closed request"; never seen by the disconnected client
CLIENT_CLOSED_REQUEST = 499

# A UTF-8 character takes at most 4 bytes
MAX_BYTES_PER_CHAR = 4

# Starlette reports an oversized multipart field with this message
PART_TOO_LARGE_PREFIX = "Part exceeded maximum size"


def _render(request: Request, status_code: int, body: bytes, media_type: str) -> Response:
    """Build response; HEAD keeps status and headers but drops the body"""
    headers = {"content-length": str(len(body))}
    if request.method == "HEAD":
        body = b""
    return Response(content=body, status_code=status_code, media_type=media_type, headers=headers)


def _render_json(request: Request, status_code: int, payload: dict[str, Any]) -> Response:
    body = json.dumps(payload, ensure_ascii=False).encode("utf-8")
    return _render(request, status_code, body, JSON_MEDIA_TYPE)


def _render_error(request: Request, error: AppError) -> Response:
    include_details = request.app.state.settings.DEBUG
    return _render_json(request, error.status_code, error.to_dict(include_details=include_details))


async def _read_body(request: Request, max_length: Optional[int]) -> str:
    """
    Buffer the request body as text

    Multipart bodies contribute their "data" field. Raw bodies are read
    chunk by chunk and abandoned once they are certainly too large.

    Raises:
        ClientDisconnect: Client went away before the body was complete
        DocumentTooLargeError: Body exceeds any possible decoded length
        InvalidDocumentError: Multipart body could not be parsed
    """
    byte_limit = max_length * MAX_BYTES_PER_CHAR if max_length is not None else None
    content_type = request.headers.get("content-type", "")
    if content_type.split(";")[0].strip().lower() == "multipart/form-data":
        try:
            form = await request.form(max_part_size=byte_limit if byte_limit is not None else sys.maxsize)
        except (StarletteHTTPException, MultiPartException) as e:
            reason = str(e.detail if isinstance(e, StarletteHTTPException) else e.message)
            if reason.startswith(PART_TOO_LARGE_PREFIX):
                raise DocumentTooLargeError() from e
            raise InvalidDocumentError(details={"reason": reason}) from e
        value = form.get("data")
        if value is None:
            return ""
        if isinstance(value, UploadFile):
            return (await value.read()).decode("utf-8", errors="replace")
        return value

    buffer = bytearray()
    async for chunk in request.stream():
        buffer.extend(chunk)
        if byte_limit is not None and len(buffer) > byte_limit:
            raise DocumentTooLargeError()
    return buffer.decode("utf-8", errors="replace")


def _document_url(request: Request, key: str) -> str:
    protocol = request.headers.get("x-forwarded-proto") or request.url.scheme
    host = request.headers.get("host") or request.url.netloc
    return f"{protocol}://{host}/{key}"


@router.post(
    "/documents",
    response_model=DocumentCreateResponse,
    responses={400: {"model": MessageResponse}, 500: {"model": MessageResponse}},
)
async def create_document(
    request: Request,
    service: DocumentServiceDep,
    notifier: NotifierDep,
    background_tasks: BackgroundTasks,
):
    """
    Create document

    Accepts the raw request body or a multipart field named "data".
    """
    try:
        content = await _read_body(request, service.max_length)
    except ClientDisconnect:
        logger.info("Client disconnected during upload, document discarded")
        return Response(status_code=CLIENT_CLOSED_REQUEST)
    except AppError as e:
        return _render_error(request, e)

    try:
        key = await service.create_document(content)
    except AppError as e:
        return _render_error(request, e)

    if notifier is not None:
        background_tasks.add_task(
            notifier.notify,
            f":white_check_mark: A new document was created: {_document_url(request, key)}",
        )
    return _render_json(request, 200, {"key": key})


@router.api_route(
    "/documents/{id}",
    methods=["GET", "HEAD"],
    responses={404: {"model": MessageResponse}},
)
async def get_document(id: str, request: Request, service: DocumentServiceDep):
    """
    Get document

    Returns the content wrapped in JSON together with its key.
    A trailing extension on the id is ignored.
    """
    try:
        document = await service.retrieve_document(id)
    except AppError as e:
        return _render_error(request, e)
    return _render_json(request, 200, {"data": document.data, "key": document.key})


@router.api_route(
    "/raw/{id}",
    methods=["GET", "HEAD"],
    responses={404: {"model": MessageResponse}},
)
async def get_raw_document(id: str, request: Request, service: DocumentServiceDep):
    """
    Get raw document

    Returns the stored content as plain text.
    """
    try:
        document = await service.retrieve_document(id)
    except AppError as e:
        return _render_error(request, e)
    return _render(request, 200, document.data.encode("utf-8"), RAW_MEDIA_TYPE)
