import mimetypes
import os

from werkzeug.http import http_date

from .models import (
    BufferedBody,
    Failure,
    GatewayResponse,
    OperationOutcome,
    SendBody,
    StreamedBody,
    Success,
)

DEFAULT_CONTENT_TYPE = "text/plain"


def content_type_for(path: str) -> str:
    mime_type, _ = mimetypes.guess_type(path)
    return mime_type or DEFAULT_CONTENT_TYPE


def file_body(path: str) -> SendBody:
    """
    Describe a readable file for sending. Files reporting a size are
    streamed by the transport; files reporting zero (special files, empty
    files) are read into memory whole, with no upper bound.
    """
    st = os.stat(path)
    content_type = content_type_for(path)
    if st.st_size:
        return StreamedBody(path=path, size=st.st_size, mtime=st.st_mtime, content_type=content_type)
    with open(path, "rb") as f:
        data = f.read()
    return BufferedBody(data=data, mtime=st.st_mtime, content_type=content_type)


def _text_response(status: int, body: str, content_type: str = "text/plain") -> GatewayResponse:
    data = body.encode("utf-8")
    return GatewayResponse(
        status=status,
        headers={"Content-Type": content_type, "Content-Length": str(len(data))},
        body=[data],
    )


def error_response(failure: Failure) -> GatewayResponse:
    body = failure.message
    if not body.endswith("\n"):
        body += "\n"
    return _text_response(failure.kind.value, body)


def success_response(success: Success) -> GatewayResponse:
    return _text_response(200, success.message, content_type="text/html")


def send_response(body: SendBody) -> GatewayResponse:
    headers = {
        "Last-Modified": http_date(body.mtime),
        "Content-Type": body.content_type,
        "Content-Length": str(body.size),
    }
    if isinstance(body, StreamedBody):
        return GatewayResponse(status=200, headers=headers, body=body)
    return GatewayResponse(status=200, headers=headers, body=[body.data])


def build_response(outcome: OperationOutcome) -> GatewayResponse:
    if isinstance(outcome, Failure):
        return error_response(outcome)
    if isinstance(outcome, Success):
        return success_response(outcome)
    if isinstance(outcome, (StreamedBody, BufferedBody)):
        return send_response(outcome)
    raise TypeError(f"unexpected outcome {outcome!r}")
