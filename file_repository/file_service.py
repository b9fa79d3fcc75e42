import contextlib
import os
import tempfile
from typing import IO, Optional

from flask import Flask, Request, Response, g, request
from werkzeug.datastructures import FileStorage
from werkzeug.wsgi import wrap_file

from .config import load_settings
from .dispatcher import dispatch
from .logging_setup import access_enabled, access_logger, setup_logging
from .models import GatewayRequest, GatewayResponse, StreamedBody, UploadedPayload
from .paths import encode
from .responses import build_response


class UploadRequest(Request):
    """
    Spools every uploaded file into a named temp file so that the
    payload has a location on disk that can be moved into place.
    """

    def _get_file_stream(
        self,
        total_content_length: Optional[int],
        content_type: Optional[str],
        filename: Optional[str] = None,
        content_length: Optional[int] = None,
    ) -> IO[bytes]:
        stream = tempfile.NamedTemporaryFile("wb+", prefix="upload-", delete=False)
        g.setdefault("upload_tempfiles", []).append(stream)
        return stream


def _uploaded_payload() -> Optional[UploadedPayload]:
    upload = request.files.get("file")
    # browsers send an empty part with no filename when nothing was picked
    if isinstance(upload, FileStorage) and upload.filename:
        stream = upload.stream
        name = getattr(stream, "name", None)
        if isinstance(name, str) and os.path.isfile(name):
            stream.flush()
            return UploadedPayload(tempfile=name, filename=upload.filename)
        return UploadedPayload(tempfile=None, filename=upload.filename)
    if "file" in request.form:
        # plain form field, no upload behind it
        return UploadedPayload(tempfile=None)
    return None


def _to_flask_response(resp: GatewayResponse) -> Response:
    if isinstance(resp.body, StreamedBody):
        f = open(resp.body.path, "rb")
        return Response(
            wrap_file(request.environ, f),
            status=resp.status,
            headers=resp.headers,
            direct_passthrough=True,
        )
    return Response(resp.body, status=resp.status, headers=resp.headers)


def _cleanup_uploads(exc: Optional[BaseException] = None) -> None:
    for stream in g.pop("upload_tempfiles", []):
        stream.close()
        with contextlib.suppress(FileNotFoundError):
            os.unlink(stream.name)


def create_app(root: Optional[str] = None) -> Flask:
    """Build the Flask app serving the directory ``root`` (FILES_DIR by default)."""
    setup_logging()
    settings = load_settings()

    app = Flask(__name__)
    app.request_class = UploadRequest
    app.config["FILES_DIR"] = os.path.abspath(root or settings.files_dir)
    app.config["FILES_STRICT_PATHS"] = settings.strict_paths
    os.makedirs(app.config["FILES_DIR"], exist_ok=True)  # create it if it does not exist

    @app.route("/", defaults={"subpath": ""}, methods=["GET", "POST"])
    @app.route("/<path:subpath>", methods=["GET", "POST"])
    def repository(subpath):
        gateway_request = GatewayRequest(
            # PATH_INFO arrives decoded; re-encode so the single decode in dispatch restores it
            path=encode(request.path),
            action=request.values.get("action"),
            upload=_uploaded_payload(),
        )
        outcome = dispatch(
            gateway_request, app.config["FILES_DIR"], strict=app.config["FILES_STRICT_PATHS"]
        )
        resp = build_response(outcome)
        if access_enabled():
            access_logger().info(
                "%s %s action=%s -> %s", request.method, request.path, gateway_request.action, resp.status
            )
        return _to_flask_response(resp)

    app.teardown_request(_cleanup_uploads)
    return app


def main() -> None:
    settings = load_settings()
    app = create_app(settings.files_dir)
    app.run(host=settings.host, port=settings.port, debug=settings.debug)


if __name__ == "__main__":
    main()
