from file_repository.models import BufferedBody, Failure, StreamedBody, Success
from file_repository.responses import build_response, content_type_for


def test_not_found_body():
    resp = build_response(Failure.not_found("/missing.txt"))
    assert resp.status == 404
    assert resp.body == [b"Path not found: /missing.txt\n"]
    assert resp.headers == {"Content-Type": "text/plain", "Content-Length": "29"}


def test_forbidden_appends_single_newline():
    assert build_response(Failure.forbidden("nope")).body == [b"nope\n"]
    assert build_response(Failure.forbidden("nope\n")).body == [b"nope\n"]


def test_content_length_counts_bytes():
    resp = build_response(Failure.forbidden("Illegal path /café/.."))
    assert resp.status == 403
    assert resp.headers["Content-Length"] == str(len(resp.body[0]))


def test_success_is_html():
    resp = build_response(Success("Touched /a"))
    assert resp.status == 200
    assert resp.headers["Content-Type"] == "text/html"
    assert resp.body == [b"Touched /a"]


def test_streamed_body_is_passed_to_transport():
    body = StreamedBody(path="/x/pic.png", size=10, mtime=1242148920.0, content_type="image/png")
    resp = build_response(body)
    assert resp.body is body
    assert resp.headers == {
        "Last-Modified": "Tue, 12 May 2009 17:22:00 GMT",
        "Content-Type": "image/png",
        "Content-Length": "10",
    }


def test_buffered_body():
    resp = build_response(BufferedBody(data=b"abc", mtime=0.0, content_type="text/plain"))
    assert resp.body == [b"abc"]
    assert resp.headers["Content-Length"] == "3"


def test_content_type_default():
    assert content_type_for("/x/file.unknownext") == "text/plain"
    assert content_type_for("/x/noext") == "text/plain"
    assert content_type_for("/x/page.html") == "text/html"
