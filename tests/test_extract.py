from starlette.requests import Request

from logdrop.extract import base_media_type, declared_length


def make_request(headers: list[tuple[bytes, bytes]]) -> Request:
    return Request({"type": "http", "method": "POST", "path": "/", "headers": headers})


def test_declared_length():
    assert declared_length(make_request([(b"content-length", b"42")])) == 42
    assert declared_length(make_request([])) is None
    assert declared_length(make_request([(b"content-length", b"abc")])) is None
    assert declared_length(make_request([(b"content-length", "²".encode("latin-1"))])) is None


def test_base_media_type():
    assert base_media_type("Text/Plain; charset=UTF-8") == "text/plain"
    assert base_media_type("multipart/form-data; boundary=x") == "multipart/form-data"
