import pytest

from file_repository import create_app


@pytest.fixture
def root_dir(tmp_path):
    root = tmp_path / "root"
    root.mkdir()
    return root


@pytest.fixture
def app(root_dir):
    app = create_app(str(root_dir))
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def upload_file(tmp_path):
    """Write bytes to a file outside the root, standing in for a spooled upload."""

    def _make(data: bytes, name: str = "upload.bin"):
        src = tmp_path / "uploads" / name
        src.parent.mkdir(exist_ok=True)
        src.write_bytes(data)
        return src

    return _make
