"""Test fixtures: temporary mail storage and FastAPI test client."""

import os
import sys
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from mailquota import services
from mailquota.config import NamespaceConfig
from mailquota.main import create_app
from mailquota.services.namespaces import NamespaceResolver


def _write_file(path: Path, size: int) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"x" * size)
    return path


@pytest.fixture
def write_file():
    """Create a file (and its parents) holding a given number of bytes."""
    return _write_file


@pytest.fixture
def mail_root(tmp_path) -> Path:
    root = tmp_path / "mail"
    root.mkdir()
    return root


@pytest.fixture
def resolver(mail_root, monkeypatch):
    """Namespace resolver with a maildir namespace and an mbox INBOX."""
    resolver = NamespaceResolver([
        NamespaceConfig(
            prefix="",
            root_dir=f"{mail_root}/{{user}}/Maildir",
            inbox_path=f"{mail_root}/{{user}}/Maildir",
            mailbox_format="maildir",
        ),
        NamespaceConfig(
            prefix="Archive/",
            root_dir=f"{mail_root}/{{user}}/archive",
            inbox_path=f"{mail_root}/spool/{{user}}",
            mailbox_format="mbox",
        ),
    ])
    monkeypatch.setattr(services, "_namespace_resolver", resolver)
    return resolver


@pytest_asyncio.fixture
async def client(resolver):
    """Async test client; services are wired through the resolver fixture."""
    app = create_app()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def deep_tree(tmp_path):
    """A 5 byte file nested deeper than the interpreter's recursion limit.

    Built and removed one level at a time; os.makedirs and rmtree recurse.
    """
    root = tmp_path / "deep"
    depth = sys.getrecursionlimit() + 100
    if len(str(root)) + 2 * depth + 64 > os.pathconf("/", "PC_PATH_MAX"):
        pytest.skip("recursion limit too high for a tree under PATH_MAX")
    dirs = [str(root)]
    os.mkdir(dirs[0])
    for _ in range(depth):
        dirs.append(os.path.join(dirs[-1], "a"))
        os.mkdir(dirs[-1])
    leaf = os.path.join(dirs[-1], "msg")
    with open(leaf, "wb") as f:
        f.write(b"x" * 5)

    yield root

    os.remove(leaf)
    for d in reversed(dirs):
        os.rmdir(d)
