from __future__ import annotations

import logging
import tempfile
from pathlib import Path

import pytest

from specrefresh.settings import RefreshSettings
from tests._fixtures.fakes import FakeGit, RecordingProcess
from tests._fixtures.tree_builder import TreeBuilder


@pytest.fixture(autouse=True)
def isolated_tempdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep temp files and clone directories inside the pytest tmp_path."""
    scratch = tmp_path / "scratch"
    scratch.mkdir()
    monkeypatch.setattr(tempfile, "tempdir", str(scratch))
    return scratch


@pytest.fixture(autouse=True)
def reset_specrefresh_logger():
    yield
    logger = logging.getLogger("specrefresh")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def settings() -> RefreshSettings:
    return RefreshSettings()


@pytest.fixture
def tree_builder(tmp_path: Path) -> TreeBuilder:
    return TreeBuilder(tmp_path / "tree")


@pytest.fixture
def clone_root(tmp_path: Path, settings: RefreshSettings) -> Path:
    """A directory laid out like a previously generated client repository."""
    builder = TreeBuilder(tmp_path / "clone")
    builder.write(
        {
            "swagger.json": '{"stale": true}',
            "README.md": "# client\n",
            f"src/{settings.project_file_name}": "<Project Sdk=\"Microsoft.NET.Sdk\" />\n",
            "src/TrustedFormCertificatesOpenApiClient.cs": "// old client\n",
            "src/Models/Certificate.cs": "// old model\n",
            "src/Certificates/Item/WithCertificate.cs": "// old builder\n",
            "src/kiota-lock.json": "{}",
        }
    )
    return builder.path()


@pytest.fixture
def fake_git(clone_root: Path) -> FakeGit:
    return FakeGit(clone_root)


@pytest.fixture
def recording_process() -> RecordingProcess:
    return RecordingProcess()
