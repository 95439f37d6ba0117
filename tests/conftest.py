import os

import pytest

from logger_export.paths import StaticPathProvider, reset_path_provider, set_path_provider


@pytest.fixture(scope="function", autouse=True)
def documents_dir(tmp_path, monkeypatch):
    """
    Points the process-wide documents directory at a per-test temp folder.
    Also isolates tests from LOGGER_EXPORT_* variables and any local .env file.
    """
    for name in list(os.environ):
        if name.startswith("LOGGER_EXPORT_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)

    docs = tmp_path / "docs"
    set_path_provider(StaticPathProvider(docs))
    yield docs
    reset_path_provider()
