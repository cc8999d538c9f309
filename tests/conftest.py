# tests/conftest.py
import pytest

from semaudit_cli.core.managers.config_manager import config_manager
from semaudit_cli.core.utils.path_utils import PathUtils


@pytest.fixture(autouse=True)
def isolated_user_settings(tmp_path, monkeypatch):
    """
    Houdt ~/.semaudit/settings.json buiten de tests: elke test start met
    alleen de meegeleverde settings.json.
    """
    monkeypatch.setattr(PathUtils, "get_user_settings_file", lambda: tmp_path / "no-user-settings.json")
    config_manager.reset()
    yield
    config_manager.reset()
