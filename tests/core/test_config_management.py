# tests/core/test_config_management.py
import pytest
import json

from semaudit_cli.core.managers.config_manager import ConfigManager
from semaudit_cli.core.utils.path_utils import PathUtils

# Een standaard, voorspelbare configuratie voor onze tests
MOCK_SETTINGS_CONTENT = {
    "debug": {
        "level": "WARNING"
    },
    "parser": {
        "strict": True
    },
    "batch": {
        "workers": 4
    },
    "rules": {
        "section-heading": {"enabled": True, "severity": "warning"}
    }
}


@pytest.fixture
def config_env(tmp_path, monkeypatch):
    """
    Een fixture die een geïsoleerde testomgeving opzet voor de ConfigManager:
    - Plaatst een nep 'settings.json' in een tijdelijke map.
    - Monkeypatched PathUtils om naar deze tijdelijke locatie te wijzen.
    - Herlaadt na de test de echte configuratie.
    """
    settings_file = tmp_path / "settings.json"
    settings_file.write_text(json.dumps(MOCK_SETTINGS_CONTENT))

    monkeypatch.setattr(PathUtils, 'get_default_settings_file', lambda: settings_file)
    monkeypatch.setattr(PathUtils, 'get_user_settings_file', lambda: tmp_path / "no-user-settings.json")

    manager = ConfigManager()
    manager.reset()  # Forceer herladen vanuit ons nep-bestand

    yield manager

    monkeypatch.undo()
    manager.reset()


def test_config_manager_is_singleton():
    assert ConfigManager() is ConfigManager()


def test_packaged_settings_cover_every_rule():
    """De meegeleverde settings.json kent alle regels."""
    from semaudit.engine.registry import RuleRegistry

    settings = json.loads(PathUtils.get_default_settings_file().read_text(encoding="utf-8"))
    assert sorted(settings["rules"]) == sorted(RuleRegistry.get_all_rule_ids())


def test_config_manager_load(config_env):
    """Test of de manager de configuratie correct laadt."""
    config = config_env.get_all()
    assert config["debug"]["level"] == "WARNING"
    assert config["batch"]["workers"] == 4


def test_config_manager_get_nested(config_env):
    """Test het ophalen van geneste waarden."""
    assert config_env.get_nested("rules.section-heading.severity") == "warning"
    assert config_env.get_nested("non.existent.key", "default") == "default"


def test_config_manager_set_nested(config_env):
    """Test het aanpassen van waarden in het geheugen."""
    config_env.set_nested("debug.level", "INFO")
    assert config_env.get_nested("debug.level") == "INFO"

    # Type-casting: de originele waarde is een int, dus '8' wordt 8.
    config_env.set_nested("batch.workers", "8")
    assert config_env.get_nested("batch.workers") == 8

    # Booleans worden uit tekst gelezen, 'false' blijft niet truthy.
    config_env.set_nested("parser.strict", "false")
    assert config_env.get_nested("parser.strict") is False


def test_config_manager_reset(config_env):
    """Test of de reset-functie de configuratie herlaadt vanaf schijf."""
    config_env.set_nested("debug.level", "DEBUG")
    config_env.reset()
    assert config_env.get_nested("debug.level") == "WARNING"


def test_load_file_merges_overrides(config_env, tmp_path):
    override = tmp_path / "override.json"
    override.write_text(json.dumps({"rules": {"section-heading": {"enabled": False}}}))

    assert config_env.load_file(override)
    assert config_env.rule_settings()["section-heading"] == {"enabled": False, "severity": "warning"}


def test_load_file_failures(config_env, tmp_path):
    broken = tmp_path / "broken.json"
    broken.write_text("{not json")

    assert not config_env.load_file(broken)
    assert not config_env.load_file(tmp_path / "missing.json")
    assert config_env.get_nested("batch.workers") == 4
