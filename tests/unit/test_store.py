"""
Unit tests for the config store

Tests JSON persistence of application definitions, including recovery
from missing or corrupted files.
"""

import json

import pytest

from applauncher.core.models import ApplicationConfig, ApplicationDefinition
from applauncher.state.store import ConfigStore
from applauncher.utils.errors import PersistenceError


def _config():
    return ApplicationConfig(registered_apps=[
        ApplicationDefinition(
            id="b2", name="Browser", path="/usr/bin/firefox",
            arguments="--private-window", description="web", delay=2,
        ),
        ApplicationDefinition(
            id="a1", name="Slack", path="C:/Apps/slack.exe",
            enabled=False, prevent_duplicate=True, auto_start=True,
        ),
    ])


class TestConfigStore:
    """Test ConfigStore load and save."""
    
    @pytest.mark.asyncio
    async def test_missing_file_loads_empty(self, store):
        config = await store.load()
        assert config == ApplicationConfig()
    
    @pytest.mark.asyncio
    async def test_round_trip(self, store):
        store.save(_config())
        
        assert await store.load() == _config()
    
    @pytest.mark.asyncio
    async def test_save_then_load_is_stable(self, store, config_file):
        store.save(_config())
        first = config_file.read_text(encoding="utf-8")
        
        store.save(await store.load())
        
        assert config_file.read_text(encoding="utf-8") == first
    
    def test_save_creates_directory(self, store, config_file):
        assert not config_file.parent.exists()
        store.save(ApplicationConfig())
        
        assert config_file.exists()
        assert not config_file.with_suffix(".tmp").exists()
    
    def test_saved_layout(self, store, config_file):
        store.save(_config())
        data = json.loads(config_file.read_text(encoding="utf-8"))
        
        assert list(data) == ["registered_apps"]
        assert data["registered_apps"][1] == {
            "id": "a1",
            "name": "Slack",
            "path": "C:/Apps/slack.exe",
            "arguments": "",
            "description": "",
            "enabled": False,
            "delay": 0,
            "prevent_duplicate": True,
            "auto_start": True,
        }
    
    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", [
        "{not json",
        "[1, 2, 3]",
        '{"registered_apps": "nope"}',
        '{"registered_apps": [{"id": "a1"}]}',
        '{"registered_apps": [{"id": "a1", "name": "x", "path": "x", "delay": -5}]}',
        pytest.param("[" * 200000, id="deeply-nested"),
        "",
    ])
    async def test_malformed_file_loads_empty(self, store, config_file, test_helper, content):
        test_helper.create_test_file(config_file, content)
        
        assert await store.load() == ApplicationConfig()
    
    @pytest.mark.asyncio
    async def test_loads_camel_case_records(self, store, config_file, test_helper):
        test_helper.create_test_json_file(config_file, {
            "registered_apps": [{
                "id": "a1", "name": "x", "path": "x", "arguments": "",
                "description": "", "enabled": True, "delay": 1,
                "preventDuplicate": True,
            }]
        })
        
        config = await store.load()
        
        assert config.registered_apps[0].prevent_duplicate is True
        assert config.registered_apps[0].auto_start is False
    
    def test_save_failure_raises_persistence_error(self, temp_dir):
        blocker = temp_dir / "blocker"
        blocker.write_text("a file, not a directory")
        store = ConfigStore(blocker / "config.json")
        
        with pytest.raises(PersistenceError) as exc_info:
            store.save(_config())
        
        assert exc_info.value.details['config_file'] == str(blocker / "config.json")
