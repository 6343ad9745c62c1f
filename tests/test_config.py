"""配置加载单元测试 -- 环境变量映射与默认值"""

import pytest
from pydantic import ValidationError
from tasklist.config import DEFAULT_SLOT_KEY, TaskListConfig, get_db_path, load_config
from tasklist.models import SortMode

_ENV_VARS = (
    "TASKLIST_DATA_DIR",
    "TASKLIST_DB_PATH",
    "TASKLIST_SLOT_KEY",
    "TASKLIST_DEFAULT_SORT",
    "TASKLIST_LOG_FORMAT",
    "TASKLIST_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestDbPath:
    """数据库路径"""

    def test_default_path(self):
        assert get_db_path().replace("\\", "/") == "data/sqlite/tasklist.db"

    def test_data_dir_override(self, monkeypatch, tmp_path):
        monkeypatch.setenv("TASKLIST_DATA_DIR", str(tmp_path))
        assert get_db_path() == str(tmp_path / "sqlite" / "tasklist.db")

    def test_explicit_db_path_wins(self, monkeypatch, tmp_path):
        monkeypatch.setenv("TASKLIST_DATA_DIR", str(tmp_path / "ignored"))
        monkeypatch.setenv("TASKLIST_DB_PATH", str(tmp_path / "x.db"))
        assert get_db_path() == str(tmp_path / "x.db")


class TestLoadConfig:
    """load_config() 环境变量映射"""

    def test_defaults(self):
        config = load_config()
        assert config.slot_key == DEFAULT_SLOT_KEY == "todos"
        assert config.default_sort == SortMode.CREATED_AT
        assert config.log_format == "dev"
        assert config.log_level == "INFO"

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("TASKLIST_SLOT_KEY", "work-list")
        monkeypatch.setenv("TASKLIST_DEFAULT_SORT", "dueDate")
        monkeypatch.setenv("TASKLIST_LOG_FORMAT", "json")
        monkeypatch.setenv("TASKLIST_LOG_LEVEL", "debug")

        config = load_config()
        assert config.slot_key == "work-list"
        assert config.default_sort == SortMode.DUE_DATE
        assert config.log_format == "json"
        assert config.log_level == "DEBUG"

    def test_invalid_sort_falls_back(self, monkeypatch):
        """非法排序方式不阻塞启动，回退默认值"""
        monkeypatch.setenv("TASKLIST_DEFAULT_SORT", "priority")
        assert load_config().default_sort == SortMode.CREATED_AT

    def test_invalid_log_level_falls_back(self, monkeypatch):
        monkeypatch.setenv("TASKLIST_LOG_LEVEL", "verbose")
        assert load_config().log_level == "INFO"

    def test_empty_slot_key_rejected(self):
        with pytest.raises(ValidationError):
            TaskListConfig(db_path="x.db", slot_key="")
