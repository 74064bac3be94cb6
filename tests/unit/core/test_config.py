"""Test StowageConfig construction from code, environment and files."""

import pytest

from stowage.core.config import StowageConfig
from stowage.core.exceptions import ConfigurationError
from stowage.storage.transfer import RelocationPolicy


class TestStowageConfig:
    """Tests for StowageConfig."""

    def test_defaults(self):
        config = StowageConfig()

        assert config.relocate_to == frozenset()
        assert config.delete_source_on_fallback is True
        assert config.metrics is False
        assert config.policy == RelocationPolicy()

    def test_relocate_to_normalized(self):
        config = StowageConfig(relocate_to=["store", "cache", "store"])

        assert config.relocate_to == frozenset({"cache", "store"})
        assert config.policy.prefers_relocation("cache")

    def test_invalid_storage_key(self):
        with pytest.raises(ValueError):
            StowageConfig(relocate_to=["cache", ""])

    def test_is_immutable(self):
        config = StowageConfig()

        with pytest.raises(AttributeError):
            config.metrics = True

    def test_with_relocation(self):
        config = StowageConfig(relocate_to=["cache"], delete_source_on_fallback=False)
        updated = config.with_relocation(["store"])

        assert updated.relocate_to == frozenset({"store"})
        assert updated.delete_source_on_fallback is False
        assert config.relocate_to == frozenset({"cache"})

    def test_to_dict(self):
        config = StowageConfig(relocate_to=["store", "cache"], metrics=True)

        assert config.to_dict() == {
            "relocate_to": ["cache", "store"],
            "delete_source_on_fallback": True,
            "metrics": True,
        }


class TestFromEnv:
    """Tests for StowageConfig.from_env()."""

    def test_defaults_without_variables(self):
        assert StowageConfig.from_env() == StowageConfig()

    def test_reads_variables(self, monkeypatch):
        monkeypatch.setenv("STOWAGE_RELOCATE_TO", "cache, store,")
        monkeypatch.setenv("STOWAGE_DELETE_SOURCE_ON_FALLBACK", "false")
        monkeypatch.setenv("STOWAGE_METRICS", "yes")

        config = StowageConfig.from_env()

        assert config.relocate_to == frozenset({"cache", "store"})
        assert config.delete_source_on_fallback is False
        assert config.metrics is True

    def test_reads_dotenv_file(self, tmp_path):
        (tmp_path / ".env").write_text("STOWAGE_RELOCATE_TO=cache\n")

        config = StowageConfig.from_env()

        assert config.relocate_to == frozenset({"cache"})

    def test_skip_dotenv(self, tmp_path):
        (tmp_path / ".env").write_text("STOWAGE_METRICS=true\n")

        config = StowageConfig.from_env(load_dotenv=False)

        assert config.metrics is False


class TestFromFile:
    """Tests for StowageConfig.from_file()."""

    def test_full_file(self, tmp_path):
        path = tmp_path / "stowage.yaml"
        path.write_text(
            "moving:\n"
            "  storages: [cache, store]\n"
            "  delete_source_on_fallback: false\n"
            "observability:\n"
            "  prometheus:\n"
            "    enabled: true\n"
        )

        config = StowageConfig.from_file(path)

        assert config.relocate_to == frozenset({"cache", "store"})
        assert config.delete_source_on_fallback is False
        assert config.metrics is True

    def test_empty_file(self, tmp_path):
        path = tmp_path / "stowage.yaml"
        path.write_text("")

        assert StowageConfig.from_file(path) == StowageConfig()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            StowageConfig.from_file(tmp_path / "missing.yaml")

    def test_env_substitution(self, tmp_path, monkeypatch):
        monkeypatch.setenv("MOVE_TO", "cache")
        path = tmp_path / "stowage.yaml"
        path.write_text(
            "moving:\n"
            "  storages: ['${MOVE_TO}']\n"
            "  delete_source_on_fallback: ${KEEP_DELETING:-false}\n"
        )

        config = StowageConfig.from_file(path)

        assert config.relocate_to == frozenset({"cache"})
        assert config.delete_source_on_fallback is False

    def test_comma_separated_storages(self, tmp_path):
        path = tmp_path / "stowage.yaml"
        path.write_text("moving:\n  storages: cache, store\n")

        assert StowageConfig.from_file(path).relocate_to == frozenset({"cache", "store"})

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "stowage.yaml"
        path.write_text("moving: [unclosed\n")

        with pytest.raises(ConfigurationError, match="stowage.yaml"):
            StowageConfig.from_file(path)

    def test_root_not_a_mapping(self, tmp_path):
        path = tmp_path / "stowage.yaml"
        path.write_text("- cache\n- store\n")

        with pytest.raises(ConfigurationError, match="mapping"):
            StowageConfig.from_file(path)

    def test_invalid_boolean(self, tmp_path):
        path = tmp_path / "stowage.yaml"
        path.write_text("moving:\n  delete_source_on_fallback: sometimes\n")

        with pytest.raises(ConfigurationError, match="delete_source_on_fallback"):
            StowageConfig.from_file(path)

    def test_invalid_storages(self, tmp_path):
        path = tmp_path / "stowage.yaml"
        path.write_text("moving:\n  storages: {cache: true}\n")

        with pytest.raises(ConfigurationError, match="list"):
            StowageConfig.from_file(path)

    def test_required_variable_missing(self, tmp_path):
        path = tmp_path / "stowage.yaml"
        path.write_text("moving:\n  storages: ['${STOWAGE_MISSING_STORAGE:?set the storage}']\n")

        with pytest.raises(ConfigurationError, match="set the storage"):
            StowageConfig.from_file(path)

    def test_null_storage_entry(self, tmp_path):
        path = tmp_path / "stowage.yaml"
        path.write_text("moving:\n  storages: [cache, null]\n")

        with pytest.raises(ConfigurationError, match="non-empty strings"):
            StowageConfig.from_file(path)

    def test_non_string_storage_entry(self, tmp_path):
        path = tmp_path / "stowage.yaml"
        path.write_text("moving:\n  storages: [cache, {store: true}]\n")

        with pytest.raises(ConfigurationError, match="non-empty strings"):
            StowageConfig.from_file(path)
