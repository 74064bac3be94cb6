"""Test environment variable management."""

import pytest

from stowage.core.env import EnvManager, get_env, load_env


class TestEnvManager:
    """Test EnvManager functionality."""

    def test_get_with_default(self, monkeypatch):
        env = EnvManager(auto_load=False)

        assert env.get("NONEXISTENT_VAR", "default") == "default"

        monkeypatch.setenv("TEST_VAR", "test_value")
        assert env.get("TEST_VAR") == "test_value"

    def test_get_required(self):
        env = EnvManager(auto_load=False)

        with pytest.raises(ValueError, match="NONEXISTENT_VAR"):
            env.get("NONEXISTENT_VAR", required=True)

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("true", True),
            ("True", True),
            ("1", True),
            ("yes", True),
            ("false", False),
            ("0", False),
            ("no", False),
            ("", False),
        ],
    )
    def test_get_bool(self, monkeypatch, value, expected):
        monkeypatch.setenv("TEST_BOOL", value)
        assert EnvManager(auto_load=False).get_bool("TEST_BOOL") is expected

    def test_get_bool_default_for_garbage(self, monkeypatch):
        monkeypatch.setenv("TEST_BOOL", "maybe")
        assert EnvManager(auto_load=False).get_bool("TEST_BOOL", default=True) is True

    def test_get_list(self, monkeypatch):
        env = EnvManager(auto_load=False)

        assert env.get_list("TEST_LIST") == []
        assert env.get_list("TEST_LIST", default=["a"]) == ["a"]

        monkeypatch.setenv("TEST_LIST", " cache ,store,, ")
        assert env.get_list("TEST_LIST") == ["cache", "store"]

    def test_load_env_file(self, tmp_path, monkeypatch):
        monkeypatch.delenv("STOWAGE_TEST_LOADED", raising=False)
        (tmp_path / ".env").write_text("STOWAGE_TEST_LOADED=yes\n")

        env = EnvManager(project_root=tmp_path, auto_load=False)

        assert env.load() is True
        assert env.loaded is True
        assert env.get("STOWAGE_TEST_LOADED") == "yes"

    def test_load_missing_file(self, tmp_path):
        env = EnvManager(project_root=tmp_path, auto_load=False)

        assert env.load() is False
        assert env.loaded is False


class TestSubstitution:
    """Test ${VAR} substitution."""

    def test_braced(self, monkeypatch):
        monkeypatch.setenv("STORE_DIR", "/srv/uploads")
        env = EnvManager(auto_load=False)

        assert env.substitute("${STORE_DIR}/photos") == "/srv/uploads/photos"

    def test_default(self):
        env = EnvManager(auto_load=False)
        assert env.substitute("${UNSET_STOWAGE_VAR:-cache}") == "cache"

    def test_required(self):
        env = EnvManager(auto_load=False)

        with pytest.raises(ValueError, match="need it"):
            env.substitute("${UNSET_STOWAGE_VAR:?need it}")

    def test_unset_left_alone(self):
        env = EnvManager(auto_load=False)
        assert env.substitute("${UNSET_STOWAGE_VAR}") == "${UNSET_STOWAGE_VAR}"

    def test_simple_dollar(self, monkeypatch):
        monkeypatch.setenv("STORAGE_NAME", "store")
        env = EnvManager(auto_load=False)

        assert env.substitute("$STORAGE_NAME") == "store"

    def test_substitute_dict(self, monkeypatch):
        monkeypatch.setenv("STORAGE_NAME", "store")
        env = EnvManager(auto_load=False)

        data = {
            "moving": {"storages": ["cache", "${STORAGE_NAME}"], "delete_source_on_fallback": True},
            "name": "$STORAGE_NAME",
        }

        assert env.substitute_dict(data) == {
            "moving": {"storages": ["cache", "store"], "delete_source_on_fallback": True},
            "name": "store",
        }


class TestGlobalEnv:
    """Test the global EnvManager helpers."""

    def test_get_env_is_cached(self):
        assert get_env() is get_env()

    def test_load_env(self, tmp_path, monkeypatch):
        monkeypatch.delenv("STOWAGE_TEST_GLOBAL", raising=False)
        project = tmp_path / "project"
        project.mkdir()
        (project / ".env").write_text("STOWAGE_TEST_GLOBAL=1\n")

        assert load_env(project) is True
        assert get_env().get("STOWAGE_TEST_GLOBAL") == "1"
