"""Tests for the static feature and operation tables."""

import pytest
import yaml

from swiftbank.core.access.tables import (
    AccessTables, DEFAULT_TABLES, FEATURE_CAPABILITIES, OPERATION_CAPABILITIES,
    load_access_tables,
)


class TestBuiltInTables:

    def test_feature_table(self):
        assert FEATURE_CAPABILITIES["user_management"] == {"user_view", "user_edit", "user_create"}
        assert FEATURE_CAPABILITIES["account_view"] == {"account_view"}
        assert FEATURE_CAPABILITIES["notifications"] == {"notifications_view"}

    def test_operation_table(self):
        assert OPERATION_CAPABILITIES["edit_user"] == {"user_edit"}
        assert OPERATION_CAPABILITIES["approve_transaction"] == {"transaction_approve"}
        assert OPERATION_CAPABILITIES["security_audit"] == {"security_view"}
        assert len(OPERATION_CAPABILITIES) == 16

    def test_tables_are_read_only(self):
        with pytest.raises(TypeError):
            FEATURE_CAPABILITIES["new_feature"] = frozenset({"user_view"})
        with pytest.raises(TypeError):
            OPERATION_CAPABILITIES["edit_user"] = frozenset()

    def test_default_tables(self):
        assert DEFAULT_TABLES.features is FEATURE_CAPABILITIES
        assert "edit_user" in DEFAULT_TABLES.operation_names()
        assert DEFAULT_TABLES.feature_names() == sorted(FEATURE_CAPABILITIES)


class TestFromDict:

    def test_single_token_string(self):
        tables = AccessTables.from_dict({
            "features": {"reports": "security_view"},
            "operations": {"export": ["security_view", "settings_view"]},
        })
        assert tables.features["reports"] == {"security_view"}
        assert tables.operations["export"] == {"security_view", "settings_view"}

    def test_unknown_token_rejected(self):
        with pytest.raises(ValueError, match="unknown capabilities"):
            AccessTables.from_dict({
                "features": {"reports": ["full_access"]},
                "operations": {},
            })

    def test_wildcard_rejected(self):
        with pytest.raises(ValueError):
            AccessTables.from_dict({"features": {"all": ["*"]}, "operations": {}})

    def test_empty_requirement_rejected(self):
        with pytest.raises(ValueError):
            AccessTables.from_dict({"features": {"reports": []}, "operations": {}})

    def test_missing_section(self):
        with pytest.raises(ValueError, match="operations"):
            AccessTables.from_dict({"features": {}})

    def test_section_not_mapping(self):
        with pytest.raises(TypeError):
            AccessTables.from_dict({"features": ["user_view"], "operations": {}})


class TestLoadAccessTables:

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "access.yaml"
        path.write_text(yaml.safe_dump({
            "features": {"user_management": ["user_view"]},
            "operations": {"view_user": ["user_view"]},
        }))
        tables = load_access_tables(str(path))
        assert tables.features["user_management"] == {"user_view"}
        assert tables.operation_names() == ["view_user"]

    def test_env_var_in_path(self, tmp_path, monkeypatch):
        path = tmp_path / "access.yaml"
        path.write_text("features: {}\noperations: {}\n")
        monkeypatch.setenv("ACCESS_DIR", str(tmp_path))
        tables = load_access_tables("$ACCESS_DIR/access.yaml")
        assert tables.feature_names() == []

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_access_tables(str(tmp_path / "nope.yaml"))

    def test_root_not_mapping(self, tmp_path):
        path = tmp_path / "access.yaml"
        path.write_text("- user_view\n")
        with pytest.raises(TypeError):
            load_access_tables(str(path))

    def test_empty_file(self, tmp_path):
        path = tmp_path / "access.yaml"
        path.write_text("")
        with pytest.raises(ValueError):
            load_access_tables(str(path))
