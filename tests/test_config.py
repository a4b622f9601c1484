"""
Tests for config loading, naming, override criteria and tool settings.
"""

import sys

import pytest
import yaml

from flatcompat.config.loader import find_config_file, load_config_file
from flatcompat.config.modules import find_module_file, load_module, load_module_from_path, loaded_module_key
from flatcompat.config.naming import (
    CONFIG_PREFIX,
    PLUGIN_PREFIX,
    get_shorthand_name,
    normalize_package_name,
    to_module_name,
)
from flatcompat.config.overrides import combine_criteria, create_criteria, to_pattern_list
from flatcompat.config.settings import Settings, load_settings, substitute_env_vars
from flatcompat.core.types import OverridePattern
from flatcompat.exceptions import ConfigNotFoundError, ConfigurationError, InvalidPatternError


class TestNaming:
    """Package name normalization."""

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("foo", "eslint-plugin-foo"),
            ("eslint-plugin-foo", "eslint-plugin-foo"),
            ("@scope", "@scope/eslint-plugin"),
            ("@scope/", "@scope/eslint-plugin"),
            ("@scope/foo", "@scope/eslint-plugin-foo"),
            ("@scope/eslint-plugin", "@scope/eslint-plugin"),
            ("@scope/eslint-plugin-foo", "@scope/eslint-plugin-foo"),
            ("@scope\\foo", "@scope/eslint-plugin-foo"),
        ],
    )
    def test_normalize_plugin_name(self, name, expected):
        assert normalize_package_name(name, PLUGIN_PREFIX) == expected

    def test_normalize_config_name(self):
        assert normalize_package_name("standard", CONFIG_PREFIX) == "eslint-config-standard"

    @pytest.mark.parametrize(
        "full_name, expected",
        [
            ("eslint-plugin-foo", "foo"),
            ("@scope/eslint-plugin", "@scope"),
            ("@scope/eslint-plugin-foo", "@scope/foo"),
            ("other", "other"),
        ],
    )
    def test_shorthand(self, full_name, expected):
        assert get_shorthand_name(full_name, PLUGIN_PREFIX) == expected

    @pytest.mark.parametrize(
        "package, expected",
        [
            ("eslint-plugin-foo", "eslint_plugin_foo"),
            ("@scope/eslint-plugin-foo", "scope.eslint_plugin_foo"),
            ("my-parser", "my_parser"),
        ],
    )
    def test_module_name(self, package, expected):
        assert to_module_name(package) == expected


class TestOverrideCriteria:
    """create_criteria() and combine_criteria()."""

    def test_single_string(self):
        criteria = create_criteria("*.js", base_path="/p")
        assert criteria.patterns == [OverridePattern(includes=["*.js"])]
        assert criteria.base_path == "/p"

    def test_excludes(self):
        criteria = create_criteria(["*.js"], "*.test.js")
        assert criteria.patterns == [OverridePattern(includes=["*.js"], excludes=["*.test.js"])]

    def test_empty_returns_none(self):
        assert create_criteria([], None) is None

    def test_negated_pattern_validated(self):
        with pytest.raises(InvalidPatternError):
            create_criteria("!../secret/*.js")

    def test_bad_type(self):
        with pytest.raises(ConfigurationError, match="'files' must be a string or a list of strings"):
            create_criteria(42)

    def test_to_pattern_list(self):
        assert to_pattern_list(None, key="k", source="s") is None
        assert to_pattern_list([], key="k", source="s") is None
        assert to_pattern_list("a", key="k", source="s") == ["a"]

    def test_combine(self):
        parent = create_criteria("src/**", base_path="/p")
        child = create_criteria("*.ts", base_path="/q")
        combined = combine_criteria(parent, child)
        assert combined.patterns == parent.patterns + child.patterns
        assert combined.base_path == "/p"
        assert combine_criteria(None, child) is child
        assert combine_criteria(parent, None) is parent


class TestLoader:
    """Legacy config file loading."""

    def test_yaml(self, config_dir):
        data = load_config_file(config_dir / "eslint-config-fixture2.yaml")
        assert data == {"globals": {"foobar": False}, "rules": {"foobar": "error"}}

    def test_json(self, config_dir):
        assert load_config_file(config_dir / "nested" / "base.json")["rules"] == {"nested": "error"}

    def test_tab_indented_json(self, tmp_path):
        (tmp_path / ".eslintrc.json").write_text('{\n\t"rules": {\n\t\t"semi": "error"\n\t}\n}')
        assert load_config_file(tmp_path / ".eslintrc.json") == {"rules": {"semi": "error"}}

    def test_json_syntax_error_reports_position(self, tmp_path):
        (tmp_path / ".eslintrc.json").write_text('{\n  "rules": {"semi": "error",}\n}')
        with pytest.raises(ConfigurationError, match="Error parsing .eslintrc.json at line 2") as exc_info:
            load_config_file(tmp_path / ".eslintrc.json")
        assert exc_info.value.details["line"] == 2

    def test_empty_file(self, tmp_path):
        (tmp_path / ".eslintrc.yml").write_text("")
        assert load_config_file(tmp_path / ".eslintrc.yml") == {}

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigNotFoundError):
            load_config_file(tmp_path / ".eslintrc.yaml")

    def test_syntax_error_reports_position(self, tmp_path):
        (tmp_path / ".eslintrc.yaml").write_text("rules:\n  semi: [error\n")
        with pytest.raises(ConfigurationError, match="at line"):
            load_config_file(tmp_path / ".eslintrc.yaml")

    def test_non_mapping(self, tmp_path):
        (tmp_path / ".eslintrc.yaml").write_text("- a\n- b\n")
        with pytest.raises(ConfigurationError, match="must be a mapping"):
            load_config_file(tmp_path / ".eslintrc.yaml")

    def test_unsupported_suffix(self, tmp_path):
        (tmp_path / "config.toml").write_text("")
        with pytest.raises(ConfigurationError, match="Unsupported config file format"):
            load_config_file(tmp_path / "config.toml")

    def test_package_json_without_key(self, tmp_path):
        (tmp_path / "package.json").write_text('{"name": "x"}')
        with pytest.raises(ConfigurationError, match="eslintConfig"):
            load_config_file(tmp_path / "package.json")

    def test_find_config_file_order(self, tmp_path):
        (tmp_path / ".eslintrc.json").write_text("{}")
        (tmp_path / ".eslintrc.yaml").write_text("")
        assert find_config_file(tmp_path) == tmp_path / ".eslintrc.yaml"

    def test_find_skips_package_json_without_key(self, tmp_path):
        (tmp_path / "package.json").write_text('{"name": "x"}')
        assert find_config_file(tmp_path) is None

    def test_find_package_json(self, tmp_path):
        (tmp_path / "package.json").write_text('{"eslintConfig": {}}')
        assert find_config_file(tmp_path) == tmp_path / "package.json"


class TestModules:
    """Module lookup."""

    def test_find_module_file(self, config_dir):
        assert find_module_file("eslint_plugin_fixture1", config_dir) == config_dir / "eslint_plugin_fixture1.py"
        assert find_module_file("scope.eslint_plugin", config_dir) == config_dir / "scope" / "eslint_plugin.py"
        assert find_module_file("missing", config_dir) is None

    def test_package_directory(self, tmp_path):
        package = tmp_path / "eslint_plugin_pkg"
        package.mkdir()
        (package / "__init__.py").write_text("from .rules import rules\n")
        (package / "rules.py").write_text("rules = {'pkg-rule': {}}\n")
        loaded = load_module("eslint_plugin_pkg", tmp_path)
        assert loaded.module.rules == {"pkg-rule": {}}
        assert loaded.file_path == str(package / "__init__.py")

    def test_missing_module(self, tmp_path):
        assert load_module("eslint_plugin_does_not_exist", tmp_path) is None

    def test_missing_dependency_propagates(self, tmp_path):
        (tmp_path / "eslint_plugin_broken.py").write_text("import flatcompat_missing_dependency\n")
        with pytest.raises(ModuleNotFoundError):
            load_module("eslint_plugin_broken", tmp_path)

    def test_import_path_fallback(self):
        loaded = load_module("flatcompat.config.naming")
        assert loaded.module.PLUGIN_PREFIX == "eslint-plugin"

    def test_file_modules_use_private_keys(self, tmp_path):
        (tmp_path / "yaml.py").write_text("marker = 1\n")
        loaded = load_module_from_path(tmp_path / "yaml.py")
        assert loaded.module.marker == 1
        assert sys.modules["yaml"] is yaml
        assert sys.modules[loaded_module_key("yaml", tmp_path / "yaml.py")] is loaded.module
        assert load_module_from_path(tmp_path / "yaml.py").module is loaded.module

    def test_load_from_path(self, config_dir):
        loaded = load_module_from_path(config_dir / "my_parser.py")
        assert loaded.module.parse_for_eslint("x")["text"] == "x"
        assert load_module_from_path(config_dir / "missing.py") is None


class TestSettings:
    """Tool settings."""

    def test_missing_file(self, tmp_path):
        settings = load_settings(tmp_path)
        assert settings.data == {}
        assert settings.format is None

    def test_load(self, tmp_path):
        (tmp_path / ".flatcompat.yaml").write_text(
            "base_directory: configs\nformat: yaml\nlogging:\n  level: DEBUG\n"
        )
        settings = load_settings(tmp_path)
        assert settings.base_directory == "configs"
        assert settings.format == "yaml"
        assert settings.get("logging.level") == "DEBUG"
        assert settings["logging"]["level"] == "DEBUG"
        assert "logging.level" in settings
        assert "logging.file" not in settings

    def test_env_substitution(self, tmp_path, monkeypatch):
        monkeypatch.setenv("FLATCOMPAT_PLUGINS", "/opt/plugins")
        (tmp_path / ".flatcompat.yaml").write_text("resolve_plugins_relative_to: ${FLATCOMPAT_PLUGINS}\n")
        assert load_settings(tmp_path).resolve_plugins_relative_to == "/opt/plugins"

    def test_unknown_variable_kept(self, monkeypatch):
        monkeypatch.delenv("FLATCOMPAT_UNSET", raising=False)
        assert substitute_env_vars({"a": ["${FLATCOMPAT_UNSET}", 1]}) == {"a": ["${FLATCOMPAT_UNSET}", 1]}

    def test_invalid_yaml(self, tmp_path):
        (tmp_path / ".flatcompat.yaml").write_text("format: [yaml\n")
        with pytest.raises(ConfigurationError, match="Error parsing .flatcompat.yaml"):
            load_settings(tmp_path)

    def test_validation(self):
        with pytest.raises(ConfigurationError) as exc_info:
            Settings({"format": "xml", "base_directory": 3, "logging": "loud"}).validate()
        assert len(exc_info.value.details["errors"]) == 3

    def test_missing_key(self):
        with pytest.raises(KeyError):
            Settings()["format"]
