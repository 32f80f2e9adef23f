from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from snp.config import (
    CONFIG_ENV_VAR,
    DEFAULT_CONFIG_PATH,
    Config,
    config_path,
    env_values,
    load_config,
    load_file_values,
)


class ConfigPathTests(unittest.TestCase):
    def test_default_path(self) -> None:
        self.assertEqual(config_path({}), DEFAULT_CONFIG_PATH)

    def test_env_override(self) -> None:
        self.assertEqual(config_path({CONFIG_ENV_VAR: "/tmp/snp.yaml"}), Path("/tmp/snp.yaml"))


class LoadConfigTests(unittest.TestCase):
    def test_defaults_when_nothing_is_configured(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config = load_config(environ={}, path=Path(tmp) / "missing.yaml")
        self.assertEqual(config, Config())
        self.assertEqual(config.default_language, "go")
        self.assertEqual(config.theme, "dracula")
        self.assertEqual(config.gray, "7")

    def test_yaml_values_are_applied(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.yaml"
            path.write_text(
                "root: ~/snips\ndefault_language: py\nblue: '#336699'\nbright_red: 196\nunknown: 1\n",
                encoding="utf-8",
            )
            config = load_config(environ={}, path=path)
        self.assertEqual(config.root, Path("~/snips").expanduser())
        self.assertEqual(config.default_language, "py")
        self.assertEqual(config.blue, "#336699")
        self.assertEqual(config.bright_red, "196")

    def test_environment_overrides_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.yaml"
            path.write_text("theme: monokai\n", encoding="utf-8")
            environ = {"SNP_THEME": "nord", "SNP_BRRED": "160", "SNP_ROOT": tmp}
            config = load_config(environ=environ, path=path)
        self.assertEqual(config.theme, "nord")
        self.assertEqual(config.bright_red, "160")
        self.assertEqual(config.root, Path(tmp))

    def test_empty_env_value_is_ignored(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config = load_config(environ={"SNP_THEME": ""}, path=Path(tmp) / "none.yaml")
        self.assertEqual(config.theme, "dracula")

    def test_config_path_from_environment(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "custom.yaml"
            path.write_text("log_level: debug\n", encoding="utf-8")
            config = load_config(environ={CONFIG_ENV_VAR: str(path)})
        self.assertEqual(config.log_level, "debug")


class MalformedConfigTests(unittest.TestCase):
    def test_malformed_yaml_falls_back(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.yaml"
            path.write_text("root: [unclosed\n", encoding="utf-8")
            with self.assertLogs("snp.config", level="WARNING"):
                values = load_file_values(path)
        self.assertEqual(values, {})

    def test_non_mapping_yaml_falls_back(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.yaml"
            path.write_text("- a\n- b\n", encoding="utf-8")
            with self.assertLogs("snp.config", level="WARNING"):
                values = load_file_values(path)
        self.assertEqual(values, {})

    def test_env_values_only_reads_known_variables(self) -> None:
        values = env_values({"SNP_GRAY": "8", "HOME": "/root"})
        self.assertEqual(values, {"gray": "8"})


if __name__ == "__main__":
    unittest.main()
