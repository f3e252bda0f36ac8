import pytest
from dacite import WrongTypeError

from utils.config import Config
from utils.load_config import load_config


def test_load_config_reads_bundled_defaults():
    config = load_config()

    assert isinstance(config, Config)
    assert config.reasoning.default_mode == "react"
    assert config.reasoning.react.max_iters == 10
    assert config.reasoning.tot.max_depth == 3
    assert config.reasoning.program.timeout_ms == 1000
    assert config.logging.file.rotation.backup_count == 5


def test_load_config_fills_missing_sections_with_defaults(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text('[reasoning.tot]\nbeam_width = 5\n\n[logging]\nlevel = "DEBUG"\n')

    config = load_config(path)

    assert config.reasoning.tot.beam_width == 5
    assert config.reasoning.tot.max_depth == 3
    assert config.reasoning.consensus.rounds == 1
    assert config.logging.level == "DEBUG"
    assert config.logging.console.enabled is True


def test_load_config_rejects_wrong_types(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text('[reasoning.react]\nmax_iters = "many"\n')

    with pytest.raises(WrongTypeError):
        load_config(path)


def test_load_config_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "absent.toml")
