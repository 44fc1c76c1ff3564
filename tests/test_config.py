import textwrap
from pathlib import Path

import pytest

from MarkdownLens.config import ViewerConfig, load_config, parse_config
from MarkdownLens.markdown_parser import HeaderMode


def test_defaults_without_path():
    assert load_config(None) == ViewerConfig()


def test_parse_full_config(tmp_path):
    config_file = tmp_path / "lens.yaml"
    config_file.write_text(
        textwrap.dedent(
            f"""
            theme: deepblue
            header_mode: LENIENT
            recent_file: {tmp_path / "recent.yaml"}
            max_recent: 3
            """
        ),
        encoding="utf-8",
    )
    config = load_config(config_file)
    assert config.theme == "deepblue"
    assert config.header_mode is HeaderMode.LENIENT
    assert config.recent_file == tmp_path / "recent.yaml"
    assert config.max_recent == 3


def test_empty_config_is_default():
    assert parse_config("") == ViewerConfig()


@pytest.mark.parametrize(
    "text",
    [
        "- just\n- a list\n",
        "theme: sepia\n",
        "header_mode: strict\n",
        "max_recent: 0\n",
        "colour: red\n",
    ],
)
def test_invalid_config_raises(text):
    with pytest.raises(ValueError):
        parse_config(text)


def test_relative_recent_file_follows_config_location(tmp_path):
    config_dir = tmp_path / "conf"
    config_dir.mkdir()
    config_file = config_dir / "lens.yaml"
    config_file.write_text("recent_file: state/recent.yaml\n", encoding="utf-8")
    assert load_config(config_file).recent_file == config_dir / "state" / "recent.yaml"


def test_parse_config_without_base_dir_keeps_relative_path():
    assert parse_config("recent_file: recent.yaml\n").recent_file == Path("recent.yaml")
