"""Tests for configuration loading."""

from picklist.config import Config, find_config_file, load_config


def test_defaults_without_file(tmp_path):
    config = load_config(tmp_path)

    assert config == Config()
    assert config.list.result_cap is None
    assert config.filter.scorer == "subsequence"


def test_loads_sections(tmp_path):
    (tmp_path / ".picklistrc").write_text(
        """
[list]
max_results = 5
empty_message = "Nothing here"

[filter]
scorer = "tolerant"
threshold = 70

[ui]
show_count = false
""",
        encoding="utf-8",
    )

    config = load_config(tmp_path)

    assert config.list.result_cap == 5
    assert config.list.empty_message == "Nothing here"
    assert config.filter.scorer == "tolerant"
    assert config.filter.threshold == 70
    assert config.ui.show_count is False
    assert config.ui.placeholder == "Filter..."


def test_user_config_dir(isolated_home, tmp_path):
    config_dir = isolated_home / ".config" / "picklist"
    config_dir.mkdir(parents=True)
    (config_dir / "config.toml").write_text("[list]\nmax_results = 3\n", encoding="utf-8")

    assert find_config_file(tmp_path) == config_dir / "config.toml"
    assert load_config(tmp_path).list.max_results == 3


def test_local_file_wins(isolated_home, tmp_path):
    config_dir = isolated_home / ".config" / "picklist"
    config_dir.mkdir(parents=True)
    (config_dir / "config.toml").write_text("", encoding="utf-8")
    (tmp_path / ".picklistrc.toml").write_text("", encoding="utf-8")

    assert find_config_file(tmp_path) == tmp_path / ".picklistrc.toml"


def test_invalid_toml_falls_back_to_defaults(tmp_path):
    (tmp_path / ".picklistrc").write_text("[list\nmax_results = ", encoding="utf-8")
    assert load_config(tmp_path) == Config()


def test_wrong_types_are_ignored(tmp_path):
    (tmp_path / ".picklistrc").write_text(
        '[list]\nmax_results = "ten"\n\n[ui]\nshow_count = 1\n',
        encoding="utf-8",
    )

    config = load_config(tmp_path)

    assert config.list.max_results == 0
    assert config.ui.show_count is True
