from __future__ import annotations

"""
Unit tests for the Config Domain.

Verifies:
1. Default configuration and renderer option mapping.
2. Resilience against missing or corrupted config files.
3. Persistence (Save/Load) inside an isolated data directory.
"""

import json

from metatree.domain.config import (
    get_config_file,
    get_default_config,
    load_config,
    save_config,
    tree_options_from_config,
)
from metatree.domain.constants import CURRENT_CONFIG_VERSION
from metatree.domain.tree_models import TreeOptions


def test_default_config_matches_tree_options() -> None:
    """Defaults map onto the default renderer options."""
    assert tree_options_from_config(get_default_config()) == TreeOptions()


def test_default_config_is_fresh_copy() -> None:
    cfg = get_default_config()
    cfg["use_color"] = False
    assert get_default_config()["use_color"] is True


def test_load_missing_file_returns_defaults(tmp_path) -> None:
    assert load_config(str(tmp_path / "absent.json")) == get_default_config()


def test_load_corrupted_file_returns_defaults(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text("{ not json", encoding="utf-8")

    assert load_config(str(path)) == get_default_config()


def test_load_non_object_returns_defaults(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text("[1, 2]", encoding="utf-8")

    assert load_config(str(path)) == get_default_config()


def test_load_merges_tree_section(tmp_path) -> None:
    """Persisted values override defaults; unknown keys are kept for validation."""
    path = tmp_path / "config.json"
    path.write_text(json.dumps({
        "version": CURRENT_CONFIG_VERSION,
        "tree": {"use_color": False, "extra": 1},
    }), encoding="utf-8")

    cfg = load_config(str(path))
    assert cfg["use_color"] is False
    assert cfg["show_file_size"] is True
    assert cfg["extra"] == 1


def test_save_and_load_roundtrip_in_data_dir() -> None:
    """Without an explicit path the user data directory is used."""
    cfg = get_default_config()
    cfg["max_entry_size"] = 60
    save_config(cfg)

    with open(get_config_file(), "r", encoding="utf-8") as f:
        stored = json.load(f)

    assert stored["version"] == CURRENT_CONFIG_VERSION
    assert stored["tree"]["max_entry_size"] == 60
    assert load_config()["max_entry_size"] == 60
