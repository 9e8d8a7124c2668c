from __future__ import annotations

import pytest
from pydantic import ValidationError

from pathextraction.schemas import AppConfig, SearchPathSpec, load_config


def test_load_config_accepts_strings_and_mappings():
    app_config = load_config(
        {
            "extractor": {"match_relative_paths": True},
            "search_paths": ["(foo)", {"path": "(bar *)", "step_out": 1}],
            "document_format": "yaml",
        }
    )

    assert isinstance(app_config, AppConfig)
    assert app_config.search_paths == [
        SearchPathSpec(path="(foo)"),
        SearchPathSpec(path="(bar *)", step_out=1),
    ]
    settings = app_config.to_settings()
    assert settings["extractor"] == {
        "match_relative_paths": True,
        "match_case_insensitive": False,
    }
    assert settings["document_format"] == "yaml"


def test_load_config_rejects_invalid_search_path():
    with pytest.raises(ValidationError):
        load_config({"search_paths": ["(foo -1)"]})


def test_load_config_rejects_negative_step_out_and_unknown_keys():
    with pytest.raises(ValidationError):
        load_config({"search_paths": [{"path": "(a)", "step_out": -1}]})
    with pytest.raises(ValidationError):
        load_config({"extractor": {"relative": True}})


def test_load_config_requires_mapping():
    with pytest.raises(ValidationError):
        load_config(["not", "a", "mapping"])
