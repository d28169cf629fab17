import pytest

from edit_engine.buffer.gap import DEFAULT_CAPACITY, STREAM_CHUNK
from edit_engine.config import EditorConfig


def test_defaults() -> None:
    config = EditorConfig()

    assert config.initial_capacity == DEFAULT_CAPACITY
    assert config.stream_chunk_size == STREAM_CHUNK
    assert config.page_scroll == 21
    assert config.extra_bindings == ()


def test_from_env_reads_prefixed_values() -> None:
    environ = {
        "EDIT_ENGINE_INITIAL_CAPACITY": "64",
        "EDIT_ENGINE_STREAM_CHUNK": "128",
        "EDIT_ENGINE_PAGE_SCROLL": " ",
    }

    config = EditorConfig.from_env(environ)

    assert config.initial_capacity == 64
    assert config.stream_chunk_size == 128
    assert config.page_scroll == 21


def test_from_env_overrides_win() -> None:
    config = EditorConfig.from_env({"EDIT_ENGINE_PAGE_SCROLL": "5"}, page_scroll=9)

    assert config.page_scroll == 9


@pytest.mark.parametrize("raw", ["ten", "0", "-3"])
def test_from_env_rejects_bad_values(raw: str) -> None:
    with pytest.raises(ValueError):
        EditorConfig.from_env({"EDIT_ENGINE_STREAM_CHUNK": raw})


def test_direct_construction_is_validated() -> None:
    with pytest.raises(ValueError):
        EditorConfig(page_scroll=0)
    with pytest.raises(ValueError):
        EditorConfig(initial_capacity=-1)


def test_config_is_frozen() -> None:
    config = EditorConfig()

    with pytest.raises(AttributeError):
        config.page_scroll = 3  # type: ignore[misc]
