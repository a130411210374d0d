import pytest

from tilematch.config import EngineConfig
from tilematch.constants import DEFAULT_PALETTE, GRID_COLS, GRID_ROWS
from tilematch.errors import ConfigurationError


def test_defaults():
    config = EngineConfig()
    assert (config.rows, config.cols) == (GRID_ROWS, GRID_COLS)
    assert config.palette == DEFAULT_PALETTE
    assert config.drag_threshold > 0


def test_palette_is_deduplicated_in_order():
    config = EngineConfig(palette=['b', 'a', 'b', 'c', 'a'])
    assert config.palette == ('b', 'a', 'c')


@pytest.mark.parametrize(
    "kwargs",
    [
        {"rows": 0},
        {"cols": -2},
        {"rows": 2.5},
        {"rows": True},
        {"generation_retry_limit": 0},
        {"drag_threshold": 0},
        {"drag_threshold": -1.0},
        {"drag_threshold": "far"},
        {"palette": ()},
    ],
)
def test_invalid_values_raise_configuration_error(kwargs):
    with pytest.raises(ConfigurationError):
        EngineConfig(**kwargs)


def test_configuration_error_is_a_value_error():
    with pytest.raises(ValueError):
        EngineConfig(rows=0)
