from __future__ import annotations

import pytest

from chesstoe.config import Settings


def test_defaults_are_valid():
    s = Settings(hard_depth=3, think_delay_s=0.0, difficulty="hard", log_level="debug")
    assert s.hard_depth == 3
    assert s.hard_time_limit_s is None or s.hard_time_limit_s > 0


@pytest.mark.parametrize(
    "kwargs",
    [
        {"hard_depth": 0},
        {"think_delay_s": -1.0},
        {"hard_time_limit_s": 0.0},
        {"difficulty": "insane"},
        {"log_level": "LOUD"},
    ],
)
def test_invalid_settings_are_rejected(kwargs):
    with pytest.raises(ValueError):
        Settings(**kwargs)
