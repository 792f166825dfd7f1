from __future__ import annotations

import pytest
from pydantic import ValidationError

from sortstep.core.config.settings import AppSettings


def test_defaults() -> None:
    cfg = AppSettings(_env_file=None)
    assert cfg.default_size == 100
    assert cfg.default_algorithm == "quick"
    assert (cfg.min_speed, cfg.max_speed, cfg.default_speed) == (0.1, 5.0, 1.0)


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SORTSTEP_DEFAULT_SIZE", "256")
    monkeypatch.setenv("SORTSTEP_DEFAULT_ALGORITHM", "merge")
    monkeypatch.setenv("SORTSTEP_DEFAULT_SEED", "17")

    cfg = AppSettings(_env_file=None)

    assert cfg.default_size == 256
    assert cfg.default_algorithm == "merge"
    assert cfg.default_seed == 17


def test_inverted_speed_bounds_rejected() -> None:
    with pytest.raises(ValidationError):
        AppSettings(_env_file=None, min_speed=4.0, max_speed=1.0)


def test_size_must_be_positive() -> None:
    with pytest.raises(ValidationError):
        AppSettings(_env_file=None, default_size=0)
