import os
import random

import pytest

from config import ENV_PREFIX


class ScriptedRandom:
    """Источник случайности с заранее заданными выборами.

    Каждый вызов choice берёт следующее значение из picks (оно обязано быть
    среди вариантов); когда значения кончились, возвращается первый вариант.
    """

    def __init__(self, picks=()):
        self.picks = list(picks)
        self.calls = []

    def choice(self, seq):
        self.calls.append(tuple(seq))
        if self.picks:
            pick = self.picks.pop(0)
            assert pick in seq, f"{pick!r} not among {seq!r}"
            return pick
        return seq[0]


class SeededAt:
    """Первый выбор фиксирован, остальные делает random.Random(seed)."""

    def __init__(self, prefix, seed=None):
        self.prefix = prefix
        self.rng = random.Random(seed)
        self.seeded = False

    def choice(self, seq):
        if not self.seeded:
            self.seeded = True
            assert self.prefix in seq
            return self.prefix
        return self.rng.choice(seq)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in list(os.environ):
        if name.startswith(ENV_PREFIX):
            monkeypatch.delenv(name)
    # setenv + delenv: monkeypatch запоминает отсутствие переменной и удалит её,
    # если её выставит load_dotenv
    for suffix in ('ENCODING', 'ENCODING_ERRORS', 'SEED', 'LOG_LEVEL'):
        monkeypatch.setenv(ENV_PREFIX + suffix, '')
        monkeypatch.delenv(ENV_PREFIX + suffix)


@pytest.fixture
def scripted():
    return ScriptedRandom


@pytest.fixture
def seeded_at():
    return SeededAt
