import sys, os
import random
from collections import deque

import pytest

# Ensure src is on path for test imports
ROOT = os.path.dirname(os.path.dirname(__file__))
SRC = os.path.join(ROOT, 'src')
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from tilematch.config import EngineConfig
from tilematch.engine import Engine


class ScriptedRandom(random.Random):
    """Random source whose choice() replays queued values before falling back to the seed."""

    script = None
    choice_calls = 0

    def queue(self, *values):
        if self.script is None:
            self.script = deque()
        self.script.extend(values)
        return self

    def choice(self, seq):
        self.choice_calls += 1
        if self.script:
            return self.script.popleft()
        return super().choice(seq)


@pytest.fixture
def scripted_rng():
    return ScriptedRandom(0)


@pytest.fixture
def make_engine(scripted_rng):
    """Build an engine over an explicit layout; palette defaults to the kinds used."""

    def _make(layout, palette=None, **config_kwargs):
        if palette is None:
            palette = sorted({kind for line in layout for kind in line})
        config = EngineConfig(rows=len(layout), cols=len(layout[0]), palette=tuple(palette), **config_kwargs)
        engine = Engine(config, rng=scripted_rng, initialize=False)
        # Staged layouts may hold a pending run, so bypass the Engine stability check.
        engine.board_system.load_layout(layout)
        return engine

    return _make
