from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
BACKEND = ROOT / "backend"
for path in (ROOT, BACKEND):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))


import pytest

from services.config_manager import ConfigManager
from tests.fakes import FakeTransport


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def config_manager(tmp_path):
    manager = ConfigManager(config_dir=str(tmp_path))
    ConfigManager.reset_instance(manager)
    yield manager
    ConfigManager.reset_instance(None)
