from __future__ import annotations

import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT / "src") not in sys.path:
    sys.path.insert(0, str(ROOT / "src"))


import pytest


@pytest.fixture(autouse=True)
def _reset_hhserver_logger():
    logger = logging.getLogger("hhserver")
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    root = tmp_path / "www"
    root.mkdir()
    (root / ".hhconfig").write_text("", encoding="utf-8")
    return root
