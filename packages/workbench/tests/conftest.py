from __future__ import annotations

import os

import pytest


@pytest.fixture(autouse=True)
def _clear_workbench_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in list(os.environ):
        if name.startswith("WORKBENCH_"):
            monkeypatch.delenv(name, raising=False)
