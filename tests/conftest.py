from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, List

import pytest


# Ensure the project root is on ``sys.path`` so tests can import ``photo_editor``
# without requiring the package to be installed in the environment.
_PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from tests._executors import ImmediateExecutor, ManualExecutor  # noqa: E402


class StateRecorder:
    """Slot subscriber collecting every state it receives."""

    def __init__(self) -> None:
        self.states: List[Any] = []

    def __call__(self, state: Any) -> None:
        self.states.append(state)

    @property
    def last(self) -> Any:
        return self.states[-1]


@pytest.fixture
def manual_executor() -> ManualExecutor:
    return ManualExecutor()


@pytest.fixture
def immediate_executor() -> ImmediateExecutor:
    return ImmediateExecutor()


@pytest.fixture
def recorder() -> StateRecorder:
    return StateRecorder()
