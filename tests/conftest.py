from __future__ import annotations

import pytest

from support import RecordingCaller


@pytest.fixture
def caller() -> RecordingCaller:
    return RecordingCaller()
