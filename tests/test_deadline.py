"""
Tests for Deadline bookkeeping.
"""

from unittest.mock import patch

import pytest

from docdigest.deadline import Deadline
from docdigest.errors import PipelineTimeoutError

MONOTONIC = 'docdigest.deadline.time.monotonic'


def test_no_timeout_means_no_deadline():
    assert Deadline.from_timeout(None) is None


@pytest.mark.parametrize("timeout", [0, -1])
def test_non_positive_timeout_rejected(timeout):
    with pytest.raises(ValueError):
        Deadline(timeout)


def test_remaining_and_expiry():
    with patch(MONOTONIC, return_value=100.0):
        deadline = Deadline(10)

    with patch(MONOTONIC, return_value=104.0):
        assert deadline.remaining() == pytest.approx(6.0)
        assert not deadline.expired()
        deadline.check("part 1/2")

    with patch(MONOTONIC, return_value=111.0):
        assert deadline.remaining() == 0.0
        assert deadline.expired()
        with pytest.raises(PipelineTimeoutError) as exc_info:
            deadline.check("reduce")

    assert "reduce" in exc_info.value.message
    assert exc_info.value.classification == "timeout"
