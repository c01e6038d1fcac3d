"""Tests for score labels."""

import pytest

from ojtech.labels import match_label


@pytest.mark.parametrize("score,label", [
    (None, "No match data"),
    (100, "Strong Match"),
    (80, "Strong Match"),
    (79, "Good Match"),
    (60, "Good Match"),
    (40, "Potential Match"),
    (39, "Low Match"),
    (0, "Low Match"),
])
def test_match_label(score, label):
    assert match_label(score) == label
