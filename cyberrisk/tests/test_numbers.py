"""
Unit Tests for Numeric Helpers
"""

from cyberrisk.util.numbers import round_half_up


class TestRoundHalfUp:
    """Test suite for round_half_up"""

    def test_halves_round_up(self):
        """Test .5 always rounds towards positive infinity"""
        assert round_half_up(12.5) == 13
        assert round_half_up(0.5) == 1
        assert round_half_up(-2.5) == -2

    def test_other_values_round_to_nearest(self):
        """Test non-half values round to the nearest integer"""
        assert round_half_up(82.4) == 82
        assert round_half_up(82.6) == 83
        assert round_half_up(-2.6) == -3
        assert isinstance(round_half_up(7.0), int)
