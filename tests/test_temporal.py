"""
Tests for history window, growth analysis, region filtering and the alert state machine.
"""

import logging

import numpy as np
import pytest

from algorithms.alert import AlertStateMachine
from algorithms.growth import GrowthAnalyzer, mask_area
from algorithms.history import HistoryWindow
from algorithms.regions import RegionFilter
from models.alert import AlertState
from models.config import AlertConfig

from conftest import mask_with_count


def _growth_sequence(counts, window_size, threshold=50):
    window = HistoryWindow(window_size)
    analyzer = GrowthAnalyzer(threshold)
    flags = []
    for count in counts:
        mask = mask_with_count(count)
        window.push(mask)
        flags.append(analyzer.evaluate(mask, window).significant)
    return flags


class TestHistoryWindow:
    def test_length_never_exceeds_capacity(self):
        window = HistoryWindow(10)
        for i in range(35):
            window.push(mask_with_count(i % 20))
            assert len(window) <= 10
        assert len(window) == 10

    def test_evicts_oldest_first(self):
        window = HistoryWindow(3)
        for count in [1, 2, 3, 4, 5]:
            window.push(mask_with_count(count))

        assert [mask_area(m) for m in window] == [3, 4, 5]
        assert mask_area(window.oldest()) == 3
        assert mask_area(window.newest()) == 5

    def test_empty_window(self):
        window = HistoryWindow(5)
        assert len(window) == 0
        assert window.oldest() is None
        assert window.newest() is None

    def test_clear(self):
        window = HistoryWindow(5)
        window.push(mask_with_count(1))
        window.clear()
        assert len(window) == 0

    def test_invalid_capacity(self):
        with pytest.raises(ValueError):
            HistoryWindow(0)


class TestGrowthAnalyzer:
    def test_growth_rule_full_window(self):
        """current - oldest > 50 with every mask still in the window."""
        flags = _growth_sequence([0, 10, 60, 120, 180], window_size=10)
        assert flags == [False, False, True, True, True]

    def test_final_growth_against_oldest(self):
        window = HistoryWindow(5)
        for count in [0, 10, 60, 120, 180]:
            window.push(mask_with_count(count))

        result = GrowthAnalyzer(50).evaluate(window.newest(), window)
        assert result.current_area == 180
        assert result.reference_area == 0
        assert result.delta == 180
        assert result.significant is True

    def test_reference_is_oldest_not_previous(self):
        """With a window of 2 the reference slides; 60 - 10 = 50 is not > 50."""
        flags = _growth_sequence([0, 10, 60, 120, 180], window_size=2)
        assert flags == [False, False, False, True, True]

    def test_single_entry_uses_zero_reference(self):
        window = HistoryWindow(10)
        mask = mask_with_count(80)
        window.push(mask)

        result = GrowthAnalyzer(50).evaluate(mask, window)
        assert result.reference_area == 0
        assert result.significant is True

    def test_shrinking_area_not_significant(self):
        flags = _growth_sequence([200, 150, 100], window_size=10)
        assert flags == [True, False, False]

    def test_threshold_is_strict(self):
        flags = _growth_sequence([0, 50], window_size=10)
        assert flags == [False, False]


class TestRegionFilter:
    def _mask(self):
        mask = np.zeros((120, 160), dtype=np.uint8)
        mask[10:50, 10:60] = 255     # 40 x 50 block, contour area 39*49 = 1911
        mask[80:90, 100:110] = 255   # 10 x 10 block, contour area 81
        return mask

    def test_find_all_external_regions(self):
        regions = RegionFilter(1000).find_regions(self._mask())
        assert len(regions) == 2
        assert sorted(r.area for r in regions) == [81.0, 1911.0]

    def test_significant_keeps_large_regions_only(self):
        regions = RegionFilter(1000).significant(self._mask())
        assert len(regions) == 1
        assert regions[0].area == 1911.0
        assert regions[0].bbox == (10, 10, 60, 50)

    def test_nested_boundaries_not_reported(self):
        mask = np.zeros((120, 160), dtype=np.uint8)
        mask[10:100, 10:140] = 255
        mask[30:80, 30:120] = 0      # hole
        mask[45:65, 60:90] = 255     # island inside the hole
        regions = RegionFilter(0).find_regions(mask)
        assert len(regions) == 1

    def test_area_threshold_is_strict(self):
        mask = np.zeros((60, 60), dtype=np.uint8)
        mask[10:20, 10:20] = 255     # contour area 81
        assert RegionFilter(81).significant(mask) == []
        assert len(RegionFilter(80).significant(mask)) == 1

    def test_empty_mask(self):
        assert RegionFilter(10).find_regions(np.zeros((0, 0), dtype=np.uint8)) == []
        assert RegionFilter(10).find_regions(np.zeros((20, 20), dtype=np.uint8)) == []


class TestAlertStateMachine:
    def _machine(self, fire_required=3, smoke_required=3, fire_threshold=100):
        return AlertStateMachine(
            AlertConfig(fire_streak_required=fire_required, smoke_streak_required=smoke_required),
            fire_detection_threshold=fire_threshold,
        )

    def test_initial_state(self):
        assert self._machine().state == AlertState(0, 0, False)

    def test_fire_requires_area_and_growth(self):
        machine = self._machine()
        assert machine.update(150, False, False).fire_streak == 0
        assert machine.update(50, True, False).fire_streak == 0
        assert machine.update(100, True, False).fire_streak == 0  # strict >
        assert machine.update(101, True, False).fire_streak == 1

    def test_streak_resets_to_zero(self):
        machine = self._machine()
        machine.update(150, True, False)
        machine.update(150, True, False)
        assert machine.state.fire_streak == 2

        state = machine.update(150, False, False)
        assert state.fire_streak == 0

    def test_smoke_streak_resets_to_zero(self):
        machine = self._machine()
        machine.update(0, False, True)
        machine.update(0, False, True)
        assert machine.update(0, False, False).smoke_streak == 0

    def test_activation_requires_both_streaks(self):
        machine = self._machine()
        history = [machine.update(150, True, True).active for _ in range(4)]
        assert history == [False, False, True, True]

    def test_inactive_while_either_streak_short(self):
        machine = self._machine()
        for _ in range(5):
            state = machine.update(150, True, False)
        assert state.fire_streak == 5
        assert state.active is False

        for _ in range(2):
            state = machine.update(150, True, True)
        assert state.smoke_streak == 2
        assert state.active is False

        state = machine.update(150, True, True)
        assert state.active is True

    def test_active_first_when_both_reach_requirement(self):
        """Fire streak ahead of smoke: activation waits for smoke to catch up."""
        machine = self._machine()
        machine.update(150, True, False)
        machine.update(150, True, False)
        states = [machine.update(150, True, True) for _ in range(3)]
        assert [s.active for s in states] == [False, False, True]
        assert states[-1].fire_streak == 5
        assert states[-1].smoke_streak == 3

    def test_alert_drops_when_streak_breaks(self):
        machine = self._machine(fire_required=1, smoke_required=1)
        assert machine.update(150, True, True).active is True
        assert machine.update(150, True, False).active is False
        assert machine.update(150, True, True).active is True

    def test_transition_is_pure(self):
        machine = self._machine()
        start = AlertState(fire_streak=2, smoke_streak=2, active=False)
        nxt = machine.transition(start, 150, True, True)

        assert nxt == AlertState(3, 3, True)
        assert start == AlertState(2, 2, False)
        assert machine.state == AlertState(0, 0, False)

    def test_raise_and_clear_are_logged(self, caplog):
        machine = self._machine(fire_required=1, smoke_required=1)

        with caplog.at_level(logging.INFO):
            machine.update(150, True, True)
            machine.update(150, True, True)
            machine.update(0, False, False)

        raised = [r for r in caplog.records if "Fire and smoke detected" in r.getMessage()]
        cleared = [r for r in caplog.records if r.getMessage() == "Alert cleared"]
        assert len(raised) == 1
        assert raised[0].levelno == logging.WARNING
        assert raised[0].getMessage().startswith("Alert: Fire and smoke detected!")
        assert len(cleared) == 1
        assert cleared[0].levelno == logging.INFO

    def test_reset(self):
        machine = self._machine(fire_required=1, smoke_required=1)
        machine.update(150, True, True)
        machine.reset()
        assert machine.state == AlertState()
