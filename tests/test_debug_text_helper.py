"""
Tests for DebugTextViewHelper lifecycle and cadence.

Uses FakeSurface so time only moves when the test advances it.
"""

import pytest

from common.constants import REFRESH_INTERVAL_MS
from ui.debug_overlay.text_view_helper import DebugTextViewHelper
from test_utils.provider_stub import FailingProvider, StubProvider


@pytest.fixture
def helper(playing_provider, fake_surface):
    return DebugTextViewHelper(playing_provider, fake_surface)


class TestLifecycleScenarios:
    def test_start_then_four_periods(self, helper, fake_surface):
        """One immediate write plus one per elapsed period."""
        helper.start()
        for _ in range(4):
            fake_surface.advance(1000)

        assert len(fake_surface.texts) == 5
        assert len(fake_surface.posts) == 5
        assert all(p.delay_ms == 1000 for p in fake_surface.posts)
        # Only start() cancels; ticks never do
        assert len(fake_surface.removals) == 1

    def test_start_stop_then_time_passes(self, helper, fake_surface):
        helper.start()
        helper.stop()
        fake_surface.advance(5000)

        assert len(fake_surface.texts) == 1
        assert fake_surface.pending == []
        assert not helper.is_running


class TestSchedulerInvariants:
    def test_exactly_one_pending_after_start(self, helper, fake_surface):
        helper.start()

        assert len(fake_surface.pending) == 1
        assert helper.is_running

    def test_pending_stays_single_across_ticks(self, helper, fake_surface):
        helper.start()
        for _ in range(10):
            fake_surface.advance(REFRESH_INTERVAL_MS)
            assert len(fake_surface.pending) == 1

    def test_double_start_does_not_accumulate(self, helper, fake_surface):
        helper.start()
        helper.start()

        assert len(fake_surface.pending) == 1
        assert len(fake_surface.texts) == 2

        fake_surface.advance(REFRESH_INTERVAL_MS)
        assert len(fake_surface.texts) == 3
        assert len(fake_surface.pending) == 1

    def test_repeated_stop_equals_single_stop(self, helper, fake_surface):
        helper.start()
        helper.stop()
        texts_after_first_stop = list(fake_surface.texts)

        helper.stop()
        helper.stop()
        fake_surface.advance(3000)

        assert fake_surface.texts == texts_after_first_stop
        assert fake_surface.pending == []
        assert not helper.is_running

    def test_stop_when_never_started(self, helper, fake_surface):
        helper.stop()

        assert fake_surface.texts == []
        assert fake_surface.pending == []

    def test_each_tick_posts_one_followup_with_period_delay(self, helper, fake_surface):
        helper.start()
        fake_surface.advance(3 * REFRESH_INTERVAL_MS)

        assert [p.delay_ms for p in fake_surface.posts] == [REFRESH_INTERVAL_MS] * 4
        assert [p.due_ms for p in fake_surface.posts] == [1000, 2000, 3000, 4000]

    def test_no_tick_before_period_elapses(self, helper, fake_surface):
        helper.start()
        fake_surface.advance(REFRESH_INTERVAL_MS - 1)

        assert len(fake_surface.texts) == 1

    def test_restart_after_stop(self, helper, fake_surface):
        helper.start()
        helper.stop()
        fake_surface.advance(2500)
        helper.start()
        fake_surface.advance(REFRESH_INTERVAL_MS)

        assert len(fake_surface.texts) == 3
        assert len(fake_surface.pending) == 1


class TestTickContent:
    def test_immediate_render_on_start(self, helper, fake_surface):
        helper.start()
        assert fake_surface.text == "ms(12345) id:video/1 br:2500000 h:720 bw:8000 rb:10 db:2"

    def test_each_tick_samples_fresh_values(self, fake_surface):
        provider = StubProvider(position_ms=0)
        helper = DebugTextViewHelper(provider, fake_surface)

        helper.start()
        provider.position_ms = 1000
        fake_surface.advance(REFRESH_INTERVAL_MS)
        provider.position_ms = 2000
        fake_surface.advance(REFRESH_INTERVAL_MS)

        assert [t.split(" ")[0] for t in fake_surface.texts] == ["ms(0)", "ms(1000)", "ms(2000)"]
        assert provider.position_reads == 3


class TestFailureSemantics:
    def test_provider_error_propagates_from_start(self, fake_surface):
        provider = FailingProvider(RuntimeError("clock gone"))
        provider.fail = True
        helper = DebugTextViewHelper(provider, fake_surface)

        with pytest.raises(RuntimeError, match="clock gone"):
            helper.start()

        assert fake_surface.texts == []
        assert fake_surface.pending == []
        assert not helper.is_running

    def test_failed_tick_stops_updates(self, fake_surface):
        provider = FailingProvider(ValueError("bad sample"), position_ms=10)
        helper = DebugTextViewHelper(provider, fake_surface)
        helper.start()

        provider.fail = True
        with pytest.raises(ValueError):
            fake_surface.advance(REFRESH_INTERVAL_MS)

        provider.fail = False
        fake_surface.advance(5 * REFRESH_INTERVAL_MS)

        assert len(fake_surface.texts) == 1
        assert fake_surface.pending == []
        assert not helper.is_running

    def test_start_recovers_after_failure(self, fake_surface):
        provider = FailingProvider(ValueError("bad sample"), position_ms=10)
        helper = DebugTextViewHelper(provider, fake_surface)
        helper.start()
        provider.fail = True
        with pytest.raises(ValueError):
            fake_surface.advance(REFRESH_INTERVAL_MS)

        provider.fail = False
        helper.start()
        fake_surface.advance(REFRESH_INTERVAL_MS)

        assert len(fake_surface.texts) == 3
        assert helper.is_running
