#!/usr/bin/env python3
# tests/test_explosions.py
import unittest

from explosions import ExplosionManager, EXPLOSION_STYLES
from simulation import Coordinate

SITE = Coordinate(40.0, 29.0)


class FakeTimer:
    def __init__(self, interval, fn):
        self.interval = interval
        self.fn = fn
        self.started = False
        self.cancelled = False

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        self.fn()


class TestExplosionManager(unittest.TestCase):
    def setUp(self):
        self.now = 0.0
        self.timers = []

        def factory(interval, fn):
            t = FakeTimer(interval, fn)
            self.timers.append(t)
            return t

        self.manager = ExplosionManager(clock=lambda: self.now, timer_factory=factory)

    def test_trigger_builds_event(self):
        e = self.manager.trigger(SITE, 50, 'airburst')
        self.assertEqual(e.radius_km, 25)
        self.assertEqual(e.kind, 'airburst')
        self.assertEqual(e.style, EXPLOSION_STYLES['airburst'])
        self.assertEqual(e.ttl_ms, 6500)
        self.assertEqual((e.lat, e.lng), (40.0, 29.0))

    def test_radius_floor_and_unknown_kind(self):
        e = self.manager.trigger(SITE, 0.5, 'plasma')
        self.assertEqual(e.radius_km, 1.0)
        self.assertEqual(e.kind, 'ground')
        self.assertEqual(e.style, EXPLOSION_STYLES['ground'])

    def test_ids_unique(self):
        ids = {self.manager.trigger(SITE, 10).id for _ in range(20)}
        self.assertEqual(len(ids), 20)

    def test_expiry_boundary(self):
        e = self.manager.trigger(SITE, 10, now_ms=1000)
        self.assertEqual(self.manager.sweep(now_ms=1000 + 6499), [])
        self.assertEqual(self.manager.live(now_ms=1000 + 6499), [e])
        self.assertEqual(self.manager.sweep(now_ms=1000 + 6500), [e])
        self.assertEqual(len(self.manager), 0)

    def test_events_expire_independently(self):
        first = self.manager.trigger(SITE, 10, now_ms=0)
        second = self.manager.trigger(SITE, 20, 'water', now_ms=3000)
        self.manager.sweep(now_ms=7000)
        self.assertEqual(self.manager.live(now_ms=7000), [second])
        self.assertNotIn(first, self.manager.live(now_ms=7000))

    def test_ticker_starts_on_first_event_and_stops_when_empty(self):
        self.assertFalse(self.manager.ticking)
        self.manager.trigger(SITE, 10)
        self.manager.trigger(SITE, 10)
        self.assertTrue(self.manager.ticking)
        self.assertEqual(len(self.timers), 1)
        self.assertEqual(self.timers[0].interval, 0.5)
        self.assertTrue(self.timers[0].started)

        self.now = 7000
        self.timers[0].fire()
        self.assertFalse(self.manager.ticking)
        self.assertEqual(len(self.timers), 1)

    def test_tick_reschedules_while_events_live(self):
        self.manager.trigger(SITE, 10, now_ms=0)
        self.manager.trigger(SITE, 10, now_ms=3000)
        self.now = 6600
        self.timers[0].fire()
        self.assertEqual(len(self.manager), 1)
        self.assertEqual(len(self.timers), 2)
        self.now = 9600
        self.timers[1].fire()
        self.assertEqual(len(self.manager), 0)
        self.assertFalse(self.manager.ticking)

    def test_manual_sweep_stops_ticker(self):
        self.manager.trigger(SITE, 10, now_ms=0)
        self.manager.sweep(now_ms=10000)
        self.assertTrue(self.timers[0].cancelled)
        self.assertFalse(self.manager.ticking)

    def test_stale_timer_is_ignored(self):
        self.manager.trigger(SITE, 10, now_ms=0)
        self.manager.close()
        self.manager.trigger(SITE, 10, now_ms=100)
        self.now = 200
        self.timers[0].fire()
        # only the live chain keeps scheduling
        self.assertEqual(len(self.timers), 2)
        self.timers[1].fire()
        self.assertEqual(len(self.timers), 3)

    def test_live_cap_evicts_oldest(self):
        manager = ExplosionManager(clock=lambda: 0.0, timer_factory=FakeTimer, max_live=3)
        events = [manager.trigger(SITE, 10) for _ in range(5)]
        self.assertEqual(manager.live(), events[2:])

    def test_rings(self):
        self.manager.trigger(SITE, 100, 'water', now_ms=0)
        shock, thermal = self.manager.rings(now_ms=10)
        self.assertEqual(shock['radius_km'], 50)
        self.assertEqual(shock['color'], '#4fd1c5')
        self.assertEqual(shock['speed'], 15)
        self.assertAlmostEqual(thermal['radius_km'], 80)
        self.assertEqual(thermal['color'], '#60a5fa')
        self.assertEqual(thermal['speed'], 10)
        self.assertEqual(self.manager.rings(now_ms=6500), [])


if __name__ == '__main__':
    unittest.main()
