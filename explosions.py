# explosions.py
"""
Transient explosion events (visual-only shock and thermal rings).

Events live for a fixed time-to-live. While any event is live a periodic sweep
removes expired ones; the sweep stops itself once the registry is empty.
"""

import functools
import logging
import threading
import time
import uuid
from dataclasses import dataclass

from config import EXPLOSION_TTL_MS, EXPLOSION_SWEEP_INTERVAL_S, MAX_LIVE_EXPLOSIONS
from simulation import Coordinate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExplosionStyle:
    color_shock: str
    color_thermal: str
    speed: float


EXPLOSION_STYLES = {
    'ground': ExplosionStyle('#ff3b2f', '#ffa500', 20),     # red/orange
    'airburst': ExplosionStyle('#fff176', '#ffffff', 30),   # yellow/white
    'water': ExplosionStyle('#4fd1c5', '#60a5fa', 15),      # teal/blue
}


@dataclass(frozen=True)
class ExplosionEvent:
    id: str
    lat: float
    lng: float
    radius_km: float
    kind: str
    created_at_ms: float
    ttl_ms: float
    style: ExplosionStyle

    def expired(self, now_ms):
        return now_ms - self.created_at_ms >= self.ttl_ms


def monotonic_ms():
    return time.monotonic() * 1000.0


class ExplosionManager:
    """
    Registry of live explosion events.

    `clock` returns milliseconds, `timer_factory(interval_s, callback)` must return
    an object with start()/cancel() (threading.Timer by default). Both are
    injectable so tests can drive time by hand.
    """

    def __init__(self, clock=monotonic_ms, timer_factory=threading.Timer,
                 ttl_ms=EXPLOSION_TTL_MS, interval_s=EXPLOSION_SWEEP_INTERVAL_S,
                 max_live=MAX_LIVE_EXPLOSIONS):
        self._clock = clock
        self._timer_factory = timer_factory
        self.ttl_ms = ttl_ms
        self.interval_s = interval_s
        self.max_live = max_live
        self._events = []
        self._lock = threading.Lock()
        self._timer = None
        self._generation = 0

    def __len__(self):
        with self._lock:
            return len(self._events)

    @property
    def ticking(self):
        return self._timer is not None

    def trigger(self, coordinate: Coordinate, diameter_km, kind='ground', now_ms=None) -> ExplosionEvent:
        now = self._clock() if now_ms is None else now_ms
        style = EXPLOSION_STYLES.get(kind)
        if style is None:
            kind, style = 'ground', EXPLOSION_STYLES['ground']
        event = ExplosionEvent(id=f"{int(now)}-{uuid.uuid4().hex[:8]}",
                               lat=coordinate.lat, lng=coordinate.lng,
                               radius_km=max(1.0, diameter_km / 2.0),
                               kind=kind, created_at_ms=now, ttl_ms=self.ttl_ms, style=style)
        with self._lock:
            # evict oldest first when triggers outpace expiry
            while len(self._events) >= self.max_live:
                dropped = self._events.pop(0)
                logger.debug("Explosion cap reached, evicting %s", dropped.id)
            self._events.append(event)
            self._ensure_ticking()
        logger.debug("Triggered %s explosion %s (r=%.1f km)", kind, event.id, event.radius_km)
        return event

    def sweep(self, now_ms=None):
        """Drop expired events; returns the removed ones."""
        now = self._clock() if now_ms is None else now_ms
        with self._lock:
            removed = [e for e in self._events if e.expired(now)]
            if removed:
                self._events = [e for e in self._events if not e.expired(now)]
                logger.debug("Swept %d expired explosion(s)", len(removed))
            if not self._events:
                self._stop_ticking()
        return removed

    def live(self, now_ms=None):
        now = self._clock() if now_ms is None else now_ms
        with self._lock:
            return [e for e in self._events if not e.expired(now)]

    def rings(self, now_ms=None):
        """Shock ring plus a slower, larger thermal ring per live event."""
        out = []
        for e in self.live(now_ms):
            out.append({'lat': e.lat, 'lng': e.lng, 'radius_km': e.radius_km,
                        'color': e.style.color_shock, 'speed': e.style.speed, 'ring': 'shock'})
            out.append({'lat': e.lat, 'lng': e.lng, 'radius_km': e.radius_km * 1.6,
                        'color': e.style.color_thermal, 'speed': max(10, e.style.speed - 5),
                        'ring': 'thermal'})
        return out

    def close(self):
        with self._lock:
            self._stop_ticking()

    # ---------------- periodic sweep -----------------
    # everything below except _tick runs with self._lock held

    def _ensure_ticking(self):
        if self._timer is None:
            self._schedule()

    def _schedule(self):
        self._generation += 1
        timer = self._timer_factory(self.interval_s, functools.partial(self._tick, self._generation))
        # threading.Timer must not keep the interpreter alive
        if hasattr(timer, 'daemon'):
            timer.daemon = True
        self._timer = timer
        timer.start()

    def _stop_ticking(self):
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
            self._generation += 1

    def _tick(self, generation):
        now = self._clock()
        with self._lock:
            # a stale timer from a cancelled chain
            if generation != self._generation:
                return
            before = len(self._events)
            self._events = [e for e in self._events if not e.expired(now)]
            if before != len(self._events):
                logger.debug("Swept %d expired explosion(s)", before - len(self._events))
            self._timer = None
            if self._events:
                self._schedule()
