"""Tests for the in-memory news cache."""
import unittest

from services.radar.app.cache import LATEST_NEWS_KEY, NewsCache
from services.radar.app.fallback import fallback_items
from tests.fakes import FakeClock


class TestNewsCache(unittest.TestCase):
    def setUp(self):
        self.clock = FakeClock()
        self.cache = NewsCache(clock=self.clock)
        self.items = fallback_items()

    def test_absent_key(self):
        self.assertIsNone(self.cache.get(LATEST_NEWS_KEY))

    def test_set_and_get(self):
        self.cache.set(LATEST_NEWS_KEY, self.items)
        entry = self.cache.get(LATEST_NEWS_KEY)
        self.assertEqual(entry.data, self.items)
        self.assertEqual(entry.stored_at, self.clock.now)
        self.assertFalse(entry.is_fallback)

    def test_overwrite_replaces_whole_entry(self):
        self.cache.set(LATEST_NEWS_KEY, self.items, is_fallback=True)
        self.clock.advance(10)
        self.cache.set(LATEST_NEWS_KEY, self.items[:1])
        entry = self.cache.get(LATEST_NEWS_KEY)
        self.assertEqual(len(entry.data), 1)
        self.assertFalse(entry.is_fallback)
        self.assertEqual(entry.age(self.clock.now), 0)

    def test_entries_never_expire_on_their_own(self):
        self.cache.set(LATEST_NEWS_KEY, self.items)
        self.clock.advance(10 ** 6)
        entry = self.cache.get(LATEST_NEWS_KEY)
        self.assertIsNotNone(entry)
        self.assertEqual(entry.age(self.clock.now), 10 ** 6)

    def test_clear(self):
        self.cache.set(LATEST_NEWS_KEY, self.items)
        self.cache.clear()
        self.assertIsNone(self.cache.get(LATEST_NEWS_KEY))

    def test_stored_list_is_not_the_callers_list(self):
        self.cache.set(LATEST_NEWS_KEY, self.items)
        self.items.clear()
        self.assertTrue(self.cache.get(LATEST_NEWS_KEY).data)


if __name__ == "__main__":
    unittest.main()
