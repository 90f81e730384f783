import random
from collections import Counter
from datetime import date

from urdle.services.catalog import Catalog
from urdle.services.word_selector import (
    WordSelector, build_weighted_pool, catalog_seed, day_index_for, seeded_shuffle
)


def test_day_index_counts_calendar_days_from_epoch():
    assert day_index_for(date(2025, 1, 1)) == 0
    assert day_index_for(date(2025, 1, 31)) == 30
    assert day_index_for(date(2026, 1, 1)) == 365


def test_selector_uses_clock_for_today(catalog, clock):
    selector = WordSelector(catalog, clock=clock)
    assert selector.day_index() == 68
    assert selector.today_key() == "2025-03-10"
    assert selector.daily_word() == selector.daily_word(date(2025, 3, 10))


def test_daily_word_is_deterministic(catalog, clock):
    first = WordSelector(catalog, clock=clock)
    second = WordSelector(Catalog(list(catalog)), clock=clock)
    for offset in range(40):
        day = date(2025, 2, 1 + offset % 28)
        assert first.daily_word(day) == first.daily_word(day)
        assert first.daily_word(day) == second.daily_word(day)


def test_weighted_pool_repeats_by_quality(catalog):
    counts = Counter(entry.word for entry in build_weighted_pool(catalog))
    assert counts["cat"] == 5
    assert counts["brat"] == 2
    assert counts["eel"] == 1
    assert counts["algorithm"] == 2  # no quality means the default


def test_seeded_shuffle_is_a_stable_permutation(catalog):
    pool = build_weighted_pool(catalog)
    seed = catalog_seed(catalog)
    shuffled = seeded_shuffle(pool, seed)
    assert sorted(e.word for e in shuffled) == sorted(e.word for e in pool)
    assert shuffled == seeded_shuffle(pool, seed)
    assert -2 ** 31 <= seed < 2 ** 31


def test_bundled_daily_pool_order_is_pinned(clock):
    selector = WordSelector(Catalog.from_json(), clock=clock)
    assert len(selector.daily_pool) == 55
    head = [entry.word for entry in selector.daily_pool[:6]]
    assert head == ["stan", "touch grass", "lowkey", "simp", "ghosting", "delulu"]
    assert selector.daily_word(date(2025, 3, 10)).word == "salty"


def test_daily_word_cycles_through_pool(catalog, clock):
    selector = WordSelector(catalog, clock=clock)
    size = len(selector.daily_pool)
    assert selector.daily_word(date(2025, 1, 1)) == selector.daily_pool[0]
    assert selector.daily_word(date.fromordinal(date(2025, 1, 1).toordinal() + size)) == selector.daily_pool[0]


def test_random_word_never_repeats_excluded(catalog, clock):
    selector = WordSelector(catalog, clock=clock, rng=random.Random(7))
    previous = None
    for _ in range(50):
        entry = selector.random_word(exclude=previous)
        assert entry.word != previous
        previous = entry.word


def test_random_word_draws_from_unweighted_catalog(catalog, clock):
    selector = WordSelector(catalog, clock=clock, rng=random.Random(3))
    drawn = {selector.random_word().word for _ in range(300)}
    assert drawn == set(catalog.words)


def test_random_word_with_single_entry_catalog(clock):
    catalog = Catalog.from_records([{"word": "solo", "definitions": ["Alone."]}])
    selector = WordSelector(catalog, clock=clock)
    assert selector.random_word(exclude="solo").word == "solo"
