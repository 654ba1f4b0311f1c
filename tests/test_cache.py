from app.core.cache import ResultCache
from app.models.media import MediaQuery, MediaType
from app.services.metadata import same_query


class FakeTimer:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


def make_cache():
    timer = FakeTimer()
    return ResultCache(compare=same_query, timer=timer), timer


def test_get_returns_value_right_after_set():
    cache, _ = make_cache()
    query = MediaQuery(search_query="The Matrix", type=MediaType.MOVIE)

    cache.set(query, ["result"], 3600)

    assert cache.has(query)
    assert cache.get(query) == ["result"]


def test_entry_expires_after_ttl():
    cache, timer = make_cache()
    query = MediaQuery(search_query="The Matrix", type=MediaType.MOVIE)
    cache.set(query, ["result"], 60)

    timer.now += 59
    assert cache.has(query)

    timer.now += 1
    assert not cache.has(query)
    assert cache.get(query) is None
    # Expired entries are dropped on access
    assert len(cache) == 0


def test_surrounding_whitespace_is_ignored():
    cache, _ = make_cache()
    cache.set(MediaQuery(search_query="  dune ", type=MediaType.MOVIE), ["dune"], 60)

    assert cache.get(MediaQuery(search_query="dune", type=MediaType.MOVIE)) == ["dune"]


def test_media_type_and_case_must_match():
    cache, _ = make_cache()
    cache.set(MediaQuery(search_query="dune", type=MediaType.MOVIE), ["dune"], 60)

    assert not cache.has(MediaQuery(search_query="dune", type=MediaType.SERIES))
    assert not cache.has(MediaQuery(search_query="Dune", type=MediaType.MOVIE))


def test_set_replaces_matching_entry():
    cache, _ = make_cache()
    cache.set(MediaQuery(search_query="dune", type=MediaType.MOVIE), ["old"], 60)
    cache.set(MediaQuery(search_query="dune ", type=MediaType.MOVIE), ["new"], 60)

    assert len(cache) == 1
    assert cache.get(MediaQuery(search_query="dune", type=MediaType.MOVIE)) == ["new"]


def test_delete_and_clear():
    cache, _ = make_cache()
    a = MediaQuery(search_query="a", type=MediaType.MOVIE)
    b = MediaQuery(search_query="b", type=MediaType.MOVIE)
    cache.set(a, 1, 60)
    cache.set(b, 2, 60)

    cache.delete(a)
    assert not cache.has(a)
    assert cache.has(b)

    cache.clear()
    assert len(cache) == 0


def test_default_comparator_uses_equality():
    cache = ResultCache()
    cache.set(("movie", "x"), "value", 60)
    assert cache.get(("movie", "x")) == "value"
