from dotest.services.cache_service import ContentCache


class _Clock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def test_loader_runs_once_until_expiry() -> None:
    clock = _Clock()
    cache = ContentCache(ttl_seconds=10, max_entries=4, timer=clock)
    calls = []

    def _load() -> list[str]:
        calls.append(1)
        return ["E01"]

    assert cache.get_or_load("textbooks:all", _load) == ["E01"]
    assert cache.get_or_load("textbooks:all", _load) == ["E01"]
    assert len(calls) == 1

    clock.now = 11
    assert "textbooks:all" not in cache
    cache.get_or_load("textbooks:all", _load)
    assert len(calls) == 2


def test_invalidate_by_prefix() -> None:
    cache = ContentCache(ttl_seconds=60, max_entries=8)
    cache.get_or_load("textbooks:all", lambda: [])
    cache.get_or_load("textbooks:subject_英語", lambda: [])
    cache.get_or_load("chapters:book_E01", lambda: [])

    cache.invalidate("textbooks:")

    assert "textbooks:all" not in cache
    assert "textbooks:subject_英語" not in cache
    assert "chapters:book_E01" in cache

    cache.invalidate()
    assert "chapters:book_E01" not in cache


def test_invalidation_during_load_is_not_overwritten() -> None:
    cache = ContentCache(ttl_seconds=60, max_entries=8)

    def _load_then_invalidate() -> list[str]:
        cache.invalidate("textbooks:")
        return ["stale"]

    assert cache.get_or_load("textbooks:all", _load_then_invalidate) == ["stale"]
    assert "textbooks:all" not in cache
    assert cache.get_or_load("textbooks:all", lambda: ["fresh"]) == ["fresh"]
    assert "textbooks:all" in cache
