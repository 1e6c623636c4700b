import pytest

from storage import MemoryStorage, SqlStorage, make_storage


@pytest.mark.parametrize("backend", [MemoryStorage(), SqlStorage()], ids=["memory", "sql"])
def test_get_set_remove(backend):
    assert backend.get("k") is None
    backend.set("k", "[1]")
    backend.set("k", "[2]")
    assert backend.get("k") == "[2]"
    backend.remove("k")
    assert backend.get("k") is None
    # removing twice is harmless
    backend.remove("k")


def test_make_storage_kinds():
    assert isinstance(make_storage("memory"), MemoryStorage)
    assert isinstance(make_storage("SQL"), SqlStorage)
    with pytest.raises(ValueError):
        make_storage("redis")
