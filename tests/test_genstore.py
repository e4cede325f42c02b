import pytest

from quadkit.genstore import GenerationalId, GenerationalStorage


def test_push_and_get():
    storage = GenerationalStorage()
    first = storage.push("a")
    second = storage.push("b")
    assert storage.get(first) == "a"
    assert storage.get(second) == "b"
    assert storage.count() == 2


def test_first_ids_start_at_generation_zero():
    storage = GenerationalStorage()
    assert storage.push("a") == GenerationalId(0, 0)


def test_free_makes_handle_stale():
    storage = GenerationalStorage()
    handle = storage.push("a")
    storage.free(handle)
    assert storage.get(handle) is None
    assert handle not in storage
    assert storage.count() == 0


def test_reused_slot_bumps_generation():
    storage = GenerationalStorage()
    old = storage.push("a")
    storage.free(old)
    new = storage.push("b")
    assert new.index == old.index
    assert new.generation == old.generation + 1
    assert storage.get(old) is None
    assert storage.get(new) == "b"


def test_reused_slot_keeps_other_indices():
    storage = GenerationalStorage()
    first = storage.push("a")
    second = storage.push("b")
    storage.free(first)
    third = storage.push("c")
    assert third.index == first.index
    assert storage.get(second) == "b"
    assert storage.get(third) == "c"


def test_free_with_stale_id_leaves_new_data():
    storage = GenerationalStorage()
    old = storage.push("a")
    storage.free(old)
    new = storage.push("b")
    storage.free(old)
    assert storage.get(new) == "b"
    assert storage.count() == 1


def test_double_free_does_not_duplicate_slot():
    storage = GenerationalStorage()
    handle = storage.push("a")
    storage.free(handle)
    storage.free(handle)
    first = storage.push("b")
    second = storage.push("c")
    assert first.index != second.index
    assert storage.get(first) == "b"
    assert storage.get(second) == "c"


def test_get_out_of_range_is_none():
    storage = GenerationalStorage()
    storage.push("a")
    assert storage.get(GenerationalId(5, 0)) is None


def test_replace_live_and_stale():
    storage = GenerationalStorage()
    handle = storage.push("a")
    storage.replace(handle, "z")
    assert storage.get(handle) == "z"
    storage.free(handle)
    with pytest.raises(KeyError):
        storage.replace(handle, "y")


def test_retain_visits_in_order_and_removes():
    storage = GenerationalStorage()
    handles = [storage.push(value) for value in [1, 2, 3, 4]]
    seen = []

    def keep_odd(value):
        seen.append(value)
        return value % 2 == 1

    storage.retain(keep_odd)
    assert seen == [1, 2, 3, 4]
    assert [storage.get(h) for h in handles] == [1, None, 3, None]
    assert storage.count() == 2


def test_retain_allows_push_during_iteration():
    storage = GenerationalStorage()
    storage.push("a")
    pushed = []

    def spawn(value):
        if value == "a":
            pushed.append(storage.push("b"))
        return True

    storage.retain(spawn)
    assert storage.get(pushed[0]) == "b"
    assert storage.count() == 2


def test_clear_empties_everything():
    storage = GenerationalStorage()
    handle = storage.push("a")
    storage.push("b")
    storage.clear()
    assert storage.count() == 0
    assert storage.get(handle) is None
    assert storage.push("c") == GenerationalId(0, 0)