from optistats.utils.filter_store import FilterStore, is_active_value


def test_set_filter_passes_whole_mapping_to_callback():
    seen = []
    store = FilterStore({"search": "", "role": None}, on_change=seen.append)

    store.set_filter("role", "ADMIN")

    assert seen == [{"search": "", "role": "ADMIN"}]


def test_set_many_fires_callback_once():
    seen = []
    store = FilterStore({"a": None}, on_change=seen.append)

    store.set_many({"a": 1, "b": "x"})

    assert len(seen) == 1
    assert seen[0] == {"a": 1, "b": "x"}


def test_clear_keeps_keys_and_remove_deletes_them():
    store = FilterStore({"status": "ACTIVE"})
    store.set_filter("role", "ADMIN")

    store.clear()
    assert "role" in store.filters
    assert store.filters["role"] is None
    assert store.filters == {"status": None, "role": None}

    store.remove_filter("role")
    assert "role" not in store.filters


def test_remove_missing_key_is_a_noop():
    store = FilterStore({"a": 1})
    store.remove_filter("missing")
    assert store.filters == {"a": 1}


def test_reset_restores_defaults_including_non_null_values():
    store = FilterStore({"period": "month", "locationId": None})
    store.set_many({"period": "day", "locationId": "L1", "extra": True})
    store.clear()

    store.reset()

    assert store.filters == {"period": "month", "locationId": None}


def test_defaults_are_not_shared_with_caller():
    defaults = {"tags": None}
    store = FilterStore(defaults)
    store.set_filter("tags", ["a"])
    assert defaults == {"tags": None}


def test_callback_copy_cannot_mutate_state():
    received = []
    store = FilterStore({"a": 1}, on_change=received.append)
    store.set_filter("b", 2)
    received[0]["a"] = 99
    assert store.get("a") == 1


def test_active_rules():
    assert not is_active_value(None)
    assert not is_active_value("   ")
    assert not is_active_value([])
    assert is_active_value(0)
    assert is_active_value(False)
    assert is_active_value(" x ")
    assert is_active_value(["a"])


def test_active_count_and_has_active():
    store = FilterStore({"search": " ", "tags": [], "role": None})
    assert not store.has_active()
    assert store.active_count() == 0

    store.set_many({"role": "ADMIN", "page": 0})
    assert store.has_active()
    assert store.active_count() == 2
    assert store.is_active("page")
    assert not store.is_active("search")
    assert not store.is_active("missing")


def test_query_params_keep_insertion_order_and_drop_inactive():
    store = FilterStore({"zeta": "z", "alpha": None, "mid": []})
    store.set_filter("alpha", "a")
    store.set_filter("beta", 2)

    params = store.to_query_params()

    assert list(params) == ["zeta", "alpha", "beta"]
    assert params == {"zeta": "z", "alpha": "a", "beta": 2}


def test_values_are_duck_typed():
    store = FilterStore()
    marker = object()
    store.set_filter("anything", marker)
    assert store.get("anything") is marker
    assert store.to_query_params() == {"anything": marker}
