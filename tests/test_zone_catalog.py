import threading
import time

import pytest

from tzregion import (
    Alias,
    ArgErr,
    Canonical,
    RuleTable,
    TzdbErr,
    TzdbSource,
    UnknownRegionErr,
    ZoneCatalog,
)


def test_lookup_exact_match_only(mini_catalog):
    assert mini_catalog.lookup("Europe/London").id() == "Europe/London"
    assert mini_catalog.lookup("europe/london", checked=False) is None
    with pytest.raises(UnknownRegionErr):
        mini_catalog.lookup("Europe/Londonderry")


def test_resolve_canonical(mini_catalog):
    assert mini_catalog.resolve_canonical("GB") == "Europe/London"
    assert mini_catalog.resolve_canonical("Europe/London") == "Europe/London"
    assert mini_catalog.table("GB") is mini_catalog.table("Europe/London")


def test_entries(mini_catalog):
    gb = mini_catalog.lookup("GB")
    assert gb.is_alias()
    assert gb.target() == "Europe/London"
    assert gb.is_obsolete()
    gmt5 = mini_catalog.lookup("Etc/GMT+5")
    assert not gmt5.is_alias()
    assert gmt5.is_obsolete()


def test_all_identifiers(mini_catalog):
    current = mini_catalog.all_identifiers(False)
    everything = mini_catalog.all_identifiers(True)
    assert current == ("Europe/London", "UTC")
    assert set(everything) == {"Europe/London", "UTC", "GB", "Etc/UTC", "Etc/GMT+5"}
    assert len(everything) == len(set(everything))
    assert len(everything) > len(current)
    assert mini_catalog.all_identifiers(True) == everything


def test_no_obsolete_means_equal_counts():
    catalog = ZoneCatalog([Canonical("UTC", RuleTable.fixed(0, "UTC"))])
    assert catalog.all_identifiers(True) == catalog.all_identifiers(False)


def test_aliases_of(mini_catalog):
    assert mini_catalog.aliases_of("UTC") == ("Etc/UTC",)


def test_country_lookup(mini_catalog):
    assert mini_catalog.identifiers_for_country("GB") == ("Europe/London",)
    assert mini_catalog.identifiers_for_country("XX") == ()


def test_alias_chain_rejected():
    utc = RuleTable.fixed(0, "UTC")
    with pytest.raises(TzdbErr):
        ZoneCatalog([Canonical("UTC", utc), Alias("Etc/UTC", "UTC"), Alias("Zulu", "Etc/UTC")])


def test_dangling_alias_rejected():
    with pytest.raises(TzdbErr):
        ZoneCatalog([Alias("GB", "Europe/London")])


def test_duplicate_id_rejected():
    utc = RuleTable.fixed(0, "UTC")
    with pytest.raises(TzdbErr):
        ZoneCatalog([Canonical("UTC", utc), Canonical("UTC", utc)])


def test_swap_and_reset(mini_catalog, restore_catalog):
    assert ZoneCatalog.swap(mini_catalog) is None
    assert ZoneCatalog.cur() is mini_catalog

    other = ZoneCatalog([Canonical("UTC", RuleTable.fixed(0, "UTC"))])
    assert ZoneCatalog.swap(other) is mini_catalog
    assert ZoneCatalog.cur() is other

    assert ZoneCatalog.reset() is other


def test_swap_requires_catalog(restore_catalog):
    with pytest.raises(ArgErr):
        ZoneCatalog.swap({"UTC": None})


def test_concurrent_first_use_builds_once(mini_catalog, restore_catalog, monkeypatch):
    builds = []

    class SlowSource:
        def load(self):
            builds.append(threading.get_ident())
            time.sleep(0.05)
            return mini_catalog

    monkeypatch.setattr(TzdbSource, "from_config", staticmethod(lambda env=None: SlowSource()))

    results = []
    threads = [threading.Thread(target=lambda: results.append(ZoneCatalog.cur())) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(builds) == 1
    assert len(results) == 8
    assert all(r is mini_catalog for r in results)
