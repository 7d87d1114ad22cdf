import pytest

from conftest import build_tzif
from tzregion import Env, IOErr, Log, LogLevel, TzdbErr, TzdbSource

ZONE_TAB = "#code\tcoordinates\tTZ\tcomments\nGB\t+513030-0000731\tEurope/London\nXX\t+0000+00000\tEurope/Nowhere\n"


@pytest.fixture
def zoneinfo_dir(tmp_path, london_tzif):
    utc = build_tzif([], [], [(0, 0, "UTC")], "UTC0")
    gmt5 = build_tzif([], [], [(-18000, 0, "-05")], "<-05>5")

    (tmp_path / "Europe").mkdir()
    (tmp_path / "Etc").mkdir()
    (tmp_path / "posix" / "Europe").mkdir(parents=True)
    (tmp_path / "Europe" / "London").write_bytes(london_tzif)
    (tmp_path / "GB").write_bytes(london_tzif)
    (tmp_path / "posix" / "Europe" / "London").write_bytes(london_tzif)
    (tmp_path / "UTC").write_bytes(utc)
    (tmp_path / "Etc" / "UTC").write_bytes(utc)
    (tmp_path / "Etc" / "GMT+5").write_bytes(gmt5)
    (tmp_path / "Etc" / "Broken").write_bytes(b"TZif2" + b"\0" * 10)
    (tmp_path / "zone.tab").write_text(ZONE_TAB)
    (tmp_path / "tzdata.zi").write_text("# version 2099z\n# This zic input file is in the public domain.\n")
    return tmp_path


def test_read_zones_skips_non_tzif_and_posix(zoneinfo_dir):
    zones = TzdbSource.from_dir(zoneinfo_dir).read_zones()
    assert set(zones) == {"Europe/London", "GB", "UTC", "Etc/UTC", "Etc/GMT+5", "Etc/Broken"}


def test_version_from_tzdata_zi(zoneinfo_dir):
    assert TzdbSource.from_dir(zoneinfo_dir).version() == "2099z"


def test_load(zoneinfo_dir):
    records = []
    Log.add_handler(records.append)
    try:
        catalog = TzdbSource.from_dir(zoneinfo_dir).load()
    finally:
        Log.remove_handler(records.append)

    assert catalog.version() == "2099z"
    assert catalog.all_identifiers(False) == ("Europe/London", "UTC")
    assert catalog.all_identifiers(True) == ("Etc/GMT+5", "Etc/UTC", "Europe/London", "GB", "UTC")

    assert catalog.lookup("GB").is_alias()
    assert catalog.resolve_canonical("GB") == "Europe/London"
    assert catalog.resolve_canonical("Etc/UTC") == "UTC"
    assert not catalog.lookup("Etc/GMT+5").is_alias()
    assert catalog.is_obsolete("Etc/GMT+5")

    assert catalog.identifiers_for_country("GB") == ("Europe/London",)
    assert catalog.identifiers_for_country("XX") == ()

    messages = [r.msg() for r in records]
    assert any("Europe/Nowhere" in m for m in messages)
    assert any("Etc/Broken" in m for m in messages)
    assert any(m.startswith("Loaded tzdb 2099z") for m in messages)


def test_utc_is_synthesized_when_missing(zoneinfo_dir):
    (zoneinfo_dir / "UTC").unlink()
    catalog = TzdbSource.from_dir(zoneinfo_dir).load()
    assert "UTC" in catalog.all_identifiers(False)
    assert catalog.table("UTC").initial().offset == 0


def test_missing_country_table(zoneinfo_dir):
    (zoneinfo_dir / "zone.tab").unlink()
    with pytest.raises(TzdbErr):
        TzdbSource.from_dir(zoneinfo_dir).load()


def test_missing_dir(tmp_path):
    with pytest.raises(IOErr):
        TzdbSource.from_dir(tmp_path / "nope")


def test_missing_package():
    with pytest.raises(IOErr):
        TzdbSource.from_package("no_such_tz_package")


def test_from_config_env_var(zoneinfo_dir, tmp_path):
    env = Env(work_dir=str(tmp_path), environ={"TZREGION_TZDB_DIR": str(zoneinfo_dir)})
    source = TzdbSource.from_config(env)
    assert str(source.root()) == str(zoneinfo_dir)


def test_from_config_props_file(zoneinfo_dir, tmp_path):
    work = tmp_path / "work"
    (work / "etc" / "tzregion").mkdir(parents=True)
    (work / "etc" / "tzregion" / "config.props").write_text(
        f"// test config\ntzdb.dir={zoneinfo_dir}\nlog.level=warn\n")
    env = Env(work_dir=str(work), environ={})
    try:
        source = TzdbSource.from_config(env)
        assert str(source.root()) == str(zoneinfo_dir)
        assert Log.get("tzregion").level().name() == "warn"
    finally:
        Log.get("tzregion").level(LogLevel.info())
        Log.get("tzregion.tzdb").level(LogLevel.info())


def test_from_config_defaults_to_tzdata_package():
    source = TzdbSource.from_config(Env(environ={}))
    assert source.version() is not None
