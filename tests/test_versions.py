import pytest

from repocore.modules.content.util import (
    compare_versions,
    get_base_version,
    is_generic_snapshot,
    is_snapshot,
    is_unique_snapshot,
    is_version_token,
    max_version,
    sort_versions,
    split_unique_snapshot,
)


def test_sort_versions_in_maven_order():
    expected = [
        "1.0-spec",
        "1.0",
        "1.0.1",
        "1.1",
        "2.0-proposal-beta",
        "2.0-spec",
        "2.0",
        "2.0.1",
        "2.1",
        "3.0",
        "3.1",
    ]
    shuffled = ["3.1", "2.0", "1.0.1", "2.0-spec", "1.0", "2.1", "1.0-spec", "3.0", "2.0.1", "2.0-proposal-beta", "1.1"]

    assert sort_versions(shuffled) == expected


@pytest.mark.parametrize(
    "lower,higher",
    [
        ("1.0-alpha-1", "1.0"),
        ("1.0-alpha-1", "1.0-beta-1"),
        ("1.0-beta-1", "1.0-rc1"),
        ("1.0-SNAPSHOT", "1.0"),
        ("1.0-SNAPSHOT", "1.0-20070821.213044-8"),
        ("1.0-20070821.213044-8", "1.0-20070821.213044-10"),
        ("2.0.1", "2.0-20070821-dev"),
        ("1.9", "1.10"),
    ],
)
def test_compare_versions_orders_pairs(lower, higher):
    assert compare_versions(lower, higher) < 0
    assert compare_versions(higher, lower) > 0


def test_compare_versions_equal_and_none():
    assert compare_versions("1.0", "1.0") == 0
    assert compare_versions(None, None) == 0
    assert compare_versions(None, "1.0") > 0
    assert compare_versions("1.0", None) < 0


def test_sort_versions_deduplicates():
    assert sort_versions(["1.0", "1.0", "0.9"]) == ["0.9", "1.0"]


def test_max_version_ignores_empty_values():
    assert max_version([None, "1.0", "", "2.0"]) == "2.0"
    assert max_version([None, ""]) is None


def test_snapshot_detection():
    assert is_snapshot("1.0-SNAPSHOT")
    assert is_snapshot("1.0-20050611.112233-1")
    assert not is_snapshot("1.0")
    assert not is_snapshot(None)
    assert is_generic_snapshot("1.0-SNAPSHOT")
    assert not is_generic_snapshot("1.0-20050611.112233-1")
    assert is_unique_snapshot("3.1-beta-1-20050831.101112-42")
    assert not is_unique_snapshot("1.0-SNAPSHOT")


def test_base_version_of_timestamped_build():
    assert get_base_version("3.1-beta-1-20050831.101112-42") == "3.1-beta-1-SNAPSHOT"
    assert get_base_version("1.0-SNAPSHOT") == "1.0-SNAPSHOT"
    assert get_base_version("1.0") == "1.0"


def test_split_unique_snapshot():
    assert split_unique_snapshot("1.0-20070821.213044-8") == ("1.0", "20070821.213044", 8)
    assert split_unique_snapshot("1.0-SNAPSHOT") is None


def test_version_token_heuristic():
    assert is_version_token("2.1")
    assert is_version_token("SNAPSHOT")
    assert is_version_token("alpha")
    assert is_version_token("rc1")
    assert not is_version_token("commons")
    assert not is_version_token("lang")
    assert not is_version_token("")
