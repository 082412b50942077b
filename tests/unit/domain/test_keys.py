import pytest

from tiercache.domain.keys import comparison_key, insights_key, profile_key
from tiercache.domain.models.errors import InvalidKeyError


def test_profile_key_lowercases_identifier():
    assert profile_key("Octo") == "github:octo:profile"


def test_profile_key_custom_source():
    assert profile_key("octo", source="LeetCode") == "leetcode:octo:profile"


def test_insights_key():
    assert insights_key("OctoCat") == "ai:octocat:insights"


def test_comparison_key_is_case_and_order_insensitive():
    assert comparison_key("alice", "bob") == comparison_key("BOB", "Alice")
    assert comparison_key("alice", "bob") == "compare:alice:bob:verdict"


@pytest.mark.parametrize("a, b", [("zed", "amy"), ("Amy", "ZED"), ("same", "SAME"), ("a-1", "a_1")])
def test_comparison_key_symmetry(a, b):
    assert comparison_key(a, b) == comparison_key(b, a)


def test_identifiers_are_stripped():
    assert insights_key("  octo ") == "ai:octo:insights"
    assert profile_key(" octo", source=" GitHub ") == profile_key("octo")


@pytest.mark.parametrize("bad", ["", "   ", None])
def test_empty_identifiers_rejected(bad):
    with pytest.raises(InvalidKeyError):
        profile_key(bad)
    with pytest.raises(InvalidKeyError):
        comparison_key("alice", bad)
