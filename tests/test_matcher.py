from showsearch_app.search.matcher import (
    NO_MATCH,
    ResolutionType,
    dedupe_by_show_id,
    find_shorter_match,
    is_loading,
    resolve,
)


def _ids(resolution):
    return [match.show_id for match in resolution.results]


def test_exact_match_wins_over_longer_and_shorter(make_match):
    cache = {
        "ba": [make_match(9)],
        "bat": [make_match(1)],
        "batman": [make_match(1), make_match(2, ["Action"])],
    }

    resolution = resolve("bat", cache)

    assert resolution.type is ResolutionType.EXACT_MATCH
    assert _ids(resolution) == [1]


def test_exact_match_with_empty_results_is_still_exact():
    resolution = resolve("zzz", {"zzz": [], "zzzz": []})

    assert resolution.type is ResolutionType.EXACT_MATCH
    assert resolution.results == ()


def test_missing_exact_falls_back_to_longer_matches(make_match):
    cache = {
        "batman": [make_match(1), make_match(2, ["Action"])],
    }

    resolution = resolve("bat", cache)

    assert resolution.type is ResolutionType.PREFIX_EXTENSION
    assert _ids(resolution) == [1, 2]


def test_longer_matches_are_unioned_and_deduplicated(make_match):
    cache = {
        "batman": [make_match(1), make_match(2)],
        "batwoman": [make_match(2), make_match(3)],
        "bob": [make_match(4)],
    }

    resolution = resolve("bat", cache)

    assert resolution.type is ResolutionType.PREFIX_EXTENSION
    assert _ids(resolution) == [1, 2, 3]


def test_dedupe_keeps_first_occurrence(make_match):
    first = make_match(7, name="first", score=0.9)
    second = make_match(7, name="second", score=0.1)

    assert dedupe_by_show_id([first, second]) == [first]


def test_shorter_match_uses_longest_prefix_unmodified(make_match):
    short = [make_match(1), make_match(1)]
    longer = [make_match(2), make_match(3)]
    cache = {"b": short, "bat": longer}

    resolution = resolve("batm", cache)

    assert resolution.type is ResolutionType.PREFIX_REDUCTION
    assert list(resolution.results) == longer


def test_shorter_match_returned_as_is_without_dedup(make_match):
    duplicated = [make_match(1), make_match(1)]

    resolution = resolve("bat", {"b": duplicated})

    assert resolution.type is ResolutionType.PREFIX_REDUCTION
    assert _ids(resolution) == [1, 1]


def test_longer_match_beats_shorter_match(make_match):
    cache = {"ba": [make_match(1)], "batman": [make_match(2)]}

    resolution = resolve("bat", cache)

    assert resolution.type is ResolutionType.PREFIX_EXTENSION
    assert _ids(resolution) == [2]


def test_single_character_query_has_no_shorter_candidate(make_match):
    assert find_shorter_match({"": [make_match(1)]}, "b") is None
    assert resolve("b", {"x": [make_match(1)]}) == NO_MATCH


def test_no_match_on_empty_or_unrelated_cache(make_match):
    assert resolve("bat", {}) == NO_MATCH
    assert resolve("bat", {"cat": [make_match(1)]}).results is None


def test_resolve_is_idempotent_and_does_not_mutate(make_match):
    cache = {"batman": [make_match(1)], "batwoman": [make_match(2)]}
    before = {key: list(value) for key, value in cache.items()}

    first = resolve("bat", cache)
    second = resolve("bat", cache)

    assert first == second
    assert cache == before


def test_bat_scenario_exact_then_extension(make_match):
    cache = {
        "bat": [make_match(1)],
        "batman": [make_match(1), make_match(2, ["Action"])],
    }
    assert _ids(resolve("bat", cache)) == [1]

    del cache["bat"]
    resolution = resolve("bat", cache)

    assert resolution.type is ResolutionType.PREFIX_EXTENSION
    assert _ids(resolution) == [1, 2]


def test_loading_policy(make_match):
    exact = resolve("bat", {"bat": [make_match(1)]})
    approx = resolve("bat", {"batman": [make_match(1)]})

    assert is_loading("bat", exact) is False
    assert is_loading("bat", approx) is True
    assert is_loading("", NO_MATCH) is False
