import pytest

from conftest import make_candidate
from services.errors import NoRoutesFound
from services.route_selector import considered_routes, find_optimal_paths, smoothness_rank


def test_empty_candidate_set_raises():
    with pytest.raises(NoRoutesFound):
        find_optimal_paths([])


def test_each_criterion_picks_its_best_route():
    fast = make_candidate(0, skate_time=6, num_turns=4, roughness=6.0, distance=1.5)
    few_turns = make_candidate(1, skate_time=9, num_turns=0, roughness=3.0, distance=2.2)
    smooth = make_candidate(2, skate_time=8, num_turns=2, roughness=0.5, smoothness_score=5.0, distance=2.0)

    paths = find_optimal_paths([fast, few_turns, smooth])

    assert paths.shortest_path is fast
    assert paths.safest_path is few_turns
    assert paths.smoothest_path is smooth
    assert paths.single_turn_path is None
    assert paths.all_routes == [fast, few_turns, smooth]


def test_balanced_normalizes_turns_and_roughness():
    # (4/4 + 1/8)/2 = 0.5625
    a = make_candidate(0, num_turns=4, roughness=1.0)
    # (1/4 + 8/8)/2 = 0.625
    b = make_candidate(1, num_turns=1, roughness=8.0)
    # (2/4 + 2/8)/2 = 0.375
    c = make_candidate(2, num_turns=2, roughness=2.0)

    assert find_optimal_paths([a, b, c]).balanced_path is c


def test_balanced_floors_maxima_at_one():
    a = make_candidate(0, num_turns=0, roughness=0.0)
    b = make_candidate(1, num_turns=0, roughness=0.5)

    assert find_optimal_paths([a, b]).balanced_path is a


def test_single_turn_picks_shortest_distance():
    long_single = make_candidate(0, num_turns=1, distance=3.0)
    short_single = make_candidate(1, num_turns=1, distance=1.8)
    many_turns = make_candidate(2, num_turns=3, distance=1.0)

    assert find_optimal_paths([long_single, short_single, many_turns]).single_turn_path is short_single


def test_ties_go_to_first_candidate():
    first = make_candidate(0, skate_time=5, num_turns=1, roughness=1.0, distance=2.0)
    second = make_candidate(-1, skate_time=5, num_turns=1, roughness=1.0, distance=2.0)

    paths = find_optimal_paths([first, second])

    assert paths.shortest_path is first
    assert paths.safest_path is first
    assert paths.smoothest_path is first
    assert paths.balanced_path is first
    assert paths.single_turn_path is first


def test_blocked_routes_are_skipped_but_listed():
    blocked = make_candidate(0, skate_time=3, num_turns=1, roughness=0.0, blocked=True)
    open_route = make_candidate(1, skate_time=10, num_turns=3, roughness=5.0)

    paths = find_optimal_paths([blocked, open_route])

    for selected in (paths.shortest_path, paths.safest_path, paths.smoothest_path, paths.balanced_path):
        assert selected is open_route
    assert paths.single_turn_path is None
    assert blocked in paths.all_routes


def test_all_blocked_falls_back_to_full_set():
    a = make_candidate(0, skate_time=7, num_turns=1, blocked=True)
    b = make_candidate(1, skate_time=4, num_turns=2, blocked=True)

    paths = find_optimal_paths([a, b])

    assert considered_routes([a, b]) == [a, b]
    assert paths.shortest_path is b
    assert paths.safest_path is a
    assert paths.single_turn_path is a


def test_selected_routes_dominate_considered_set():
    candidates = [
        make_candidate(i, skate_time=t, num_turns=n, roughness=r, smoothness_score=s, blocked=b)
        for i, (t, n, r, s, b) in enumerate([
            (12.0, 3, 4.2, 4.0, False),
            (7.5, 5, 1.1, 3.5, False),
            (6.0, 0, 0.0, 5.0, True),
            (9.1, 2, 2.7, 5.0, False),
        ])
    ]

    paths = find_optimal_paths(candidates)
    considered = considered_routes(candidates)

    assert all(paths.shortest_path.skate_time <= r.skate_time for r in considered)
    assert all(paths.safest_path.num_turns <= r.num_turns for r in considered)
    assert all(smoothness_rank(paths.smoothest_path) >= smoothness_rank(r) for r in considered)
    assert not any(p.blocked for p in (paths.shortest_path, paths.safest_path))
