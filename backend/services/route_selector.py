"""
Picks the best candidate route under each optimization criterion.

Blocked routes are only considered when every candidate is blocked. Ties go
to the first candidate in iteration order.
"""

import logging
from typing import Callable, List, Optional, Sequence

from models import CandidateRoute, OptimalPaths
from services.errors import NoRoutesFound

logger = logging.getLogger(__name__)


def _min_by(routes: Sequence[CandidateRoute], key: Callable[[CandidateRoute], float]) -> CandidateRoute:
    best = routes[0]
    best_value = key(best)
    for route in routes[1:]:
        value = key(route)
        if value < best_value:
            best, best_value = route, value
    return best


def smoothness_rank(route: CandidateRoute) -> float:
    return route.smoothness_score - route.roughness / 10


def considered_routes(candidates: Sequence[CandidateRoute]) -> List[CandidateRoute]:
    """Unblocked candidates, or all of them when every route is blocked"""
    available = [route for route in candidates if not route.blocked]
    return available if available else list(candidates)


def select_shortest(routes: Sequence[CandidateRoute]) -> CandidateRoute:
    return _min_by(routes, lambda r: r.skate_time)


def select_safest(routes: Sequence[CandidateRoute]) -> CandidateRoute:
    return _min_by(routes, lambda r: r.num_turns)


def select_smoothest(routes: Sequence[CandidateRoute]) -> CandidateRoute:
    return _min_by(routes, lambda r: -smoothness_rank(r))


def select_balanced(routes: Sequence[CandidateRoute]) -> CandidateRoute:
    """Lowest mean of turns and roughness, each normalized by its maximum (floored at 1)"""
    max_turns = max([r.num_turns for r in routes] + [1])
    max_roughness = max([r.roughness for r in routes] + [1])
    return _min_by(routes, lambda r: (r.num_turns / max_turns + r.roughness / max_roughness) / 2)


def select_single_turn(routes: Sequence[CandidateRoute]) -> Optional[CandidateRoute]:
    single_turn = [r for r in routes if r.num_turns == 1]
    if not single_turn:
        return None
    return _min_by(single_turn, lambda r: r.distance)


def find_optimal_paths(candidates: Sequence[CandidateRoute]) -> OptimalPaths:
    """
    Reduce an enriched candidate set to the named best routes.

    Raises:
        NoRoutesFound: if the candidate set is empty
    """
    if not candidates:
        raise NoRoutesFound("No routes found")

    routes = considered_routes(candidates)
    if len(routes) == len(candidates) and any(r.blocked for r in candidates):
        logger.warning("All candidate routes are blocked; selecting from blocked routes")

    return OptimalPaths(
        shortest_path=select_shortest(routes),
        safest_path=select_safest(routes),
        smoothest_path=select_smoothest(routes),
        balanced_path=select_balanced(routes),
        single_turn_path=select_single_turn(routes),
        all_routes=list(candidates),
    )
