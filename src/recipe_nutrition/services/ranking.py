"""Re-ranking of food search candidates for cooking use."""

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from recipe_nutrition.domain.nutrition import FoodCandidate

_PRODUCE_QUERY_TERMS = ("avocado", "fruit", "vegetable")
_OIL_BEARING_PRODUCE = ("avocado", "olive", "coconut")
_CONDIMENT_TERMS = ("dressing", "spread", "dip", "sauce")


@dataclass(frozen=True)
class ScoreRule:
    """Score delta applied when predicate(query, description, candidate) holds."""

    name: str
    predicate: Callable[[str, str, FoodCandidate], bool]
    delta: float


def _raw_produce(query: str, description: str, _: FoodCandidate) -> bool:
    return (
        any(term in query for term in _PRODUCE_QUERY_TERMS)
        and "raw" in description
        and "oil" not in description
    )


def _unwanted_oil(query: str, description: str, _: FoodCandidate) -> bool:
    return (
        any(term in query for term in _OIL_BEARING_PRODUCE)
        and "oil" in description
        and "oil" not in query
    )


def _condiment(_query: str, description: str, _: FoodCandidate) -> bool:
    return any(term in description for term in _CONDIMENT_TERMS)


def _complete_macros(_query: str, _description: str, candidate: FoodCandidate) -> bool:
    return candidate.macros().has_all


def _no_macros(_query: str, _description: str, candidate: FoodCandidate) -> bool:
    return not candidate.macros().has_any


RANKING_RULES: tuple[ScoreRule, ...] = (
    ScoreRule("raw_produce", _raw_produce, 50),
    ScoreRule("unwanted_oil", _unwanted_oil, -100),
    ScoreRule("condiment", _condiment, -30),
    ScoreRule("complete_macros", _complete_macros, 50),
    ScoreRule("no_macros", _no_macros, -1000),
)


def adjusted_score(
    candidate: FoodCandidate,
    query: str,
    rules: Sequence[ScoreRule] = RANKING_RULES,
) -> float:
    """Provider relevance score plus the deltas of every matching rule."""
    lowered_query = query.lower()
    description = candidate.description.lower()
    score = candidate.score
    for rule in rules:
        if rule.predicate(lowered_query, description, candidate):
            score += rule.delta
    return score


def rank_candidates(
    candidates: Sequence[FoodCandidate],
    query: str,
    rules: Sequence[ScoreRule] = RANKING_RULES,
) -> list[FoodCandidate]:
    """Order candidates by adjusted score, keeping provider order on ties."""
    return sorted(
        candidates,
        key=lambda candidate: adjusted_score(candidate, query, rules),
        reverse=True,
    )
