"""
Bracket Classifier.

Maps a flat list of card names (one entry per physical card) to a minimum
and recommended power bracket.

Matching is by lower-cased name against the fixed catalogs in
bracket_catalog. The minimum bracket is the lowest one whose requirement
row the deck satisfies; the recommended bracket can only raise it, based
on an externally computed power score.

INVARIANTS:
1. classify_bracket() is pure and deterministic
2. recommended_bracket >= minimum_bracket
3. Category tuples preserve input order and multiplicity
4. A combo needs two distinct names; a pair is reported once
"""

from collections.abc import Iterable
from itertools import combinations

from highlander.models.bracket import (
    BracketAnalysis,
    BracketDetails,
    ComboMatch,
    format_allowance,
)
from highlander.services.bracket_catalog import (
    EARLY_GAME_COST_LIMIT,
    EXTRA_TURN_CHAIN_CARDS,
    EXTRA_TURN_PHRASES,
    GAME_CHANGER_CARDS,
    MASS_LAND_DENIAL_CARDS,
    MAX_BRACKET,
    TUTOR_CARDS,
    find_combo,
    requirements_for,
)

# Power score thresholds, highest first: (minimum score, bracket)
POWER_SCORE_THRESHOLDS: tuple[tuple[float, int], ...] = (
    (800, 4),
    (650, 3),
    (500, 2),
)


def is_extra_turn_card(name: str) -> bool:
    """Check a lower-cased name for extra-turn phrasing or chaining membership."""
    return any(phrase in name for phrase in EXTRA_TURN_PHRASES) or name in EXTRA_TURN_CHAIN_CARDS


def find_two_card_combos(names: list[str]) -> tuple[ComboMatch, ...]:
    """
    Find catalogued combos among the given lower-cased names.

    Each unordered pair of distinct names is checked once, in input order.
    """
    distinct = list(dict.fromkeys(names))
    matches: list[ComboMatch] = []
    for card_a, card_b in combinations(distinct, 2):
        combo = find_combo(card_a, card_b)
        if combo is None:
            continue
        description, total_cost = combo
        matches.append(
            ComboMatch(
                cards=(card_a, card_b),
                is_early_game=total_cost < EARLY_GAME_COST_LIMIT,
                description=description,
            )
        )
    return tuple(matches)


def _failed_requirements(
    bracket: int,
    analysis: BracketAnalysis,
    has_chaining: bool,
) -> list[str]:
    """Every requirement of `bracket` the analysis exceeds, as messages."""
    requirements = requirements_for(bracket)
    failed: list[str] = []

    counted = (
        (len(analysis.mass_land_denial), requirements.max_mass_land_denial, "Mass Land Denial"),
        (len(analysis.extra_turns), requirements.max_extra_turns, "Extra Turn"),
        (len(analysis.tutors), requirements.max_tutors, "Tutor"),
        (len(analysis.game_changers), requirements.max_game_changers, "Game Changer"),
        (len(analysis.two_card_combos), requirements.max_two_card_combos, "Two-Card Combo"),
    )
    for found, allowed, label in counted:
        if found > allowed:
            failed.append(
                f"Bracket {bracket} allows {format_allowance(allowed)} {label} cards, "
                f"found {found}"
            )

    if has_chaining and not requirements.allows_extra_turn_chaining:
        failed.append(f"Bracket {bracket} doesn't allow Extra Turn chaining cards")

    if analysis.has_early_game_combos and not requirements.allows_early_game_combos:
        failed.append(f"Bracket {bracket} doesn't allow early game infinite combos")

    return failed


def minimum_bracket_reason(analysis: BracketAnalysis, minimum_bracket: int) -> str:
    """Summarize the categories that push a deck upward."""
    reasons: list[str] = []

    if analysis.mass_land_denial:
        reasons.append(f"{len(analysis.mass_land_denial)} mass land denial cards")

    extra_turns = len(analysis.extra_turns)
    if extra_turns > 3:
        reasons.append(f"{extra_turns} extra turn cards (above bracket 3 limit)")
    elif extra_turns > 2:
        reasons.append(f"{extra_turns} extra turn cards (above bracket 2 limit)")
    elif extra_turns > 0:
        reasons.append(f"{extra_turns} extra turn cards (above bracket 1 limit)")

    if any(card in EXTRA_TURN_CHAIN_CARDS for card in analysis.extra_turns):
        reasons.append("extra turn chaining cards (requires bracket 4+)")

    tutors = len(analysis.tutors)
    if tutors > 3:
        reasons.append(f"{tutors} tutors (above bracket 2 limit)")
    elif tutors > 2:
        reasons.append(f"{tutors} tutors (above bracket 1 limit)")

    game_changers = len(analysis.game_changers)
    if game_changers > 3:
        reasons.append(f"{game_changers} game changer cards (above bracket 3 limit)")
    elif game_changers > 0:
        reasons.append(f"{game_changers} game changer cards (above bracket 2 limit)")

    if analysis.two_card_combos:
        early = sum(1 for combo in analysis.two_card_combos if combo.is_early_game)
        late = len(analysis.two_card_combos) - early
        if early:
            reasons.append(f"{early} early game infinite combos (requires bracket 4+)")
        if late:
            reasons.append(f"{late} late game infinite combos (allowed in bracket 3+)")

    if not reasons:
        return f"Meets all criteria for Bracket {minimum_bracket}"
    if minimum_bracket >= 4:
        return f"Minimum Bracket {minimum_bracket} due to: {', '.join(reasons)}"
    return f"Bracket {minimum_bracket}: has {', '.join(reasons)} but still meets requirements"


def recommend_bracket(minimum_bracket: int, power_score: float | None) -> tuple[int, str]:
    """
    Raise the minimum bracket according to a power score.

    Returns:
        (recommended bracket, reason)
    """
    if power_score is None:
        return minimum_bracket, "No power score provided, using minimum bracket"

    recommended = minimum_bracket
    for threshold, bracket in POWER_SCORE_THRESHOLDS:
        if power_score >= threshold:
            recommended = max(recommended, bracket)
            break
    return recommended, f"Based on power score {power_score:g}"


def classify_bracket(
    card_names: Iterable[str],
    power_score: float | None = None,
) -> BracketAnalysis:
    """
    Classify a deck into a power bracket.

    Args:
        card_names: One name per physical card (multiplicity preserved)
        power_score: Optional externally computed power score

    Returns:
        BracketAnalysis with category findings and bracket explanations
    """
    names = [name.lower() for name in card_names]

    categories = BracketAnalysis(
        mass_land_denial=tuple(name for name in names if name in MASS_LAND_DENIAL_CARDS),
        extra_turns=tuple(name for name in names if is_extra_turn_card(name)),
        tutors=tuple(name for name in names if name in TUTOR_CARDS),
        game_changers=tuple(name for name in names if name in GAME_CHANGER_CARDS),
        two_card_combos=find_two_card_combos(names),
    )
    has_chaining = any(name in EXTRA_TURN_CHAIN_CARDS for name in names)

    minimum_bracket = MAX_BRACKET
    requirements_failed: list[str] = []
    for bracket in range(1, MAX_BRACKET + 1):
        failed = _failed_requirements(bracket, categories, has_chaining)
        if not failed:
            minimum_bracket = bracket
            break
        requirements_failed.extend(failed)

    recommended_bracket, recommended_reason = recommend_bracket(minimum_bracket, power_score)

    return BracketAnalysis(
        mass_land_denial=categories.mass_land_denial,
        extra_turns=categories.extra_turns,
        tutors=categories.tutors,
        game_changers=categories.game_changers,
        two_card_combos=categories.two_card_combos,
        minimum_bracket=minimum_bracket,
        recommended_bracket=recommended_bracket,
        details=BracketDetails(
            minimum_bracket_reason=minimum_bracket_reason(categories, minimum_bracket),
            recommended_bracket_reason=recommended_reason,
            bracket_requirements_failed=tuple(requirements_failed),
        ),
    )
