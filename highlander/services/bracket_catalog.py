"""
Bracket category catalogs.

Static, lower-cased card name sets used by the bracket classifier, plus the
per-bracket requirement table. Loaded once at import and never mutated.
"""

import math

from highlander.models.bracket import BracketRequirements

# =============================================================================
# REQUIREMENT TABLE
# =============================================================================

INF = math.inf

# Index 0 is bracket 1. Bracket 5 has no row of its own and reuses bracket 4.
BRACKET_REQUIREMENTS: tuple[BracketRequirements, ...] = (
    BracketRequirements(
        max_mass_land_denial=0,
        max_extra_turns=0,
        max_tutors=2,
        max_game_changers=0,
        max_two_card_combos=0,
        allows_extra_turn_chaining=False,
        allows_early_game_combos=False,
    ),
    BracketRequirements(
        max_mass_land_denial=0,
        max_extra_turns=2,
        max_tutors=3,
        max_game_changers=0,
        max_two_card_combos=0,
        allows_extra_turn_chaining=False,
        allows_early_game_combos=False,
    ),
    BracketRequirements(
        max_mass_land_denial=0,
        max_extra_turns=3,
        max_tutors=INF,
        max_game_changers=3,
        max_two_card_combos=INF,
        allows_extra_turn_chaining=False,
        allows_early_game_combos=False,
    ),
    BracketRequirements(
        max_mass_land_denial=INF,
        max_extra_turns=INF,
        max_tutors=INF,
        max_game_changers=INF,
        max_two_card_combos=INF,
        allows_extra_turn_chaining=True,
        allows_early_game_combos=True,
    ),
)

MAX_BRACKET = 5


def requirements_for(bracket: int) -> BracketRequirements:
    """Requirement row for a bracket (1..MAX_BRACKET)."""
    if not 1 <= bracket <= MAX_BRACKET:
        raise ValueError(f"Bracket must be between 1 and {MAX_BRACKET}, got {bracket}")
    return BRACKET_REQUIREMENTS[min(bracket, len(BRACKET_REQUIREMENTS)) - 1]


# =============================================================================
# CARD CATEGORIES
# =============================================================================

MASS_LAND_DENIAL_CARDS: frozenset[str] = frozenset(
    {
        "acid rain",
        "alpine moon",
        "apocalypse",
        "armageddon",
        "back to basics",
        "bearer of the heavens",
        "bend or break",
        "blood moon",
        "boil",
        "boiling seas",
        "boom // bust",
        "burning of xinye",
        "cataclysm",
        "catastrophe",
        "cleansing",
        "contamination",
        "conversion",
        "death cloud",
        "decree of annihilation",
        "desolation angel",
        "destructive force",
        "devastating dreams",
        "devastation",
        "dimensional breach",
        "epicenter",
        "fall of the thran",
        "flashfires",
        "gilt-leaf archdruid",
        "glaciers",
        "global ruin",
        "hall of gemstone",
        "harbinger of the seas",
        "hokori, dust drinker",
        "impending disaster",
        "infernal darkness",
        "jokulhaups",
        "keldon firebombers",
        "magus of the moon",
        "myojin of infinite rage",
        "naked singularity",
        "obliterate",
        "omen of fire",
        "raiding party",
        "ravages of war",
        "razia's purification",
        "reality twist",
        "realm razer",
        "rising waters",
        "ritual of subdual",
        "ruination",
        "soulscour",
        "stasis",
        "static orb",
        "stench of evil",
        "sunder",
        "tectonic break",
        "thoughts of ruin",
        "tsunami",
        "urza's sylex",
        "wildfire",
        "winter moon",
        "winter orb",
        "worldfire",
        "worldpurge",
        "worldslayer",
    }
)

# Cards that enable repeated extra turns; also counted as extra-turn cards
EXTRA_TURN_CHAIN_CARDS: frozenset[str] = frozenset(
    {
        "alchemist's gambit",
        "alrund's epiphany",
        "beacon of tomorrows",
        "capture of jingzhou",
        "chance for glory",
        "expropriate",
        "final fortune",
        "gonti's aether heart",
        "ichormoon gauntlet",
        "karn's temporal sundering",
        "last chance",
        "lighthouse chronologist",
        "lost isle calling",
        "magistrate's scepter",
        "magosi, the waterveil",
        "medomai the ageless",
        "mu yanling",
        "nexus of fate",
        "notorious throng",
        "part the waterveil",
        "plea for power",
        "ral zarek",
        "regenerations restored",
        "rise of the eldrazi",
        "sage of hours",
        "savor the moment",
        "search the city",
        "second chance",
        "seedtime",
        "stitch in time",
        "teferi, master of time",
        "teferi, timebender",
        "temporal extortion",
        "temporal manipulation",
        "temporal mastery",
        "temporal trespass",
        "time sieve",
        "timesifter",
        "timestream navigator",
        "time stretch",
        "time warp",
        "twice upon a time",
        "ugin's nexus",
        "walk the aeons",
        "wanderwine prophets",
        "warrior's oath",
        "wormfang manta",
    }
)

# Name fragments that mark a card as granting extra turns
EXTRA_TURN_PHRASES = ("extra turn", "additional turn")

GAME_CHANGER_CARDS: frozenset[str] = frozenset(
    {
        "ad nauseam",
        "ancient tomb",
        "aura shards",
        "bolas's citadel",
        "braids, cabal minion",
        "chrome mox",
        "coalition victory",
        "consecrated sphinx",
        "crop rotation",
        "cyclonic rift",
        "deflecting swat",
        "demonic tutor",
        "drannith magistrate",
        "enlightened tutor",
        "expropriate",
        "field of the dead",
        "fierce guardianship",
        "food chain",
        "force of will",
        "gaea's cradle",
        "gamble",
        "gifts ungiven",
        "glacial chasm",
        "grand arbiter augustin iv",
        "grim monolith",
        "humility",
        "imperial seal",
        "intuition",
        "jeska's will",
        "jin-gitaxias, core augur",
        "kinnan, bonder prodigy",
        "lion's eye diamond",
        "mana vault",
        "mishra's workshop",
        "mox diamond",
        "mystical tutor",
        "narset, parter of veils",
        "natural order",
        "necropotence",
        "notion thief",
        "opposition agent",
        "orcish bowmasters",
        "panoptic mirror",
        "rhystic study",
        "seedborn muse",
        "serra's sanctum",
        "smothering tithe",
        "survival of the fittest",
        "sway of the stars",
        "teferi's protection",
        "tergrid, god of fright",
        "thassa's oracle",
        "the one ring",
        "the tabernacle at pendrell vale",
        "underworld breach",
        "urza, lord high artificer",
        "vampiric tutor",
        "vorinclex, voice of hunger",
        "winota, joiner of forces",
        "worldly tutor",
        "yuriko, the tiger's shadow",
    }
)

TUTOR_CARDS: frozenset[str] = frozenset(
    {
        "academy rector",
        "altar of bone",
        "archmage ascension",
        "artificer's intuition",
        "behold the beyond",
        "beseech the mirror",
        "beseech the queen",
        "birthing pod",
        "bring to light",
        "buried alive",
        "captain sisay",
        "chord of calling",
        "cruel tutor",
        "dark petition",
        "demonic collusion",
        "demonic counsel",
        "demonic tutor",
        "diabolic intent",
        "diabolic revelation",
        "diabolic tutor",
        "eladamri's call",
        "eldritch evolution",
        "enlightened tutor",
        "entomb",
        "fabricate",
        "fauna shaman",
        "finale of devastation",
        "gamble",
        "grim tutor",
        "idyllic tutor",
        "imperial seal",
        "increasing ambition",
        "infernal tutor",
        "insidious dreams",
        "intuition",
        "long-term plans",
        "maralen of the mornsong",
        "mastermind's acquisition",
        "merchant scroll",
        "mystical tutor",
        "natural order",
        "personal tutor",
        "prime speaker vannifar",
        "profane tutor",
        "razaketh's rite",
        "reshape",
        "rhystic tutor",
        "scheming symmetry",
        "shared summons",
        "sidisi, undead vizier",
        "solve the equation",
        "survival of the fittest",
        "sylvan tutor",
        "tooth and nail",
        "traverse the ulvenwald",
        "unmarked grave",
        "vampiric tutor",
        "varragoth, bloodsky sire",
        "wargate",
        "whir of invention",
        "wishclaw talisman",
        "worldly tutor",
    }
)

# =============================================================================
# TWO-CARD COMBOS
# =============================================================================

# Combined mana cost below this makes a combo "early game"
EARLY_GAME_COST_LIMIT = 8

# (card a, card b, description, total mana cost)
_COMBOS: tuple[tuple[str, str, str, int], ...] = (
    ("kiki-jiki, mirror breaker", "zealous conscripts", "Infinite creatures with haste", 8),
    ("sanguine bond", "exquisite blood", "Infinite life drain", 10),
    ("mikaeus, the unhallowed", "triskelion", "Infinite damage", 10),
    ("splinter twin", "deceiver exarch", "Infinite creatures with haste", 7),
    ("isochron scepter", "dramatic reversal", "Infinite mana with mana rocks", 4),
    (
        "simic growth chamber",
        "retreat to coralhelm",
        "Infinite landfall with exploration effect",
        5,
    ),
)

# Keyed by unordered pair so lookups are symmetric
TWO_CARD_COMBOS: dict[frozenset[str], tuple[str, int]] = {
    frozenset((a, b)): (description, total_cost) for a, b, description, total_cost in _COMBOS
}


def find_combo(card_a: str, card_b: str) -> tuple[str, int] | None:
    """
    Look up a catalogued combo by its two lower-cased card names.

    Returns:
        (description, total mana cost) or None if the pair is not a known combo
    """
    if card_a == card_b:
        return None
    return TWO_CARD_COMBOS.get(frozenset((card_a, card_b)))
