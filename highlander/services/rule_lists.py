"""
Rule list loading.

Reads the banned, allowed and singleton-exception lists from the data
directory. Each file holds one card name per line; double quotes are
stripped, blank lines and lines starting with "//" are skipped.
"""

import logging
from functools import lru_cache
from pathlib import Path

from highlander.config import settings
from highlander.models.failure import FailureKind, KnownError
from highlander.models.rule_lists import RuleLists

logger = logging.getLogger(__name__)

BANNED_LIST_FILE = "banned_list.csv"
ALLOWED_LIST_FILE = "allowed_list.csv"
SINGLETON_EXCEPTIONS_FILE = "singleton_exceptions.csv"


class RuleListError(KnownError):
    """Raised when a rule list file is missing or unreadable."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        super().__init__(
            kind=FailureKind.CONFIGURATION_ERROR,
            message="Format rule lists are unavailable.",
            detail=f"{path}: {reason}",
            status_code=503,
        )


def parse_card_list(text: str) -> list[str]:
    """
    Parse rule list text into card names.

    Args:
        text: Raw file contents

    Returns:
        Card names in file order
    """
    names: list[str] = []
    for line in text.split("\n"):
        name = line.replace('"', "").strip()
        if not name or name.startswith("//"):
            continue
        names.append(name)
    return names


def load_card_list(path: Path) -> frozenset[str]:
    """
    Load one rule list file.

    Raises:
        RuleListError: If the file does not exist or cannot be read
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise RuleListError(path, "file not found") from e
    except (OSError, UnicodeDecodeError) as e:
        raise RuleListError(path, str(e)) from e

    return frozenset(parse_card_list(text))


def load_rule_lists(data_dir: Path | None = None) -> RuleLists:
    """
    Load all three rule lists from a directory.

    Args:
        data_dir: Directory holding the CSV files. Defaults to settings.data_dir

    Returns:
        Immutable RuleLists

    Raises:
        RuleListError: If any list is missing or unreadable
    """
    if data_dir is None:
        data_dir = settings.data_dir

    rules = RuleLists(
        banned=load_card_list(data_dir / BANNED_LIST_FILE),
        allowed=load_card_list(data_dir / ALLOWED_LIST_FILE),
        singleton_exceptions=load_card_list(data_dir / SINGLETON_EXCEPTIONS_FILE),
    )

    overlap = rules.banned & rules.allowed
    if overlap:
        logger.warning(
            "Cards on both banned and allowed lists (allowed wins): %s",
            ", ".join(sorted(overlap)),
        )

    logger.info(
        "Loaded rule lists: %d banned, %d allowed, %d singleton exceptions",
        len(rules.banned),
        len(rules.allowed),
        len(rules.singleton_exceptions),
    )
    return rules


@lru_cache(maxsize=1)
def get_rule_lists() -> RuleLists:
    """
    Get cached rule lists.

    Loaded once on first use.
    """
    return load_rule_lists()
