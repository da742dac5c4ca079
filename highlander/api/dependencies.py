"""
FastAPI dependencies for the shared reference data.

Routes receive the card store and rule lists through Depends so tests can
substitute fixtures with app.dependency_overrides.
"""

from highlander.models.rule_lists import RuleLists
from highlander.services.card_store import CardStore, card_store_registry
from highlander.services.rule_lists import get_rule_lists


def get_card_store() -> CardStore:
    """Current card store. Raises CardStoreError (503) until one is loaded."""
    return card_store_registry.current()


def get_rules() -> RuleLists:
    """Process-wide rule lists. Raises RuleListError (503) if they cannot be loaded."""
    return get_rule_lists()
