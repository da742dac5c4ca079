from highlander.api.bracket import router as bracket_router
from highlander.api.decks import router as decks_router
from highlander.api.health import router as health_router
from highlander.api.legality import router as legality_router

__all__ = [
    "bracket_router",
    "decks_router",
    "health_router",
    "legality_router",
]
