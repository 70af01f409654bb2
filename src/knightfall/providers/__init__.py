from __future__ import annotations

from typing import List

from knightfall.config import EngineOptions

from .base import MoveProvider
from .book import OpeningBookProvider
from .endgame import EndgameProvider
from .search import SearchProvider


def default_providers(options: EngineOptions) -> List[MoveProvider]:
    """Opening book first (when configured), then endgames, search as the fallback."""
    providers: List[MoveProvider] = []
    if options.book_path:
        providers.append(OpeningBookProvider(options.book_path))
    providers.append(EndgameProvider())
    providers.append(SearchProvider())
    return providers


__all__ = [
    "EndgameProvider",
    "MoveProvider",
    "OpeningBookProvider",
    "SearchProvider",
    "default_providers",
]
