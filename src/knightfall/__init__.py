"""knightfall: chess move generation, attack detection and move selection."""

__version__ = "0.1.0"
