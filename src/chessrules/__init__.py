"""Chess rules engine: board state, move legality, check and mate detection."""

__version__ = "0.1.0"
