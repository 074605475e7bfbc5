"""
Draughtsim - Diagonal-capture board game engine with self-play AI.

Provides:
- Board rules (legal moves, capture, promotion)
- Actor policies: interactive, random, simulated lookahead
- Concurrent fork-join self-play for move selection
- A turn loop for interactive and headless games
"""

__version__ = "0.1.0"
