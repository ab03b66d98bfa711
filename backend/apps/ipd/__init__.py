"""
Iterated Prisoner's Dilemma engine.

Strategies repeatedly Cooperate or Defect against an opponent, score
under a configurable payoff matrix, and are evaluated in 1v1 matches,
round-robin tournaments and multi-generation population runs.
"""
__version__ = '0.4.0'
