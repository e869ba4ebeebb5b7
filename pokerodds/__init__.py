"""
pokerodds: Texas hold'em hand evaluation and equity engine

Finds the best five-card hand among up to seven cards, compares hands with
full kicker tie-breaking, and computes hero win/tie probabilities against
opponent ranges by exhaustive enumeration or Monte Carlo sampling.
"""

__version__ = "0.1.0"
