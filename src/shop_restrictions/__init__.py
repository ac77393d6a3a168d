"""
Shop sell restrictions.

Lets an event script declare which inventory entries the next shop it opens
will buy from the party. The rule model and its evaluation live in
``shop_restrictions.restrictions``; the scene, party and interpreter modules
are the host-runtime side that carries a restriction set to a shop session.
"""

__version__ = "0.1.0"

__all__ = [
    "restrictions",
    "interpreter",
    "shop",
]
