"""
ChickChain Trace - Core Package

Reconciles the ledger history of a poultry batch (farm, slaughter,
transformation, distribution) into a deduplicated provenance narrative
and a current-state snapshot for consumers.
"""

__version__ = "0.1.0"
