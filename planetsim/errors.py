#!/usr/bin/env python3
"""
Exceptions raised at the simulator's configuration boundaries.
"""


class InvalidConfiguration(ValueError):
    """A preset or body definition violates the engine's invariants."""
