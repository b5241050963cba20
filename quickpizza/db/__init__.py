"""Database Layer: declarative Base and the table retention policy.

Invariants:
    - Everything here operates on a caller-provided session (no engine ownership)
"""
