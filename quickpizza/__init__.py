"""QuickPizza Catalog Package: persistence layer for the QuickPizza demo service.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports only, no star exports
"""
