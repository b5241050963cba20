"""Infrastructure Layer: storage engine, credentials, fault injection, logging.

Invariants:
    - Infrastructure never imports from services/
    - Each collaborator is reachable from the catalog only through core/protocols.py
"""
