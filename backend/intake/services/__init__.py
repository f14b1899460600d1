"""Services Layer — orchestrates core functions around infrastructure IO.

Invariants:
    - Services depend on core Protocols, never on a concrete backend or transport
    - Services never build HTTP responses; routes do
"""
