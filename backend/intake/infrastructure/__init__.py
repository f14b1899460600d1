"""Infrastructure Layer — storage backends, mail transport and cross-cutting concerns.

Invariants:
    - Every external call maps library exceptions to the core error hierarchy
    - Infrastructure never decides HTTP status codes
"""
