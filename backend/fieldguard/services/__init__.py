"""Services Layer: rules that await IO, the rule runner and the Validation facade.

Invariants:
    - Services depend on core/ and infrastructure/, never on api/
    - Every rule callback may return a bool or an awaitable bool
"""
