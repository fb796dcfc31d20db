"""fieldguard: tag-driven validation with database-aware rules.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Docstring-only __init__.py: explicit imports only, no star exports
"""
