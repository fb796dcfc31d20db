"""API Layer: FastAPI integration (error handlers and dependencies).

Invariants:
    - Nothing here is imported by core/ or services/
    - Hosts opt in by calling register_error_handlers(app)
"""
