"""Infrastructure Layer: database access and logging setup.

Invariants:
    - Infrastructure never imports rule logic from services/
    - All SQLAlchemy exceptions leave this layer as core.errors.DatabaseError
"""
