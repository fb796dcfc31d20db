"""Core Layer: pure rule logic, tag grammar and translations. No IO, no DB.

Invariants:
    - No module in core/ imports from services/, api/ or infrastructure/
    - Rules in core/ are synchronous predicates over a FieldContext

Design Decisions:
    - Functional core separated from the imperative shell: database rules and
      the password hook live in services/ because they await IO
"""
