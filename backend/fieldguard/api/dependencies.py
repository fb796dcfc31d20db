"""FastAPI dependencies for hosts that initialize fieldguard at startup."""

from fieldguard.services import validation as validation_module
from fieldguard.services.validation import Validation


def get_validation() -> Validation:
    """FastAPI dependency returning the process-wide Validation."""
    instance = validation_module.current()
    if instance is None:
        raise RuntimeError("Validation not initialized")
    return instance
