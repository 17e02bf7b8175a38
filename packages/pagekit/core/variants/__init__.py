"""Interaction state for dynamic nodes."""

from pagekit.core.variants.models import VariantRecord
from pagekit.core.variants.state_machine import VariantStateMachine

__all__ = [
    "VariantRecord",
    "VariantStateMachine",
]
