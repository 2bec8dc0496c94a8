"""Review policy file loading."""

from .policy_loader import PolicyConfigError, PolicyLoader

__all__ = [
    "PolicyConfigError",
    "PolicyLoader",
]
