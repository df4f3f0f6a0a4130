"""
Admin Controls

Admin-gated root, suspension, metadata location and admin transfer.
"""

from .controls import AdminControls, validate_root

__all__ = ["AdminControls", "validate_root"]
