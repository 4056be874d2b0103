"""
Browser automation for device pairing.

Drives a headless Playwright session against nanomid.com to pair a device
(Quickcode + label) with the single configured account.

Main Components:
- types: PairingResult contract
- errors: failure taxonomy and result formatting
- selectors: selector-fallback cascades (label -> placeholder -> CSS, role -> CSS)
- constants: site-specific selectors, markers and browser parameters
- browser: ephemeral session lifecycle
- workflow: the login -> navigate -> fill -> submit -> confirm routine

Usage:
    from pairing.automation import pair_device

    result = await pair_device(settings, otp="123456", label="Kitchen TV")
"""

from pairing.automation.types import PairingResult
from pairing.automation.workflow import pair_device

__all__ = [
    "pair_device",
    "PairingResult",
]
