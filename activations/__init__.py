"""
Activations module - device binding and activation history.

This module handles:
- Device binding policy for single-device licenses
- Activation of a license on a device
- Append-only activation trail
"""
