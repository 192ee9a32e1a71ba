"""
Licenses module - License record and key management.

This module handles:
- License entity, key format and key generation
- Validity evaluation
- Admin control (issue, enable/disable, device release, listing)
- License store adapters
"""
