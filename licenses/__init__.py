"""
Licenses module - License issuing, validation and auditing.

This module handles:
- License entity and key generation
- Activation tokens
- License validation
- Audit log
- The license engine used by every entry point
"""
