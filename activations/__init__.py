"""
Activations module - Per-domain activations and the activation cap.

This module handles:
- Activation entity and domain logic
- Production/development domain classification
- Activate, deactivate and heartbeat operations
"""
