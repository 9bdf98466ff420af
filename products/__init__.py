"""
Products module - Licensable plugin catalogue.

This module handles:
- Product entity and domain logic
- Product persistence
- Admin product management
"""
