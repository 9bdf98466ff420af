"""
Core module for shared domain infrastructure.

This module contains:
- Domain exceptions and value objects
- The persistence store and webhook signatures
- Middleware components
- Health and metrics views
"""

