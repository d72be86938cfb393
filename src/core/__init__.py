"""
Core domain models, minor-unit arithmetic, errors and contracts.

This module contains the foundational building blocks that are independent
of external systems (entry stores, payment providers, presentation).
"""
