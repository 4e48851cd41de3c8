"""Core business logic layer.

Subpackages:
- shopping: ingredient normalization and shopping list presentation
- cache: the session recipe cache
- search: discovery (search / load more) over cache and oracle
- planning: bulk plan/favourite operations
- images: rate-gated background image generation
"""
__all__ = ["shopping", "cache", "search", "planning", "images"]
