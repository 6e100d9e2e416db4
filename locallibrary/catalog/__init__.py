"""
Catalog package for the Local Library site.

This package holds the author and genre pages: the declarative form
rules (``validation``), the per-kind settings shared by both entity
kinds (``kinds``), the create / update / delete workflow with its
duplicate and dependency checks (``workflow``) and the routes that
render its outcomes (``router``).
"""

from .router import router as catalog_router  # noqa: F401
