# locallibrary/exceptions.py
"""
Exceptions raised by the store and the catalog workflow.

Form validation problems are not exceptions: they come back as
``Invalid`` results and are rendered inline. Only conditions that end
the request early are modelled here.
"""


class CatalogError(Exception):
    """Base class for catalog errors."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(CatalogError):
    """An id did not resolve to a record of the given kind."""

    status_code = 404

    def __init__(self, kind: str, entity_id: str):
        super().__init__(f"{kind.capitalize()} not found: {entity_id}")
        self.kind = kind
        self.entity_id = entity_id


class StoreFailure(CatalogError):
    """The store could not complete an operation."""
