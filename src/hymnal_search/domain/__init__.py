"""Domain value objects shared by the search core and its collaborators."""

from hymnal_search.domain.model import Document


__all__ = ["Document"]
