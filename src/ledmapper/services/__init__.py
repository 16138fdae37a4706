"""Services built on top of mapping devices."""

from ledmapper.services.mapping_session import MappingSession

__all__ = ["MappingSession"]
