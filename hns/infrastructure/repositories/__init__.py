"""Repository implementations for infrastructure layer."""

from .hostname_repository import HostnameRepository
from .template_repository import TemplateRepository

__all__ = ["HostnameRepository", "TemplateRepository"]
