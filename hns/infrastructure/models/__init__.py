"""ORM models used by the application infrastructure."""

from .hostname import HostnameModel
from .template import TemplateGroupModel, TemplateModel

__all__ = ["HostnameModel", "TemplateGroupModel", "TemplateModel"]
