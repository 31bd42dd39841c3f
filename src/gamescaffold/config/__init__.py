"""
Configuration helpers for the scaffolder.
"""

from .models import (
    CATALOG_FILENAME,
    DEFAULT_CODE_TEMPLATE,
    ScaffoldRequest,
    TemplateCatalog,
    TemplateDescriptor,
    load_catalog,
)
from .settings import ScaffolderSettings, get_settings

__all__ = [
    "CATALOG_FILENAME",
    "DEFAULT_CODE_TEMPLATE",
    "ScaffoldRequest",
    "TemplateCatalog",
    "TemplateDescriptor",
    "load_catalog",
    "ScaffolderSettings",
    "get_settings",
]
