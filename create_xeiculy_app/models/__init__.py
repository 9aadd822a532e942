"""Data models for create-xeiculy-app."""
from create_xeiculy_app.models.settings import (
    OutcomeStatus,
    PackageManager,
    RunSettings,
    ScaffoldOutcome,
    TemplateDownloadResult,
)
from create_xeiculy_app.models.template import TemplateCatalogFile, TemplateEntry

__all__ = [
    'OutcomeStatus',
    'PackageManager',
    'RunSettings',
    'ScaffoldOutcome',
    'TemplateDownloadResult',
    'TemplateCatalogFile',
    'TemplateEntry',
]
