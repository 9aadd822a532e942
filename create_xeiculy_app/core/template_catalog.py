"""Template catalog loading."""
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import ValidationError as PydanticValidationError

from create_xeiculy_app.core.errors import ConfigurationError
from create_xeiculy_app.models.template import TemplateCatalogFile, TemplateEntry

DEFAULT_CATALOG = Path(__file__).parent.parent / "templates" / "catalog.yml"


class TemplateCatalog:
    """Templates the select prompt offers."""

    def __init__(self, entries: List[TemplateEntry]):
        self.entries = entries

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "TemplateCatalog":
        """Load a catalog YAML file.

        Args:
            path: Catalog file. Defaults to the bundled templates/catalog.yml

        Raises:
            ConfigurationError: If the file is missing, unparsable or invalid
        """
        catalog_path = path or DEFAULT_CATALOG
        if not catalog_path.exists():
            raise ConfigurationError(f"Template catalog not found at {catalog_path}")

        try:
            with open(catalog_path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {catalog_path}: {e}") from e

        try:
            parsed = TemplateCatalogFile.model_validate(data or {})
        except PydanticValidationError as e:
            raise ConfigurationError(f"Invalid template catalog {catalog_path}: {e}") from e

        return cls(parsed.templates)

    def values(self) -> List[str]:
        return [entry.value for entry in self.entries]

    def get(self, value: str) -> Optional[TemplateEntry]:
        for entry in self.entries:
            if entry.value == value:
                return entry
        return None
