"""Template catalog models."""
import re
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TemplateEntry(BaseModel):
    """One option of the template select prompt."""

    model_config = ConfigDict(extra='forbid')

    value: str = Field(..., description="Path of the template under the registry base")
    label: str = Field(..., description="Name shown in the prompt")
    hint: Optional[str] = None

    @field_validator('value')
    @classmethod
    def validate_value(cls, v):
        """Template values are registry sub-paths, not URLs or absolute paths."""
        if not re.match(r'^[A-Za-z0-9][A-Za-z0-9._\-/]*$', v) or '..' in v.split('/'):
            raise ValueError(
                f"Template value '{v}' must be a relative path of letters, digits, '.', '_', '-' or '/'"
            )
        return v


class TemplateCatalogFile(BaseModel):
    """Top-level layout of catalog.yml."""

    model_config = ConfigDict(extra='forbid')

    templates: List[TemplateEntry] = Field(..., min_length=1)

    @field_validator('templates')
    @classmethod
    def validate_unique(cls, v):
        seen = set()
        for entry in v:
            if entry.value in seen:
                raise ValueError(f"Duplicate template value '{entry.value}'")
            seen.add(entry.value)
        return v
