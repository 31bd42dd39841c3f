"""
Pydantic models for scaffold requests and the template catalog file.
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError, model_validator

from ..errors import CatalogError

DEFAULT_CODE_TEMPLATE = "game-screen-logic"
CATALOG_FILENAME = "templates.toml"


class TemplateDescriptor(BaseModel):
    """
    Identifies a template archive and the placeholders it uses.

    Attributes:
        archive_id: Opaque token resolvable by a template source (catalog `id`).
        internal_name: Placeholder string embedded in the archive's entry paths.
        code_template: Identifier of the code template used to seed the project.
        archive: Archive file name relative to the template directory.
        description: Free-form text shown to users picking a template.
    """
    archive_id: str = Field(alias="id", min_length=1)
    internal_name: str
    code_template: str = DEFAULT_CODE_TEMPLATE
    archive: Optional[str] = None
    description: str = ""

    model_config = {
        "frozen": True,
        "extra": "forbid",
        "populate_by_name": True,
    }

    @property
    def archive_name(self) -> str:
        return self.archive or f"{self.archive_id}.zip"


class ScaffoldRequest(BaseModel):
    """
    One invocation of the scaffolder.

    Identifier legality (no separators, no `..`) is checked by the path
    rewriter so that failures surface as InvalidIdentifier.
    """
    project_name: str
    package_id: str
    destination_root: Path
    template: TemplateDescriptor

    model_config = {
        "frozen": True,
        "arbitrary_types_allowed": True,
    }


class TemplateCatalog(BaseModel):
    """
    Templates available in a template directory, keyed by archive id.
    """
    templates: List[TemplateDescriptor] = Field(default_factory=list)

    model_config = {"extra": "forbid"}

    @model_validator(mode="after")
    def _check_unique_ids(self) -> "TemplateCatalog":
        seen: set[str] = set()
        for template in self.templates:
            if template.archive_id in seen:
                raise ValueError(f"Duplicate template id: {template.archive_id}")
            seen.add(template.archive_id)
        return self

    def get(self, archive_id: str) -> Optional[TemplateDescriptor]:
        for template in self.templates:
            if template.archive_id == archive_id:
                return template
        return None

    def ids(self) -> List[str]:
        return [template.archive_id for template in self.templates]


def load_catalog(path: Path | str) -> TemplateCatalog:
    """
    Load and validate a TOML template catalog.

    The file holds one `[[template]]` block per archive:

        [[template]]
        id = "platformer"
        archive = "platformer.zip"
        internal_name = "TemplateGame"
        code_template = "game-screen-logic"

    Raises:
        CatalogError: If the file is missing, unreadable, or invalid.
    """
    catalog_path = Path(path).expanduser().resolve()
    if not catalog_path.exists():
        raise CatalogError("Template catalog not found", path=catalog_path)

    try:
        with catalog_path.open("rb") as handle:
            raw_data: Dict[str, Any] = tomllib.load(handle)
    except OSError as exc:
        raise CatalogError(f"Unable to read template catalog: {exc}", path=catalog_path) from exc
    except tomllib.TOMLDecodeError as exc:
        raise CatalogError(f"Invalid TOML in template catalog: {exc}", path=catalog_path) from exc

    if "templates" in raw_data:
        raise CatalogError("Use [[template]] blocks (singular) instead of [[templates]].", path=catalog_path)

    normalized = dict(raw_data)
    normalized["templates"] = _coerce_table_array(normalized.pop("template", None), catalog_path)

    try:
        return TemplateCatalog.model_validate(normalized)
    except ValidationError as exc:
        raise CatalogError(str(exc), path=catalog_path) from exc


def _coerce_table_array(value: Any, catalog_path: Path) -> list[dict]:
    if value is None:
        return []
    if isinstance(value, dict):
        return [value]
    if isinstance(value, list):
        if not all(isinstance(item, dict) for item in value):
            raise CatalogError("Each [[template]] entry must be a table.", path=catalog_path)
        return value
    raise CatalogError("Invalid [template] block; expected a table or array of tables.", path=catalog_path)
