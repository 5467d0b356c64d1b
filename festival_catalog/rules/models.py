from pydantic import BaseModel, ConfigDict, Field

from festival_catalog.domain.entities import SortKey


class StorageRules(BaseModel):
    favorites_key: str = "{festival_id}_favorites"
    ratings_key: str = "ratings_{festival_id}_{drink_id}"
    selected_festival_key: str = "selected_festival_id"
    hide_unavailable_key: str = "hide_unavailable"
    data_dir_env: str = "FESTIVAL_CATALOG_DATA_DIR"
    default_data_dir: str = "./data"


class CatalogRules(BaseModel):
    drinks_staleness_seconds: int = Field(default=3600, ge=0)
    default_sort: SortKey = "name_asc"
    clear_styles_on_category_change: bool = True


class ProjectRules(BaseModel):
    slug: str = "festival-catalog"
    rules_version: str = "1"


class Rules(BaseModel):
    model_config = ConfigDict(extra="forbid")

    project: ProjectRules = Field(default_factory=ProjectRules)
    storage: StorageRules = Field(default_factory=StorageRules)
    catalog: CatalogRules = Field(default_factory=CatalogRules)
