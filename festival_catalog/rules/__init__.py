from festival_catalog.rules.loader import load_rules
from festival_catalog.rules.models import CatalogRules, ProjectRules, Rules, StorageRules

__all__ = ["load_rules", "Rules", "CatalogRules", "ProjectRules", "StorageRules"]
