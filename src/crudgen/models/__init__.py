"""Model metadata resolution."""

from crudgen.models.base import ModelResolver
from crudgen.models.descriptor import ModelDescriptor, RuleValue, normalize_rules
from crudgen.models.import_resolver import ImportModelResolver
from crudgen.models.manifest_resolver import Manifest, ManifestModel, ManifestModelResolver
from crudgen.models.registry import create_resolver
from crudgen.models.source_resolver import SourceModelResolver

__all__ = [
    "ImportModelResolver",
    "Manifest",
    "ManifestModel",
    "ManifestModelResolver",
    "ModelDescriptor",
    "ModelResolver",
    "RuleValue",
    "SourceModelResolver",
    "create_resolver",
    "normalize_rules",
]
