"""Template resolution, retrieval and feature provisioning."""

from genapp.core.catalog import TEMPLATE_CATALOG, catalog_entries, resolve
from genapp.core.config import CONFIG_FILENAME, Answers, TemplateSource
from genapp.core.errors import (
    CommandError,
    FetchError,
    ProvisioningError,
    ScaffoldError,
    TemplateNotFoundError,
)
from genapp.core.fetcher import FetchMethod, TemplateFetcher
from genapp.core.pkg_manager import PackageManager, detect
from genapp.core.provision import ProvisionContext, provision
from genapp.core.runner import CommandRunner, SubprocessRunner
from genapp.core.scaffold import ScaffoldResult, Stage, scaffold_project
from genapp.core.types import Feature, Framework

__all__ = [
    "CONFIG_FILENAME",
    "TEMPLATE_CATALOG",
    "Answers",
    "CommandError",
    "CommandRunner",
    "Feature",
    "FetchError",
    "FetchMethod",
    "Framework",
    "PackageManager",
    "ProvisionContext",
    "ProvisioningError",
    "ScaffoldError",
    "ScaffoldResult",
    "Stage",
    "SubprocessRunner",
    "TemplateFetcher",
    "TemplateNotFoundError",
    "TemplateSource",
    "catalog_entries",
    "detect",
    "provision",
    "resolve",
    "scaffold_project",
]
