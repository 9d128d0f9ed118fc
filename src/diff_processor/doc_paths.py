from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

ARGUMENTS_SECTION = "Arguments Reference"
ATTRIBUTES_SECTION = "Attributes Reference"


@dataclass(frozen=True)
class DocsConvention:
    """Naming rules that map an entity name to its documentation file."""

    provider_prefix: str = "google_"
    resource_subdir: str = "website/docs/r"
    datasource_subdir: str = "website/docs/d"
    extension: str = ".html.markdown"

    def stripped_name(self, entity: str) -> str:
        if self.provider_prefix and entity.startswith(self.provider_prefix):
            return entity[len(self.provider_prefix):]
        return entity

    def _relative_path(self, subdir: str, entity: str) -> str:
        return f"{subdir.strip('/')}/{self.stripped_name(entity)}{self.extension}"

    def resource_doc_rel(self, entity: str) -> str:
        return self._relative_path(self.resource_subdir, entity)

    def datasource_doc_rel(self, entity: str) -> str:
        return self._relative_path(self.datasource_subdir, entity)

    def doc_path(self, rel: str, *, root: Path) -> Path:
        return root / rel

    def report_path(self, rel: str) -> str:
        # Reported paths are docs-root relative so reports match across checkouts.
        return "/" + rel


DEFAULT_CONVENTION = DocsConvention()
