from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from configuration import Configuration as Config
from loggers.sw360_sync_logger import sw360_sync_logger as logger
from sw360api.sw360_component_api import Sw360ComponentApiClient
from sw360api.sw360_project_api import Sw360ProjectApiClient
from sw360api.sw360_release_api import Sw360ReleaseApiClient


@dataclass
class Sw360NameIdIndex:
    """
    Lower-cased name (and version) -> id lookups for one synchronization run.

    Built from a full listing of the catalog before the tree is reconciled and
    extended with every entity created during the run.
    """
    component_ids: Dict[str, str] = field(default_factory=dict)
    project_ids: Dict[Tuple[str, str], str] = field(default_factory=dict)
    release_ids: Dict[Tuple[str, str], str] = field(default_factory=dict)

    @staticmethod
    def _key(name: str, version: str) -> Tuple[str, str]:
        return (name or "").lower(), (version or "").lower()

    def find_component_id(self, name: str) -> Optional[str]:
        return self.component_ids.get((name or "").lower())

    def put_component_id(self, name: str, component_id: str) -> None:
        self.component_ids[(name or "").lower()] = component_id

    def find_project_id(self, name: str, version: str) -> Optional[str]:
        return self.project_ids.get(self._key(name, version))

    def put_project_id(self, name: str, version: str, project_id: str) -> None:
        self.project_ids[self._key(name, version)] = project_id

    def find_release_id(self, name: str, version: str) -> Optional[str]:
        return self.release_ids.get(self._key(name, version))

    def put_release_id(self, name: str, version: str, release_id: str) -> None:
        self.release_ids[self._key(name, version)] = release_id


def build_name_id_index(
        project_client: Sw360ProjectApiClient,
        component_client: Sw360ComponentApiClient,
        release_client: Sw360ReleaseApiClient,
) -> Sw360NameIdIndex:
    """List every component, project and release once and index them."""
    index = Sw360NameIdIndex(
        component_ids=dict(component_client.get_sw360_component_name_id_map()),
        project_ids=dict(project_client.get_sw360_project_name_id_map()),
        release_ids=dict(release_client.get_sw360_release_name_id_map()),
    )
    logger.info(
        f"SW360 index built: {len(index.component_ids)} components, "
        f"{len(index.project_ids)} projects, {len(index.release_ids)} releases"
    )
    return index


@dataclass
class Sw360SyncContext:
    """Clients, run-scoped index and the acting user, passed through one run."""
    project_client: Sw360ProjectApiClient
    component_client: Sw360ComponentApiClient
    release_client: Sw360ReleaseApiClient
    index: Sw360NameIdIndex
    username: str = ""

    @classmethod
    def create(
            cls,
            base_url: Optional[str] = None,
            token: Optional[str] = None,
            username: Optional[str] = None,
    ) -> "Sw360SyncContext":
        project_client = Sw360ProjectApiClient(base_url, token)
        component_client = Sw360ComponentApiClient(base_url, token)
        release_client = Sw360ReleaseApiClient(base_url, token)
        # fail before any listing if url or token is missing
        project_client.get_base_url()
        project_client.get_token()
        return cls(
            project_client=project_client,
            component_client=component_client,
            release_client=release_client,
            index=build_name_id_index(project_client, component_client, release_client),
            username=Config.sw360_username if username is None else username,
        )
