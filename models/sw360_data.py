"""
Thin typed views over the HAL+JSON documents the SW360 REST API sends and receives.

Each entity keeps the raw dict and exposes accessors for the fields its kind supports.
An entity built locally (e.g. a create request body) has no "_links.self" and therefore
no id; get_id() only succeeds on documents returned by the server.
"""
from __future__ import annotations

import json
from typing import Any, Dict, FrozenSet, List, Optional

from loggers.sw360_client_logger import sw360_client_logger as logger
from sw360api.exceptions import MissingFieldError, MissingLinkError


def _parse_json_text(json_text: str = "") -> Dict[str, Any]:
    if not json_text or not json_text.strip():
        return {}
    data = json.loads(json_text)
    if not isinstance(data, dict):
        # e.g. the multi-status list DELETE answers with
        logger.debug(f"Response is a JSON {type(data).__name__}, not an object; using an empty node.")
        return {}
    return data


def get_id_from_url(url: str) -> str:
    """Return the last path segment of a hypermedia link url."""
    resource_id = (url or "").rstrip().rsplit("/", 1)[-1]
    if not resource_id:
        raise MissingLinkError("self", url)
    return resource_id


def _embedded_list(node: Dict[str, Any], collection: str) -> List[Dict[str, Any]]:
    embedded = node.get("_embedded")
    if not isinstance(embedded, dict):
        return []
    items = embedded.get(collection)
    if not isinstance(items, list):
        return []
    return [i for i in items if isinstance(i, dict)]


class Sw360JsonHolder:
    # None means any key may be written
    SUPPORTED_FIELDS: Optional[FrozenSet[str]] = None

    def __init__(self, json_node: Optional[Dict[str, Any]] = None) -> None:
        self.json_node: Dict[str, Any] = json_node if json_node is not None else {}

    def get_root_value(self, key: str) -> str:
        if key not in self.json_node or self.json_node[key] is None:
            logger.warning(f"{type(self).__name__}.get_root_value The specified key={key} does not exist in this node.")
            raise MissingFieldError(key)
        value = self.json_node[key]
        if isinstance(value, bool):
            return "true" if value else "false"
        return value if isinstance(value, str) else str(value)

    def has_root_value(self, key: str) -> bool:
        return self.json_node.get(key) is not None

    def set_root_value(self, key: str, value: Any) -> None:
        if self.SUPPORTED_FIELDS is not None and key not in self.SUPPORTED_FIELDS:
            raise ValueError(f"{type(self).__name__} does not support the field '{key}'")
        if isinstance(value, (str, int, bool)) or value is None:
            self.json_node[key] = value
        elif isinstance(value, (list, tuple)):
            self.json_node[key] = list(value)
        elif isinstance(value, dict):
            self.json_node[key] = dict(value)
        else:
            raise TypeError(f"Unsupported value type for '{key}': {type(value).__name__}")

    def get_json_as_string(self) -> str:
        return json.dumps(self.json_node)


class Sw360ObjectNodeHolder(Sw360JsonHolder):

    def get_link_url(self, link_name: str) -> str:
        links = self.json_node.get("_links")
        link = links.get(link_name) if isinstance(links, dict) else None
        href = link.get("href") if isinstance(link, dict) else None
        if not href:
            raise MissingLinkError(link_name)
        return href

    def get_self_url(self) -> str:
        return self.get_link_url("self")

    def get_id(self) -> str:
        return get_id_from_url(self.get_self_url())

    def get_embedded_attachment_entries(self) -> List["Sw360EmbeddedAttachment"]:
        return [Sw360EmbeddedAttachment(node) for node in _embedded_list(self.json_node, "sw360:attachments")]


class Sw360Project(Sw360ObjectNodeHolder):
    SUPPORTED_FIELDS = frozenset({
        "name", "version", "visibility", "description", "projectType", "homepage",
        "linkedReleases", "dependencyNetwork", "state", "tag",
    })

    def get_release_relationship(self) -> List[str]:
        """Ids of the releases linked to this project."""
        linked = self.json_node.get("linkedReleases")
        if not isinstance(linked, list):
            return []
        release_ids: List[str] = []
        for node in linked:
            release_url = Sw360JsonHolder(node if isinstance(node, dict) else {}).get_root_value("release")
            release_ids.append(get_id_from_url(release_url))
        return release_ids


class Sw360ProjectSearchResult(Sw360ObjectNodeHolder):
    pass


class Sw360ProjectSearch(Sw360ObjectNodeHolder):

    def get_search_results(self) -> List[Sw360ProjectSearchResult]:
        return [Sw360ProjectSearchResult(node) for node in _embedded_list(self.json_node, "sw360:projects")]

    def get_page_info(self) -> Dict[str, int]:
        """
        Returns {"size", "totalElements", "totalPages", "number"} or {} if the
        response is not paged.
        """
        page = self.json_node.get("page")
        if not isinstance(page, dict):
            return {}
        holder = Sw360JsonHolder(page)
        return {key: int(holder.get_root_value(key)) for key in ("size", "totalElements", "totalPages", "number")}


class Sw360Component(Sw360ObjectNodeHolder):
    SUPPORTED_FIELDS = frozenset({
        "name", "componentType", "description", "homepage", "visibility", "categories",
    })


class Sw360ComponentSearchResult(Sw360ObjectNodeHolder):
    pass


class Sw360ComponentSearch(Sw360ObjectNodeHolder):

    def get_search_results(self) -> List[Sw360ComponentSearchResult]:
        return [Sw360ComponentSearchResult(node) for node in _embedded_list(self.json_node, "sw360:components")]


class Sw360Release(Sw360ObjectNodeHolder):
    SUPPORTED_FIELDS = frozenset({
        "name", "version", "componentId", "mainLicenseIds", "releaseIdToRelationship",
        "description", "homepage", "sourceCodeDownloadurl", "binaryDownloadurl",
    })

    def get_component_url(self) -> str:
        return self.get_link_url("sw360:component")

    def get_component_id(self) -> str:
        return get_id_from_url(self.get_component_url())

    def get_release_relationship(self) -> Dict[str, str]:
        relationships = self.json_node.get("releaseIdToRelationship")
        if not isinstance(relationships, dict):
            return {}
        return {str(k): str(v) for k, v in relationships.items()}

    def get_main_license_ids(self) -> List[str]:
        ids = self.json_node.get("mainLicenseIds")
        if not isinstance(ids, list):
            return []
        return [str(i) for i in ids]


class Sw360ReleaseSearchResult(Sw360ObjectNodeHolder):
    pass


class Sw360ReleaseSearch(Sw360ObjectNodeHolder):

    def get_search_results(self) -> List[Sw360ReleaseSearchResult]:
        return [Sw360ReleaseSearchResult(node) for node in _embedded_list(self.json_node, "sw360:releases")]


class Sw360EmbeddedAttachment(Sw360ObjectNodeHolder):

    def get_filename(self) -> str:
        return self.get_root_value("filename")

    def get_sha1(self) -> str:
        return self.get_root_value("sha1")

    def get_attachment_type(self) -> str:
        return self.get_root_value("attachmentType")


# ----------------------------
# Factories (empty text -> empty object)
# ----------------------------

def create_sw360_project(json_text: str = "") -> Sw360Project:
    return Sw360Project(_parse_json_text(json_text))


def create_sw360_project_search(json_text: str = "") -> Sw360ProjectSearch:
    return Sw360ProjectSearch(_parse_json_text(json_text))


def create_sw360_component(json_text: str = "") -> Sw360Component:
    return Sw360Component(_parse_json_text(json_text))


def create_sw360_component_search(json_text: str = "") -> Sw360ComponentSearch:
    return Sw360ComponentSearch(_parse_json_text(json_text))


def create_sw360_release(json_text: str = "") -> Sw360Release:
    return Sw360Release(_parse_json_text(json_text))


def create_sw360_release_search(json_text: str = "") -> Sw360ReleaseSearch:
    return Sw360ReleaseSearch(_parse_json_text(json_text))
