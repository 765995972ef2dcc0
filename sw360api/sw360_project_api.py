from typing import Dict, List, Tuple

from loggers.sw360_client_logger import sw360_client_logger as logger
from models.sw360_data import (
    Sw360Project,
    Sw360ProjectSearchResult,
    create_sw360_project,
    create_sw360_project_search,
)
from sw360api.exceptions import PaginationConsistencyError
from sw360api.sw360_client import Sw360BaseApiClient


class Sw360ProjectApiClient(Sw360BaseApiClient):

    def create_project(self, body_text: str) -> Sw360Project:
        result = self.post(self.url("/projects"), body_text)
        self.raise_for_result(f"Sw360ProjectApiClient.create_project body_text='{body_text}'", result)
        return create_sw360_project(result.response_body)

    def get_project(self, project_id: str) -> Sw360Project:
        result = self.get(self.url(f"/projects/{project_id}"))
        self.raise_for_result(f"Sw360ProjectApiClient.get_project id={project_id}", result)
        return create_sw360_project(result.response_body)

    def get_projects(self) -> List[Sw360ProjectSearchResult]:
        """
        GET /projects, following the page info when the server pages the listing.

        The first response gives totalElements and totalPages; pages 1..totalPages are
        then fetched in order. Every page must report the page number that was asked
        for, and the collected results must add up to totalElements, otherwise the
        listing changed while it was read and PaginationConsistencyError is raised.
        """
        operation = "Sw360ProjectApiClient.get_projects"
        result = self.get(self.url("/projects"))
        self.raise_for_result(operation, result)

        search_entry = create_sw360_project_search(result.response_body)
        page_info = search_entry.get_page_info()
        if not page_info:
            return search_entry.get_search_results()

        total_pages = page_info["totalPages"]
        total_elements = page_info["totalElements"]
        results: List[Sw360ProjectSearchResult] = list(search_entry.get_search_results())

        for number in range(1, total_pages + 1):
            page_result = self.get(self.url(f"/projects?page={number}"))
            self.raise_for_result(f"{operation} page={number}", page_result)

            page_entry = create_sw360_project_search(page_result.response_body)
            new_page_info = page_entry.get_page_info()
            if not new_page_info:
                logger.error(f"{operation} page info of page {number} is empty")
                raise PaginationConsistencyError(operation, f"page info of page {number} is empty")
            if new_page_info["number"] != number:
                reason = (
                    f"The value of number does not match. Expected value: {number}, "
                    f"actual value: {new_page_info['number']}."
                )
                logger.error(f"{operation} {reason}")
                raise PaginationConsistencyError(operation, reason)

            results.extend(page_entry.get_search_results())

        if len(results) != total_elements:
            reason = (
                f"The results size does not match. Expected value: {total_elements}, "
                f"actual value: {len(results)}."
            )
            logger.error(f"{operation} {reason}")
            raise PaginationConsistencyError(operation, reason)

        return results

    def get_sw360_project_name_id_map(self) -> Dict[Tuple[str, str], str]:
        """(name, version) -> id, lower-cased. A project without a version maps to ""."""
        name_id_map: Dict[Tuple[str, str], str] = {}
        for project in self.get_projects():
            name = project.get_root_value("name").lower()
            version = project.get_root_value("version").lower() if project.has_root_value("version") else ""
            name_id_map[(name, version)] = project.get_id()
        return name_id_map

    def update_project(self, project_id: str, body_text: str) -> Sw360Project:
        result = self.patch(self.url(f"/projects/{project_id}"), body_text)
        self.raise_for_result(
            f"Sw360ProjectApiClient.update_project id={project_id}, body_text={body_text}", result
        )
        return create_sw360_project(result.response_body)

    def update_dependency_network(self, project_id: str, body_text: str) -> Sw360Project:
        result = self.patch(self.url(f"/projects/network/{project_id}"), body_text)
        self.raise_for_result(
            f"Sw360ProjectApiClient.update_dependency_network id={project_id}, body_text={body_text}", result
        )
        return create_sw360_project(result.response_body)

    def delete_project(self, project_id: str) -> Sw360Project:
        result = self.delete(self.url(f"/projects/{project_id}"))
        self.raise_for_result(f"Sw360ProjectApiClient.delete_project id={project_id}", result)
        return create_sw360_project(result.response_body)

    def create_release_relationship(self, project_id: str, release_ids: List[str]) -> Sw360Project:
        """Link the project to the given releases (POST /projects/{id}/releases)."""
        body_text = self.body_from_string_list(release_ids)
        result = self.post(self.url(f"/projects/{project_id}/releases"), body_text)
        self.raise_for_result(
            f"Sw360ProjectApiClient.create_release_relationship id={project_id}, release_ids='{release_ids}'",
            result,
        )
        return create_sw360_project(result.response_body)
