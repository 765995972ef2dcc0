from typing import Dict, List

from models.sw360_data import (
    Sw360Component,
    Sw360ComponentSearchResult,
    create_sw360_component,
    create_sw360_component_search,
)
from sw360api.sw360_client import Sw360BaseApiClient


class Sw360ComponentApiClient(Sw360BaseApiClient):

    def create_component(self, body_text: str) -> Sw360Component:
        result = self.post(self.url("/components"), body_text)
        self.raise_for_result(f"Sw360ComponentApiClient.create_component body_text='{body_text}'", result)
        return create_sw360_component(result.response_body)

    def get_component(self, component_id: str) -> Sw360Component:
        result = self.get(self.url(f"/components/{component_id}"))
        self.raise_for_result(f"Sw360ComponentApiClient.get_component id={component_id}", result)
        return create_sw360_component(result.response_body)

    def get_components(self) -> List[Sw360ComponentSearchResult]:
        result = self.get(self.url("/components"))
        self.raise_for_result("Sw360ComponentApiClient.get_components", result)
        return create_sw360_component_search(result.response_body).get_search_results()

    def get_sw360_component_name_id_map(self) -> Dict[str, str]:
        return {c.get_root_value("name").lower(): c.get_id() for c in self.get_components()}

    def update_component(self, component_id: str, body_text: str) -> Sw360Component:
        result = self.patch(self.url(f"/components/{component_id}"), body_text)
        self.raise_for_result(
            f"Sw360ComponentApiClient.update_component id={component_id}, body_text={body_text}", result
        )
        return create_sw360_component(result.response_body)

    def delete_component(self, component_id: str) -> Sw360Component:
        result = self.delete(self.url(f"/components/{component_id}"))
        self.raise_for_result(f"Sw360ComponentApiClient.delete_component id={component_id}", result)
        return create_sw360_component(result.response_body)
