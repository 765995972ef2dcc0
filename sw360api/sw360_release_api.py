from pathlib import Path
from typing import Dict, List, Tuple, Union

from models.enums import ATTACHMENT_MEDIA_TYPES, Sw360AttachmentType
from models.sw360_data import (
    Sw360Release,
    Sw360ReleaseSearchResult,
    create_sw360_release,
    create_sw360_release_search,
)
from sw360api.sw360_client import Sw360BaseApiClient


class Sw360ReleaseApiClient(Sw360BaseApiClient):

    def create_release(self, body_text: str) -> Sw360Release:
        result = self.post(self.url("/releases"), body_text)
        self.raise_for_result(f"Sw360ReleaseApiClient.create_release body_text='{body_text}'", result)
        return create_sw360_release(result.response_body)

    def get_release(self, release_id: str) -> Sw360Release:
        result = self.get(self.url(f"/releases/{release_id}"))
        self.raise_for_result(f"Sw360ReleaseApiClient.get_release id={release_id}", result)
        return create_sw360_release(result.response_body)

    def get_releases(self) -> List[Sw360ReleaseSearchResult]:
        result = self.get(self.url("/releases"))
        self.raise_for_result("Sw360ReleaseApiClient.get_releases", result)
        return create_sw360_release_search(result.response_body).get_search_results()

    def get_sw360_release_name_id_map(self) -> Dict[Tuple[str, str], str]:
        return {
            (r.get_root_value("name").lower(), r.get_root_value("version").lower()): r.get_id()
            for r in self.get_releases()
        }

    def update_release(self, release_id: str, body_text: str) -> Sw360Release:
        result = self.patch(self.url(f"/releases/{release_id}"), body_text)
        self.raise_for_result(
            f"Sw360ReleaseApiClient.update_release id={release_id}, body_text={body_text}", result
        )
        return create_sw360_release(result.response_body)

    def delete_release(self, release_id: str) -> Sw360Release:
        result = self.delete(self.url(f"/releases/{release_id}"))
        self.raise_for_result(f"Sw360ReleaseApiClient.delete_release id={release_id}", result)
        return create_sw360_release(result.response_body)

    def create_release_relationship(self, release_id: str, relationship: Dict[str, str]) -> None:
        """
        POST /releases/{id}/releases with {related_release_id: relationship}.

        The endpoint answers without a body; read the release back to see the links.
        """
        body_text = self.body_from_string_map(relationship)
        result = self.post(self.url(f"/releases/{release_id}/releases"), body_text)
        self.raise_for_result(
            f"Sw360ReleaseApiClient.create_release_relationship id={release_id}, relationship='{relationship}'",
            result,
        )

    def attach_file(
            self,
            release_id: str,
            file: Union[str, Path],
            media_type: str,
            attachment_type: Sw360AttachmentType,
    ) -> Sw360Release:
        result = self.post_attachment(
            self.url(f"/releases/{release_id}/attachments"), file, media_type, attachment_type.value
        )
        self.raise_for_result(
            f"Sw360ReleaseApiClient.attach_file id={release_id}, file={Path(file).name}, "
            f"attachment_type={attachment_type.value}",
            result,
        )
        return create_sw360_release(result.response_body)

    def attach_component_license_info_xml(self, release_id: str, file: Union[str, Path]) -> Sw360Release:
        attachment_type = Sw360AttachmentType.COMPONENT_LICENSE_INFO_XML
        return self.attach_file(release_id, file, ATTACHMENT_MEDIA_TYPES[attachment_type], attachment_type)

    def attach_source_code(self, release_id: str, file: Union[str, Path]) -> Sw360Release:
        attachment_type = Sw360AttachmentType.SOURCE
        return self.attach_file(release_id, file, ATTACHMENT_MEDIA_TYPES[attachment_type], attachment_type)

    def attach_license_text(self, release_id: str, file: Union[str, Path]) -> Sw360Release:
        attachment_type = Sw360AttachmentType.DOCUMENT
        return self.attach_file(release_id, file, ATTACHMENT_MEDIA_TYPES[attachment_type], attachment_type)

    def delete_attachment(self, release_id: str, attachment_id: str) -> Sw360Release:
        result = self.delete(self.url(f"/releases/{release_id}/attachments/{attachment_id}"))
        self.raise_for_result(
            f"Sw360ReleaseApiClient.delete_attachment id={release_id}, attachment_id={attachment_id}", result
        )
        return create_sw360_release(result.response_body)
