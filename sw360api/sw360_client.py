import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import requests

from configuration import Configuration as Config
from loggers.sw360_client_logger import sw360_client_logger as logger
from sw360api.exceptions import ConfigurationError, RemoteOperationError


@dataclass
class ApiResult:
    is_successful: bool
    status_code: Optional[int]
    response_body: str

    def dump(self) -> str:
        return (
            f"ApiResult: is_successful={self.is_successful}, "
            f"status_code={self.status_code}, "
            f"response_body=\"{self.response_body}\""
        )


class Sw360BaseApiClient:
    """
    Shared transport for the SW360 resource clients.

    base_url is the REST root of the SW360 instance, e.g.
    "https://sw360.example.com/resource/api". token is sent as a bearer token.
    Both default to the values in Configuration; a missing value is reported when
    the first request is built, not at construction.

    No retries: a failed call is reported once and left to the caller.
    """

    def __init__(
            self,
            base_url: Optional[str] = None,
            token: Optional[str] = None,
            session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = Config.sw360_rest_url if base_url is None else base_url
        self.token = Config.sw360_token if token is None else token
        self.timeout = Config.sw360_timeout
        self.verify = Config.sw360_verify_tls
        self.proxies = Config.proxies

        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Accept": "application/hal+json",
                "User-Agent": "sw360-license-report/1.0",
            }
        )

    def get_token(self) -> str:
        if not self.token:
            error_message = "SW360 authentication token string is missing."
            logger.error(error_message)
            raise ConfigurationError(error_message)
        return self.token

    def get_base_url(self) -> str:
        if not self.base_url:
            error_message = "SW360 base url string is missing."
            logger.error(error_message)
            raise ConfigurationError(error_message)
        return self.base_url.rstrip("/")

    def url(self, path: str) -> str:
        path = path if path.startswith("/") else f"/{path}"
        return f"{self.get_base_url()}{path}"

    def _headers(self, json_body: bool = False) -> Dict[str, str]:
        headers = {"Authorization": f"Bearer {self.get_token()}"}
        if json_body:
            headers["Content-Type"] = "application/json"
        return headers

    def execute_request(self, method: str, url: str, **kwargs: Any) -> ApiResult:
        """Send one request. Transport failures come back as an unsuccessful result with no status."""
        try:
            resp = self.session.request(
                method, url, timeout=self.timeout, proxies=self.proxies, verify=self.verify, **kwargs
            )
        except requests.RequestException as e:
            logger.error(f"SW360 {method} {url} transport error: {e}")
            return ApiResult(is_successful=False, status_code=None, response_body=str(e))

        logger.debug(f"SW360 {method} {url} -> {resp.status_code}")
        return ApiResult(is_successful=resp.ok, status_code=resp.status_code, response_body=resp.text or "")

    def get(self, url: str) -> ApiResult:
        return self.execute_request("GET", url, headers=self._headers())

    def post(self, url: str, body_text: str) -> ApiResult:
        return self.execute_request("POST", url, headers=self._headers(json_body=True), data=body_text.encode("utf-8"))

    def patch(self, url: str, body_text: str) -> ApiResult:
        return self.execute_request("PATCH", url, headers=self._headers(json_body=True), data=body_text.encode("utf-8"))

    def delete(self, url: str) -> ApiResult:
        return self.execute_request("DELETE", url, headers=self._headers())

    def post_attachment(self, url: str, file: Union[str, Path], media_type: str, attachment_type: str) -> ApiResult:
        """
        multipart POST with a "file" part (the file content) and an "attachment"
        part (JSON with filename and attachmentType).
        """
        path = Path(file)
        attachment_text = json.dumps({"filename": path.name, "attachmentType": attachment_type})
        headers = self._headers()

        # requests sets the multipart boundary; do NOT set Content-Type manually.
        with path.open("rb") as f:
            files = {
                "file": (path.name, f, media_type),
                "attachment": (None, attachment_text, "application/json"),
            }
            return self.execute_request("POST", url, headers=headers, files=files)

    @staticmethod
    def body_from_string_list(values: List[str]) -> str:
        return json.dumps(list(values))

    @staticmethod
    def body_from_string_map(values: Dict[str, str]) -> str:
        return json.dumps(dict(values))

    def raise_for_result(self, operation: str, result: ApiResult) -> None:
        """Log and raise RemoteOperationError for an unsuccessful result."""
        if result.is_successful:
            return
        error_message = f"{operation}, result='{result.dump()}'"
        logger.error(error_message)
        raise RemoteOperationError(operation, result.status_code, result.response_body)
