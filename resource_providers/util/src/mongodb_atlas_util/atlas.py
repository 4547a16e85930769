"""
Client for the MongoDB Atlas Admin API

Only the calls used by the Resource Providers are implemented. Every method either returns the decoded JSON body or
raises `AtlasApiError`.
"""
import logging
from typing import Any, Mapping, Optional, Sequence
from urllib.parse import quote, urlparse

import requests
from requests.auth import HTTPDigestAuth

from .config import HandlerConfig

LOG = logging.getLogger(__name__)

API_V1 = "api/atlas/v1.0"
API_V2 = "api/atlas/v2"
V1_ACCEPT = "application/json"
V2_ACCEPT = "application/vnd.atlas.2023-01-01+json"

DUPLICATE_MANAGED_NAMESPACE = "DUPLICATE_MANAGED_NAMESPACE"


class AtlasClientError(Exception):
    """Raised when a client can not be constructed from the supplied credentials"""


class AtlasApiError(Exception):
    """
    A failed call to the Atlas API

    `status_code` is None when no HTTP response was received.
    """

    def __init__(self, message: str, status_code: Optional[int] = None, error_code: Optional[str] = None,
                 detail: Optional[str] = None, response: Optional[requests.Response] = None):
        super().__init__(message)
        self.status_code = status_code
        self.error_code = error_code
        self.detail = detail
        self.response = response

    @classmethod
    def from_response(cls, method: str, url: str, response: requests.Response) -> "AtlasApiError":
        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        error_code = body.get("errorCode")
        detail = body.get("detail") or body.get("reason") or response.text
        message = f"{method} {url}: {response.status_code} ({error_code or response.reason}) {detail}"
        return cls(message, status_code=response.status_code, error_code=error_code, detail=detail,
                   response=response)


def _segment(value: str) -> str:
    return quote(str(value), safe="")


class AtlasClient:
    """
    Digest-authenticated Atlas Admin API client

    :param public_key: Programmatic API public key
    :param private_key: Programmatic API private key
    :param base_url: Atlas base URL, e.g. https://cloud.mongodb.com/
    :param timeout: Per-request timeout in seconds
    :param user_agent: User-Agent header value
    """

    def __init__(self, public_key: str, private_key: str, base_url: str, timeout: float = 30.0,
                 user_agent: Optional[str] = None):
        if not public_key or not private_key:
            raise AtlasClientError("PublicKey and PrivateKey must both be provided")
        parsed = urlparse(base_url or "")
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise AtlasClientError(f"BaseUrl {base_url!r} is not a valid http(s) URL")
        self.base_url = base_url.rstrip("/") + "/"
        self.timeout = timeout
        self._session = requests.Session()
        self._session.auth = HTTPDigestAuth(public_key, private_key)
        if user_agent:
            self._session.headers["User-Agent"] = user_agent

    def _request(self, method: str, path: str, accept: str, params: Optional[Mapping[str, Any]] = None,
                 body: Optional[Any] = None) -> Any:
        url = self.base_url + path
        headers = {"Accept": accept}
        if body is not None:
            headers["Content-Type"] = accept
        LOG.debug("%s %s params=%s", method, url, params)
        try:
            response = self._session.request(method, url, params=params, json=body, headers=headers,
                                             timeout=self.timeout)
        except requests.RequestException as e:
            raise AtlasApiError(f"{method} {url}: {e}") from e
        if response.status_code >= 400:
            error = AtlasApiError.from_response(method, url, response)
            LOG.debug("Atlas API error: %s", error)
            raise error
        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise AtlasApiError(f"{method} {url}: undecodable response body: {e}",
                                status_code=response.status_code, response=response) from e

    # Global Clusters (v1.0)

    def _global_writes(self, project_id: str, cluster_name: str) -> str:
        return f"{API_V1}/groups/{_segment(project_id)}/clusters/{_segment(cluster_name)}/globalWrites"

    def get_global_cluster(self, project_id: str, cluster_name: str) -> Mapping[str, Any]:
        """
        Fetches the managed namespaces and custom zone mapping of a global cluster

        :return: `{"managedNamespaces": [...], "customZoneMapping": {location: zone}}`
        """
        return self._request("GET", self._global_writes(project_id, cluster_name), V1_ACCEPT) or {}

    def add_managed_namespace(self, project_id: str, cluster_name: str,
                              namespace: Mapping[str, Any]) -> Mapping[str, Any]:
        path = self._global_writes(project_id, cluster_name) + "/managedNamespaces"
        return self._request("POST", path, V1_ACCEPT, body=dict(namespace))

    def delete_managed_namespace(self, project_id: str, cluster_name: str, db: str,
                                 collection: str) -> Mapping[str, Any]:
        path = self._global_writes(project_id, cluster_name) + "/managedNamespaces"
        return self._request("DELETE", path, V1_ACCEPT, params={"db": db, "collection": collection})

    def add_custom_zone_mappings(self, project_id: str, cluster_name: str,
                                 mappings: Sequence[Mapping[str, str]]) -> Mapping[str, Any]:
        path = self._global_writes(project_id, cluster_name) + "/customZoneMapping"
        return self._request("POST", path, V1_ACCEPT, body={"customZoneMappings": list(mappings)})

    def delete_custom_zone_mappings(self, project_id: str, cluster_name: str) -> Mapping[str, Any]:
        path = self._global_writes(project_id, cluster_name) + "/customZoneMapping"
        return self._request("DELETE", path, V1_ACCEPT)

    # Project Invitations (v2)

    def _invites(self, project_id: str) -> str:
        return f"{API_V2}/groups/{_segment(project_id)}/invites"

    def create_project_invitation(self, project_id: str, username: str,
                                  roles: Sequence[str]) -> Mapping[str, Any]:
        return self._request("POST", self._invites(project_id), V2_ACCEPT,
                             body={"username": username, "roles": list(roles)})

    def get_project_invitation(self, project_id: str, invitation_id: str) -> Mapping[str, Any]:
        return self._request("GET", f"{self._invites(project_id)}/{_segment(invitation_id)}", V2_ACCEPT)

    def update_project_invitation(self, project_id: str, invitation_id: str,
                                  roles: Sequence[str]) -> Mapping[str, Any]:
        return self._request("PATCH", f"{self._invites(project_id)}/{_segment(invitation_id)}", V2_ACCEPT,
                             body={"roles": list(roles)})

    def delete_project_invitation(self, project_id: str, invitation_id: str) -> None:
        self._request("DELETE", f"{self._invites(project_id)}/{_segment(invitation_id)}", V2_ACCEPT)

    def list_project_invitations(self, project_id: str) -> Sequence[Mapping[str, Any]]:
        return self._request("GET", self._invites(project_id), V2_ACCEPT) or []


def client_from_keys(public_key: str, private_key: str, config: HandlerConfig,
                     base_url: Optional[str] = None) -> AtlasClient:
    """
    Builds a client from a programmatic API key pair

    :param public_key: Atlas public key
    :param private_key: Atlas private key
    :param config: Handler configuration supplying base URL, timeout and User-Agent
    :param base_url: Overrides the configured base URL
    :return AtlasClient:
    """
    return AtlasClient(
        public_key,
        private_key,
        base_url or config.base_url,
        timeout=config.request_timeout,
        user_agent=config.user_agent,
    )
