"""
Consul-backed configuration lookup with local fallbacks.

Values are read from the Consul KV store when the server is reachable and
otherwise from the process environment (plain values) or the working
directory (JWKS and version files). A remote miss is never an error; a miss
in both sources raises ConfigurationNotFoundError for the host to handle.

Example:
    from service_components.consul import ConsulComponents, ConsulConfiguration

    async with ConsulComponents(ConsulConfiguration(url="http://consul:8500")) as consul:
        status = await consul.get_consul_status()
        dsn = await consul.get_value(status, "v1/kv/config/orders/database-url")
        jwks = await consul.get_jwks(status, "v1/kv/config/orders/jwks", "jwks.json")
"""

import logging
import os
from pathlib import Path
from typing import List, Mapping, Optional

import httpx
from pydantic import ValidationError

from service_components.consul.base import ConsulComponentsProtocol
from service_components.consul.jwks import parse_jwks
from service_components.consul.models import (
    CONSUL_STATUS_PATH,
    ConsulConfiguration,
    ConsulKeyValueResponse,
)
from service_components.utils.exceptions import ConfigurationNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 5.0


def environment_key(path: str) -> str:
    """Map a Consul key path to its environment variable name."""
    return path.replace("-", "_").upper()


class ConsulComponents(ConsulComponentsProtocol):
    """
    Reads configuration values and key material from Consul.

    The HTTP client is created on demand unless one is passed in; an owned
    client is closed by ``aclose()`` or when leaving the async context.
    """

    def __init__(
        self,
        configuration: Optional[ConsulConfiguration] = None,
        client: Optional[httpx.AsyncClient] = None,
        environ: Optional[Mapping[str, str]] = None,
        working_directory: str = ".",
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        """
        Initialize Consul components.

        Args:
            configuration: Consul URL and credentials (defaults to localhost)
            client: Shared HTTP client; created lazily when omitted
            environ: Environment mapping for fallbacks (defaults to os.environ)
            working_directory: Directory holding JWKS and version files
            timeout: Request timeout for an owned client, in seconds
        """
        self.configuration = configuration or ConsulConfiguration()
        self._client = client
        self._owns_client = client is None
        self._environ = environ if environ is not None else os.environ
        self.working_directory = Path(working_directory)
        self._timeout = timeout

    # ─────────────────────────────────────────────────────────────────
    # Client lifecycle
    # ─────────────────────────────────────────────────────────────────

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    async def aclose(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "ConsulComponents":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    def _auth(self) -> Optional[httpx.BasicAuth]:
        if self.configuration.has_credentials:
            return httpx.BasicAuth(self.configuration.username, self.configuration.password)
        return None

    def _url(self, path: str) -> str:
        return f"{self.configuration.url.rstrip('/')}/{path.lstrip('/')}"

    # ─────────────────────────────────────────────────────────────────
    # Public API
    # ─────────────────────────────────────────────────────────────────

    async def get_consul_status(self) -> Optional[int]:
        url = self._url(CONSUL_STATUS_PATH)
        try:
            response = await self.client.get(url, auth=self._auth())
        except httpx.HTTPError as e:
            logger.debug(f"ConsulKV connection status - unreachable ({e}). Connection for consul by URL - {url}")
            return None

        logger.debug(
            f"ConsulKV connection status - {response.reason_phrase}. Connection for consul by URL - {url}"
        )
        return response.status_code

    async def get_value(self, consul_status: Optional[int], path: str) -> str:
        logger.debug(
            f"ConsulKV connection status - {consul_status}. "
            f"Connection for consul by URL - {self.configuration.url}, and path - {path}"
        )
        value = ""
        if consul_status == 200:
            data = await self._read_consul_value(path)
            value = data.decode("utf-8", errors="replace") if data else ""
            if value:
                logger.info(f"SUCCESS: Retrieved value for '{path}' from Consul.")

        if value:
            return value
        return self.get_value_from_environment(environment_key(path))

    async def get_jwks(self, consul_status: Optional[int], path: str, file_name: str) -> str:
        jwks = ""
        if consul_status == 200:
            jwks = await self._read_consul_jwks(path)

        if jwks:
            return jwks
        return self.get_jwks_from_local_directory(file_name)

    # ─────────────────────────────────────────────────────────────────
    # Local fallbacks
    # ─────────────────────────────────────────────────────────────────

    def get_value_from_environment(self, key: str) -> str:
        """
        Read a non-empty environment variable.

        Raises:
            ConfigurationNotFoundError: If the variable is missing or empty
        """
        value = self._environ.get(key)
        if not value:
            logger.error(f"No value was found at the given key - '{key}'")
            raise ConfigurationNotFoundError(key, "environment")

        logger.info(f"SUCCESS: Retrieved value for the given key - '{key}' from local environment")
        return value

    def get_jwks_from_local_directory(self, file_name: str) -> str:
        """
        Read a JWKS file from the working directory.

        Raises:
            ConfigurationNotFoundError: If the file is missing, unreadable or empty
        """
        jwks_path = self.working_directory / file_name
        jwks = self._read_text_file(jwks_path, "JWKS Keypair")
        logger.info(f"SUCCESS: Retrieved the JWKS value from the local machine along the file path {jwks_path}")
        return jwks

    def read_version_file(self, file_name: str) -> str:
        """
        Read the application version from a file in the working directory.

        Newlines are stripped from the content.

        Raises:
            ConfigurationNotFoundError: If the file is missing, unreadable or empty
        """
        version_path = self.working_directory / file_name
        version = self._read_text_file(version_path, "Version").replace("\n", "").strip()
        if not version:
            logger.error(f"ERROR: Version file at the file path - '{version_path}' is empty")
            raise ConfigurationNotFoundError(str(version_path), "file")

        logger.info(f"SUCCESS: Retrieved the Version - {version} from the local machine along the file path {version_path}")
        return version

    def _read_text_file(self, file_path: Path, label: str) -> str:
        try:
            content = file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"ERROR: Failed to load {label} file at the file path - '{file_path}': {e}")
            raise ConfigurationNotFoundError(
                str(file_path), "file", f"Failed to load {label} file at the file path - '{file_path}'"
            ) from e

        if not content.strip():
            logger.error(f"ERROR: {label} file at the file path - '{file_path}' is empty")
            raise ConfigurationNotFoundError(str(file_path), "file")
        return content

    # ─────────────────────────────────────────────────────────────────
    # Consul reads
    # ─────────────────────────────────────────────────────────────────

    async def _read_consul_value(self, path: str) -> Optional[bytes]:
        """Fetch and base64-decode the first KV entry at path; None on any failure."""
        url = self._url(path)
        try:
            response = await self.client.get(url, auth=self._auth())
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"ERROR: Failed to read '{url}' from Consul: {e}")
            return None

        try:
            entries = self._decode_entries(response)
        except (ValueError, ValidationError) as e:
            logger.error(f"ERROR: Failed to decode response from Consul for path - '{url}': {e}")
            return None

        if not entries or entries[0].value is None:
            logger.error(f"ERROR: No value was found at the - '{url}'")
            return None

        try:
            data = entries[0].decoded_value()
        except ValueError as e:
            logger.error(f"ERROR: {e}")
            return None

        if not data:
            logger.error(f"Encoded empty value for '{url}' in Consul.")
        return data

    async def _read_consul_jwks(self, path: str) -> str:
        data = await self._read_consul_value(path)
        if not data:
            return ""

        jwks = data.decode("utf-8", errors="replace")
        try:
            parse_jwks(jwks)
        except ValueError as e:
            logger.error(f"JWKS value in Consul is empty or invalid: {e}")
            return ""

        logger.info(f"SUCCESS: Retrieved JWKS for '{path}' from Consul.")
        return jwks

    @staticmethod
    def _decode_entries(response: httpx.Response) -> List[ConsulKeyValueResponse]:
        payload = response.json()
        if not isinstance(payload, list):
            raise ValueError("expected a list of key-value entries")
        return [ConsulKeyValueResponse.model_validate(item) for item in payload]
