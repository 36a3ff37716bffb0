"""
Consul configuration and key-value response models.
"""

import base64
import binascii
from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_CONSUL_URL = "http://127.0.0.1:8500"
CONSUL_STATUS_PATH = "/v1/status/leader"


@dataclass(frozen=True)
class ConsulConfiguration:
    """
    Connection settings for a Consul server.

    Attributes:
        url: Base URL, e.g. ``http://127.0.0.1:8500``
        username: Basic auth username
        password: Basic auth password
    """

    url: str = DEFAULT_CONSUL_URL
    username: Optional[str] = None
    password: Optional[str] = None

    @property
    def has_credentials(self) -> bool:
        """Basic auth is only sent when both credentials are non-empty."""
        return bool(self.username) and bool(self.password)


class ConsulKeyValueResponse(BaseModel):
    """
    One entry of a Consul KV read (``GET /v1/kv/<key>``).

    See https://developer.hashicorp.com/consul/api-docs/kv
    """

    model_config = ConfigDict(populate_by_name=True)

    lock_index: Optional[int] = Field(default=None, alias="LockIndex")
    key: Optional[str] = Field(default=None, alias="Key")
    flags: Optional[int] = Field(default=None, alias="Flags")
    value: Optional[str] = Field(default=None, alias="Value")  # base64-encoded
    create_index: Optional[int] = Field(default=None, alias="CreateIndex")
    modify_index: Optional[int] = Field(default=None, alias="ModifyIndex")

    def decoded_value(self) -> Optional[bytes]:
        """
        Decode the base64 ``Value``.

        Returns:
            Raw bytes, or None when the entry holds no value

        Raises:
            ValueError: If the value is not valid base64
        """
        if self.value is None:
            return None
        try:
            return base64.b64decode(self.value, validate=True)
        except binascii.Error as e:
            raise ValueError(f"Failed to decode '{self.value}' from base64: {e}") from e
