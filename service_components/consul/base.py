"""
Abstract Consul components interface.

Defines the contract host code depends on, so tests and local setups can
swap in a stub without a Consul server.

Example:
    from service_components.consul import ConsulComponentsProtocol

    class StaticConsul(ConsulComponentsProtocol):
        async def get_consul_status(self):
            return None
        ...
"""

from abc import ABC, abstractmethod
from typing import Optional


class ConsulComponentsProtocol(ABC):
    """
    Access to configuration values and key material held in Consul.

    Every lookup takes the reachability signal from a previous
    ``get_consul_status()`` call so Consul is probed once per batch of reads.
    """

    @abstractmethod
    async def get_consul_status(self) -> Optional[int]:
        """
        Probe the Consul server.

        Returns:
            The HTTP status code of the leader endpoint, or None if the
            server could not be reached
        """
        pass

    @abstractmethod
    async def get_value(self, consul_status: Optional[int], path: str) -> str:
        """
        Read a value from Consul, falling back to the environment.

        Args:
            consul_status: Result of get_consul_status(), or None if not checked
            path: Key path in Consul, e.g. ``v1/kv/config/orders/database-url``

        Returns:
            The value

        Raises:
            ConfigurationNotFoundError: If neither source holds a value
        """
        pass

    @abstractmethod
    async def get_jwks(self, consul_status: Optional[int], path: str, file_name: str) -> str:
        """
        Read a JSON Web Key Set from Consul, falling back to a local file.

        Args:
            consul_status: Result of get_consul_status(), or None if not checked
            path: Key path in Consul
            file_name: JWKS file in the working directory

        Returns:
            The raw JWKS JSON string

        Raises:
            ConfigurationNotFoundError: If neither source holds a key set
        """
        pass
