"""Connection status value shared by the dependency components."""

from typing import NamedTuple


class ConnectionStatus(NamedTuple):
    """Outcome of a dependency probe: human-readable message and HTTP status code."""

    message: str
    status_code: int

    @property
    def is_ok(self) -> bool:
        return self.status_code == 200
