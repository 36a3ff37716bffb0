"""
Status payload returned by ``GET /v1/status``.
"""

from typing import Optional

from pydantic import BaseModel


class AppStatusResponse(BaseModel):
    """Process, host and dependency status."""

    app_status: str = "Ok"
    system_uptime: float
    active_processor_count: int
    operating_system_version: str
    physical_memory: float  # GiB
    redis_connection_status: Optional[str] = None
    redis_version: Optional[str] = None
    psql_connection_status: Optional[str] = None
    psql_version: Optional[str] = None
    mongo_connection_status: Optional[str] = None
    mongo_version: Optional[str] = None
    app_name: Optional[str] = None
    app_version: Optional[str] = None

    @classmethod
    def example(cls) -> "AppStatusResponse":
        return cls(
            app_status="Ok",
            system_uptime=123456,
            active_processor_count=12,
            operating_system_version="12.1",
            physical_memory=12,
            redis_connection_status="Ok",
            psql_connection_status="Ok",
            mongo_connection_status="Ok",
            redis_version="12",
            psql_version="12.9",
            mongo_version="20.2",
            app_name="Name of application",
            app_version="1.1.1",
        )
