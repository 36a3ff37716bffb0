"""
Consul module - Key-value configuration, JWKS and version lookup with local fallbacks.
"""

from service_components.consul.base import ConsulComponentsProtocol
from service_components.consul.components import ConsulComponents, environment_key
from service_components.consul.jwks import JSONWebKey, JSONWebKeySet, parse_jwks, verify_token
from service_components.consul.models import ConsulConfiguration, ConsulKeyValueResponse

__all__ = [
    "ConsulComponentsProtocol",
    "ConsulComponents",
    "ConsulConfiguration",
    "ConsulKeyValueResponse",
    "JSONWebKey",
    "JSONWebKeySet",
    "environment_key",
    "parse_jwks",
    "verify_token",
]
