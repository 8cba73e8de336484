"""Adapter layer package for ZooPhy API integration boundaries."""

from .interfaces import GatewayRunResult, GatewayValidationResult, ZoophyGatewayPort
from .zoophy_api import ZoophyApiAdapter
from .zoophy_errors import (
	ZoophyAdapterConnectionError,
	ZoophyAdapterError,
	ZoophyAdapterTimeoutError,
	ZoophyResponseError,
)

__all__ = [
	"GatewayRunResult",
	"GatewayValidationResult",
	"ZoophyAdapterConnectionError",
	"ZoophyAdapterError",
	"ZoophyAdapterTimeoutError",
	"ZoophyApiAdapter",
	"ZoophyGatewayPort",
	"ZoophyResponseError",
]
