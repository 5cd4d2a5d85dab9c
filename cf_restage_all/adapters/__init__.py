"""Adapter layer package for platform control-plane integration boundaries."""

from .cloud_foundry_v3 import CloudFoundryV3Adapter
from .interfaces import PlatformAdapterPort
from .platform_errors import (
	PlatformAdapterError,
	PlatformDecodeError,
	PlatformNotFoundError,
	PlatformTransportError,
	PlatformTransportTimeoutError,
)

__all__ = [
	"CloudFoundryV3Adapter",
	"PlatformAdapterError",
	"PlatformAdapterPort",
	"PlatformDecodeError",
	"PlatformNotFoundError",
	"PlatformTransportError",
	"PlatformTransportTimeoutError",
]
