"""Domain-level exceptions for the discovery feed."""

from __future__ import annotations


class DiscoveryError(Exception):
	"""Base class for discovery feed errors."""

	reason: str = "discovery_error"
	status_code: int = 500

	def __init__(self, reason: str | None = None) -> None:
		super().__init__(reason or self.reason)
		if reason:
			self.reason = reason


class StoreUnavailable(DiscoveryError):
	"""A profile or relationship lookup failed or timed out.

	Callers must surface this as a retryable failure. Treating it as an empty
	feed would hide the fact that blocks and swipes were never filtered.
	"""

	reason = "discovery_unavailable"
	status_code = 503

	def __init__(self, operation: str, reason: str | None = None) -> None:
		super().__init__(reason)
		self.operation = operation
