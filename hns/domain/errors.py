"""Error taxonomy raised by the hostname core."""

from __future__ import annotations

from .entities import HostnameStatus


class HNSError(Exception):
    """Base class for every error raised by the hostname core."""


class NotFoundError(HNSError):
    """A template or hostname could not be located."""


class TemplateNotFoundError(NotFoundError):
    def __init__(self, template_id: int | str) -> None:
        super().__init__(f"Template {template_id} not found")
        self.template_id = template_id


class HostnameNotFoundError(NotFoundError):
    def __init__(self, hostname_id: int | str) -> None:
        super().__init__(f"Hostname {hostname_id} not found")
        self.hostname_id = hostname_id


class ValidationFailure(HNSError, ValueError):
    """The caller supplied input that cannot produce a valid result."""


class NameLengthExceededError(ValidationFailure):
    def __init__(self, name: str, max_length: int) -> None:
        super().__init__(
            f"Generated hostname {name!r} exceeds maximum length of {max_length} characters"
        )
        self.name = name
        self.max_length = max_length


class TemplateDefinitionError(ValidationFailure):
    """A template definition violates its structural invariants."""


class TemplateInUseError(ValidationFailure):
    """A template cannot be removed while hostnames reference it."""


class StateConflictError(HNSError):
    """A lifecycle transition was attempted from the wrong status."""

    def __init__(
        self,
        hostname_id: int,
        current_status: HostnameStatus,
        expected_status: HostnameStatus,
    ) -> None:
        super().__init__(
            f"Hostname {hostname_id} is not in {expected_status.value} status, "
            f"current status: {current_status.value}"
        )
        self.hostname_id = hostname_id
        self.current_status = current_status
        self.expected_status = expected_status


class AllocationExhaustedError(HNSError):
    """Every reservation attempt collided with an existing hostname."""

    def __init__(self, template_id: int, attempts: int, last_name: str) -> None:
        super().__init__(
            f"Generated hostname {last_name!r} still exists after {attempts} attempts "
            f"for template {template_id}"
        )
        self.template_id = template_id
        self.attempts = attempts
        self.last_name = last_name


class DuplicateHostnameError(HNSError):
    """The store rejected an insert because the name is already taken."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Hostname {name!r} already exists")
        self.name = name


class ResolutionUnavailableError(HNSError):
    """No configured DNS server produced a definitive answer."""


class DiscoveryFailedError(HNSError):
    """No in-use sequence number was found in the search envelope."""


__all__ = [
    "AllocationExhaustedError",
    "DiscoveryFailedError",
    "DuplicateHostnameError",
    "HNSError",
    "HostnameNotFoundError",
    "NameLengthExceededError",
    "NotFoundError",
    "ResolutionUnavailableError",
    "StateConflictError",
    "TemplateDefinitionError",
    "TemplateInUseError",
    "TemplateNotFoundError",
    "ValidationFailure",
]
