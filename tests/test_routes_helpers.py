"""Tests for the domain error to HTTP status translation."""

import pytest

from hns.domain.entities import HostnameStatus
from hns.domain.errors import (
    AllocationExhaustedError,
    DiscoveryFailedError,
    HNSError,
    HostnameNotFoundError,
    NameLengthExceededError,
    ResolutionUnavailableError,
    StateConflictError,
    TemplateDefinitionError,
    TemplateInUseError,
    TemplateNotFoundError,
)
from hns.interfaces.api.routes_helpers import to_http_exception


@pytest.mark.parametrize(
    ("error", "expected_status"),
    [
        (TemplateNotFoundError(1), 404),
        (HostnameNotFoundError(1), 404),
        (NameLengthExceededError("srv1000", 6), 400),
        (TemplateDefinitionError("bad"), 400),
        (TemplateInUseError("in use"), 409),
        (StateConflictError(1, HostnameStatus.RESERVED, HostnameStatus.COMMITTED), 409),
        (AllocationExhaustedError(1, 2, "srv002"), 409),
        (ResolutionUnavailableError("down"), 503),
        (DiscoveryFailedError("nothing"), 404),
        (HNSError("unexpected"), 500),
    ],
)
def test_to_http_exception(error, expected_status):
    """Each domain error must map to its documented HTTP status."""

    exc = to_http_exception(error)

    assert exc.status_code == expected_status
    assert exc.detail == str(error)
