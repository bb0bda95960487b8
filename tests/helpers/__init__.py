"""Test helpers package."""

from tests.helpers.mocks import (
    FakeClusterClient,
    RecordingProgress,
    create_backends,
    failing_discovery,
    operator_discovery,
)

__all__ = [
    "FakeClusterClient",
    "RecordingProgress",
    "create_backends",
    "failing_discovery",
    "operator_discovery",
]
