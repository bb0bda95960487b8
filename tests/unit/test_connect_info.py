"""Tests for agent connect descriptors."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from mirrorlink.connection import (
    DirectKubernetesConnectInfo,
    OperatorConnectInfo,
    decode_connect_info,
    encode_connect_info,
)
from mirrorlink.errors import ConnectInfoDecodeError

pytestmark = pytest.mark.unit


def _describe(info) -> str:  # noqa: ANN001
    match info:
        case OperatorConnectInfo():
            return "operator"
        case DirectKubernetesConnectInfo(name=name, port=port):
            return f"{name}:{port}"


def test_variants_match_exhaustively() -> None:
    assert _describe(OperatorConnectInfo()) == "operator"
    assert _describe(DirectKubernetesConnectInfo(name="agent-7", port=9000)) == "agent-7:9000"


def test_encoding_is_tagged() -> None:
    assert encode_connect_info(OperatorConnectInfo()) == '{"kind":"operator"}'
    assert (
        encode_connect_info(DirectKubernetesConnectInfo(name="agent-7", port=9000))
        == '{"kind":"direct_kubernetes","name":"agent-7","port":9000}'
    )


def test_decode_restores_variant() -> None:
    info = decode_connect_info('{"kind":"direct_kubernetes","name":"agent-7","port":9000}')

    assert info == DirectKubernetesConnectInfo(name="agent-7", port=9000)
    assert decode_connect_info(b'{"kind":"operator"}') == OperatorConnectInfo()


@pytest.mark.parametrize(
    "raw",
    [
        "not json",
        '{"kind":"sidecar"}',
        '{"kind":"direct_kubernetes","name":"agent-7"}',
        '{"kind":"direct_kubernetes","name":"agent-7","port":70000}',
    ],
)
def test_decode_rejects_malformed_payloads(raw: str) -> None:
    with pytest.raises(ConnectInfoDecodeError):
        decode_connect_info(raw)


def test_descriptors_are_immutable() -> None:
    info = DirectKubernetesConnectInfo(name="agent-7", port=9000)

    with pytest.raises(ValidationError):
        info.port = 9001  # type: ignore[misc]
