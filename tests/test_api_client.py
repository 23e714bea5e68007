"""Retry policy of the outbound HTTP client."""

import asyncio

import pytest

from app.shared.core.exceptions import ExternalServiceError
from app.shared.infrastructure.external_apis.api_client import (
    IDEMPOTENCY_HEADER,
    APIClient,
    RetryableServiceError,
)


def failing_client(error):
    client = APIClient(base_url="http://gateway.test", api_name="gateway", max_retries=3)
    calls = []

    async def send(method, endpoint, json=None, params=None, headers=None):
        calls.append(headers)
        raise error

    client._send = send
    return client, calls


async def test_get_is_retried_after_timeout():
    client, calls = failing_client(asyncio.TimeoutError())

    with pytest.raises(ExternalServiceError):
        await client.request("GET", "orders/1")

    assert len(calls) == 3


async def test_unkeyed_post_is_not_retried_after_timeout():
    client, calls = failing_client(asyncio.TimeoutError())

    with pytest.raises(ExternalServiceError):
        await client.request("POST", "payments/pay_1/transfers", json={})

    assert len(calls) == 1


async def test_unkeyed_post_is_not_retried_after_server_error():
    client, calls = failing_client(RetryableServiceError(503, {}))

    with pytest.raises(ExternalServiceError):
        await client.request("POST", "payments/pay_1/refund", json={})

    assert len(calls) == 1


async def test_unkeyed_post_is_retried_when_rate_limited():
    client, calls = failing_client(RetryableServiceError(429, {}))

    with pytest.raises(ExternalServiceError):
        await client.request("POST", "orders", json={})

    assert len(calls) == 3


async def test_keyed_post_is_retried_with_the_same_key():
    client, calls = failing_client(asyncio.TimeoutError())

    with pytest.raises(ExternalServiceError):
        await client.request("POST", "payments/pay_1/transfers", json={}, idempotency_key="transfer-pay_1")

    assert calls == [{IDEMPOTENCY_HEADER: "transfer-pay_1"}] * 3
