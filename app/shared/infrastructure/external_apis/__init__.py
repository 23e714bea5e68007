# 📄 File: app/shared/infrastructure/external_apis/__init__.py
# 🧭 Purpose (Layman Explanation):
# Shared machinery for talking to outside services over the internet, with retries.
# 🧪 Purpose (Technical Summary):
# Base aiohttp client with tenacity retry/backoff, timeouts and error mapping to
# ExternalServiceError. Concrete clients subclass APIClient.
# 🔗 Dependencies:
# aiohttp, tenacity
# 🔄 Connected Modules / Calls From:
# app.modules.payments.infrastructure.external.gateway_client

from .api_client import APIClient, RetryableServiceError

__all__ = ["APIClient", "RetryableServiceError"]
