# 📄 File: app/shared/core/__init__.py
# 🧭 Purpose (Layman Explanation):
# The basic building blocks: error types, login tokens and passwords, who-is-calling checks,
# request limits and the in-process announcement board for events.
# 🧪 Purpose (Technical Summary):
# Core primitives shared by all modules: exception hierarchy, JWT/bcrypt security, FastAPI
# auth dependencies, slowapi limiter, domain event bus and GeoJSON value objects.
# 🔗 Dependencies:
# FastAPI, python-jose, passlib, slowapi, pydantic
# 🔄 Connected Modules / Calls From:
# app.api, app.modules.*

from .exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConcurrencyConflictError,
    DatabaseError,
    DuplicateResourceError,
    ExternalServiceError,
    InvalidStateError,
    MarketplaceException,
    NotFoundError,
    PaymentSignatureError,
    ValidationError,
)
from .event_bus import DomainEvent, EventBus, EventHandler, get_event_bus
from .security import create_access_token, get_password_hash, verify_password, verify_token

__all__ = [
    "AuthenticationError",
    "AuthorizationError",
    "ConcurrencyConflictError",
    "DatabaseError",
    "DuplicateResourceError",
    "ExternalServiceError",
    "InvalidStateError",
    "MarketplaceException",
    "NotFoundError",
    "PaymentSignatureError",
    "ValidationError",
    "DomainEvent",
    "EventBus",
    "EventHandler",
    "get_event_bus",
    "create_access_token",
    "get_password_hash",
    "verify_password",
    "verify_token",
]
