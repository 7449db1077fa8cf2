"""
Shared logging configuration for the ACL decision engine.
"""

import sys
import structlog
import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional
from contextvars import ContextVar

# Requester of the evaluation in progress
account_var: ContextVar[Optional[str]] = ContextVar('account', default=None)
owner_var: ContextVar[Optional[str]] = ContextVar('owner', default=None)

_service_name: Optional[str] = None


def configure_logging(service_name: str, log_level: str = "info") -> None:
    """Configure structured JSON logging for the engine."""
    global _service_name
    _service_name = service_name

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            add_service_context,
            add_requester_context,
            structlog.processors.JSONRenderer()
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper()),
    )


def add_service_context(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Tag events with the configured service name."""
    if _service_name:
        event_dict["service"] = _service_name
    return event_dict


def add_requester_context(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Tag events raised during an evaluation with who asked and who owns."""
    account = account_var.get()
    if account:
        event_dict.setdefault("account", account)

    owner = owner_var.get()
    if owner:
        event_dict.setdefault("owner", owner)

    return event_dict


@contextmanager
def requester_context(account: Optional[str], owner: Optional[str]) -> Iterator[None]:
    """Bind the requester and owner accounts for the duration of a block."""
    account_token = account_var.set(account)
    owner_token = owner_var.set(owner)
    try:
        yield
    finally:
        owner_var.reset(owner_token)
        account_var.reset(account_token)


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)
