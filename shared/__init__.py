"""
Shared utilities for the ACL decision engine.

This package aggregates the ambient building blocks used by the engine:

- config: Engine configuration via pydantic-settings
- logging: Structured logging with correlation context
- metrics: Prometheus metrics helpers
- errors: Canonical error types and responses
- test_helpers: Factories for principals and encoded ACLs used in tests

Engine logic should not live here. Do not import from service_* packages
into shared/.
"""
