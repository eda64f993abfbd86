"""
Resilience helpers for calls to external services.
"""

from .circuit_breaker import CircuitBreaker, CircuitOpenError, CircuitState

__all__ = ["CircuitBreaker", "CircuitOpenError", "CircuitState"]
