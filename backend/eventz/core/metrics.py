"""
Metrics instrumentation for observability.
Exposes Prometheus-compatible metrics at /metrics endpoint.
"""

from prometheus_client import Counter, generate_latest, CONTENT_TYPE_LATEST
from fastapi import Response

# Booking lifecycle metrics
booking_transitions = Counter(
    'booking_transitions_total',
    'Booking lifecycle transitions',
    ['transition']  # created, agreed, paid, updated, cancelled, deleted, approved
)

booking_conflicts = Counter(
    'booking_conflicts_total',
    'Booking writes rejected by the version check'
)

# Coupon metrics
coupon_checks = Counter(
    'coupon_checks_total',
    'Coupon validations during payment',
    ['result']  # applied, expired, unknown, mismatch
)

# OTP metrics
otp_events = Counter(
    'otp_events_total',
    'Password reset OTP events',
    ['event']  # issued, validated, expired, invalid, consumed
)

# Database metrics
db_operations = Counter(
    'db_operations_total',
    'Total database operations',
    ['operation']  # read, write
)


def metrics_endpoint() -> Response:
    """
    Prometheus metrics endpoint.

    Usage:
        @app.get("/metrics")
        def metrics():
            return metrics_endpoint()
    """
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


def record_booking_transition(transition: str):
    booking_transitions.labels(transition=transition).inc()


def record_coupon_check(result: str):
    coupon_checks.labels(result=result).inc()


def record_otp_event(event: str):
    otp_events.labels(event=event).inc()


def record_db_operation(operation: str):
    """Record database operation. Operation: read, write"""
    db_operations.labels(operation=operation).inc()
