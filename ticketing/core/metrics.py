"""
Metrics instrumentation for observability.
Exposes Prometheus-compatible metrics at /metrics endpoint.
"""

from prometheus_client import Counter, Histogram, Gauge, generate_latest, CONTENT_TYPE_LATEST
from fastapi import Response

# Ticket operation metrics
ticket_operations = Counter(
    'ticket_operations_total',
    'Ticket service operations',
    ['operation', 'result']  # reserve/cancel/modify/..., success or error kind
)

ticket_operation_latency = Histogram(
    'ticket_operation_latency_seconds',
    'Ticket service operation latency',
    ['operation'],
    buckets=[0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05, 0.1]
)

# Catalog metrics
events_created = Counter(
    'events_created_total',
    'Total events created'
)

# Seating metrics
seats_occupied = Gauge(
    'seats_occupied',
    'Occupied seats per event date',
    ['event_id', 'event_date']
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

# Convenience functions for instrumentation
def record_ticket_operation(operation: str, result: str):
    """Record ticket operation. Result: success, or the error kind name"""
    ticket_operations.labels(operation=operation, result=result).inc()

def record_event_created():
    events_created.inc()

def record_seats_occupied(event_id: int, event_date: str, count: int):
    """Publish the occupied seat count for one event date."""
    seats_occupied.labels(event_id=str(event_id), event_date=event_date).set(count)
