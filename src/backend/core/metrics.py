"""
Prometheus business metrics.

HTTP request metrics come from core.instrumentator; this module covers
the ledger and dispute workflow.

Usage:
    from core.metrics import track_payment_recorded

    track_payment_recorded(payment.period_year, float(payment.amount))
"""

from prometheus_client import Counter, Histogram

# ==============================================================================
# Business Metrics - Payment Ledger
# ==============================================================================

payments_recorded_total = Counter(
    'payments_recorded_total',
    'Total payments recorded by admins',
    ['period_year']
)

payments_updated_total = Counter(
    'payments_updated_total',
    'Total payment corrections',
)

payment_amount_rupiah = Histogram(
    'payment_amount_rupiah',
    'Recorded payment amounts in Rupiah',
    buckets=(5000, 10000, 20000, 30000, 50000, 100000, 250000, float('inf'))
)

# ==============================================================================
# Business Metrics - Dispute Workflow
# ==============================================================================

disputes_filed_total = Counter(
    'disputes_filed_total',
    'Total disputes filed by citizens',
)

dispute_status_changed_total = Counter(
    'dispute_status_changed_total',
    'Total dispute resolutions',
    ['from_status', 'to_status']
)

# ==============================================================================
# Business Metrics - User Authentication
# ==============================================================================

auth_attempts_total = Counter(
    'auth_attempts_total',
    'Total authentication attempts',
    ['status']  # status: success/failure
)


def track_payment_recorded(period_year: int, amount: float):
    payments_recorded_total.labels(period_year=str(period_year)).inc()
    payment_amount_rupiah.observe(amount)


def track_payment_updated():
    payments_updated_total.inc()


def track_dispute_filed():
    disputes_filed_total.inc()


def track_dispute_resolved(from_status: str, to_status: str):
    dispute_status_changed_total.labels(from_status=from_status, to_status=to_status).inc()


def track_auth_attempt(success: bool):
    auth_attempts_total.labels(status="success" if success else "failure").inc()
