"""Prometheus metrics for validation outcomes, generated identifiers and key derivations"""

from prometheus_client import Counter, Histogram

# Validation metrics
validation_counter = Counter(
    "fintools_validation_total",
    "Validations performed",
    ["tool", "outcome"],  # tool: iban | oib | card | mnemonic | payment_slip; outcome: valid | invalid | incomplete
)

generation_counter = Counter(
    "fintools_generation_total",
    "Identifiers and payloads generated",
    ["tool"],
)

# Derivation metrics
derivation_counter = Counter(
    "fintools_derivation_total",
    "Mnemonic key derivations",
    ["outcome"],  # derived | rejected | unavailable
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_validation(tool: str, outcome: str) -> None:
    """Record one validation by tool and outcome"""
    validation_counter.labels(tool=tool, outcome=outcome).inc()


def record_generation(tool: str) -> None:
    generation_counter.labels(tool=tool).inc()


def record_derivation(outcome: str) -> None:
    derivation_counter.labels(outcome=outcome).inc()
