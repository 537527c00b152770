"""
Prometheus metrics for constraint validation

This module counts validation passes and failures so rejected input can be
monitored per validator kind and per constraint argument.
"""
from prometheus_client import (
    Counter,
    Histogram,
    CollectorRegistry,
    generate_latest,
    write_to_textfile,
)


# Private registry, separate from prometheus_client's default one
REGISTRY = CollectorRegistry()


# =======================
# VALIDATION METRICS
# =======================

# Validation passes counter
constraint_validations_total = Counter(
    name="constraint_validations_total",
    documentation="Total number of constrained values validated",
    labelnames=["kind", "status"],  # kind: string, number, list; status: valid, invalid
    registry=REGISTRY,
)

# Failures by constraint argument
constraint_failures_total = Counter(
    name="constraint_failures_total",
    documentation="Total number of failed constraints",
    labelnames=["kind", "arg"],
    registry=REGISTRY,
)

# Input validation duration (field-set engine)
input_validation_duration_seconds = Histogram(
    name="constraint_input_validation_duration_seconds",
    documentation="Time spent validating one input in seconds",
    buckets=[0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05, 0.1],
    registry=REGISTRY,
)


# =======================
# EXPOSITION
# =======================

def generate_metrics() -> bytes:
    """
    Render the registry in Prometheus text format

    Returns:
        Metrics exposition bytes
    """
    return generate_latest(REGISTRY)


def write_metrics(path: str) -> None:
    """
    Write the registry to a file for the node_exporter textfile collector

    The file is replaced atomically, so a scrape never sees a partial write.

    Args:
        path: Target file, conventionally ending in ``.prom``
    """
    write_to_textfile(path, REGISTRY)


def record_validation(kind: str, error=None) -> None:
    """
    Record the outcome of one validation pass

    Args:
        kind: Validator kind (string, number, list)
        error: The ConstraintValidationError raised, or None when the value passed
    """
    if error is None:
        constraint_validations_total.labels(kind=kind, status="valid").inc()
        return

    constraint_validations_total.labels(kind=kind, status="invalid").inc()
    for item in error.context:
        constraint_failures_total.labels(kind=kind, arg=item.arg).inc()


def get_sample_value(name: str, labels: dict[str, str]) -> float:
    """
    Read the current value of a sample (0.0 when it was never recorded)

    Args:
        name: Sample name, e.g. "constraint_validations_total"
        labels: Label values of the sample
    """
    return REGISTRY.get_sample_value(name, labels) or 0.0
