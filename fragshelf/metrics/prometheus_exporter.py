"""Prometheus exporter helpers."""

from __future__ import annotations

from prometheus_client import Counter


recommendation_requests_total = Counter(
    "fragshelf_recommendation_requests_total",
    "Total number of recommendation requests.",
    ["mode"],
)

recommendation_empty_total = Counter(
    "fragshelf_recommendation_empty_total",
    "Recommendation requests that produced no match above the threshold.",
    ["mode"],
)

fragrance_mutations_total = Counter(
    "fragshelf_fragrance_mutations_total",
    "Create, update and delete operations on fragrance records.",
    ["operation"],
)
