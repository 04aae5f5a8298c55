"""
Transformers Package

Normalization of ledger envelopes, identity resolution and certificate links.
"""
from src.chicktrace.transformers.certificate_links import CertificateLinkBuilder, is_valid_cid
from src.chicktrace.transformers.identity_resolver import resolve_display_name
from src.chicktrace.transformers.record_normalizer import (
    normalize_entry,
    normalize_history,
    parse_timestamp,
    sort_chronologically,
)

__all__ = [
    "CertificateLinkBuilder",
    "is_valid_cid",
    "resolve_display_name",
    "normalize_entry",
    "normalize_history",
    "parse_timestamp",
    "sort_chronologically",
]
