"""
Certification Service - the learner's own certifications and the
organization-wide certification tracker.

Tracker chart series are computed from the filtered records:
    completed_by_location   - Completed records per location
    progress_distribution   - all four progress statuses, zero-filled
    by_department           - records per department
"""

from __future__ import annotations

import copy
from collections import Counter

from luma.data.mock_data import (
    CERTIFICATIONS,
    ORG_CERTIFICATION_RECORDS,
    ORG_SEARCH_FIELDS,
    PROGRESS_STATUSES,
)

CERT_STATUS_GROUPS = ("Active", "In Progress", "Expired")


def my_certifications(search: str | None = None) -> dict:
    term = (search or "").strip().lower()
    certs = [
        copy.deepcopy(c) for c in CERTIFICATIONS
        if not term or term in c["name"].lower() or term in c["provider"].lower()
    ]
    groups = {status: [c for c in certs if c["status"] == status] for status in CERT_STATUS_GROUPS}
    return {
        "items": certs,
        "active": groups["Active"],
        "in_progress": groups["In Progress"],
        "expired": groups["Expired"],
        "counts": {
            "active": len(groups["Active"]),
            "in_progress": len(groups["In Progress"]),
            "expired": len(groups["Expired"]),
        },
    }


def _filter_records(search: str | None) -> list[dict]:
    term = (search or "").strip().lower()
    if not term:
        return [copy.deepcopy(r) for r in ORG_CERTIFICATION_RECORDS]
    return [
        copy.deepcopy(r) for r in ORG_CERTIFICATION_RECORDS
        if any(term in str(r[field]).lower() for field in ORG_SEARCH_FIELDS)
    ]


def _chart_data(records: list[dict]) -> dict:
    # Counter preserves first-seen order, matching the table order
    by_location = Counter(r["location"] for r in records if r["progress"] == "Completed")
    progress = Counter(r["progress"] for r in records)
    by_department = Counter(r["department"] for r in records)
    return {
        "completed_by_location": [{"name": k, "value": v} for k, v in by_location.items()],
        "progress_distribution": [{"name": s, "value": progress.get(s, 0)} for s in PROGRESS_STATUSES],
        "by_department": [{"name": k, "certifications": v} for k, v in by_department.items()],
    }


def organization_tracker(search: str | None = None) -> dict:
    records = _filter_records(search)
    return {
        "items": records,
        "total": len(records),
        "charts": _chart_data(records),
    }
