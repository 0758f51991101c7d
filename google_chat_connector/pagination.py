"""
Pagination for the list operations (space:getAll, member:getAll).

Two strategies, chosen by the run-level returnAll flag:

  fetch-all    Follow nextPageToken until the server stops returning one and
               concatenate the named result array of every page.
  single-page  Issue exactly one request with the caller's pageSize and
               pageToken and return the page as-is (nextPageToken included).
"""

import math
from typing import Any, Dict, List

UINT32_MODULUS = 2 ** 32


def to_uint32(value: Any) -> int:
    """Coerce value to an unsigned 32-bit integer.

    Mirrors the `value >>> 0` idiom: missing or non-numeric values become 0,
    fractions are truncated toward zero and negatives wrap (-1 -> 4294967295).
    """
    if value is None:
        return 0
    if isinstance(value, int):
        return int(value) % UINT32_MODULUS
    if isinstance(value, str):
        value = value.strip()
        if value == "":
            return 0
        try:
            value = float(value)
        except ValueError:
            return 0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    if math.isnan(number) or math.isinf(number):
        return 0
    return math.trunc(number) % UINT32_MODULUS


def single_page_query(additional_fields: Dict[str, Any]) -> Dict[str, Any]:
    """Query string for single-page mode."""
    additional_fields = additional_fields or {}
    query = {"pageSize": to_uint32(additional_fields.get("pageSize"))}
    page_token = additional_fields.get("pageToken")
    if page_token is not None:
        query["pageToken"] = page_token
    return query


def fetch_all_pages(transport, spec, debug: bool = False) -> List[Any]:
    """Collect spec.list_key items across every page, in page order."""
    results = []
    query = dict(spec.query or {})
    page = 0

    while True:
        page += 1
        response = transport.request(spec.method, spec.path, spec.body, dict(query)) or {}
        items = response.get(spec.list_key) or []
        results.extend(items)

        if debug:
            print(f"  Page {page}: {len(items)} {spec.list_key}")

        next_token = response.get("nextPageToken")
        if not next_token:
            break
        query["pageToken"] = next_token

    return results


def fetch_single_page(transport, spec) -> Any:
    """Issue exactly one request and return the raw page."""
    return transport.request(spec.method, spec.path, spec.body, spec.query)

