"""
Job Parameters - Parameter resolution for jobs run from a JSON file.

A job file looks like:

    {
        "resource": "message",
        "operation": "create",
        "parameters": {"spaceName": "AAAA1234"},
        "items": [
            {"json": {...}, "parameters": {"messageUi": {"text": "Hello"}}},
            {"json": {...}, "parameters": {"messageUi": {"text": "World"}}}
        ]
    }

get_param(name, i) returns, in order of precedence: item i's override, the
job-level value, the default from PARAMETER_DEFAULTS.
"""

import json
from typing import Any, Dict, List, Optional, Tuple

from .config import PARAMETER_DEFAULTS
from .exceptions import InvalidInput


class JobParameters:
    """Resolves parameter values per item index."""

    def __init__(
        self,
        resource: str,
        operation: str,
        parameters: Optional[Dict[str, Any]] = None,
        item_parameters: Optional[List[Dict[str, Any]]] = None,
        defaults: Optional[Dict[str, Any]] = None,
    ):
        self.resource = resource
        self.operation = operation
        self.parameters = dict(parameters or {})
        self.item_parameters = list(item_parameters or [])
        self.defaults = PARAMETER_DEFAULTS if defaults is None else defaults

    def get_param(self, name: str, index: int) -> Any:
        if index < len(self.item_parameters):
            overrides = self.item_parameters[index] or {}
            if name in overrides:
                return overrides[name]
        if name == "resource":
            return self.resource
        if name == "operation":
            return self.operation
        if name in self.parameters:
            return self.parameters[name]
        if name in self.defaults:
            return self.defaults[name]
        raise InvalidInput(f'Could not get parameter "{name}"')


def load_job(path: str) -> Tuple[JobParameters, List[Dict[str, Any]]]:
    """Read a job file.

    Returns:
        (JobParameters, input records) where each record is the item's "json".

    Raises:
        InvalidInput: If the file is not valid JSON or misses resource/operation.
    """
    try:
        with open(path, encoding="utf-8") as fh:
            job = json.load(fh)
    except ValueError as e:
        raise InvalidInput(f"Job file {path} is not valid JSON: {e}") from e

    if not isinstance(job, dict):
        raise InvalidInput(f"Job file {path} must contain a JSON object")

    missing = [key for key in ("resource", "operation") if not job.get(key)]
    if missing:
        raise InvalidInput(f"Job file {path} is missing: {', '.join(missing)}")

    items = job.get("items") or [{}]
    records = []
    item_parameters = []
    for item in items:
        item = item or {}
        records.append(item.get("json", {}))
        item_parameters.append(item.get("parameters", {}))

    params = JobParameters(
        job["resource"],
        job["operation"],
        parameters=job.get("parameters"),
        item_parameters=item_parameters,
    )
    return params, records
