"""Tests for google_chat_connector.parameters."""

import json
import pytest

from google_chat_connector.exceptions import InvalidInput
from google_chat_connector.parameters import JobParameters, load_job


def _write_job(tmp_path, job):
    path = tmp_path / "job.json"
    path.write_text(json.dumps(job) if not isinstance(job, str) else job)
    return str(path)


# ---------------------------------------------------------------------------
# JobParameters.get_param
# ---------------------------------------------------------------------------

def test_item_override_wins():
    params = JobParameters(
        "message", "get",
        parameters={"spaceName": "S"},
        item_parameters=[{}, {"spaceName": "T"}],
    )
    assert params.get_param("spaceName", 0) == "S"
    assert params.get_param("spaceName", 1) == "T"


def test_falls_back_to_defaults():
    params = JobParameters("space", "getAll")
    assert params.get_param("returnAll", 0) is False
    assert params.get_param("additionalFields", 3) == {}


def test_resource_and_operation():
    params = JobParameters("space", "get")
    assert params.get_param("resource", 0) == "space"
    assert params.get_param("operation", 0) == "get"


def test_unknown_parameter_raises():
    params = JobParameters("space", "get")
    with pytest.raises(InvalidInput, match='Could not get parameter "nope"'):
        params.get_param("nope", 0)


# ---------------------------------------------------------------------------
# load_job
# ---------------------------------------------------------------------------

def test_load_job(tmp_path):
    path = _write_job(tmp_path, {
        "resource": "message",
        "operation": "create",
        "parameters": {"spaceName": "S"},
        "items": [
            {"json": {"id": 1}, "parameters": {"messageUi": {"text": "a"}}},
            {"json": {"id": 2}},
        ],
    })

    params, records = load_job(path)

    assert records == [{"id": 1}, {"id": 2}]
    assert params.get_param("messageUi", 0) == {"text": "a"}
    assert params.get_param("messageUi", 1) == {}
    assert params.get_param("spaceName", 1) == "S"


def test_load_job_without_items_has_one_record(tmp_path):
    path = _write_job(tmp_path, {"resource": "space", "operation": "getAll"})
    _, records = load_job(path)
    assert records == [{}]


def test_load_job_missing_operation(tmp_path):
    path = _write_job(tmp_path, {"resource": "space"})
    with pytest.raises(InvalidInput, match="missing: operation"):
        load_job(path)


def test_load_job_invalid_json(tmp_path):
    path = _write_job(tmp_path, "{not json")
    with pytest.raises(InvalidInput, match="is not valid JSON"):
        load_job(path)


def test_load_job_not_an_object(tmp_path):
    path = _write_job(tmp_path, [1, 2])
    with pytest.raises(InvalidInput, match="must contain a JSON object"):
        load_job(path)
