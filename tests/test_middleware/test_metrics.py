"""Metrics middleware tests."""

from prometheus_client import REGISTRY
from starlette.testclient import TestClient


def _sample(name: str, labels: dict[str, str]) -> float:
    return REGISTRY.get_sample_value(name, labels) or 0.0


def test_requests_and_responses_are_counted(test_app_client: TestClient) -> None:
    before_requests = _sample(
        "hashbrowns_http_requests_total", {"method": "POST", "path": "/"}
    )
    before_ok = _sample("hashbrowns_http_responses_total", {"status_code": "200"})

    test_app_client.post("/", content=b"count me")

    assert (
        _sample("hashbrowns_http_requests_total", {"method": "POST", "path": "/"})
        == before_requests + 1
    )
    assert (
        _sample("hashbrowns_http_responses_total", {"status_code": "200"})
        == before_ok + 1
    )


def test_store_operations_are_counted(test_app_client: TestClient) -> None:
    before = _sample(
        "hashbrowns_store_operations_total", {"operation": "get", "outcome": "miss"}
    )
    test_app_client.get("/", params={"key": "absent00"})
    assert (
        _sample(
            "hashbrowns_store_operations_total",
            {"operation": "get", "outcome": "miss"},
        )
        == before + 1
    )


def test_metrics_endpoint_exposes_counters(test_app_client: TestClient) -> None:
    test_app_client.get("/health")
    response = test_app_client.get("/metrics")
    assert response.status_code == 200
    assert "hashbrowns_http_requests_total" in response.text


def _request_label_sets() -> set[tuple[str, str]]:
    return {
        (sample.labels["method"], sample.labels["path"])
        for metric in REGISTRY.collect()
        if metric.name == "hashbrowns_http_requests"
        for sample in metric.samples
        if sample.name == "hashbrowns_http_requests_total"
    }


def test_rejected_hosts_add_no_request_labels(test_app_client: TestClient) -> None:
    before = _request_label_sets()
    before_forbidden = _sample(
        "hashbrowns_http_responses_total", {"status_code": "403"}
    )

    for i in range(20):
        response = test_app_client.get(
            f"/junk-{i}", headers={"host": "intruder.test"}
        )
        assert response.status_code == 403

    assert _request_label_sets() == before
    assert (
        _sample("hashbrowns_http_responses_total", {"status_code": "403"})
        == before_forbidden
    )


def test_unrouted_paths_share_one_label(test_app_client: TestClient) -> None:
    before = _sample(
        "hashbrowns_http_requests_total", {"method": "GET", "path": "unmatched"}
    )

    test_app_client.get("/nowhere-1")
    test_app_client.get("/nowhere-2")

    assert (
        _sample(
            "hashbrowns_http_requests_total", {"method": "GET", "path": "unmatched"}
        )
        == before + 2
    )
    assert not any(path.startswith("/nowhere") for _, path in _request_label_sets())


def test_unsupported_method_is_labelled_by_route(test_app_client: TestClient) -> None:
    before = _sample("hashbrowns_http_requests_total", {"method": "PUT", "path": "/"})
    test_app_client.put("/", content=b"nope")
    assert (
        _sample("hashbrowns_http_requests_total", {"method": "PUT", "path": "/"})
        == before + 1
    )
