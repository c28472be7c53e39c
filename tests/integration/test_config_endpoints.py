"""Integration coverage for the deduction table endpoints."""

from http import HTTPStatus

from flask.testing import FlaskClient


def test_list_years_endpoint(client: FlaskClient) -> None:
    response = client.get("/api/v1/config/years")

    assert response.status_code == HTTPStatus.OK
    payload = response.get_json()
    assert payload["default_year"] == 2016
    entry = next(item for item in payload["years"] if item["year"] == 2016)
    assert entry["resolved_filename"] == "2016.yaml"
    assert entry["status"] == "active"


def test_year_tables_endpoint_exposes_brackets(client: FlaskClient) -> None:
    response = client.get("/api/v1/config/2016/tables")

    assert response.status_code == HTTPStatus.OK
    payload = response.get_json()
    assert payload["year"] == 2016

    inss = payload["inss"]
    assert inss["brackets"][0] == {"upper_bound": "1693.72", "rate": "8", "rate_label": "8%"}
    assert inss["brackets"][-1]["upper_bound"] is None
    assert inss["ceiling_deduction"] == "621.04"
    assert inss["dependent_offsets"][0] == {"below": "877.68", "amount": "45.00"}

    irrf = payload["irrf"]
    assert [bracket["rate_label"] for bracket in irrf["brackets"]] == [
        "0%",
        "7.5%",
        "15%",
        "22.5%",
        "27.5%",
    ]
    assert irrf["counters"][-1] == {"max_rate": None, "counter": "869.36"}


def test_year_tables_endpoint_unknown_year(client: FlaskClient) -> None:
    response = client.get("/api/v1/config/1999/tables")

    assert response.status_code == HTTPStatus.NOT_FOUND
    payload = response.get_json()
    assert payload["error"] == "not_found"
    assert "1999" in payload["message"]
