# fizzbuzz/tests/test_api.py
from unittest.mock import patch

import pytest
from django.db import DatabaseError
from rest_framework.test import APIClient, APIRequestFactory

from fizzbuzz.services import StatisticStore
from fizzbuzz.views import FizzbuzzListView, StatisticsView

FIZZBUZZ = {"limit": "15", "int1": "3", "int2": "5", "str1": "Fizz", "str2": "Buzz"}
TOTO = {"limit": "50", "int1": "2", "int2": "7", "str1": "toto", "str2": "titi"}


def body(r):
    return r.content.decode("utf-8")


@pytest.mark.django_db
def test_list_returns_fizzbuzz_numbers():
    c = APIClient()
    r = c.get("/list", FIZZBUZZ)
    assert r.status_code == 200
    assert r["Content-Type"].startswith("text/plain")
    assert body(r) == "1, 2, Fizz, 4, Buzz, Fizz, 7, 8, Fizz, Buzz, 11, Fizz, 13, 14, FizzBuzz\n"


@pytest.mark.django_db
def test_list_ignores_accept_header():
    c = APIClient()
    r = c.get("/list", FIZZBUZZ, HTTP_ACCEPT="application/json")
    assert r.status_code == 200
    assert body(r).endswith("FizzBuzz\n")


@pytest.mark.django_db
def test_list_without_parameters_reports_every_missing_one():
    c = APIClient()
    r = c.get("/list")
    assert r.status_code == 400
    assert body(r) == (
        "parameter limit is required\n"
        "parameter int1 is required\n"
        "parameter int2 is required\n"
        "parameter str1 is required\n"
        "parameter str2 is required\n"
    )


@pytest.mark.django_db
def test_list_reports_mixed_errors_in_order_and_records_nothing():
    c = APIClient()
    r = c.get("/list", {"limit": "abc", "int1": "0", "int2": "5", "str1": "", "str2": "a!"})
    assert r.status_code == 400
    assert body(r) == (
        "parameter str1 is required\n"
        "parameter limit is not a numeric value (received:abc)\n"
        "parameter str2 is not an alphanumeric value (received:a!)\n"
        "int type parameter cannot be less than 1 (received:0)\n"
    )

    # Rejected requests are not counted
    assert c.get("/statistics").status_code == 404


@pytest.mark.django_db
def test_list_reports_null_character_as_not_alphanumeric():
    c = APIClient()
    r = c.get("/list?limit=15&int1=3&int2=5&str1=a%00b&str2=Buzz")
    assert r.status_code == 400
    assert body(r) == "parameter str1 is not an alphanumeric value (received:a\x00b)\n"

    r = c.get("/list?limit=1%00&int1=3&int2=&str1=Fizz&str2=Buzz")
    assert r.status_code == 400
    assert body(r) == (
        "parameter int2 is required\n"
        "parameter limit is not a numeric value (received:1\x00)\n"
    )


@pytest.mark.django_db
def test_list_rejects_post():
    c = APIClient()
    r = c.post("/list?limit=15&int1=3&int2=5&str1=Fizz&str2=Buzz")
    assert r.status_code == 405


@pytest.mark.django_db
def test_statistics_empty_store_is_404():
    c = APIClient()
    r = c.get("/statistics")
    assert r.status_code == 404
    assert body(r) == "there isn't any saved request yet\n"


@pytest.mark.django_db
def test_statistics_rejects_parameters():
    c = APIClient()
    assert c.get("/list", FIZZBUZZ).status_code == 200

    r = c.get("/statistics", {"limit": "15"})
    assert r.status_code == 400
    assert body(r) == "this endpoint does not accept parameter\n"

    # A bare key counts as a parameter too
    assert c.get("/statistics?verbose").status_code == 400


@pytest.mark.django_db
def test_statistics_returns_most_requested_parameters():
    c = APIClient()
    for _ in range(3):
        assert c.get("/list", FIZZBUZZ).status_code == 200
    assert c.get("/list", TOTO).status_code == 200

    r = c.get("/statistics")
    assert r.status_code == 200
    lines = body(r).splitlines()
    assert len(lines) == 1
    assert lines[0].startswith(
        "Request n°1 : limit=15, int1=3, int2=5, str1=Fizz, str2=Buzz, hits=3, created_at="
    )
    assert ", updated_at=" in lines[0]


@pytest.mark.django_db
def test_statistics_returns_every_tie_in_creation_order():
    c = APIClient()
    for _ in range(2):
        c.get("/list", FIZZBUZZ)
        c.get("/list", TOTO)

    r = c.get("/statistics")
    assert r.status_code == 200
    lines = body(r).splitlines()
    assert len(lines) == 2
    assert lines[0].startswith("Request n°1 : limit=15, int1=3, int2=5, str1=Fizz, str2=Buzz, hits=2,")
    assert lines[1].startswith("Request n°2 : limit=50, int1=2, int2=7, str1=toto, str2=titi, hits=2,")


@pytest.mark.django_db
def test_statistics_follow_the_new_leader():
    c = APIClient()
    c.get("/list", FIZZBUZZ)
    for _ in range(2):
        c.get("/list", TOTO)

    lines = body(c.get("/statistics")).splitlines()
    assert len(lines) == 1
    assert "str1=toto, str2=titi, hits=2" in lines[0]


@pytest.mark.django_db
def test_storage_failure_is_a_500_for_that_request_only():
    c = APIClient()
    with patch.object(StatisticStore, "_increment", side_effect=DatabaseError("connection lost")):
        r = c.get("/list", FIZZBUZZ)
    assert r.status_code == 500
    assert body(r) == "internal server error\n"

    # The server keeps serving once storage is back
    r = c.get("/list", FIZZBUZZ)
    assert r.status_code == 200


# === Store injection ===
class RecordingStore:
    def __init__(self, top=None):
        self.observed = []
        self.top = top or []

    def record_observation(self, params):
        self.observed.append(params)

    def top_statistics(self):
        return self.top


def test_list_view_uses_the_injected_store():
    store = RecordingStore()
    view = FizzbuzzListView.as_view(store=store)
    request = APIRequestFactory().get("/list", {"limit": "3", "int1": "3", "int2": "5", "str1": "a", "str2": "b"})

    response = view(request)
    response.render()

    assert response.status_code == 200
    assert response.content == b"1, 2, a\n"
    assert len(store.observed) == 1
    assert store.observed[0].limit == 3
    assert store.observed[0].str2 == "b"


def test_statistics_view_uses_the_injected_store():
    view = StatisticsView.as_view(store=RecordingStore())
    response = view(APIRequestFactory().get("/statistics"))
    response.render()

    assert response.status_code == 404
    assert response.content == b"there isn't any saved request yet\n"


@pytest.mark.django_db
def test_every_request_is_access_logged():
    c = APIClient()
    with patch("fizzbuzz.middleware.logger") as log:
        c.get("/statistics")

    assert log.info.call_count == 1
    fmt, method, path, status_code, _elapsed = log.info.call_args[0]
    assert (method, path, status_code) == ("GET", "/statistics", 404)
