from __future__ import annotations

import pytest

from jobly.core.errors import BadRequestError, EmptyInputError, InvalidFilterKeyError, NotFoundError
from jobly.models.job import JobRepository


@pytest.fixture()
def repo(db):
    return JobRepository(db)


def _titles(rows):
    return [r["title"] for r in rows]


def test_create(repo):
    job = repo.create({"title": "new", "salary": 100, "equity": 0.1, "companyHandle": "c3"})
    assert isinstance(job["id"], int)
    assert job["title"] == "new"
    assert job["salary"] == 100
    assert job["equity"] == pytest.approx(0.1)
    assert job["companyHandle"] == "c3"


def test_create_unknown_company(repo):
    with pytest.raises(BadRequestError):
        repo.create({"title": "new", "salary": 100, "equity": 0, "companyHandle": "ghost"})


def test_find_all_ordered_by_id(repo):
    rows = repo.find_all()
    assert _titles(rows) == ["job1", "job2", "job3"]
    assert set(rows[0]) == {"id", "title", "salary", "equity", "companyHandle"}


def test_filter_title(repo):
    assert _titles(repo.find_all({"title": "job1"})) == ["job1"]


def test_filter_title_case_insensitive(repo):
    assert _titles(repo.find_all({"title": "JOB"})) == ["job1", "job2", "job3"]


def test_filter_has_equity(repo):
    assert _titles(repo.find_all({"hasEquity": True})) == ["job2", "job3"]


def test_filter_has_equity_false_is_no_filter(repo):
    assert _titles(repo.find_all({"hasEquity": "false"})) == ["job1", "job2", "job3"]


def test_filter_min_salary(repo):
    assert _titles(repo.find_all({"minSalary": 20001})) == ["job3"]


def test_filter_min_salary_inclusive(repo):
    assert _titles(repo.find_all({"minSalary": "20000"})) == ["job2", "job3"]


def test_filter_combined(repo):
    assert _titles(repo.find_all({"title": "job", "minSalary": 15000, "hasEquity": "true"})) == ["job2", "job3"]
    assert _titles(repo.find_all({"title": "job1", "hasEquity": True})) == []


def test_filter_unknown_key(repo):
    with pytest.raises(InvalidFilterKeyError):
        repo.find_all({"title": "job1", "maxSalary": 5})


def test_get(repo, job_ids):
    job = repo.get(job_ids["job3"])
    assert job["title"] == "job3"
    assert job["companyHandle"] == "c2"


def test_get_not_found(repo):
    with pytest.raises(NotFoundError):
        repo.get(0)


def test_update(repo, job_ids):
    job = repo.update(job_ids["job1"], {"title": "renamed", "salary": 1})
    assert job["title"] == "renamed"
    assert job["salary"] == 1
    assert job["companyHandle"] == "c1"


@pytest.mark.parametrize("field", ["id", "companyHandle", "company_handle"])
def test_update_frozen_fields(repo, job_ids, field):
    with pytest.raises(BadRequestError):
        repo.update(job_ids["job1"], {field: "c2"})


def test_update_no_data(repo, job_ids):
    with pytest.raises(EmptyInputError):
        repo.update(job_ids["job1"], {})


def test_update_not_found(repo):
    with pytest.raises(NotFoundError):
        repo.update(0, {"title": "x"})


def test_remove(repo, job_ids):
    repo.remove(job_ids["job1"])
    assert _titles(repo.find_all()) == ["job2", "job3"]
    with pytest.raises(NotFoundError):
        repo.remove(job_ids["job1"])
