from __future__ import annotations

from jobly.core.sql.names import COMPANY_NAMES, JOB_NAMES, USER_NAMES, NameMapping


def test_translate_known_name():
    assert COMPANY_NAMES.translate("numEmployees") == "num_employees"
    assert COMPANY_NAMES.translate("logoUrl") == "logo_url"
    assert USER_NAMES.translate("isAdmin") == "is_admin"
    assert JOB_NAMES.translate("companyHandle") == "company_handle"


def test_unknown_name_falls_back_to_itself():
    for name in ("name", "description", "", "weird name", "numemployees"):
        assert COMPANY_NAMES.translate(name) == name


def test_empty_mapping_is_identity():
    m = NameMapping()
    assert m.translate("anything") == "anything"
    assert m.reverse("anything") == "anything"


def test_reverse_lookup():
    assert USER_NAMES.reverse("first_name") == "firstName"
    assert USER_NAMES.reverse("username") == "username"


def test_mapping_is_not_affected_by_source_dict_changes():
    src = {"a": "col_a"}
    m = NameMapping(src)
    src["a"] = "changed"
    src["b"] = "col_b"
    assert m.translate("a") == "col_a"
    assert m.translate("b") == "b"
    assert "a" in m
    assert "b" not in m
