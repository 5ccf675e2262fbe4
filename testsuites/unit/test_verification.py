import subprocess
import sys

import pytest
from pydantic import BaseModel

from staf.api import ApiResponse
from staf.verification import (
    IGNORE,
    ResponseVerificationService,
    SoftAssertions,
    add_ignore,
    add_ignores,
    compare_json,
)


class Status(BaseModel):
    winner: str
    board: list


@pytest.fixture
def rvs():
    return ResponseVerificationService()


class TestSoftAssertions:

    def test_collects_every_failure(self):
        soft = SoftAssertions()
        soft.equal(1, 2, "first")
        soft.contains("abc", "z", "second")
        soft.not_none(None, "third")
        assert soft.check(True, "never reported")

        with pytest.raises(AssertionError) as error:
            soft.assert_all()

        message = str(error.value)
        assert "3 assertion(s) failed" in message
        assert "first: expected 2, got 1" in message
        assert "second" in message and "third" in message

    def test_context_manager_passes_when_clean(self):
        with SoftAssertions() as soft:
            soft.equal("a", "a")

    def test_context_manager_raises_on_exit(self):
        with pytest.raises(AssertionError):
            with SoftAssertions() as soft:
                soft.equal(1, 2)


class TestCompareJson:

    def test_equal_documents(self):
        assert compare_json({"a": [1, {"b": None}]}, {"a": [1, {"b": None}]}) == []

    def test_numbers_compare_by_value(self):
        assert compare_json({"n": 1.0}, {"n": 1}) == []

    def test_bool_is_not_a_number(self):
        assert compare_json({"n": True}, {"n": 1}) == ["$.n: expected 1, got true"]

    def test_missing_and_unexpected_keys(self):
        differences = compare_json({"a": 1, "extra": 2}, {"a": 1, "b": 3})
        assert "$.b: missing in actual" in differences
        assert "$.extra: unexpected field with value 2" in differences

    def test_array_length_and_items(self):
        assert compare_json([1, 2], [1]) == ["$: expected array of length 1, got 2"]
        assert compare_json([[1, "x"]], [[1, "y"]]) == ['$[0][1]: expected "y", got "x"']

    def test_type_mismatch(self):
        assert compare_json("1", {"a": 1}) == ['$: expected object, got "1"']
        assert compare_json({}, []) == ["$: expected array, got {}"]

    def test_ignore_matches_any_present_value(self):
        expected = {"winner": "X", "board": [[1]], "id": 5}
        add_ignores(expected, "board", "id", "not_there")
        assert expected == {"winner": "X", "board": IGNORE, "id": IGNORE}
        assert compare_json({"winner": "X", "board": "anything", "id": None}, expected) == []

    def test_ignore_still_requires_presence(self):
        expected = {"a": 1}
        add_ignore(expected, "a")
        assert compare_json({}, expected) == ["$.a: missing in actual"]


class TestResponseVerificationService:

    def test_verify_response(self, rvs):
        rvs.verify_response(200, ApiResponse(status_code=200, body={"a": 1}), {"a": 1})
        with pytest.raises(AssertionError, match="2 assertion"):
            rvs.verify_response(200, ApiResponse(status_code=400, body=None), {"a": 1})

    def test_verify_json_response_with_models(self, rvs):
        response = ApiResponse(status_code=200, body={"winner": "X", "board": [["X"]]})
        rvs.verify_json_response(200, response, Status(winner="X", board=[["X"]]))

        with pytest.raises(AssertionError, match=r"\$\.winner"):
            rvs.verify_json_response(200, response, Status(winner="O", board=[["X"]]))

    def test_verify_json_response_parses_raw_body(self, rvs):
        response = ApiResponse(status_code=200, raw_body='{"a": 1}')
        rvs.verify_json_response(200, response, {"a": 1})

    def test_verify_status_code(self, rvs):
        rvs.verify_status_code(201, ApiResponse(status_code=201))
        with pytest.raises(AssertionError, match="Expected status 200, got 500"):
            rvs.verify_status_code(200, ApiResponse(status_code=500, raw_body="boom"))

    def test_verify_response_contains(self, rvs):
        response = ApiResponse(status_code=400, raw_body='{"message": "Illegal coordinates."}')
        rvs.verify_response_contains(400, response, "Illegal coordinates")
        with pytest.raises(AssertionError):
            rvs.verify_response_contains(400, response, "Invalid Mark")

    def test_verify_body_not_null(self, rvs):
        rvs.verify_body_not_null(ApiResponse(status_code=200, raw_body="x"))
        with pytest.raises(AssertionError):
            rvs.verify_body_not_null(ApiResponse(status_code=204))

    def test_verify_content_type_json(self, rvs):
        rvs.verify_content_type_json(
            ApiResponse(status_code=200, headers={"content-type": "Application/JSON; charset=utf-8"})
        )
        with pytest.raises(AssertionError, match="missing"):
            rvs.verify_content_type_json(ApiResponse(status_code=200))
        with pytest.raises(AssertionError, match="text/html"):
            rvs.verify_content_type_json(ApiResponse(status_code=200, headers={"Content-Type": "text/html"}))

    def test_verify_json_response_with_non_json_body(self, rvs):
        response = ApiResponse(status_code=200, raw_body="<html>oops</html>")
        with pytest.raises(AssertionError, match="Response body is not JSON: '<html>oops</html>'"):
            rvs.verify_json_response(200, response, {"a": 1})


OPTIMIZED_CHECK = """
from staf.api import ApiResponse
from staf.verification import ResponseVerificationService
from testsuites.uspto.framework import UsptoVerificationService

checks = [
    lambda: ResponseVerificationService().verify_status_code(200, ApiResponse(status_code=500)),
    lambda: ResponseVerificationService().verify_body_not_null(ApiResponse(status_code=204)),
    lambda: UsptoVerificationService().verify_fields_list([]),
]
for check in checks:
    try:
        check()
    except AssertionError:
        continue
    raise SystemExit("verification passed under -O")
print("all checks raised")
"""


def test_checks_still_fail_with_optimizations(project_root):
    result = subprocess.run(
        [sys.executable, "-O", "-c", OPTIMIZED_CHECK],
        cwd=str(project_root),
        capture_output=True,
        text=True,
    )
    assert result.returncode == 0, result.stderr
    assert "all checks raised" in result.stdout
