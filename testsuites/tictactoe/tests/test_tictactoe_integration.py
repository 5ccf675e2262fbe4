"""
================================================================================
Tic-Tac-Toe Integration Tests
================================================================================

Complex scenarios and edge cases:
- Coordinate and mark validation grids
- Complete games ending in a win (row, column, diagonal) or a draw
- Board state consistency across several operations

================================================================================
"""

from typing import Any, Dict

import allure
import pytest

from staf.api import ApiRequest, BaseApiClient, Method

from ..framework import BoardStorage, Mark, MarkRequest, bearer_auth_headers, default_headers
from ..framework.request_path import GET_BOARD, GET_SQUARE, PUT_SQUARE


pytestmark = pytest.mark.integration

VALID_COORDINATES = [(row, column) for row in range(1, 4) for column in range(1, 4)]
INVALID_COORDINATES = [(0, 0), (0, 1), (1, 0), (4, 1), (1, 4), (4, 4), (-1, 1), (1, -1), (-1, -1)]
VALID_MARKS = [Mark.X.value, Mark.O.value]
INVALID_MARKS = ["A", "B", "Y", "Z", "1", "2", "x", "o", "", " ", "XX", "OO"]


@pytest.fixture
def place_mark(httpx_client: BaseApiClient, service_config, rvs):
    """Place a mark, verify 200 and return the board as a dict."""

    def _place(row: int, column: int, mark: str) -> Dict[str, Any]:
        with allure.step(f"Place {mark} at ({row},{column})"):
            response = httpx_client.put(
                PUT_SQUARE,
                path_params={"row": row, "column": column},
                headers=bearer_auth_headers(service_config),
                body=MarkRequest(mark=mark),
                response_body_type=dict,
            )
            rvs.verify_status_code(200, response)
            return response.body

    return _place


@pytest.fixture
def fresh_board(stub_api):
    """Scenario tests replay whole games and need an empty board."""
    if stub_api is None:
        pytest.skip("Game scenarios need a fresh board; live state is shared")
    return stub_api


@allure.epic("Tic Tac Toe API")
@allure.feature("Integration Tests")
class TestCoordinateValidation:

    @allure.story("Coordinate Validation")
    @pytest.mark.P0
    @pytest.mark.square
    @pytest.mark.parametrize("row, column", VALID_COORDINATES)
    def test_valid_coordinates(self, httpx_client, service_config, rvs, row, column):
        response = httpx_client.get(
            GET_SQUARE,
            path_params={"row": row, "column": column},
            headers=bearer_auth_headers(service_config),
            response_body_type=str,
        )
        rvs.verify_status_code(200, response)

    @allure.story("Coordinate Validation")
    @pytest.mark.P2
    @pytest.mark.square
    @pytest.mark.mutation
    @pytest.mark.parametrize("row, column", INVALID_COORDINATES)
    def test_invalid_coordinates(self, httpx_client, service_config, rvs, row, column):
        response = httpx_client.get(
            GET_SQUARE,
            path_params={"row": row, "column": column},
            headers=bearer_auth_headers(service_config),
            response_body_type=str,
        )
        rvs.verify_status_code(400, response)


@allure.epic("Tic Tac Toe API")
@allure.feature("Integration Tests")
class TestMarkValidation:

    @allure.story("Mark Validation")
    @pytest.mark.P0
    @pytest.mark.placement
    @pytest.mark.parametrize("mark", VALID_MARKS)
    def test_valid_marks(self, fresh_board, place_mark, mark):
        board = place_mark(1, 1, mark)
        assert board["board"][0][0] == mark

    @allure.story("Mark Validation")
    @pytest.mark.P2
    @pytest.mark.placement
    @pytest.mark.mutation
    @pytest.mark.parametrize("mark", INVALID_MARKS)
    def test_invalid_marks(self, httpx_client, service_config, rvs, mark):
        response = httpx_client.put(
            PUT_SQUARE,
            path_params={"row": 2, "column": 2},
            headers=bearer_auth_headers(service_config),
            body=MarkRequest(mark=mark),
            response_body_type=str,
        )
        rvs.verify_status_code(400, response)


@allure.epic("Tic Tac Toe API")
@allure.feature("Integration Tests")
class TestGameScenarios:

    @allure.story("Game Scenarios")
    @allure.title("X wins horizontally")
    @pytest.mark.P0
    @pytest.mark.e2e
    def test_x_wins_horizontal(self, fresh_board, place_mark):
        place_mark(1, 1, "X")
        place_mark(2, 1, "O")
        place_mark(1, 2, "X")
        place_mark(2, 2, "O")
        final = place_mark(1, 3, "X")

        assert final == BoardStorage.x_wins_horizontal().model_dump()

    @allure.story("Game Scenarios")
    @allure.title("O wins vertically")
    @pytest.mark.P0
    @pytest.mark.e2e
    def test_o_wins_vertical(self, fresh_board, place_mark):
        place_mark(1, 2, "X")
        place_mark(1, 1, "O")
        place_mark(1, 3, "X")
        place_mark(2, 1, "O")
        place_mark(2, 2, "X")
        final = place_mark(3, 1, "O")

        assert final == BoardStorage.o_wins_vertical().model_dump()

    @allure.story("Game Scenarios")
    @allure.title("X wins diagonally")
    @pytest.mark.P0
    @pytest.mark.e2e
    def test_x_wins_diagonal(self, fresh_board, place_mark):
        place_mark(1, 1, "X")
        place_mark(1, 2, "O")
        place_mark(2, 2, "X")
        place_mark(1, 3, "O")
        place_mark(2, 1, "O")
        final = place_mark(3, 3, "X")

        assert final == BoardStorage.x_wins_diagonal().model_dump()

    @allure.story("Game Scenarios")
    @allure.title("Full board without a winner is a draw")
    @pytest.mark.P1
    @pytest.mark.e2e
    def test_draw(self, fresh_board, place_mark):
        moves = [
            (1, 1, "X"), (1, 2, "O"), (1, 3, "X"),
            (2, 1, "O"), (2, 2, "X"), (2, 3, "O"),
            (3, 1, "O"), (3, 2, "X"),
        ]
        for row, column, mark in moves:
            assert place_mark(row, column, mark)["winner"] == Mark.EMPTY.value

        final = place_mark(3, 3, "O")
        assert final == BoardStorage.draw_board().model_dump()

    @allure.story("Error Handling")
    @allure.title("Placing a mark on an occupied square fails")
    @pytest.mark.P1
    @pytest.mark.mutation
    def test_occupied_square(self, fresh_board, place_mark, httpx_client, service_config, rvs):
        place_mark(2, 3, "X")

        response = httpx_client.put(
            PUT_SQUARE,
            path_params={"row": 2, "column": 3},
            headers=bearer_auth_headers(service_config),
            body=MarkRequest(mark="O"),
            response_body_type=str,
        )
        rvs.verify_response_contains(400, response, "not empty")

    @allure.story("Board State")
    @allure.title("Board reflects every placed mark")
    @pytest.mark.P1
    @pytest.mark.board
    def test_board_state_consistency(self, fresh_board, place_mark, httpx_client, service_config, rvs):
        board_request = ApiRequest(
            method=Method.GET,
            path=GET_BOARD,
            headers=default_headers(service_config),
            response_body_type=dict,
        )
        initial = httpx_client.send_request(board_request)
        rvs.verify_json_response(200, initial, BoardStorage.empty_board())

        place_mark(1, 1, "X")
        place_mark(2, 2, "O")
        place_mark(3, 3, "X")

        updated = httpx_client.send_request(board_request)
        rvs.verify_status_code(200, updated)
        rvs.verify_body_not_null(updated)
        assert [updated.body["board"][i][i] for i in range(3)] == ["X", "O", "X"]
        assert updated.body["winner"] == Mark.EMPTY.value


@allure.epic("Tic Tac Toe API")
@allure.feature("Integration Tests")
class TestLiveService:

    @allure.story("Availability")
    @allure.title("Live board endpoint answers with JSON")
    @pytest.mark.requires_external
    @pytest.mark.smoke
    def test_live_board_available(self, httpx_client, service_config, rvs):
        response = httpx_client.get(
            GET_BOARD,
            headers=default_headers(service_config),
            response_body_type=dict,
        )
        rvs.verify_status_code(200, response)
        rvs.verify_content_type_json(response)
