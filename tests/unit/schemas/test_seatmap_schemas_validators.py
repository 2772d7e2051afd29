import pytest
from pydantic import ValidationError
from app.domain.seatmap.schemas import SeatDraft, SeatKeyDTO, SeatMapSession, SelectRangeDTO
from tests.helper import key


def test_seat_draft_row_char_is_trimmed_and_uppercased():
    seat = SeatDraft(row_char=" b ", seat_number=3, real_seat_number=1)

    assert seat.row_char == "B"
    assert seat.key == SeatKeyDTO(row_char="B", seat_number=3)


@pytest.mark.parametrize("row_char", ["AA", "1", "", "Ä"])
def test_seat_draft_rejects_non_letter_rows(row_char):
    with pytest.raises(ValidationError):
        SeatDraft(row_char=row_char, seat_number=1, real_seat_number=1)


@pytest.mark.parametrize("seat_number, real_seat_number", [(0, 1), (1, 0), (-2, 1)])
def test_seat_draft_rejects_non_positive_numbers(seat_number, real_seat_number):
    with pytest.raises(ValidationError):
        SeatDraft(row_char="A", seat_number=seat_number, real_seat_number=real_seat_number)


def test_session_rejects_duplicate_seats():
    seat = {"row_char": "A", "seat_number": 1, "real_seat_number": 1}

    with pytest.raises(ValidationError):
        SeatMapSession(seats=[seat, seat])


def test_session_rejects_selection_of_unknown_seat():
    with pytest.raises(ValidationError):
        SeatMapSession(
            seats=[{"row_char": "A", "seat_number": 1, "real_seat_number": 1}],
            selected=[{"row_char": "B", "seat_number": 1}]
        )


def test_session_rejects_duplicate_selection():
    with pytest.raises(ValidationError):
        SeatMapSession(
            seats=[{"row_char": "A", "seat_number": 1, "real_seat_number": 1}],
            selected=[{"row_char": "A", "seat_number": 1}, {"row_char": "a", "seat_number": 1}]
        )


def test_session_parses_from_json_payload():
    session = SeatMapSession.model_validate({
        "theater_id": 3,
        "seats": [{"row_char": "a", "seat_number": 2, "real_seat_number": 1, "category_id": 4}],
        "selected": [{"row_char": "A", "seat_number": 2}]
    })

    assert session.selected == [key("A", 2)]
    assert session.seats[0].category_id == 4


def test_session_rejects_extra_fields():
    with pytest.raises(ValidationError):
        SeatMapSession(seats=[], mode="edit")


def test_select_range_row_is_normalized():
    dto = SelectRangeDTO(session=SeatMapSession(), row=" c ", start=1, end=2)

    assert dto.row == "C"
