from app.domain.seatmap.schemas import SeatDraft, SeatKeyDTO, SeatMapSession


def db_with_scalars_first(mocker, value):
    res = mocker.Mock()
    res.scalars.return_value.first.return_value = value
    db = mocker.Mock()
    db.execute = mocker.AsyncMock(return_value=res)
    return db, res


def db_with_rowcount(mocker, rowcount):
    res = mocker.Mock()
    res.rowcount = rowcount
    db = mocker.Mock()
    db.execute = mocker.AsyncMock(return_value=res)
    return db, res


def key(row_char: str, seat_number: int) -> SeatKeyDTO:
    return SeatKeyDTO(row_char=row_char, seat_number=seat_number)


def make_session(layout: dict[str, list[int]], *, category_id: int | None = None, **kwargs) -> SeatMapSession:
    seats = []
    for row_char, numbers in layout.items():
        for position, number in enumerate(sorted(numbers), start=1):
            seats.append(
                SeatDraft(row_char=row_char, seat_number=number, real_seat_number=position, category_id=category_id)
            )
    return SeatMapSession(seats=seats, **kwargs)
