"""
Seat map editing.

Physical rows are identified by a single letter (``A``-``Z``) and physical
columns by ``seat_number``. The visual map relabels rows so that the letters
shown to the user stay contiguous: a physical row whose seats were all removed
becomes an unlabeled aisle and does not use up a letter.

Every operation takes a :class:`SeatMapSession` and returns a
:class:`SeatMapEdit` holding a new session; the input session is never changed.
"""
import logging
from typing import Iterable, Mapping
from app.core.config import SEAT_MAP_MAX_ROWS, SEAT_MAP_MAX_COLUMNS
from app.domain.exceptions import InvalidInput, Forbidden, NotFound
from app.domain.seatmap.schemas import SeatDraft, SeatKeyDTO, SeatMapSession, SeatMapEdit, SeatMapViewDTO, \
    SeatSlotDTO, VisualRowDTO


logger = logging.getLogger("app.seatmap")

DEFAULT_RANGE_START = 0
DEFAULT_RANGE_END = 1000


def row_index(row_char: str) -> int:
    return ord(row_char[0]) - ord("A") if row_char else 0


def row_char_at(index: int) -> str:
    return chr(ord("A") + index)


def _group_by_row(seats: Iterable[SeatDraft]) -> dict[str, list[SeatDraft]]:
    rows: dict[str, list[SeatDraft]] = {}
    for seat in seats:
        rows.setdefault(seat.row_char, []).append(seat)
    return rows


def _label_rows(seats: list[SeatDraft]) -> list[tuple[str | None, str]]:
    # (visual label or None for an aisle, physical row) from row A up to the highest row present
    if not seats:
        return []
    present = {seat.row_char for seat in seats}
    max_row = max(present, key=lambda r: (len(r), r))

    labels: list[tuple[str | None, str]] = []
    visual_counter = 0
    for i in range(row_index(max_row) + 1):
        physical = row_char_at(i)
        if physical in present:
            labels.append((row_char_at(visual_counter), physical))
            visual_counter += 1
        else:
            labels.append((None, physical))
    return labels


def _physical_row_for(seats: list[SeatDraft], visual_label: str | None) -> str | None:
    if not visual_label:
        return None
    for label, physical in _label_rows(seats):
        if label == visual_label:
            return physical
    return None


def _slot(seat: SeatDraft, label: str, colors: Mapping[int, str], selected: set[SeatKeyDTO]) -> SeatSlotDTO:
    return SeatSlotDTO(
        row_char=seat.row_char,
        seat_number=seat.seat_number,
        real_seat_number=seat.real_seat_number,
        category_id=seat.category_id,
        display_text=f"{label}{seat.real_seat_number}",
        color=colors.get(seat.category_id) if seat.category_id is not None else None,
        selected=seat.key in selected
    )


def _require_writable(session: SeatMapSession) -> None:
    if session.read_only:
        raise Forbidden("Seat map is read-only", ctx={"theater_id": session.theater_id})


def render(session: SeatMapSession, colors: Mapping[int, str] | None = None) -> SeatMapViewDTO:
    """Lay out the session's seats without touching its selection."""
    if not session.seats:
        return SeatMapViewDTO()

    colors = colors or {}
    selected = set(session.selected)
    by_row = _group_by_row(session.seats)
    max_col = max(seat.seat_number for seat in session.seats)

    rows: list[VisualRowDTO] = []
    for label, physical in _label_rows(session.seats):
        if label is None:
            rows.append(VisualRowDTO(label=None, physical_row=physical, slots=[]))
            continue
        by_col = {seat.seat_number: seat for seat in by_row[physical]}
        slots = [
            _slot(by_col[col], label, colors, selected) if col in by_col else None
            for col in range(1, max_col + 1)
        ]
        rows.append(VisualRowDTO(label=label, physical_row=physical, slots=slots))

    return SeatMapViewDTO(
        rows=rows,
        row_options=[row.label for row in rows if row.label is not None],
        column_options=list(range(1, max_col + 1)),
        seat_count=len(session.seats)
    )


def renumber_rows(seats: list[SeatDraft]) -> list[SeatDraft]:
    positions: dict[SeatKeyDTO, int] = {}
    for row_seats in _group_by_row(seats).values():
        for position, seat in enumerate(sorted(row_seats, key=lambda s: s.seat_number), start=1):
            positions[seat.key] = position

    renumbered = []
    for seat in seats:
        position = positions[seat.key]
        if seat.real_seat_number != position:
            seat = seat.model_copy(update={"real_seat_number": position})
        renumbered.append(seat)
    return renumbered


def unassigned_seats(session: SeatMapSession) -> list[SeatKeyDTO]:
    return [seat.key for seat in session.seats if not seat.category_id]


def build_visual_map(session: SeatMapSession, colors: Mapping[int, str] | None = None) -> SeatMapEdit:
    cleared = session.model_copy(update={"selected": []})
    return SeatMapEdit(session=cleared, view=render(cleared, colors))


def preview_grid(
        rows: int,
        cols: int,
        theater_id: int | None = None,
        colors: Mapping[int, str] | None = None
) -> SeatMapEdit:
    if rows <= 0 or cols <= 0:
        raise InvalidInput("Invalid number of rows or columns", ctx={"rows": rows, "cols": cols})
    if rows > SEAT_MAP_MAX_ROWS or cols > SEAT_MAP_MAX_COLUMNS:
        raise InvalidInput(
            "Seat map too large",
            ctx={"rows": rows, "cols": cols, "max_rows": SEAT_MAP_MAX_ROWS, "max_cols": SEAT_MAP_MAX_COLUMNS}
        )

    seats = [
        SeatDraft(row_char=row_char_at(r), seat_number=c, real_seat_number=c)
        for r in range(rows)
        for c in range(1, cols + 1)
    ]
    logger.debug("Preview grid rows=%d cols=%d theater_id=%s", rows, cols, theater_id)
    return build_visual_map(SeatMapSession(theater_id=theater_id, seats=seats), colors)


def toggle_seat(
        session: SeatMapSession,
        key: SeatKeyDTO,
        colors: Mapping[int, str] | None = None
) -> SeatMapEdit:
    _require_writable(session)
    if not any(seat.key == key for seat in session.seats):
        raise NotFound("Seat not found", ctx={"row_char": key.row_char, "seat_number": key.seat_number})

    if key in session.selected:
        selected = [k for k in session.selected if k != key]
    else:
        selected = [*session.selected, key]
    updated = session.model_copy(update={"selected": selected})
    return SeatMapEdit(session=updated, view=render(updated, colors), affected=1)


def select_range(
        session: SeatMapSession,
        visual_row: str | None,
        start: int | None = None,
        end: int | None = None,
        colors: Mapping[int, str] | None = None
) -> SeatMapEdit:
    _require_writable(session)
    start = DEFAULT_RANGE_START if start is None else start
    end = DEFAULT_RANGE_END if end is None else end

    physical = _physical_row_for(session.seats, visual_row)
    if physical is None:
        return SeatMapEdit(session=session, view=render(session, colors), affected=0, message="Row not found")

    already = set(session.selected)
    in_row = sorted((s for s in session.seats if s.row_char == physical), key=lambda s: s.seat_number)
    added = [s.key for s in in_row if start <= s.seat_number <= end and s.key not in already]

    updated = session.model_copy(update={"selected": [*session.selected, *added]})
    return SeatMapEdit(
        session=updated,
        view=render(updated, colors),
        affected=len(added),
        message=f"Selected {len(added)} seats"
    )


def remove_selected_seats(session: SeatMapSession, colors: Mapping[int, str] | None = None) -> SeatMapEdit:
    _require_writable(session)
    if not session.selected:
        return SeatMapEdit(session=session, view=render(session, colors), affected=0, message="No seats selected")

    selected = set(session.selected)
    remaining = [seat for seat in session.seats if seat.key not in selected]
    removed = len(session.seats) - len(remaining)

    updated = session.model_copy(update={"seats": renumber_rows(remaining), "selected": []})
    logger.debug("Removed %d seats theater_id=%s", removed, session.theater_id)
    return SeatMapEdit(
        session=updated,
        view=render(updated, colors),
        affected=removed,
        message=f"Removed {removed} seats"
    )


def apply_category(
        session: SeatMapSession,
        category_id: int | None,
        colors: Mapping[int, str] | None = None
) -> SeatMapEdit:
    _require_writable(session)
    if not session.selected or not category_id or category_id <= 0:
        return SeatMapEdit(
            session=session,
            view=render(session, colors),
            affected=0,
            message="Select seats and a category first"
        )

    selected = set(session.selected)
    seats = [
        seat.model_copy(update={"category_id": category_id}) if seat.key in selected else seat
        for seat in session.seats
    ]
    updated = session.model_copy(update={"seats": seats, "selected": []})
    return SeatMapEdit(
        session=updated,
        view=render(updated, colors),
        affected=len(selected),
        message=f"Assigned category to {len(selected)} seats"
    )
