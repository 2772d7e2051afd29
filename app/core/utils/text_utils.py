def strip_text(v: str | None) -> str | None:
    if v is None:
        return None
    v = v.strip()
    return v or None


def normalize_row_char(v: str | None) -> str | None:
    v = strip_text(v)
    return v.upper() if v else v
