from typing import Any

def normalize(value: Any) -> Any:
    if hasattr(value, "quantize"):
        return str(value)
    if hasattr(value, "value") and isinstance(getattr(value, "value"), str):
        return value.value
    return str(value) if not isinstance(value, (str, int, float, bool, type(None))) else value


def normalize_ctx(ctx: dict[str, Any]) -> dict[str, Any]:
    return {k: normalize(v) for k, v in ctx.items()}
