"""Column value converters."""

LIKE_CODE = "1"
DISLIKE_CODE = "0"


def appreciation_to_code(like_restaurant: bool) -> str:
    """Encode a like/dislike flag as the one-character LIKES.appreciation code."""
    if not isinstance(like_restaurant, bool):
        raise TypeError(f"Appreciation must be a bool, got: {like_restaurant!r}")
    return LIKE_CODE if like_restaurant else DISLIKE_CODE


def code_to_appreciation(code: str) -> bool:
    """Decode a LIKES.appreciation code back to the like/dislike flag."""
    if code == LIKE_CODE:
        return True
    if code == DISLIKE_CODE:
        return False
    raise ValueError(f"Unknown appreciation code: {code!r}")
