"""
Structured error codes for input validation and layout outcomes.
Use these keys in exceptions and reports; map to user-facing messages in the CLI/UI.
"""

# Known error keys (LayoutInputError.error_code, report summaries)
INVALID_LABEL = "invalid_label"
INVALID_BOUNDS = "invalid_bounds"
INVALID_CONFIG = "invalid_config"
INVALID_RECORDS = "invalid_records"
NO_LABELS = "no_labels"
NO_LABELS_PLACED = "no_labels_placed"

# User-facing messages (short, actionable)
USER_MESSAGES: dict[str, str] = {
    INVALID_LABEL: "A keyword is invalid. Check for empty text, negative counts or percentages outside 0-100.",
    INVALID_BOUNDS: "Surface size is invalid. Width and height must be non-negative numbers.",
    INVALID_CONFIG: "Layout options are invalid. Check font sizes, label limit and attempt budget.",
    INVALID_RECORDS: "Keyword file could not be read. Expected keyword, count and percentage fields.",
    NO_LABELS: "No keywords available.",
    NO_LABELS_PLACED: "No keywords could be displayed. Try adjusting the size of the window.",
}


class LayoutInputError(ValueError):
    """Input contract violation, raised before any placement work starts."""

    def __init__(self, error_code: str, detail: str) -> None:
        super().__init__(f"{error_code}: {detail}")
        self.error_code = error_code
        self.detail = detail


def user_message(error_key: str | None, fallback: str = "Something went wrong.") -> str:
    """Return a user-facing message for the given error key."""
    if not error_key:
        return fallback
    return USER_MESSAGES.get(error_key, fallback)
