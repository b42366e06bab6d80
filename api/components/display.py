from typing import Optional

SUMMARY_LENGTH = 150
NO_DESCRIPTION = "No description available."
EDIT_TITLE = "Edit Species"
EDIT_DESCRIPTION = "Update species details below."


def summary_description(description: Optional[str]) -> str:
    """First 150 characters, trimmed, with a trailing ellipsis."""
    if not description:
        return ""
    return description[:SUMMARY_LENGTH].strip() + "..."


def format_population(total: Optional[int]) -> str:
    if not total:
        return "Unknown"
    return f"{total:,}"


def dialog_title(scientific_name: str, common_name: Optional[str]) -> str:
    if not common_name:
        return scientific_name
    return f"{common_name} ({scientific_name})"
