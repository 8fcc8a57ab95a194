"""Plain-text rendering of the translation status matrix."""
from typing import List, Sequence

STATUS_LEGEND = "Translation counts: Awaiting Authorization -> In Progress -> Completed"


def format_columns(rows: Sequence[Sequence[str]], padding: int = 1) -> List[str]:
    """Align rows of cells into columns.

    Every column but the last is left-aligned and padded to its widest
    cell plus *padding* spaces; the last cell of each row is left as-is.

    Example:
        >>> format_columns([["", "fr-FR"], ["app.json", "2 -> 1 -> 5"]])
        ['         fr-FR', 'app.json 2 -> 1 -> 5']
    """
    if not rows:
        return []

    num_columns = max(len(row) for row in rows)
    widths = [0] * num_columns
    for row in rows:
        for i, cell in enumerate(row[:-1]):
            widths[i] = max(widths[i], len(cell))

    lines = []
    for row in rows:
        parts = [cell.ljust(widths[i] + padding) for i, cell in enumerate(row[:-1])]
        parts.append(row[-1])
        lines.append("".join(parts))
    return lines


def render_status_table(matrix, files: Sequence[str], locales: Sequence[str]) -> str:
    """Render the matrix with one row per file and one column per locale.

    Cells read ``awaiting -> in progress -> completed``; a pair missing
    from the matrix renders as ``-``.

    Args:
        matrix: :class:`~locsync.models.file_status.StatusMatrix`
        files: Row order
        locales: Column order

    Returns:
        The table as a newline-terminated string
    """
    rows = [[""] + list(locales)]
    for project_file in files:
        row = [project_file]
        for locale in locales:
            status = matrix.get(project_file, locale)
            row.append(status.format_counts() if status else "-")
        rows.append(row)

    return "\n".join(format_columns(rows)) + "\n"
