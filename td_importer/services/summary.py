from __future__ import annotations

from ..models.processing_result import ProcessingResult

"""Summary line rendering for import runs.

Format:
SUMMARY files={total}/{total} success={success} failed={failed}
properties={properties} warnings={warnings} elapsed_sec={elapsed}
(single line)
"""


def _format_seconds(value: float) -> str:
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        # 指数表記を避ける
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return f"{value:.2f}".rstrip("0").rstrip(".")


def render_summary_line(total_files: int, result: ProcessingResult) -> str:
    """Render a SUMMARY line from a ProcessingResult.

    Examples:
        >>> result = ProcessingResult(
        ...     success_files=1, failed_files=0, total_properties=12,
        ...     total_warnings=2, elapsed_seconds=0.5,
        ... )
        >>> render_summary_line(1, result)
        'SUMMARY files=1/1 success=1 failed=0 properties=12 warnings=2 elapsed_sec=0.5'
    """
    return (
        f"SUMMARY files={total_files}/{total_files} "
        f"success={result.success_files} "
        f"failed={result.failed_files} "
        f"properties={result.total_properties} "
        f"warnings={result.total_warnings} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)}"
    )
