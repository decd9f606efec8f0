"""LaTeX rendering of the per-category accuracy report.

The table uses the ``longtable`` and ``xcolor`` LaTeX packages. Include
these lines in the document preamble:

    \\usepackage[table]{xcolor}
    \\usepackage{longtable}
"""

import datetime
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Sequence, Union

from catacc.utils import format_cell

if TYPE_CHECKING:
    from catacc.analysis.analyzer import ClassReportRow

logger = logging.getLogger(__name__)

DEFAULT_FILENAME = "category_accuracy.tex"

NUM_COLUMNS = 9
NUM_RANKS = 5
FIELD_SEPARATOR = "&"
ROW_END = " \\\\"


def _header(generated_on: datetime.date) -> list[str]:
    column_spec = "|".join(["c"] * NUM_COLUMNS)
    ranks = " & ".join(f"({rank})" for rank in range(1, NUM_RANKS + 1))
    return [
        "% latex table generated by catacc",
        f"% {generated_on.isoformat()}",
        "\\begin{center}",
        "\\begin{footnotesize}",
        f"\\begin{{longtable}}{{{column_spec}}}",
        "\\hline",
        "\\rowcolor{lightgray}",
        "Class & True Positive & Positive & True & "
        f"\\multicolumn{{{NUM_RANKS}}}{{c}}{{Top Mistaken Classes}}" + ROW_END,
        "\\rowcolor{lightgray}",
        f" & Rate & Predictive Value & Frequency & {ranks}" + ROW_END,
        "\\hline",
        "\\endhead",
    ]


FOOTER = [
    "\\hline",
    "\\caption{Accuracy by category \\label{tab:accuracy}}",
    "\\end{longtable}",
    "\\end{footnotesize}",
    "\\end{center}",
]


def format_row(row: "ClassReportRow") -> str:
    """Join the nine report fields of a row with the field separator."""
    return FIELD_SEPARATOR.join(format_cell(v) for v in row.as_record().values())


def render_latex(
    rows: Sequence["ClassReportRow"],
    generated_on: Optional[datetime.date] = None,
) -> str:
    """
    Render report rows as a LaTeX longtable.

    Rows are written in the order given; no values are recomputed.

    Args:
        rows: Report rows from ``analyze``
        generated_on: Date stamped in the leading comment (defaults to today)

    Returns:
        The complete table as a string
    """
    if generated_on is None:
        generated_on = datetime.date.today()

    lines = _header(generated_on)
    lines.extend(format_row(row) + ROW_END for row in rows)
    lines.extend(FOOTER)
    return "\n".join(lines) + "\n"


def write_latex_report(
    rows: Sequence["ClassReportRow"],
    filename: Union[str, Path] = DEFAULT_FILENAME,
    generated_on: Optional[datetime.date] = None,
) -> Path:
    """
    Write report rows to a LaTeX file, overwriting any existing content.

    The table is rendered before the file is opened, so a rendering error
    leaves an existing file untouched.

    Args:
        rows: Report rows from ``analyze``
        filename: Output path
        generated_on: Date stamped in the leading comment (defaults to today)

    Returns:
        Path of the written file
    """
    output = render_latex(rows, generated_on)

    path = Path(filename)
    with open(path, "w", encoding="utf-8") as f:
        f.write(output)

    logger.info(f"Wrote accuracy table with {len(rows)} classes to {path}")
    return path
