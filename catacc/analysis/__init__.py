"""Per-category accuracy analysis and reporting."""

from catacc.analysis.analyzer import (
    ClassReportRow,
    ConfusionMatrix,
    EvaluationAnalyzer,
    analyze,
    category_accuracy,
    to_dataframe,
)
from catacc.analysis.report import render_latex, write_latex_report
from catacc.analysis.visualization import (
    plot_class_accuracy,
    plot_confusion_matrix,
)

__all__ = [
    "ClassReportRow",
    "ConfusionMatrix",
    "EvaluationAnalyzer",
    "analyze",
    "category_accuracy",
    "to_dataframe",
    "render_latex",
    "write_latex_report",
    "plot_class_accuracy",
    "plot_confusion_matrix",
]
