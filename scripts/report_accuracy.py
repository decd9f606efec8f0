"""Per-category accuracy report for classifier predictions.

Reads true and predicted codings from a CSV file, computes the accuracy
report, writes it as a LaTeX table and optionally saves figures and logs
everything to MLflow.

Usage:
    python scripts/report_accuracy.py data.path=predictions.csv
    python scripts/report_accuracy.py data.path=preds.csv report.filename=out.tex
    python scripts/report_accuracy.py data.path=preds.csv plots.enabled=true mlflow.enabled=true
"""

import logging
from pathlib import Path
from typing import Optional

import hydra
import matplotlib

matplotlib.use("Agg")  # Must be set before importing pyplot

import matplotlib.pyplot as plt  # noqa: E402
import mlflow  # noqa: E402
from omegaconf import DictConfig, OmegaConf  # noqa: E402

from catacc.analysis import (  # noqa: E402
    ClassReportRow,
    EvaluationAnalyzer,
    plot_class_accuracy,
    plot_confusion_matrix,
    write_latex_report,
)
from catacc.data import load_label_vectors  # noqa: E402

logger = logging.getLogger(__name__)


def save_plots(
    analyzer: EvaluationAnalyzer, rows: list[ClassReportRow], output_dir: Path
) -> list[Path]:
    """Save confusion matrix and per-class accuracy figures."""
    output_dir.mkdir(parents=True, exist_ok=True)

    cm_path = output_dir / "confusion_matrix_normalized.png"
    fig = plot_confusion_matrix(
        analyzer.confusion_matrix, normalize="true", output_path=cm_path
    )
    plt.close(fig)

    acc_path = output_dir / "category_accuracy.png"
    fig = plot_class_accuracy(rows, output_path=acc_path)
    plt.close(fig)

    logger.info(f"Saved figures to {output_dir}")
    return [cm_path, acc_path]


def log_to_mlflow(
    rows: list[ClassReportRow],
    artifacts: list[Path],
    cfg: DictConfig,
) -> None:
    """Log per-class rates and report artifacts to MLflow."""
    if cfg.mlflow.tracking_uri:
        mlflow.set_tracking_uri(cfg.mlflow.tracking_uri)

    mlflow.set_experiment(cfg.mlflow.experiment_name)

    with mlflow.start_run(run_name=cfg.mlflow.run_name):
        mlflow.log_param("data_path", str(cfg.data.path))
        mlflow.log_param("num_classes", len(rows))
        mlflow.log_param("num_observations", sum(row.frequency for row in rows))

        for row in rows:
            mlflow.log_metric(f"class_{row.true}_true_positive_rate", row.true_positive_rate)
            if row.positive_predictive_value is not None:
                mlflow.log_metric(
                    f"class_{row.true}_positive_predictive_value",
                    row.positive_predictive_value,
                )

        for path in artifacts:
            mlflow.log_artifact(str(path))

        logger.info(f"Logged results to MLflow experiment: {cfg.mlflow.experiment_name}")


def log_summary(rows: list[ClassReportRow]) -> None:
    """Log summary of the accuracy report to console."""
    logger.info("=" * 60)
    logger.info("ACCURACY BY CATEGORY")
    logger.info("=" * 60)
    logger.info(f"Classes:      {len(rows)}")
    logger.info(f"Observations: {sum(row.frequency for row in rows)}")

    logger.info("\nHighest Rate Classes:")
    for row in rows[:5]:
        logger.info(f"  {row.true}: {row.true_positive_rate} (n={row.frequency})")

    logger.info("\nLowest Rate Classes:")
    for row in rows[-5:]:
        mistaken = ", ".join(label for label in row.top_mistaken if label is not None)
        logger.info(
            f"  {row.true}: {row.true_positive_rate} "
            f"(n={row.frequency}; mistaken for: {mistaken or 'n/a'})"
        )


@hydra.main(config_path="../configs", config_name="config", version_base=None)
def main(cfg: DictConfig) -> Optional[list[ClassReportRow]]:
    """Main report entry point."""
    logger.info("Configuration:")
    logger.info(OmegaConf.to_yaml(cfg))

    if cfg.data.path is None:
        raise ValueError(
            "data.path required. "
            "Usage: python scripts/report_accuracy.py data.path=path/to/predictions.csv"
        )

    true, predicted = load_label_vectors(
        cfg.data.path,
        true_column=cfg.data.true_column,
        predicted_column=cfg.data.predicted_column,
    )

    analyzer = EvaluationAnalyzer(true, predicted)
    rows = analyzer.report()
    log_summary(rows)

    artifacts: list[Path] = []
    if cfg.report.latexfile:
        artifacts.append(write_latex_report(rows, cfg.report.filename))

    if cfg.plots.enabled:
        artifacts.extend(save_plots(analyzer, rows, Path(cfg.plots.output_dir)))

    if cfg.mlflow.enabled:
        log_to_mlflow(rows, artifacts, cfg)

    return rows


if __name__ == "__main__":
    main()
