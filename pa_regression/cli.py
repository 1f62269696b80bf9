# pa_regression/cli.py
from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich import print
from rich.markup import escape

from pa_regression import __version__, logs
from pa_regression.config.app_config import AppConfig
from pa_regression.config.training_config import PAConfig
from pa_regression.io.dataset import load_examples
from pa_regression.io.export import load_weights, write_weights
from pa_regression.observability.instrumentation import Instrumentation
from pa_regression.training.pipeline import TrainingPipeline
from pa_regression.utils.errors import UserInputError
from pa_regression.utils.logger import Logging

app = typer.Typer(help="Online Passive-Aggressive regression CLI")

# 用户输入类错误：红字提示 + exit 2，不打印 traceback
_INPUT_ERRORS = (UserInputError, ValidationError, FileNotFoundError)


def _load_config(config: Optional[Path]) -> AppConfig:
    cfg = AppConfig.load(str(config) if config else None)
    Logging.from_config(cfg.log)
    return cfg


def _fail(e: Exception):
    print(f"[red]{escape(str(e))}[/red]")
    raise typer.Exit(code=2)


@app.command()
def version():
    print(f"v{__version__}")


@app.command()
def train(
    input: Path = typer.Argument(..., help="CSV with a features column and a target column"),
    output: Path = typer.Argument(..., help="Weights CSV (feature,weight)"),
    variant: Optional[str] = typer.Option(None, "--variant", "-v", help="PA1 / PA1a / PA2 / PA2a"),
    c: Optional[float] = typer.Option(None, "--c", "-c", help="Aggressiveness parameter C > 0"),
    epsilon: Optional[float] = typer.Option(None, "--epsilon", "-e", help="Sensitivity to prediction mistakes"),
    config: Optional[Path] = typer.Option(None, "--config", help="YAML config (default: base.yml)"),
):
    """
    单遍训练：读取样本 -> PA 在线更新 -> 输出权重
    """
    overrides = {}
    if variant is not None:
        overrides["variant"] = variant
    if c is not None:
        overrides["aggressiveness"] = c
    if epsilon is not None:
        overrides["epsilon"] = epsilon

    try:
        cfg = _load_config(config)
        training_cfg = PAConfig(**{**cfg.training.model_dump(), **overrides})
        pipeline = TrainingPipeline(training_cfg, inst=Instrumentation())
        examples = load_examples(input, cfg.dataset)
    except _INPUT_ERRORS as e:
        _fail(e)

    print(f"[green]Training {training_cfg.variant.value} on {len(examples)} examples[/green]")

    pipeline.run(examples)
    weights = pipeline.finalize()
    write_weights(weights, output)

    counters = pipeline.counters
    print(
        f"[blue]processed={counters['processed']} updated={counters['updated']} "
        f"no_update={counters['no_update']} skipped={counters['skipped']} "
        f"features={counters['features']}[/blue]"
    )


@app.command()
def predict(
    weights: Path = typer.Argument(..., help="Weights CSV produced by `train`"),
    input: Path = typer.Argument(..., help="CSV with features and target columns"),
    config: Optional[Path] = typer.Option(None, "--config", help="YAML config (default: base.yml)"),
):
    """
    用已训练的权重对样本打分（不更新模型）
    """
    from pa_regression.core.scorer import predict as score

    try:
        cfg = _load_config(config)
        model = load_weights(weights, int_ids=cfg.dataset.int_ids)
        examples = load_examples(input, cfg.dataset)
    except _INPUT_ERRORS as e:
        _fail(e)

    for features, target in examples:
        print(f"{score(features, model):.6f}\t{target}")

    logs.info(f"[CLI] predicted rows={len(examples)}")


if __name__ == "__main__":
    app()

# python -m pa_regression.cli train data.csv weights.csv --variant PA2 -c 1.0
