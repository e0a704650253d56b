"""Command-line interface for sparse_logreg."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Annotated, Any

import typer

from ..common import EvaluationResult, evaluate
from ..config import (
    PathConfig,
    RunConfig,
    TrainingConfig,
    load_run_config,
    validate_training_config,
)
from ..data import Dataset, load_examples
from ..io import EmptyModelFileError, load_weights, write_predictions, write_weights
from ..models.logreg.training import SGDTrainer
from ..utils import get_logger, json_log

app = typer.Typer(
    help='Train and evaluate sparse logistic regression with online SGD.',
    no_args_is_help=True,
)

log = get_logger(__name__)

_TRAINING_OPTIONS = {
    'shuffle': 'shuffle',
    'max_iterations': 'max_iterations',
    'convergence': 'convergence_threshold',
    'learning_rate': 'learning_rate',
    'l1': 'l1_weight',
    'randomize_weights': 'randomize_weights',
    'seed': 'seed',
}
_PATH_OPTIONS = {
    'model_in': 'model_in',
    'model_out': 'model_out',
    'test': 'test_data',
    'predictions': 'predictions',
}


def _resolve_path(value: Path | None) -> Path | None:
    if value is None:
        return None
    return Path(value).expanduser().resolve()


def _given(ctx: typer.Context, name: str) -> bool:
    source = ctx.get_parameter_source(name)
    return source is not None and source.name != 'DEFAULT'


def _build_run_config(ctx: typer.Context, config: Path | None, values: dict[str, Any]) -> RunConfig:
    """Start from the config file (or defaults) and apply explicit CLI options."""
    if config is not None:
        base = load_run_config(config)
    else:
        # Without a config file every option's default is the effective value.
        base = RunConfig(
            training=TrainingConfig(
                **{field: values[opt] for opt, field in _TRAINING_OPTIONS.items()}
            ),
            paths=PathConfig(),
            verbose=values['verbose'],
        )

    training_overrides = {
        field: values[opt]
        for opt, field in _TRAINING_OPTIONS.items()
        if opt in values and _given(ctx, opt)
    }
    path_overrides = {
        field: _resolve_path(values[opt])
        for opt, field in _PATH_OPTIONS.items()
        if values.get(opt) is not None
    }
    verbose = values['verbose'] if _given(ctx, 'verbose') else base.verbose

    return replace(
        base,
        training=replace(base.training, **training_overrides),
        paths=replace(base.paths, **path_overrides),
        verbose=verbose,
    )


def _echo_settings(cfg: RunConfig, training_data: Path | None) -> None:
    paths = cfg.paths
    if paths.model_in is None:
        training = cfg.training
        typer.echo(f'# learning rate:     {training.learning_rate:g}')
        typer.echo(f'# convergence rate:  {training.convergence_threshold:g}')
        typer.echo(f'# l1 penalty weight: {training.l1_weight:g}')
        typer.echo(f'# max. iterations:   {training.max_iterations}')
        typer.echo(f'# shuffle:           {"on" if training.shuffle else "off"}')
        if training_data is not None:
            typer.echo(f'# training data:     {training_data}')
        if paths.model_out is not None:
            typer.echo(f'# model output:      {paths.model_out}')
    else:
        typer.echo(f'# model input:       {paths.model_in}')
    if paths.test_data is not None:
        typer.echo(f'# test data:         {paths.test_data}')
    if paths.predictions is not None:
        typer.echo(f'# predictions:       {paths.predictions}')


def _load_model(model_path: Path) -> dict[int, float]:
    try:
        return load_weights(model_path)
    except EmptyModelFileError as exc:
        log.error(json_log('cli.model_load.failed', component='cli', error=str(exc)))
        typer.echo('# failed to read weights from file!')
        raise typer.Exit(code=1) from exc


def _train(cfg: RunConfig, training_data: Path) -> dict[int, float]:
    dataset = load_examples(training_data)
    trainer = SGDTrainer(cfg.training)
    state = trainer.init_state(dataset)
    typer.echo(f'# training examples: {len(dataset)}')
    typer.echo(f'# features:          {len(state.weights)}')
    typer.echo('# stochastic gradient descent')

    result = trainer.fit(dataset, state=state)
    total = len(result.weights)
    typer.echo(f'# iterations:  {result.iterations} ({"converged" if result.converged else "capped"})')
    typer.echo(f'# sparsity:    {result.sparsity:.4f} ({result.nonzero}/{total})')

    if cfg.paths.model_out is not None:
        write_weights(result.weights, cfg.paths.model_out)
        typer.echo(f'# written weights to file {cfg.paths.model_out}')
    return result.weights


def _echo_example(raw_label: int, probability: float, correct: bool) -> None:
    sign = '+' if raw_label > 0 else ''
    verdict = 'correct' if correct else 'incorrect'
    typer.echo(f'label: {sign}{raw_label} : prediction: {probability:.3f}\t{verdict}')


def _report_evaluation(result: EvaluationResult, dataset: Dataset, verbose: bool) -> None:
    if verbose:
        for example, probability, prediction in zip(
            dataset, result.probabilities, result.predictions
        ):
            _echo_example(example.raw_label, probability, prediction == example.label)

    metrics = result.metrics
    counts = metrics.counts
    typer.echo(f'# accuracy:    {metrics.accuracy:.4f} ({counts.correct}/{counts.total})')
    typer.echo(f'# precision:   {metrics.precision:.4f}')
    typer.echo(f'# recall:      {metrics.recall:.4f}')
    typer.echo(f'# mcc:         {metrics.mcc:.4f}')
    typer.echo(f'# tp:          {counts.tp}')
    typer.echo(f'# tn:          {counts.tn}')
    typer.echo(f'# fp:          {counts.fp}')
    typer.echo(f'# fn:          {counts.fn}')


def _classify(weights: dict[int, float], test_path: Path, cfg: RunConfig) -> EvaluationResult:
    dataset = load_examples(test_path)
    typer.echo('# classifying')
    result = evaluate(weights, dataset)
    _report_evaluation(result, dataset, cfg.verbose)

    if cfg.paths.predictions is not None:
        write_predictions(result.predictions, cfg.paths.predictions)
        typer.echo(f'# written predictions to file {cfg.paths.predictions}')
    return result


@app.command('train')
def train_command(
    ctx: typer.Context,
    training_data: Annotated[
        Path,
        typer.Argument(exists=True, readable=True, help='Training examples file.'),
    ],
    config: Annotated[
        Path | None,
        typer.Option(
            '--config',
            '-c',
            exists=True,
            readable=True,
            help='Optional run configuration YAML. Explicit options override it.',
        ),
    ] = None,
    shuffle: Annotated[
        bool,
        typer.Option('--shuffle/--no-shuffle', help='Shuffle dataset after each iteration.'),
    ] = True,
    max_iterations: Annotated[
        int,
        typer.Option('--max-iterations', '-i', help='Maximum iterations (default 50000).'),
    ] = 50000,
    convergence: Annotated[
        float,
        typer.Option('--convergence', '-e', help='Convergence threshold (default 0.005).'),
    ] = 0.005,
    learning_rate: Annotated[
        float,
        typer.Option('--learning-rate', '-a', help='Learning rate (default 0.001).'),
    ] = 0.001,
    l1: Annotated[
        float,
        typer.Option('--l1', '-l', help='L1 regularization weight; 0 disables it (default 0.0001).'),
    ] = 0.0001,
    model_in: Annotated[
        Path | None,
        typer.Option('--model-in', '-m', exists=True, readable=True, help='Read weights from file.'),
    ] = None,
    model_out: Annotated[
        Path | None,
        typer.Option('--model-out', '-o', help='Write weights to file.'),
    ] = None,
    test: Annotated[
        Path | None,
        typer.Option('--test', '-t', exists=True, readable=True, help='Test file to classify.'),
    ] = None,
    predictions: Annotated[
        Path | None,
        typer.Option('--predictions', '-p', help='Write predictions to file.'),
    ] = None,
    randomize_weights: Annotated[
        bool,
        typer.Option('--randomize-weights', '-r', help='Randomise weights between -1 and 1, otherwise 0.'),
    ] = False,
    seed: Annotated[
        int | None,
        typer.Option('--seed', help='Random seed for shuffling and weight initialization.'),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option('--verbose', '-v', help='Print every test prediction.'),
    ] = False,
) -> None:
    """Train weights on TRAINING_DATA, then optionally classify a test file."""
    values = {
        'shuffle': shuffle,
        'max_iterations': max_iterations,
        'convergence': convergence,
        'learning_rate': learning_rate,
        'l1': l1,
        'model_in': model_in,
        'model_out': model_out,
        'test': test,
        'predictions': predictions,
        'randomize_weights': randomize_weights,
        'seed': seed,
        'verbose': verbose,
    }
    try:
        cfg = _build_run_config(ctx, config, values)
        validate_training_config(cfg.training)
    except ValueError as exc:
        typer.echo(f'# invalid configuration: {exc}', err=True)
        raise typer.Exit(code=1) from exc

    log.info(
        json_log(
            'cli.train.start',
            component='cli',
            training_data=str(training_data),
            config=str(config) if config else None,
        )
    )
    _echo_settings(cfg, training_data)

    if cfg.paths.model_in is not None:
        weights = _load_model(cfg.paths.model_in)
    else:
        weights = _train(cfg, training_data)

    if cfg.paths.test_data is not None:
        _classify(weights, cfg.paths.test_data, cfg)

    log.info(json_log('cli.train.completed', component='cli', features=len(weights)))


@app.command('evaluate')
def evaluate_command(
    model: Annotated[
        Path,
        typer.Option('--model', '-m', exists=True, readable=True, help='Weights file to load.'),
    ],
    test: Annotated[
        Path,
        typer.Option('--test', '-t', exists=True, readable=True, help='Test file to classify.'),
    ],
    predictions: Annotated[
        Path | None,
        typer.Option('--predictions', '-p', help='Write predictions to file.'),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option('--verbose', '-v', help='Print every test prediction.'),
    ] = False,
) -> None:
    """Classify a test file with previously trained weights."""
    cfg = RunConfig(
        paths=PathConfig(
            model_in=_resolve_path(model),
            test_data=_resolve_path(test),
            predictions=_resolve_path(predictions),
        ),
        verbose=verbose,
    )
    log.info(json_log('cli.evaluate.start', component='cli', model=str(model), test=str(test)))
    _echo_settings(cfg, None)

    weights = _load_model(model)
    result = _classify(weights, test, cfg)

    log.info(
        json_log(
            'cli.evaluate.completed',
            component='cli',
            examples=result.metrics.counts.total,
        )
    )


if __name__ == '__main__':
    app()
