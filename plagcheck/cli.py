import logging

import click

from .pipeline import run_batch, run_pair


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(
        "[%(asctime)s] %(levelname)s - %(message)s",
        datefmt="%H:%M:%S"
    ))
    root = logging.getLogger("plagcheck")
    root.handlers[:] = [handler]
    root.setLevel(level)
    root.propagate = False


@click.group()
def main():
    """
    N-gram plagiarism checker (CLI)
    """


@main.command()
@click.argument("original", type=click.Path(dir_okay=False))
@click.argument("plagiarized", type=click.Path(dir_okay=False))
@click.argument("output", type=click.Path(dir_okay=False))
@click.option("--config", "config_path", default=None, help="Optional YAML config path")
@click.option("-v", "--verbose", is_flag=True, help="Log progress to stderr")
def check(original, plagiarized, output, config_path, verbose):
    """Compare ORIGINAL with PLAGIARIZED and write the score to OUTPUT."""
    setup_logging(verbose)
    try:
        score = run_pair(original, plagiarized, output, config_path=config_path)
    except (OSError, ValueError) as e:
        raise click.ClickException(str(e))
    click.echo(f"Similarity: {score * 100:.2f}%")
    click.echo(f"Saved result to: {output}")


@main.command()
@click.option("--input", "manifest_csv", required=True, help="CSV listing original/plagiarized file pairs")
@click.option("--output", "output_csv", required=True, help="Path to output scores CSV")
@click.option("--config", "config_path", default=None, help="Optional YAML config path")
@click.option("-v", "--verbose", is_flag=True, help="Log progress to stderr")
def batch(manifest_csv, output_csv, config_path, verbose):
    """Score every pair listed in a CSV manifest."""
    setup_logging(verbose)
    try:
        df, flagged_path = run_batch(manifest_csv, output_csv, config_path=config_path)
    except (OSError, ValueError) as e:
        raise click.ClickException(str(e))
    errors = int((df["Error"] != "").sum())
    click.echo(f"Scored {len(df) - errors} of {len(df)} pair(s)")
    click.echo(f"Saved scores to: {output_csv}")
    if flagged_path:
        click.echo(f"Saved flagged pairs to: {flagged_path}")


if __name__ == "__main__":
    main()
