"""Command-line interface for serde-bench."""

import logging
from pathlib import Path

import click

from serde_bench import records
from serde_bench.analysis import DEFAULT_BASELINE, DEFAULT_REQUESTS_PER_SECOND, analyze
from serde_bench.artifacts import artifact_sizes, write_artifacts
from serde_bench.benchmarks import DEFAULT_ITERATIONS, run_benchmarks
from serde_bench.codecs import DEFAULT_CODECS, available_codecs, build_codecs, needs_schema
from serde_bench.errors import SchemaLoadError
from serde_bench.report import render
from serde_bench.schema import load_schema


@click.command()
@click.option("--iterations", "-i", default=DEFAULT_ITERATIONS, type=click.IntRange(min=1),
              help="Encode/decode repetitions per codec", show_default=True)
@click.option("--requests-per-second", "-r", default=DEFAULT_REQUESTS_PER_SECOND, type=click.IntRange(min=0),
              help="Assumed request rate for bandwidth projections", show_default=True)
@click.option("--records", "-n", "num_records", default=None, type=click.IntRange(min=0),
              help="Generate a synthetic dataset of this size instead of the canonical fixture")
@click.option("--seed", default=0, help="Seed for the synthetic dataset", show_default=True)
@click.option("--codec", "-c", "codec_names", multiple=True, type=click.Choice(available_codecs()),
              help=f"Codec to benchmark, repeatable [default: {', '.join(DEFAULT_CODECS)}]")
@click.option("--baseline", default=DEFAULT_BASELINE, type=click.Choice(available_codecs()),
              help="Codec relative gains are computed against", show_default=True)
@click.option("--schema", "schema_path", default=None, type=click.Path(dir_okay=False, path_type=Path),
              help="Schema resource for schema-validated codecs (default: bundled employees.json)")
@click.option("--output-dir", "-o", default=".", type=click.Path(file_okay=False, path_type=Path),
              help="Directory for encoded artifacts and plots", show_default=True)
@click.option("--no-artifacts", is_flag=True, help="Do not write one encoded file per codec")
@click.option("--plot/--no-plot", default=False, help="Save charts and a CSV of the results", show_default=True)
@click.option("--quiet", "-q", is_flag=True, help="Hide the progress bar")
@click.option("--verbose", "-v", is_flag=True, help="Log each benchmark step")
def main(iterations, requests_per_second, num_records, seed, codec_names, baseline, schema_path,
         output_dir, no_artifacts, plot, quiet, verbose):
    """Benchmark encode time, decode time and size across serialization formats."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    names = list(dict.fromkeys(codec_names)) or list(DEFAULT_CODECS)

    schema = None
    if needs_schema(names):
        try:
            schema = load_schema(schema_path)
        except SchemaLoadError as exc:
            raise click.ClickException(str(exc)) from exc

    if num_records is None:
        dataset = records.build()
    else:
        dataset = records.generate(num_records, seed=seed)
    codecs = build_codecs(names, schema)

    click.echo("=" * 78)
    click.echo(f"SERIALIZATION BENCHMARK ({len(dataset)} records, {iterations} iterations each)")
    click.echo("=" * 78)
    click.echo(f"Codecs: {', '.join(names)}")

    outcome = run_benchmarks(codecs, dataset, iterations=iterations, progress=not quiet)
    report = analyze(outcome, baseline=baseline, requests_per_second=requests_per_second)

    click.echo()
    click.echo(render(report))

    if not no_artifacts:
        survivors = [codec for codec in codecs if codec.name in report.results]
        paths = write_artifacts(survivors, dataset, output_dir)
        click.echo()
        click.echo("ARTIFACTS")
        click.echo("-" * 78)
        for name, size in artifact_sizes(paths).items():
            click.echo(f"  {paths[name]}: {size} bytes")

    if plot:
        from serde_bench.visualize import plot_report

        for path in plot_report(report, output_dir):
            click.echo(f"Saved {path}")


if __name__ == "__main__":
    main()
