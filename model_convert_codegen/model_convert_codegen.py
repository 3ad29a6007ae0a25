import json
import logging

import click

from .config import DatabaseDriver, GeneratorConfig, PackageConfig, PluginConfig
from .pipeline import ConvertGenerator
from .structs import EntityModel


@click.command()
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option(
    "--driver",
    "-d",
    default=None,
    type=click.Choice([d.value for d in DatabaseDriver]),
    help="Database driver, overrides the config file",
)
@click.option("--output-dir", "-o", default=None, type=click.Path(file_okay=False), help="Output package directory")
@click.option("--workers", "-w", default=None, type=click.IntRange(min=1), help="Files generated in parallel")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log every step")
@click.argument("model_path", type=click.Path(exists=True, dir_okay=False, resolve_path=True))
def model_convert_codegen(config, driver, output_dir, workers, verbose, model_path):
    """Generate convert modules for the entity model at MODEL_PATH."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    with open(model_path, encoding="utf-8") as f:
        entity_model = EntityModel.from_dict(json.load(f))

    if config is not None:
        with open(config, encoding="utf-8") as f:
            config = GeneratorConfig.from_dict(json.load(f))
    else:
        config = GeneratorConfig()

    # CLI flags override the config file
    if driver is not None:
        config.plugin = PluginConfig(database_driver=DatabaseDriver(driver))
    if output_dir is not None:
        config.output = PackageConfig(directory=output_dir, package_name=config.output.package_name)
    if workers is not None:
        config.workers = workers

    try:
        codegen = ConvertGenerator(entity_model, config)
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    report = codegen.generate()
    if report.skipped:
        click.echo("No models found, nothing generated")
        return

    for path in report.written:
        click.echo(f"wrote {path}")
    for result in report.failed:
        click.echo(f"failed {result.file_name} ({result.stage}): {result.error}", err=True)
    click.echo(f"{len(report.written)} written, {len(report.failed)} failed")
