import logging
from pathlib import Path

import click

from .pipeline import GeneratorConfig, SchemaError, generate_all
from .pipeline.errors import CodeWriteError


@click.command()
@click.option("--config", "-c", default=None, type=click.Path(exists=True, dir_okay=False, resolve_path=True))
@click.option("--namespace", "-n", required=True, type=str, help="C++ namespace of the generated structs")
@click.option("--output", "-o", required=True, type=click.Path(file_okay=False, resolve_path=True), help="Root directory of the struct headers")
@click.option("--reader-output", "-r", required=True, type=click.Path(file_okay=False, resolve_path=True), help="Root directory of the JSON handlers")
@click.option("--schema-path", "-s", multiple=True, type=click.Path(exists=True, file_okay=False, resolve_path=True), help="Extra directory searched for referenced schemas")
@click.option(
    "--one-handler-file",
    is_flag=True,
    default=False,
    help="Append every handler implementation to GeneratedJsonHandlers.cpp",
)
@click.option("--verbose", "-v", is_flag=True, default=False)
@click.argument("schemas", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False, resolve_path=True))
def json_schema_to_cpp(config, namespace, output, reader_output, schema_path, one_handler_file, verbose, schemas):
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if config is not None:
            base_dir = Path(config).parent
            config = GeneratorConfig.from_file(config)
        else:
            base_dir = Path.cwd()
            config = GeneratorConfig()

        result = generate_all(
            schemas,
            config,
            namespace,
            output,
            reader_output,
            one_handler_file=one_handler_file,
            search_paths=schema_path,
            base_dir=base_dir,
        )
    except (SchemaError, CodeWriteError) as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"Generated {len(result.classes)} classes")
