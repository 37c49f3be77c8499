"""Command-line interface for gql-sdkgen."""

import logging
from pathlib import Path

import click

from .core.config import SdkConfig
from .core.generator import SdkGenerator
from .core.hooks import AddHeaderHook, HookRunner
from .core.loader import DocumentLoader
from .core.operation import ChainRole


@click.group()
@click.version_option(package_name="gql-sdkgen")
def main():
    """Chainable GraphQL sdk generator for Python.

    Generate a typed Python sdk from GraphQL operation documents.
    """
    pass


@main.command()
@click.option(
    "--documents",
    "-d",
    required=True,
    type=click.Path(exists=True),
    help="Path to a GraphQL document file or a directory of .graphql/.gql files.",
)
@click.option(
    "--output",
    "-o",
    required=True,
    type=click.Path(),
    help="Output file for the generated sdk (e.g., sdk.py).",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="JSON file with sdk config values.",
)
@click.option("--sdk-name", help="Name of the api used in generated documentation.")
@click.option("--types-module", help="Module providing the operation result and variables types.")
@click.option("--types-namespace", help="Name the types module is imported as.")
@click.option("--documents-module", help="Module providing the documents, instead of emitting them.")
@click.option("--documents-namespace", help="Name the documents module is imported as.")
@click.option("--header", help="Comment to add at the top of the generated file.")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output.",
)
def generate(
    documents: str,
    output: str,
    config_path: str | None,
    sdk_name: str | None,
    types_module: str | None,
    types_namespace: str | None,
    documents_module: str | None,
    documents_namespace: str | None,
    header: str | None,
    verbose: bool,
):
    """Generate a chainable sdk from GraphQL operations.

    Examples:

        gql-sdkgen generate --documents ./operations --output ./sdk.py

        gql-sdkgen generate -d ./operations -o ./sdk.py --sdk-name Linear

        gql-sdkgen generate -d ./ops.graphql -o ./sdk.py -c ./sdk.json
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    documents_path = Path(documents).resolve()
    output_path = Path(output).resolve()

    config = SdkConfig.from_file(config_path) if config_path else SdkConfig()
    overrides = {
        "sdk_name": sdk_name,
        "types_module": types_module,
        "types_namespace": types_namespace,
        "documents_module": documents_module,
        "documents_namespace": documents_namespace,
    }
    overrides = {k: v for k, v in overrides.items() if v is not None}
    if overrides:
        config = SdkConfig.model_validate({**config.model_dump(), **overrides})

    if verbose:
        click.echo(f"Documents: {documents_path}")
        click.echo(f"Output: {output_path}")

    # Load documents
    click.echo("Loading documents...")
    document = DocumentLoader(str(documents_path)).load_all()

    hooks = HookRunner()
    if header:
        hooks.add_post_hook(AddHeaderHook(header))

    generator = SdkGenerator(document, config, hooks=hooks, filename=output_path.name)

    # Generate sdk code
    click.echo("Generating sdk...")
    content = generator.generate_code()
    generator.write(output_path, content)

    if verbose:
        for role in ChainRole:
            count = len([o for o in generator.operations if o.role is role])
            click.echo(f"  {role.value.capitalize()} operations: {count}")

    num_methods = sum(len(api.operations) for api in generator.apis)
    click.echo(f"Done! Generated {len(generator.apis)} scoped apis with {num_methods} operations.")
    click.echo(f"Output: {output_path}")


if __name__ == "__main__":
    main()
