"""Command line entry point: estimate impacts, summarize them, or serve the API."""

import asyncio
import json
import logging
import logging.config
import os
from pathlib import Path
from typing import Annotated

import typer
import uvicorn
from botocore.exceptions import BotoCoreError, ClientError
from pydantic import ValidationError

from impact_scanner.common.proxy_utils import configure_proxy_settings
from impact_scanner.config import ApiServerConfig, AWSConfig, BoaviztaConfig, ScanConfig
from impact_scanner.inventory import load_inventory
from impact_scanner.models.inventory import Inventory
from impact_scanner.models.location import UnsupportedRegionError
from impact_scanner.outputs.csv import CSVOutputStrategy
from impact_scanner.providers.base import ImpactProvider
from impact_scanner.providers.boavizta import BoaviztaImpactProvider
from impact_scanner.providers.errors import ImpactProviderError
from impact_scanner.services.estimation import ImpactEstimator

logger = logging.getLogger(__name__)

app = typer.Typer(help="Estimate the environmental impacts of cloud resources")


def is_running_in_ecs() -> bool:
    """Detect if running in AWS ECS.

    ECS injects metadata URI environment variables into every container.
    """
    return bool(
        os.environ.get("ECS_CONTAINER_METADATA_URI_V4")
        or os.environ.get("ECS_CONTAINER_METADATA_URI")
    )


def configure_logging() -> None:
    """Configure logging based on environment.

    In ECS: Uses logging.json with ECS-compatible structured logging,
    trace ID injection, and health check filtering.

    Locally: Uses logging-dev.json with simple text format for readability.
    """
    config_file = "logging.json" if is_running_in_ecs() else "logging-dev.json"
    config_path = Path(__file__).parent.parent / config_file

    if config_path.exists():
        with open(config_path) as f:
            logging.config.dictConfig(json.load(f))
    else:
        logging.basicConfig(
            level=logging.INFO,
            format=(
                '{"timestamp": "%(asctime)s", "level": "%(levelname)s", '
                '"logger": "%(name)s", "message": "%(message)s"}'
            ),
            datefmt="%Y-%m-%dT%H:%M:%S",
        )


def build_provider() -> ImpactProvider:
    return BoaviztaImpactProvider(BoaviztaConfig())


def _load_or_exit(source: str) -> Inventory:
    try:
        return load_inventory(source, AWSConfig())
    except (FileNotFoundError, ValueError, ClientError, BotoCoreError) as e:
        # pydantic ValidationError is a ValueError
        kind = "Invalid inventory" if isinstance(e, ValidationError) else "Cannot load inventory"
        typer.secho(f"{kind}: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from e


@app.callback()
def setup() -> None:
    configure_logging()
    configure_proxy_settings(BoaviztaConfig().api_url)


@app.command()
def estimate(
    inventory: Annotated[str, typer.Argument(help="Inventory JSON file path or s3://bucket/key")],
    hours: Annotated[
        float | None,
        typer.Option(help="Usage duration in hours (default: SCAN_USAGE_DURATION_HOURS)"),
    ] = None,
    verbose: Annotated[bool, typer.Option(help="Include backend raw data")] = False,
    csv: Annotated[Path | None, typer.Option(help="Also write per-resource CSV here")] = None,
) -> None:
    """Estimate the impacts of each resource and print them as JSON."""
    resources = _load_or_exit(inventory)
    estimator = ImpactEstimator(build_provider(), ScanConfig())

    try:
        estimated = asyncio.run(
            estimator.estimate(resources, usage_duration_hours=hours, verbose=verbose)
        )
    except ImpactProviderError as e:
        typer.secho(f"Impact estimation failed: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from e

    if csv is not None:
        written = CSVOutputStrategy().write(estimated, csv)
        logger.info(f"Wrote per-resource impacts to {written}")

    typer.echo(estimated.model_dump_json(indent=2))


@app.command()
def summary(
    inventory: Annotated[str, typer.Argument(help="Inventory JSON file path or s3://bucket/key")],
    region: Annotated[
        str | None, typer.Option(help="AWS region reported in the summary (default: AWS_REGION)")
    ] = None,
    hours: Annotated[
        float | None,
        typer.Option(help="Usage duration in hours (default: SCAN_USAGE_DURATION_HOURS)"),
    ] = None,
) -> None:
    """Estimate the inventory and print the aggregated impacts as JSON."""
    resources = _load_or_exit(inventory)
    estimator = ImpactEstimator(build_provider(), ScanConfig())
    aws_region = region or AWSConfig().region

    try:
        impacts_summary = asyncio.run(
            estimator.summarize_inventory(resources, aws_region, usage_duration_hours=hours)
        )
    except UnsupportedRegionError as e:
        typer.secho(str(e), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from e
    except ImpactProviderError as e:
        typer.secho(f"Impact estimation failed: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from e

    if impacts_summary.number_of_resources_not_assessed:
        logger.info(
            f"{impacts_summary.number_of_resources_not_assessed} of "
            f"{impacts_summary.number_of_resources_total} resources could not be assessed"
        )
    typer.echo(impacts_summary.model_dump_json(indent=2))


@app.command()
def serve() -> None:
    """Run the HTTP API with uvicorn."""
    config = ApiServerConfig()
    logger.info(f"Starting API server on {config.host}:{config.port}")
    uvicorn.run("impact_scanner.api:app", host=config.host, port=config.port, log_config=None)


def main():
    app()


if __name__ == "__main__":
    main()
