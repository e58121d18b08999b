# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/knop/cli/app.py
from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
import yaml

from knop.config.loader import load_facts, load_ingress, load_resource
from knop.config.settings import load_operator_settings
from knop.errors import ConfigLoadError, RouteError, SettingsError
from knop.ingress.route import translate
from knop.logging.log import init_logging
from knop.observers.dispatcher import EventBus
from knop.observers.logger import LoggerObserver
from knop.serving.extension import reconcile
from knop.utils.serialize import to_jsonable


# ------------------------------------------------------------------------------
# CLI setup
# ------------------------------------------------------------------------------

app = typer.Typer(help="Knative Serving operator core")


def _dump(data) -> None:
    typer.echo(yaml.safe_dump(to_jsonable(data), sort_keys=False), nl=False)


# ------------------------------------------------------------------------------
# Commands
# ------------------------------------------------------------------------------

@app.command("reconcile")
def reconcile_cmd(
    resource: Path = typer.Argument(..., exists=True, dir_okay=False, help="Serving resource YAML"),
    facts: Optional[Path] = typer.Option(None, "--facts", exists=True, dir_okay=False,
                                         help="Cluster facts YAML (version, domain, routes)"),
    log_dir: Optional[Path] = typer.Option(None, "--log-dir", help="Also write a debug log here"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    """
    Run one reconciliation pass and print the resolved resource plus the
    namespace labels to apply.
    """
    logger, run_id = init_logging(log_dir=log_dir, verbose=verbose)
    try:
        settings = load_operator_settings()
        ks = load_resource(resource)
        cluster = load_facts(facts)
    except (ConfigLoadError, SettingsError) as e:
        logger.error("%s", e)
        raise typer.Exit(code=2)

    result = reconcile(ks, cluster, settings, bus=EventBus([LoggerObserver(logger)]), run_id=run_id)
    _dump({
        "resource": result.resource,
        "namespaceLabels": result.namespace_labels,
    })
    if result.failed:
        raise typer.Exit(code=1)


@app.command("routes")
def routes_cmd(
    ingress: Path = typer.Argument(..., exists=True, dir_okay=False, help="Knative Ingress YAML"),
    log_dir: Optional[Path] = typer.Option(None, "--log-dir", help="Also write a debug log here"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    """Print the OpenShift Routes derived from a Knative Ingress."""
    logger, run_id = init_logging(log_dir=log_dir, verbose=verbose)
    try:
        ci = load_ingress(ingress)
    except ConfigLoadError as e:
        logger.error("%s", e)
        raise typer.Exit(code=2)

    try:
        routes = translate(ci, bus=EventBus([LoggerObserver(logger)]), run_id=run_id)
    except RouteError as e:
        typer.echo(f"error: {e}", err=True)
        raise typer.Exit(code=1)
    _dump(routes)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
