#!/usr/bin/env python3
"""
Theme Template CLI

Precompiles theme templates into an artifact bundle and renders templates from a
bundle or a raw templates directory.

Commands:
    precompile - Precompile a templates directory into a JSON bundle
    render     - Render one template from a bundle or templates directory

Examples:\n

    precompile_templates.py precompile theme/templates build/templates.json

    precompile_templates.py render build/templates.json pages/home --context home.json

    precompile_templates.py render theme/templates components/header
"""

import json
import os
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from folio.contexts.rendering import (
    Renderer,
    RendererConfig,
    RendererError,
    TemplateNotFoundError,
    load_renderer_config,
    load_template_sources,
)
from folio.contexts.rendering import config as config_module
from folio.contexts.rendering.logger import setup_rendering_logger

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))

# Exit codes by error class
EXIT_NOT_FOUND = 2
EXIT_RENDER_FAILED = 1


app = typer.Typer(
    help="Precompile and render theme templates",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _fail(message: str) -> typer.Exit:
    typer.secho(f"✗ {message}", fg=typer.colors.RED, err=True)
    return typer.Exit(code=EXIT_RENDER_FAILED)


def _read_json(path: Optional[Path]) -> Dict[str, Any]:
    if path is None:
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise _fail(f"{path} is not valid JSON: {e}")

    if not isinstance(data, dict):
        raise _fail(f"{path} must contain a JSON object, got {type(data).__name__}")
    return data


def _load_config() -> RendererConfig:
    try:
        return load_renderer_config()
    except (FileNotFoundError, ValueError) as e:
        # omegaconf validation errors are ValueErrors
        raise _fail(f"Invalid renderer config: {e}")


def _start_session(command: str, source: Path, config: RendererConfig) -> Path:
    log_dir = LOGS_PATH / f"{command}_{datetime.now().strftime('%Y%m%d_%H%M%S')}"
    return setup_rendering_logger(
        log_dir,
        command=command,
        source=source,
        config=config,
        config_path=config_module.RENDERER_CONFIG_PATH,
    )


@app.command("precompile")
def precompile_command(
    templates_dir: Annotated[
        Path,
        typer.Argument(help="Theme templates directory", exists=True, file_okay=False),
    ],
    output_path: Annotated[
        Path,
        typer.Argument(help="Where to write the JSON bundle"),
    ],
    extension: Annotated[
        str,
        typer.Option("--extension", "-e", help="Template file extension"),
    ] = ".html",
):
    """
    Precompile every template in a directory into a JSON bundle.

    The bundle maps logical paths (e.g., components/header) to precompiled artifacts
    and can be passed straight to Renderer.add_templates().
    """
    config = _load_config()
    log_file = _start_session("precompile", templates_dir, config)

    sources = load_template_sources(templates_dir, extension=extension)
    typer.secho(f"\nPrecompiling {len(sources)} templates", fg=typer.colors.BLUE, bold=True)

    try:
        bundle = Renderer(config=config).get_pre_processor()(sources)
    except RendererError as e:
        typer.secho(f"✗ {e}", fg=typer.colors.RED, err=True)
        typer.echo(f"  Log: {log_file}")
        raise typer.Exit(code=EXIT_RENDER_FAILED)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(bundle, indent=2), encoding="utf-8")

    typer.secho("✓ Precompile succeeded", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  Bundle: {output_path}")
    typer.echo(f"  Log: {log_file}")


@app.command("render")
def render_command(
    source: Annotated[
        Path,
        typer.Argument(help="JSON bundle or templates directory", exists=True),
    ],
    template_path: Annotated[
        str,
        typer.Argument(help="Logical template path (e.g., pages/home)"),
    ],
    context_file: Annotated[
        Optional[Path],
        typer.Option("--context", "-c", help="JSON file with template variables", exists=True),
    ] = None,
    site_settings_file: Annotated[
        Optional[Path],
        typer.Option("--site-settings", help="JSON file with site settings", exists=True),
    ] = None,
    theme_settings_file: Annotated[
        Optional[Path],
        typer.Option("--theme-settings", help="JSON file with theme settings", exists=True),
    ] = None,
    extension: Annotated[
        str,
        typer.Option("--extension", "-e", help="Template file extension (directory source only)"),
    ] = ".html",
):
    """
    Render a single template and print the result.

    Exits with code 2 when the template is not found and 1 on any other error.
    """
    config = _load_config()
    _start_session("render", source, config)

    if source.is_dir():
        templates = load_template_sources(source, extension=extension)
    else:
        templates = _read_json(source)
    context = _read_json(context_file)

    try:
        renderer = Renderer(
            site_settings=_read_json(site_settings_file),
            theme_settings=_read_json(theme_settings_file),
            config=config,
        )
        renderer.add_templates(templates)
        output = renderer.render(template_path, context)
    except TemplateNotFoundError as e:
        typer.secho(f"✗ {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=EXIT_NOT_FOUND)
    except RendererError as e:
        typer.secho(f"✗ {e.kind.value} error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=EXIT_RENDER_FAILED)

    typer.echo(output)


if __name__ == "__main__":
    app()
