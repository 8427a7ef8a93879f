"""
NetSketch Command-Line Interface.

Provides the ``netsketch`` entry point with four commands:

- ``netsketch init``     : write a starter recipe built from a sample network
- ``netsketch validate`` : check a recipe's layer sequence against the placement rules
- ``netsketch shapes``   : log the per-layer output shapes of a recipe
- ``netsketch generate`` : validate a recipe and write ``<kind>_model.py``

Usage:
    netsketch init cnn.yaml --kind CNN
    netsketch validate cnn.yaml
    netsketch generate cnn.yaml --framework keras --style functional
    netsketch generate cnn.yaml --set output.directory=./out --stdout
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any, NoReturn

import typer

app = typer.Typer(
    name="netsketch",
    add_completion=True,
    rich_markup_mode="rich",
    no_args_is_help=True,
)


# ── App callback ────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from importlib.metadata import version as pkg_version

        typer.echo(f"netsketch {pkg_version('netsketch')}")
        raise typer.Exit()


@app.callback()
def main(
    _: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=_version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
) -> None:
    """NetSketch: turn FCN and CNN layer designs into PyTorch or Keras code."""
    ...  # pragma: no cover


# ── Commands ────────────────────────────────────────────────────────────────


@app.command()
def init(
    output: Annotated[
        Path,
        typer.Argument(help="Output YAML file path."),
    ] = Path("recipe.yaml"),
    kind: Annotated[
        str,
        typer.Option("--kind", "-k", help="Network family of the sample: FCN or CNN."),
    ] = "CNN",
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite existing file."),
    ] = False,
) -> None:
    """Generate a starter recipe holding the sample network of the chosen family."""
    from netsketch.core.io import save_config_as_yaml
    from netsketch.exceptions import NetSketchError

    if output.exists() and not force:
        _fail(f"'{output}' already exists. Use --force to overwrite.")

    try:
        recipe = _build_init_recipe(kind)
    except NetSketchError as e:
        _fail(str(e))

    save_config_as_yaml(recipe, output, header=_INIT_HEADER.format(filename=output.name))
    typer.echo(f"Recipe created: {output}")
    typer.echo(f"Run it with:   netsketch generate {output}")


@app.command()
def validate(
    recipe: Annotated[
        Path,
        typer.Argument(help="Path to YAML recipe file."),
    ],
    set_: Annotated[
        list[str] | None,
        typer.Option("--set", help="Override recipe value (repeatable): key.path=value"),
    ] = None,
) -> None:
    """Check the recipe's layer sequence against the placement rules."""
    from netsketch.core import log_validation_failure
    from netsketch.validation import validate_layers

    cfg = _load_recipe(recipe, _parse_overrides(set_ or []))
    result = validate_layers(cfg.network.layers, cfg.network.kind)
    if not result.success:
        log_validation_failure(result.message)
        _fail(result.message)

    typer.echo(f"Valid {cfg.network.kind} network ({len(cfg.network.layers)} layers)")


@app.command()
def shapes(
    recipe: Annotated[
        Path,
        typer.Argument(help="Path to YAML recipe file."),
    ],
) -> None:
    """Log the output shape (CNN) or width (FCN) after every layer."""
    from netsketch.core import log_layer_table, log_validation_failure
    from netsketch.shapes import summarize
    from netsketch.validation import validate_layers

    cfg = _load_recipe(recipe, {})
    result = validate_layers(cfg.network.layers, cfg.network.kind)
    if not result.success:
        log_validation_failure(result.message)
        _fail(result.message)

    summaries = summarize(cfg.network.layers)
    title = "LAYER SHAPES" if cfg.network.kind == "CNN" else "LAYER WIDTHS"
    log_layer_table(summaries, title=title)
    for row in summaries:
        typer.echo(f"{row.position}\t{row.type}\t{row.size_text}")


@app.command()
def generate(
    recipe: Annotated[
        Path,
        typer.Argument(help="Path to YAML recipe file."),
    ],
    framework: Annotated[
        str | None,
        typer.Option("--framework", "-F", help="Target framework: PyTorch or Keras."),
    ] = None,
    style: Annotated[
        str | None,
        typer.Option("--style", "-s", help="Model style: Sequential, Functional, Subclassing."),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Directory receiving the generated file."),
    ] = None,
    set_: Annotated[
        list[str] | None,
        typer.Option("--set", help="Override recipe value (repeatable): key.path=value"),
    ] = None,
    stdout: Annotated[
        bool,
        typer.Option("--stdout", help="Print the code instead of writing a file."),
    ] = False,
) -> None:
    """Validate the recipe, generate code and write <kind>_model.py."""
    from netsketch.core import log_generation_summary, log_validation_failure
    from netsketch.exceptions import NetSketchError
    from netsketch.session import DesignSession

    overrides = _parse_overrides(set_ or [])
    if framework is not None:
        overrides["output.framework"] = framework
    if style is not None:
        overrides["network.model_style"] = style
    if output is not None:
        overrides["output.directory"] = str(output)

    cfg = _load_recipe(recipe, overrides, quiet=stdout)

    session = DesignSession.from_config(cfg.network)
    try:
        result = session.generate(cfg.output.framework)
    except NetSketchError as e:
        _fail(str(e))
    if not result.success:
        log_validation_failure(result.message)
        _fail(result.message)

    if stdout:
        typer.echo(session.code, nl=False)
        return

    try:
        written = session.export(cfg.output.directory)
    except OSError as e:
        _fail(str(e))
    log_generation_summary(
        kind=session.kind.value,
        framework=cfg.output.framework.value,
        model_style=session.model_style.value,
        layer_count=len(session.draft),
        output_path=written,
    )
    typer.echo(f"Code written: {written}")


# ── Private helpers ─────────────────────────────────────────────────────────

_INIT_HEADER = """\
# ==============================================================================
# NetSketch Starter Recipe (generated by `netsketch init`)
# ==============================================================================
# Usage:   netsketch generate {filename}
#
# Edit the layer list, then pick output.framework (PyTorch, Keras) and
# network.model_style (Sequential, Functional, Subclassing).
# ==============================================================================

"""


def _fail(message: str) -> NoReturn:
    """Report an error on stderr and exit with status 1."""
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(code=1)


def _load_recipe(path: Path, overrides: dict[str, Any], quiet: bool = False) -> Any:
    """
    Load a recipe and configure logging from its telemetry section.

    Args:
        path: Recipe file.
        overrides: Dotted-key overrides applied before validation.
        quiet: Restrict console logging to warnings (keeps stdout clean for piping).

    Returns:
        The validated Recipe.
    """
    from netsketch.core import Logger, Recipe
    from netsketch.exceptions import NetSketchError

    if not path.exists():
        _fail(f"recipe not found: {path}")

    try:
        cfg = Recipe.from_recipe(path, overrides=overrides or None)
    except NetSketchError as e:
        _fail(str(e))

    Logger.from_telemetry(cfg.telemetry, quiet=quiet)
    return cfg


def _build_init_recipe(kind: str) -> Any:
    """
    Build a recipe around the sample network of ``kind``.

    Returns:
        Recipe with default output and telemetry sections.
    """
    from netsketch.core import Recipe, build_config
    from netsketch.layers import NetworkKind, sample_cnn, sample_fcn

    network_kind = NetworkKind.parse(kind)
    layers = sample_cnn() if network_kind is NetworkKind.CNN else sample_fcn()
    return Recipe(network=build_config(network_kind, layers))


def _auto_cast(value: str) -> Any:
    """
    Cast a CLI string to the appropriate Python scalar type.

    Args:
        value: Raw string from the command line.

    Returns:
        Converted bool, None, int, float, or the original string.
    """
    low = value.lower()
    if low in ("true", "false"):
        return low == "true"
    if low in ("null", "none"):
        return None
    try:
        return int(value)
    except ValueError:
        pass
    try:
        return float(value)
    except ValueError:
        pass
    return value


def _parse_overrides(raw: list[str]) -> dict[str, Any]:
    """
    Parse ``key.path=value`` strings into a flat override dict.

    Args:
        raw: list of "dotted.key=value" strings from ``--set`` flags.

    Returns:
        dict mapping dotted keys to auto-casted values.

    Raises:
        typer.BadParameter: If an item has no ``=`` or an empty key.
    """
    overrides: dict[str, Any] = {}
    for item in raw:
        if "=" not in item:
            raise typer.BadParameter(f"Override must use key=value format, got: '{item}'")
        key, _, val = item.partition("=")
        key = key.strip()
        if not key:
            raise typer.BadParameter(f"Empty key in override: '{item}'")
        overrides[key] = _auto_cast(val.strip())
    return overrides
