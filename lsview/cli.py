"""
lsview CLI：列出目录条目（名称、创建时间、权限、大小），可保存默认选项到本地。
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Any, Optional

import typer

from lsview.cli_config import clear_config, load_config, parse_config_value, save_config
from lsview.listing import check_root, iter_rows, render_listing
from lsview.models import ListingConfig, parse_unit

app = typer.Typer(
    name="lsview",
    help="List directory entries with icon, creation time, permissions and size.",
)


def _saved_defaults() -> dict[str, Any]:
    """读取并校验本地保存的默认值；非法值直接报错退出。"""
    cfg = load_config() or {}
    try:
        return {k: parse_config_value(k, v) for k, v in cfg.items()}
    except ValueError as e:
        typer.echo(f"error: invalid saved config: {e}", err=True)
        raise typer.Exit(1)


def _build_config(
    directory: Path,
    max_depth: int | None,
    canonicalize: bool | None,
    show_hidden: bool | None,
    table: bool | None,
    unit: str | None,
    reversed_: bool | None,
) -> ListingConfig:
    """命令行选项 > 本地保存的默认值 > 内置默认值（None 表示命令行未指定）。"""
    saved = _saved_defaults()

    def pick(value: Any, key: str, default: Any) -> Any:
        return value if value is not None else saved.get(key, default)

    try:
        resolved_unit = parse_unit(unit) if unit is not None else parse_unit(saved.get("unit", "b"))
    except ValueError as e:
        typer.echo(f"error: {e}", err=True)
        raise typer.Exit(1)
    return ListingConfig(
        root=directory,
        max_depth=pick(max_depth, "max_depth", 1),
        canonicalize=pick(canonicalize, "canonicalize", False),
        show_hidden=pick(show_hidden, "show_hidden", False),
        table=pick(table, "table", False),
        unit=resolved_unit,
        reversed=pick(reversed_, "reversed", False),
    )


# ------------------------- list / ls -------------------------


def _cmd_list_impl(
    directory: Path,
    max_depth: int | None,
    canonicalize: bool | None,
    show_hidden: bool | None,
    table: bool | None,
    unit: str | None,
    reversed_: bool | None,
    no_color: bool,
) -> None:
    config = _build_config(directory, max_depth, canonicalize, show_hidden, table, unit, reversed_)
    color = False if no_color else None
    try:
        check_root(config.root)
    except OSError as e:
        typer.echo(f"error: {e}", err=True)
        raise typer.Exit(1)
    if config.table:
        typer.echo(render_listing(config), nl=False, color=color)
        return
    for row in iter_rows(config):
        typer.echo(row, color=color)


_dir_argument: type = Annotated[Path, typer.Argument(help="Directory to view (default: current directory)")]
_max_depth_option: type = Annotated[
    Optional[int],
    typer.Option("--max-depth", "-d", min=1, help="Maximum depth to traverse (default: 1)"),
]
_canonicalize_option: type = Annotated[
    Optional[bool],
    typer.Option("--canonicalize/--no-canonicalize", "-C", help="Show canonicalized (absolute) paths"),
]
_show_hidden_option: type = Annotated[
    Optional[bool],
    typer.Option(
        "--show-hidden/--no-show-hidden", "-a", help="Show hidden entries (names starting with a dot)"
    ),
]
_table_option: type = Annotated[
    Optional[bool],
    typer.Option("--table/--no-table", "-t", help="Render output as one table block"),
]
_unit_option: type = Annotated[
    Optional[str],
    typer.Option("--unit", "-u", help="Size unit: b, kb, mb, gb, tb (aliases: k, kib, m, mib, ...)"),
]
_reversed_option: type = Annotated[
    Optional[bool],
    typer.Option("--reversed/--no-reversed", "-r", help="Sort by creation time, newest first"),
]
_no_color_option: type = Annotated[bool, typer.Option("--no-color", help="Disable colored output")]


@app.command("list", help="List directory entries sorted by creation time")
def list_cmd(
    directory: _dir_argument = Path("."),
    max_depth: _max_depth_option = None,
    canonicalize: _canonicalize_option = None,
    show_hidden: _show_hidden_option = None,
    table: _table_option = None,
    unit: _unit_option = None,
    reversed_: _reversed_option = None,
    no_color: _no_color_option = False,
) -> None:
    _cmd_list_impl(directory, max_depth, canonicalize, show_hidden, table, unit, reversed_, no_color)


@app.command("ls", help="Alias for list")
def ls_cmd(
    directory: _dir_argument = Path("."),
    max_depth: _max_depth_option = None,
    canonicalize: _canonicalize_option = None,
    show_hidden: _show_hidden_option = None,
    table: _table_option = None,
    unit: _unit_option = None,
    reversed_: _reversed_option = None,
    no_color: _no_color_option = False,
) -> None:
    _cmd_list_impl(directory, max_depth, canonicalize, show_hidden, table, unit, reversed_, no_color)


# ------------------------- config -------------------------


config_app = typer.Typer(help="Saved default options")
app.add_typer(config_app, name="config")


@config_app.command("get", help="Show saved default options (JSON)")
def config_get() -> None:
    typer.echo(json.dumps(load_config() or {}, ensure_ascii=False, indent=2))


@config_app.command("set", help="Save default options")
def config_set(
    key_value: Annotated[list[str], typer.Argument(help="KEY=VALUE pairs, e.g. unit=kb max_depth=2")],
) -> None:
    values = {}
    for pair in key_value:
        if "=" not in pair:
            typer.echo(f"error: expected KEY=VALUE: {pair}", err=True)
            raise typer.Exit(1)
        k, v = pair.split("=", 1)
        values[k.strip()] = v.strip()
    try:
        save_config(values)
    except ValueError as e:
        typer.echo(f"error: {e}", err=True)
        raise typer.Exit(1)
    typer.echo("Saved.")


@config_app.command("clear", help="Clear saved default options")
def config_clear() -> None:
    if clear_config():
        typer.echo("Cleared.")
    else:
        typer.echo("No saved config.")


# ------------------------- main -------------------------


def main() -> None:
    app()


if __name__ == "__main__":
    main()
