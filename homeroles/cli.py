"""
homeroles CLI - drive the home controller from the command line.

State is not persisted: every command builds the home from the configured
layout file (or the built-in demo layout), runs, and reports.
"""

import logging
import random
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .config import Config, get_config, set_config
from .controller import HomeController, get_controller
from .layout import DEFAULT_LAYOUT, HomeLayout, build_home, load_layout, save_layout
from .results import HomeError, OperationResult, Outcome
from .roles.base import RoleKind, resolve_role_kind
from .roles.builtin import ROLE_TYPES, VacationModeRole, create_role

console = Console()


def setup_logging(verbose: bool = False, level: str = "WARNING"):
    """Set up logging configuration."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, level.upper(), logging.WARNING),
        format="%(message)s",
        handlers=[logging.StreamHandler()]
    )


def _layout(config: Config) -> HomeLayout:
    if config.layout_path.exists():
        return load_layout(config.layout_path)
    return DEFAULT_LAYOUT


def _home(ctx: click.Context) -> HomeController:
    """Build the configured home into the process-wide controller."""
    config: Config = ctx.obj["config"]
    controller = get_controller()
    if controller.device_count() == 0:
        try:
            build_home(_layout(config), controller)
        except HomeError as e:
            raise click.ClickException(str(e))
    return controller


def _report(result: OperationResult):
    if result.ok:
        console.print(f"[green]✓[/green] {result.message}")
    else:
        console.print(f"[yellow]⚠[/yellow] {result.message} [dim]({result.outcome.value})[/dim]")
    for step in result.details.get("results", []):
        console.print(f"    • {step.message}")


def _device_table(controller: HomeController) -> Table:
    table = Table(title="Registered Devices & Roles")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Kind", style="dim")
    table.add_column("Power")
    table.add_column("Attributes")
    table.add_column("Roles", style="magenta")
    
    for listing in controller.list_devices():
        device = listing.device
        attrs = ", ".join(f"{k}={v}" for k, v in device.attributes().items())
        roles = ", ".join(role.display_name for role in listing.roles) or "[dim]none[/dim]"
        table.add_row(
            device.device_id,
            device.name,
            device.kind.value,
            "[green]ON[/green]" if device.is_on else "[red]OFF[/red]",
            attrs,
            roles,
        )
    return table


@click.group()
@click.option('-v', '--verbose', is_flag=True, help='Enable verbose output')
@click.option('--data-dir', type=click.Path(), help='Data directory')
@click.pass_context
def main(ctx, verbose, data_dir):
    """🏠 homeroles - role-driven smart home control"""
    ctx.ensure_object(dict)
    config = Config.load(Path(data_dir)) if data_dir else get_config()
    set_config(config)
    ctx.obj['verbose'] = verbose
    ctx.obj['config'] = config
    setup_logging(verbose, config.log_level)


@main.command()
@click.option('--force', is_flag=True, help='Overwrite an existing layout')
@click.pass_context
def init(ctx, force: bool):
    """Write a default configuration and demo layout."""
    config: Config = ctx.obj['config']
    config.save()
    
    if config.layout_path.exists() and not force:
        console.print(f"[yellow]⚠️  Layout already exists:[/yellow] {config.layout_path}")
    else:
        save_layout(DEFAULT_LAYOUT, config.layout_path)
        console.print(f"[green]✓[/green] Layout written to {config.layout_path}")
    console.print(f"   Config: {config.config_path}")


@main.command()
@click.option('--json', 'as_json', is_flag=True, help='Output as JSON')
@click.pass_context
def devices(ctx, as_json: bool):
    """List devices and their roles."""
    controller = _home(ctx)
    if as_json:
        console.print_json(data=[listing.to_dict() for listing in controller.list_devices()])
        return
    console.print(_device_table(controller))


@main.command()
def roles():
    """List available roles."""
    table = Table(title="Roles")
    table.add_column("Kind", style="cyan")
    table.add_column("Name")
    table.add_column("Description", style="dim")
    for kind, role_type in ROLE_TYPES.items():
        table.add_row(kind.value, role_type.display_name, role_type.description)
    console.print(table)


@main.command()
@click.argument('name', type=click.Choice([kind.value for kind in RoleKind]))
@click.option('--invoke/--no-invoke', default=True, help='Execute the role after attaching it')
@click.option('--keep', is_flag=True, help='Leave the role attached afterwards')
@click.option('--seed', type=int, help='Seed for presence simulation')
@click.option('--message', '-m', default=None, help='Message for notifications')
@click.pass_context
def scenario(ctx, name: str, invoke: bool, keep: bool, seed: Optional[int], message: Optional[str]):
    """Activate a scenario on every device, run it, and deactivate it."""
    config: Config = ctx.obj['config']
    controller = _home(ctx)
    kind = resolve_role_kind(name)
    
    if kind == RoleKind.VACATION:
        seed = seed if seed is not None else config.vacation_seed
        rng = random.Random(seed)
        factory = lambda: VacationModeRole(rng)
    else:
        factory = ROLE_TYPES[kind]
    
    console.print(Panel(f"[bold]{ROLE_TYPES[kind].display_name}[/bold]", expand=False))
    _report(controller.activate_scenario(factory))
    if invoke:
        kwargs = {"message": message} if message else {}
        _report(controller.invoke_scenario(kind, **kwargs))
    if not keep:
        _report(controller.deactivate_scenario(kind))
    
    console.print(_device_table(controller))


@main.command()
@click.argument('device_name')
@click.argument('role', type=click.Choice([kind.value for kind in RoleKind]))
@click.option('--invoke', is_flag=True, help='Execute the role after assigning it')
@click.pass_context
def assign(ctx, device_name: str, role: str, invoke: bool):
    """Assign a role to a single device by name."""
    controller = _home(ctx)
    result = controller.assign_to(device_name, create_role(role))
    _report(result)
    if result.outcome == Outcome.NOT_FOUND:
        ctx.exit(1)
    if invoke:
        device = controller.find_device(device_name)
        _report(device.get_role(role).execute(device))
    console.print(_device_table(controller))


@main.command()
@click.argument('message')
@click.option('--all', 'all_devices', is_flag=True, help='Give every device the notification role first')
@click.pass_context
def notify(ctx, message: str, all_devices: bool):
    """Send a notification through devices holding the notification role."""
    controller = _home(ctx)
    if all_devices:
        _report(controller.activate_notifications())
    _report(controller.send_notification(message))


if __name__ == "__main__":
    main()
