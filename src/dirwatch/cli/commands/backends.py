"""
Backends command for dirwatch CLI
"""

import sys

import click
from colorama import Fore, Style
from watchdog.observers import Observer

from dirwatch.core.backends import BackendKind, native_supported, resolve_backend_kind


@click.command()
def backends_command():
    """Show which backend 'auto' selects on this platform."""
    resolved = resolve_backend_kind(BackendKind.AUTO)
    
    click.echo(f"{Fore.CYAN}Platform: {sys.platform}{Style.RESET_ALL}")
    click.echo(f"{Fore.CYAN}Native observer: {Observer.__name__}{Style.RESET_ALL}")
    if native_supported():
        click.echo(f"{Fore.GREEN}Native change notifications: available{Style.RESET_ALL}")
    else:
        click.echo(f"{Fore.YELLOW}Native change notifications: unavailable{Style.RESET_ALL}")
    click.echo(f"auto -> {resolved.value}")
