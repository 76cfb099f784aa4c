"""
Watch command for dirwatch CLI
"""

import sys
import time
from datetime import datetime
from pathlib import Path
from typing import Optional

import click
from colorama import Fore, Style

from dirwatch.core.listener import DirectoryListener
from dirwatch.core.watcher import DirectoryWatcher
from dirwatch.cli.utils import load_config_with_fallback
from dirwatch.utils.logging_utils import setup_logger


class EchoListener(DirectoryListener):
    """Prints a line for every change notification"""
    
    def __init__(self, verbose: bool = False):
        self.verbose = verbose
        self.count = 0
    
    def on_dir_changed(self, path: str) -> None:
        self.count += 1
        if self.verbose:
            click.echo(f"{Fore.GREEN}[{datetime.now().isoformat()}] CHANGED: {path}{Style.RESET_ALL}")
        else:
            click.echo(f"{Fore.GREEN}CHANGED: {Path(path).name or path}{Style.RESET_ALL}")


@click.command()
@click.argument('path', type=click.Path(), default='.', required=False)
@click.option('--interval', '-n', type=click.FloatRange(min=0.0, min_open=True),
              help='Seconds between checks (default: from config, 2.0)')
@click.option('--backend', '-b', type=click.Choice(['auto', 'native', 'null'], case_sensitive=False),
              help='Backend to use (default: from config, auto)')
@click.option('--config', '-c', type=click.Path(),
              help='Path to configuration file (TOML)')
@click.option('--max-path-length', type=click.IntRange(min=1),
              help='Longest accepted path in bytes (default: platform limit)')
@click.option('--verbose', '-v', is_flag=True,
              help='Enable verbose output')
def watch_command(path: str, interval: Optional[float], backend: Optional[str], config: Optional[str],
                  max_path_length: Optional[int], verbose: bool):
    """Start watching a directory and report when its contents change.
    
    PATH: Directory to watch (defaults to current directory)
    """
    watch_path = Path(path).resolve()
    config_obj = load_config_with_fallback(config, watch_path, verbose)
    
    if backend:
        config_obj.backend = backend.lower()
    if interval:
        config_obj.poll_interval = interval
    if max_path_length:
        config_obj.max_path_length = max_path_length
    
    setup_logger('dirwatch', 'debug' if verbose else config_obj.log_level)
    
    try:
        watcher = DirectoryWatcher.from_config(config_obj)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="'backend'")
    
    # Held here for the whole loop, the watcher only keeps a weak reference
    listener = EchoListener(verbose=verbose)
    watcher.set_callback(listener)
    
    click.echo(f"{Fore.GREEN}Starting dirwatch...{Style.RESET_ALL}")
    click.echo(f"{Fore.CYAN}Watching: {watch_path}{Style.RESET_ALL}")
    click.echo(f"{Fore.CYAN}Backend: {watcher.backend_kind.value}{Style.RESET_ALL}")
    click.echo(f"{Fore.CYAN}Interval: {config_obj.poll_interval}s{Style.RESET_ALL}")
    
    with watcher:
        if not watcher.watch(str(watch_path)):
            click.echo(f"{Fore.RED}Error: {watcher.last_error}{Style.RESET_ALL}")
            sys.exit(1)
        
        click.echo(f"{Fore.YELLOW}Press Ctrl+C to stop watching...{Style.RESET_ALL}")
        try:
            while True:
                watcher.process()
                time.sleep(config_obj.poll_interval)
        except KeyboardInterrupt:
            click.echo(f"\n{Fore.YELLOW}Stopping dirwatch...{Style.RESET_ALL}")
    
    click.echo(f"{Fore.GREEN}dirwatch stopped after {listener.count} notification(s).{Style.RESET_ALL}")
