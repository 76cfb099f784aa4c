"""
Init-config command for dirwatch CLI
"""

import sys
from pathlib import Path

import click
from colorama import Fore, Style

from dirwatch.core.config import DEFAULT_CONFIG_NAME


@click.command()
@click.argument('config_path', type=click.Path(), default=DEFAULT_CONFIG_NAME)
def init_config_command(config_path: str):
    """Create a TOML configuration file. Defaults to 'dirwatch.config.toml' if no path specified."""
    
    if not config_path.endswith('.toml'):
        click.echo(f"{Fore.YELLOW}Warning: Config file should have .toml extension. Adding .toml{Style.RESET_ALL}")
        config_path = config_path + '.toml'
    
    default_config_path = Path(__file__).parent.parent.parent / 'default.config.toml'
    
    try:
        toml_content = default_config_path.read_text(encoding='utf-8')
        Path(config_path).write_text(toml_content, encoding='utf-8')
    except OSError as e:
        click.echo(f"{Fore.RED}Error creating config file: {e}{Style.RESET_ALL}")
        sys.exit(1)
    
    click.echo(f"{Fore.GREEN}Configuration file created: {config_path}{Style.RESET_ALL}")
    click.echo(f"{Fore.CYAN}Edit this file to customize the backend and poll interval.{Style.RESET_ALL}")
