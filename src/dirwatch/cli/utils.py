"""
Utility functions for CLI commands
"""

import sys
from pathlib import Path
from typing import Optional

import click
from colorama import Fore, Style

from dirwatch.core.config import DEFAULT_CONFIG_NAME, Config, load_config, load_default_config


def load_config_with_fallback(config_file: Optional[str], search_dir: Path, verbose: bool = False) -> Config:
    """Load configuration with automatic fallback to default config file and default config."""
    if not config_file:
        # Look for default config file in search directory
        default_config = search_dir / DEFAULT_CONFIG_NAME
        if default_config.exists():
            config_file = str(default_config)
            if verbose:
                click.echo(f"{Fore.CYAN}Using default config: {config_file}{Style.RESET_ALL}")
    
    if config_file:
        config_obj = load_config(config_file)
        if not config_obj:
            click.echo(f"{Fore.RED}Error: Could not load config file: {config_file}{Style.RESET_ALL}")
            sys.exit(1)
        return config_obj
    
    return load_default_config()
