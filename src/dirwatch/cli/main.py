#!/usr/bin/env python3
"""
dirwatch CLI - Main entry point
"""

import click
from colorama import init

from dirwatch.cli.commands.watch import watch_command
from dirwatch.cli.commands.init_config import init_config_command
from dirwatch.cli.commands.backends import backends_command

# Initialize colorama for cross-platform colored output
init()


@click.group()
@click.version_option(package_name='dirwatch')
def main():
    """dirwatch - Get notified when the contents of a directory change.
    
    Common workflows:
    
      # Watch the current directory, polling every 2 seconds
      dirwatch watch
      
      # Poll faster and force the native backend
      dirwatch watch assets --interval 0.5 --backend native
      
      # See which backend this platform gets
      dirwatch backends
    
    Use 'dirwatch COMMAND --help' for detailed help on any command.
    """
    pass


main.add_command(watch_command, name='watch')
main.add_command(init_config_command, name='init-config')
main.add_command(backends_command, name='backends')


if __name__ == '__main__':
    main()
