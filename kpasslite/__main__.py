# -*- coding: utf-8 -*-
#
# kpasslite
# Read-only terminal viewer for KeePass databases
# Contact: kpasslite@users.noreply.github.com
#

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from . import __version__
from . import cli
from .display import bcolors
from .error import Error, UsageError
from .params import ViewerParams


def get_params_from_config(config_filename=None):    # type: (Optional[str]) -> ViewerParams
    if os.getenv('KPASSLITE_DEBUG'):
        logging.getLogger().setLevel(logging.DEBUG)
        logging.info('Debug ON')

    def get_env_config():
        path = os.getenv('KPASSLITE_CONFIG_FILE')
        if path:
            logging.debug(f'Setting config file from KPASSLITE_CONFIG_FILE env variable {path}')
        return path

    config_filename = config_filename or get_env_config()
    if config_filename:
        config_filename = os.path.expanduser(config_filename)
    else:
        config_filename = str(Path.home().joinpath('.kpasslite', 'config.json'))

    params = ViewerParams(config_filename=config_filename)
    if os.getenv('KPASSLITE_DEBUG'):
        params.debug = True
    if os.path.isfile(config_filename):
        try:
            with open(config_filename) as config_file:
                config = json.load(config_file)
            if isinstance(config, dict):
                params.config = config
                params.load_config_properties()
            else:
                logging.warning('Configuration file "%s" is not a JSON object', os.path.abspath(config_filename))
        except (IOError, ValueError) as e:
            logging.warning('Unable to load configuration file "%s": %s', os.path.abspath(config_filename), e)

    return params


def usage(m):
    print(m, file=sys.stderr)
    parser.print_usage(sys.stderr)
    sys.exit(1)


parser = argparse.ArgumentParser(prog='kpasslite', allow_abbrev=False,
                                 description='Read-only terminal viewer for KeePass databases')
parser.add_argument('--keyfile', '-k', dest='keyfile', action='store', help='Key file of the database.')
parser.add_argument('--config', dest='config', action='store', help='Config file to use')
parser.add_argument('--debug', dest='debug', action='store_true', help='Turn on debug mode')
parser.add_argument('--log-file', dest='log_file', action='store', help='Write log records to file while viewing')
unmask_help = 'Show passwords when the viewer starts'
parser.add_argument('--unmask-all', dest='unmask_all', action='store_true', help=unmask_help)
parser.add_argument('--expand-all', dest='expand_all', action='store_true', help='Start with all groups expanded')
parser.add_argument('--version', action='version', version=f'kpasslite, version {__version__}')
parser.add_argument('database', type=str, action='store', help='KeePass database (.kdbx)')
parser.error = usage


def parse_params(argv=None):    # type: (Optional[list]) -> ViewerParams
    opts = parser.parse_args(argv)

    params = get_params_from_config(opts.config)
    params.database = opts.database
    if opts.keyfile:
        params.keyfile = opts.keyfile
    if opts.debug:
        params.debug = True
    if opts.log_file:
        params.log_file = opts.log_file
    if opts.unmask_all:
        params.unmask_all = True
    if opts.expand_all:
        params.expand_all = True
    if not params.database:
        raise UsageError('Database file name is required')
    return params


def main(argv=None):
    logging.basicConfig(format='%(message)s')
    logging.getLogger().setLevel(logging.INFO)

    errno = 0
    try:
        params = parse_params(argv)
        logging.getLogger().setLevel(logging.DEBUG if params.debug else logging.INFO)
        errno = cli.loop(params)
    except UsageError as e:
        usage(str(e))
    except Error as e:
        logging.error(f'{bcolors.FAIL}{e}{bcolors.ENDC}')
        errno = 1
    except (KeyboardInterrupt, EOFError):
        print('', file=sys.stderr)
        errno = 1

    sys.exit(errno)


if __name__ == '__main__':
    main()
