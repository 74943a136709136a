#
# kpasslite
# Read-only terminal viewer for KeePass databases
# Contact: kpasslite@users.noreply.github.com
#
import logging
import os

from pykeepass import PyKeePass
from pykeepass.exceptions import CredentialsError, HeaderChecksumError, PayloadChecksumError

from .error import VaultDecodeError, VaultIOError
from .vault import VaultTree


def open_vault(filename, password, keyfile=None):    # type: (str, str, str or None) -> VaultTree
    """Decrypt a KeePass database and build the group tree.

    One attempt only: a wrong password is reported, never retried.
    """
    filename = os.path.expanduser(filename)
    if keyfile:
        keyfile = os.path.expanduser(keyfile)
        if not os.path.isfile(keyfile):
            raise VaultIOError(keyfile, 'Key file not found')
    if not os.path.isfile(filename):
        raise VaultIOError(filename, 'File not found')

    logging.debug('Opening database "%s"', filename)
    try:
        with PyKeePass(filename, password=password, keyfile=keyfile) as kdb:
            root = kdb.root_group
            tree = VaultTree.build([root] if root is not None else [])
    except CredentialsError:
        raise VaultDecodeError(filename, 'Invalid password or key file')
    except (HeaderChecksumError, PayloadChecksumError):
        raise VaultDecodeError(filename, 'Database is corrupted')
    except OSError as e:
        raise VaultIOError(filename, e.strerror or str(e))
    except Exception as e:
        logging.debug('Decode failure', exc_info=True)
        raise VaultDecodeError(filename, f'Unsupported or malformed database: {e}')

    return tree
