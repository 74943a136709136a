#
# kpasslite
# Read-only terminal viewer for KeePass databases
# Contact: kpasslite@users.noreply.github.com
#

class Error(Exception):
    """Base class for exceptions in this module."""
    def __init__(self, message):
        self.message = message

    def __str__(self):
        return self.message


class UsageError(Error):
    pass


class VaultIOError(Error):
    """Database file is missing or cannot be read
    """

    def __init__(self, filename, message):
        super().__init__(message)
        self.filename = filename

    def __str__(self):
        return f'{self.filename or ""}: {self.message or ""}'


class VaultDecodeError(Error):
    """Wrong credentials, corrupted or unsupported database
    """

    def __init__(self, filename, message):
        super().__init__(message)
        self.filename = filename

    def __str__(self):
        if self.filename:
            return f'{self.filename}: {self.message}'
        else:
            return super().__str__()


class TerminalError(Error):
    pass
