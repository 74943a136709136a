# -*- coding: utf-8 -*-
#
# kpasslite
# Read-only terminal viewer for KeePass databases
# Contact: kpasslite@users.noreply.github.com
#

__version__ = '1.2'
__logging_format__ = "%(asctime)s %(levelname)s: %(message)s by %(module)s.%(funcName)s:%(lineno)d"
