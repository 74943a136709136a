#
# kpasslite
# Read-only terminal viewer for KeePass databases
# Contact: kpasslite@users.noreply.github.com
#


class ViewerParams:
    """ Settings of a viewer session """
    def __init__(self, config_filename='', config=None):
        self.config_filename = config_filename
        self.config = config or {}
        self.database = ''
        self.keyfile = None
        self.password = ''
        self.debug = False
        self.unmask_all = False
        self.expand_all = False
        self.log_file = None

    def load_config_properties(self):
        config = self.config
        if config.get('keyfile'):
            self.keyfile = config['keyfile']
        if config.get('log_file'):
            self.log_file = config['log_file']
        if config.get('debug') is True:
            self.debug = True
        if config.get('unmask_all') is True:
            self.unmask_all = True
        if config.get('expand_all') is True:
            self.expand_all = True

    def clear_session(self):
        self.password = ''

    def __repr__(self):
        return 'ViewerParams(database={!r}, keyfile={!r}, debug={}, unmask_all={}, expand_all={})'.format(
            self.database, self.keyfile, self.debug, self.unmask_all, self.expand_all)
