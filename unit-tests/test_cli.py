import curses
import json
import logging
import os
import tempfile
from unittest import TestCase, mock

from data_vault import FakeScreen, get_nested_tree, get_sample_tree
from kpasslite import cli
from kpasslite.__main__ import get_params_from_config, main, parse_params
from kpasslite.error import VaultDecodeError
from kpasslite.navigator import Navigator
from kpasslite.params import ViewerParams
from kpasslite.search import SearchStatus


class TestCommandLine(TestCase):
    def test_missing_database_argument(self):
        with mock.patch('kpasslite.cli.loop') as mock_loop, mock.patch('sys.stderr'):
            with self.assertRaises(SystemExit) as ctx:
                main([])
            mock_loop.assert_not_called()
        self.assertEqual(ctx.exception.code, 1)

    def test_extra_arguments(self):
        with mock.patch('kpasslite.cli.loop') as mock_loop, mock.patch('sys.stderr'):
            with self.assertRaises(SystemExit) as ctx:
                main(['one.kdbx', 'two.kdbx'])
            mock_loop.assert_not_called()
        self.assertEqual(ctx.exception.code, 1)

    def test_decode_error_exit_code(self):
        with mock.patch('kpasslite.cli.loop', side_effect=VaultDecodeError('db.kdbx', 'Invalid password or key file')), \
                mock.patch('kpasslite.__main__.logging.error') as mock_error:
            with self.assertRaises(SystemExit) as ctx:
                main(['db.kdbx'])
            mock_error.assert_called_once()
        self.assertEqual(ctx.exception.code, 1)

    def test_success_exit_code(self):
        with mock.patch('kpasslite.cli.loop', return_value=0) as mock_loop:
            with self.assertRaises(SystemExit) as ctx:
                main(['db.kdbx', '--keyfile', 'db.key', '--unmask-all'])
            params = mock_loop.call_args[0][0]
        self.assertEqual(ctx.exception.code, 0)
        self.assertEqual(params.database, 'db.kdbx')
        self.assertEqual(params.keyfile, 'db.key')
        self.assertTrue(params.unmask_all)

    def test_interrupted_prompt(self):
        with mock.patch('kpasslite.cli.get_password', side_effect=KeyboardInterrupt()), \
                mock.patch('kpasslite.cli.open_vault') as mock_open, mock.patch('sys.stderr'):
            with self.assertRaises(SystemExit) as ctx:
                main(['db.kdbx'])
            mock_open.assert_not_called()
        self.assertEqual(ctx.exception.code, 1)


class TestConfig(TestCase):
    def setUp(self):
        fd, self.config_filename = tempfile.mkstemp(suffix='.json')
        os.close(fd)

    def tearDown(self):
        os.remove(self.config_filename)

    def test_load_config(self):
        with open(self.config_filename, 'w') as f:
            json.dump({'keyfile': '~/db.key', 'unmask_all': True, 'expand_all': True}, f)
        params = get_params_from_config(self.config_filename)
        self.assertEqual(params.keyfile, '~/db.key')
        self.assertTrue(params.unmask_all)
        self.assertTrue(params.expand_all)
        self.assertFalse(params.debug)

    def test_invalid_config_is_ignored(self):
        with open(self.config_filename, 'w') as f:
            f.write('{not json')
        with mock.patch('kpasslite.__main__.logging.warning') as mock_warning:
            params = get_params_from_config(self.config_filename)
            mock_warning.assert_called_once()
        self.assertEqual(params.config, {})
        self.assertIsNone(params.keyfile)

    def test_command_line_overrides_config(self):
        with open(self.config_filename, 'w') as f:
            json.dump({'keyfile': 'config.key'}, f)
        params = parse_params(['--config', self.config_filename, '--keyfile', 'cli.key', 'db.kdbx'])
        self.assertEqual(params.keyfile, 'cli.key')
        self.assertEqual(params.database, 'db.kdbx')

    def test_config_from_environment(self):
        with open(self.config_filename, 'w') as f:
            json.dump({'debug': True}, f)
        with mock.patch.dict(os.environ, {'KPASSLITE_CONFIG_FILE': self.config_filename}):
            params = parse_params(['db.kdbx'])
        self.assertEqual(params.config_filename, self.config_filename)
        self.assertTrue(params.debug)


class TestViewerLoop(TestCase):
    def test_browse_and_quit(self):
        screen = FakeScreen(keys=[curses.KEY_DOWN, ' ', 'q'])
        nav = Navigator(get_sample_tree())
        cli.run_viewer(screen, nav)
        self.assertFalse(nav.state.running)
        self.assertTrue(nav.state.show_passwords)
        self.assertEqual(nav.selected_group().name, 'Banking')
        self.assertIn('Password: p1', screen.text())

    def test_search_from_keyboard(self):
        screen = FakeScreen(keys=['/'] + list('linux') + ['\n', 'q'])
        nav = Navigator(get_nested_tree())
        cli.run_viewer(screen, nav)
        self.assertEqual(nav.selected_group().name, 'Linux')
        self.assertEqual(nav.state.search_status, SearchStatus.FOUND)
        self.assertFalse(nav.state.in_search_mode)

    def test_search_not_found_from_keyboard(self):
        screen = FakeScreen(keys=['/', 'z', 'z', 'z', '\n', 'q'])
        nav = Navigator(get_sample_tree())
        cli.run_viewer(screen, nav)
        self.assertEqual(nav.state.search_status, SearchStatus.NOT_FOUND)
        self.assertEqual([x[4] for x in screen.boxes][-1], ' Search: NOT FOUND')

    def test_search_cancelled(self):
        screen = FakeScreen(keys=['/', 'b', '\x1b', 'q'])
        nav = Navigator(get_sample_tree())
        cli.run_viewer(screen, nav)
        self.assertEqual(nav.state.search_status, SearchStatus.NONE)
        self.assertEqual(nav.state.selected_index, 0)


class TestLoop(TestCase):
    def test_loop_opens_vault_and_runs_viewer(self):
        params = ViewerParams()
        params.database = 'db.kdbx'
        tree = get_sample_tree()
        with mock.patch('kpasslite.cli.get_password', return_value='secret') as mock_prompt, \
                mock.patch('kpasslite.cli.open_vault', return_value=tree) as mock_open, \
                mock.patch('kpasslite.cli.locale.setlocale'), \
                mock.patch('kpasslite.cli.curses.wrapper') as mock_wrapper:
            self.assertEqual(cli.loop(params), 0)
            mock_prompt.assert_called_once()
            mock_open.assert_called_once_with('db.kdbx', 'secret', keyfile=None)
            mock_wrapper.assert_called_once_with(cli._session, tree, params)
        self.assertEqual(params.password, '')

    def test_loop_does_not_start_terminal_on_decode_error(self):
        params = ViewerParams()
        params.database = 'db.kdbx'
        with mock.patch('kpasslite.cli.get_password', return_value='wrong'), \
                mock.patch('kpasslite.cli.open_vault', side_effect=VaultDecodeError('db.kdbx', 'Invalid password')), \
                mock.patch('kpasslite.cli.curses.wrapper') as mock_wrapper:
            with self.assertRaises(VaultDecodeError):
                cli.loop(params)
            mock_wrapper.assert_not_called()
        self.assertEqual(params.password, '')

    def test_console_logging_suspended(self):
        root = logging.getLogger()
        handler = logging.StreamHandler()
        root.addHandler(handler)
        try:
            with cli.console_logging_suspended():
                self.assertNotIn(handler, root.handlers)
            self.assertIn(handler, root.handlers)
        finally:
            root.removeHandler(handler)
