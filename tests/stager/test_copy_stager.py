import unittest
from unittest.mock import MagicMock, patch, call
import os
import stat
import tempfile
import shutil
from pathlib import Path

import yaml

from dylib_relocate.stager.copy_stager import CopyStager, parse_file_mode
from dylib_relocate.models import DependencyEdge, DependencyGraph
from dylib_relocate.exceptions import CopyFailed, IdentityRewriteFailed, InvalidConfiguration
from dylib_relocate.utils.config_loader import load_app_config
from dylib_relocate.toolchain import LibraryCopier, IdentityRewriter


class TestCopyStager(unittest.TestCase):

    def setUp(self):
        self.test_dir = Path(tempfile.mkdtemp(prefix="test_copy_stager_"))
        self.src_dir = self.test_dir / "src"
        self.src_dir.mkdir()
        self.target_dir = str(self.test_dir / "out")

        self.lib_x = self._make_lib("libX.dylib")
        self.lib_y = self._make_lib("libY.dylib")

        self.mock_copier = MagicMock(spec=LibraryCopier)
        self.mock_copier.copy_tree.side_effect = lambda src, dst: shutil.copyfile(src, dst)
        self.mock_identity = MagicMock(spec=IdentityRewriter)
        self.stager = CopyStager(self.mock_copier, self.mock_identity)

        print_patcher = patch("builtins.print")
        self.mock_print = print_patcher.start()
        self.addCleanup(print_patcher.stop)

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def _make_lib(self, name: str) -> str:
        path = self.src_dir / name
        path.write_bytes(b"\xcf\xfa\xed\xfe")
        os.chmod(path, 0o555)
        return str(path)

    def _edge(self, canonical: str) -> DependencyEdge:
        return DependencyEdge.from_canonical(canonical, canonical, self.target_dir, "@rpath/")

    def _graph(self) -> DependencyGraph:
        graph = DependencyGraph(root="/bin/tool")
        graph.record("/bin/tool", [self._edge(self.lib_x), self._edge(self.lib_y)])
        graph.record(self.lib_x, [self._edge(self.lib_y)])
        graph.record(self.lib_y, [])
        return graph

    def test_stages_each_library_once(self):
        count = self.stager.stage(self._graph(), self.target_dir)

        self.assertEqual(count, 2)
        self.assertEqual(
            self.mock_copier.copy_tree.call_args_list,
            [
                call(self.lib_x, os.path.join(self.target_dir, "libX.dylib")),
                call(self.lib_y, os.path.join(self.target_dir, "libY.dylib")),
            ],
        )

    def test_stamps_new_install_name(self):
        self.stager.stage(self._graph(), self.target_dir)
        self.mock_identity.set_identity.assert_has_calls([
            call(os.path.join(self.target_dir, "libX.dylib"), "@rpath/libX.dylib"),
            call(os.path.join(self.target_dir, "libY.dylib"), "@rpath/libY.dylib"),
        ])
        self.assertEqual(self.mock_identity.set_identity.call_count, 2)

    def test_copies_get_fixed_mode(self):
        self.stager.stage(self._graph(), self.target_dir)
        for name in ("libX.dylib", "libY.dylib"):
            mode = stat.S_IMODE(os.stat(os.path.join(self.target_dir, name)).st_mode)
            self.assertEqual(mode, 0o644)

    def test_file_mode_from_config(self):
        stager = CopyStager(self.mock_copier, self.mock_identity, {"staging": {"file_mode": 0o600}})
        stager.stage(self._graph(), self.target_dir)
        mode = stat.S_IMODE(os.stat(os.path.join(self.target_dir, "libX.dylib")).st_mode)
        self.assertEqual(mode, 0o600)

    def test_creates_missing_target_directory(self):
        nested = str(self.test_dir / "bundle" / "Contents" / "Frameworks")
        graph = DependencyGraph(root="/bin/tool")
        graph.record("/bin/tool", [DependencyEdge.from_canonical(self.lib_x, self.lib_x, nested, "@rpath/")])

        self.stager.stage(graph, nested)
        self.assertTrue(os.path.isfile(os.path.join(nested, "libX.dylib")))

    def test_rerun_overwrites_existing_copies(self):
        self.stager.stage(self._graph(), self.target_dir)
        self.mock_copier.copy_tree.reset_mock()

        count = self.stager.stage(self._graph(), self.target_dir)

        self.assertEqual(count, 2)
        self.assertEqual(self.mock_copier.copy_tree.call_count, 2)

    def test_empty_graph_stages_nothing(self):
        graph = DependencyGraph(root="/bin/tool")
        graph.record("/bin/tool", [])
        self.assertEqual(self.stager.stage(graph, self.target_dir), 0)
        self.mock_copier.copy_tree.assert_not_called()

    def test_copy_failure_aborts(self):
        self.mock_copier.copy_tree.side_effect = CopyFailed("cp exited")
        with self.assertRaises(CopyFailed):
            self.stager.stage(self._graph(), self.target_dir)
        self.assertEqual(self.mock_copier.copy_tree.call_count, 1)
        self.mock_identity.set_identity.assert_not_called()

    def test_chmod_failure_raises_copy_failed(self):
        # Copier reports success without producing the file.
        self.mock_copier.copy_tree.side_effect = None
        with self.assertRaises(CopyFailed):
            self.stager.stage(self._graph(), self.target_dir)
        self.mock_identity.set_identity.assert_not_called()

    def test_identity_failure_aborts(self):
        self.mock_identity.set_identity.side_effect = IdentityRewriteFailed("install_name_tool exited")
        with self.assertRaises(IdentityRewriteFailed):
            self.stager.stage(self._graph(), self.target_dir)
        self.assertEqual(self.mock_copier.copy_tree.call_count, 1)

    def test_reports_each_copy(self):
        self.stager.stage(self._graph(), self.target_dir)
        printed = [c.args[0] for c in self.mock_print.call_args_list]
        self.assertIn(f"Stager: {self.lib_x} -> {os.path.join(self.target_dir, 'libX.dylib')}", printed)
        self.assertIn("Stager: Copied 2 dylibs.", printed)

    def test_file_mode_written_as_octal_string_in_yaml(self):
        config_path = self.test_dir / "config.yaml"
        config_path.write_text("staging:\n  file_mode: 0o640\n", encoding="utf-8")
        app_config = load_app_config(config_path)

        stager = CopyStager(self.mock_copier, self.mock_identity, app_config)
        stager.stage(self._graph(), self.target_dir)

        self.assertEqual(stager.file_mode, 0o640)
        mode = stat.S_IMODE(os.stat(os.path.join(self.target_dir, "libX.dylib")).st_mode)
        self.assertEqual(mode, 0o640)

    def test_invalid_file_mode_raises_before_staging(self):
        with self.assertRaises(InvalidConfiguration):
            CopyStager(self.mock_copier, self.mock_identity, {"staging": {"file_mode": "rw-r--r--"}})
        self.mock_copier.copy_tree.assert_not_called()


class TestParseFileMode(unittest.TestCase):

    def test_accepted_spellings(self):
        self.assertEqual(parse_file_mode(0o644), 0o644)
        self.assertEqual(parse_file_mode(420), 0o644)
        self.assertEqual(parse_file_mode("0o644"), 0o644)
        self.assertEqual(parse_file_mode("0O600"), 0o600)
        self.assertEqual(parse_file_mode("644"), 0o644)
        self.assertEqual(parse_file_mode(" 0755 "), 0o755)

    def test_yaml_octal_forms(self):
        # YAML 1.1 reads 0644 as an int and leaves 0o644 as a string.
        self.assertEqual(parse_file_mode(yaml.safe_load("0644")), 0o644)
        self.assertEqual(parse_file_mode(yaml.safe_load("0o644")), 0o644)

    def test_rejected_values(self):
        for value in ("rw-r--r--", "", "0o999", "9", None, True, 1.5, [0o644], -1, 0o10000):
            with self.subTest(value=value):
                with self.assertRaises(InvalidConfiguration):
                    parse_file_mode(value)


if __name__ == '__main__':
    unittest.main()
