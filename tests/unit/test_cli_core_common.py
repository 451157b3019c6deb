# Copyright (C) 2026 Alex Stoyanov
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License along with this program.
# If not, see <https://www.gnu.org/licenses/>.

import tempfile
import unittest
from pathlib import Path
from unittest import mock

import typer

from blobpack.cli.commands.unpack import write_binary_fields
from blobpack.cli.core import common
from blobpack.config import BlobpackConfig, UiDefaults
from blobpack.formats.multipart import decode_multipart, encode_multipart
from blobpack.tree.storage import safe_filename


class TestCliCoreCommon(unittest.TestCase):
    def test_split_assignment(self) -> None:
        self.assertEqual(common._split_assignment("k=v=w", option="--json"), ("k", "v=w"))
        self.assertEqual(common._split_assignment("k=", option="--json"), ("k", ""))
        for bad in ("novalue", "=v"):
            with self.subTest(value=bad):
                with self.assertRaises(typer.BadParameter):
                    common._split_assignment(bad, option="--json")

    def test_run_cli_maps_errors_to_exit_2(self) -> None:
        def _fail() -> None:
            raise ValueError("boom")

        with mock.patch.object(common, "error") as error:
            with self.assertRaises(typer.Exit) as ctx:
                common._run_cli(_fail, debug=False)
        self.assertEqual(ctx.exception.exit_code, 2)
        error.assert_called_once_with("boom")

    def test_run_cli_debug_reraises(self) -> None:
        def _fail() -> None:
            raise LookupError("missing")

        with mock.patch.object(common, "install_rich_traceback"):
            with self.assertRaises(LookupError):
                common._run_cli(_fail, debug=True)

    def test_run_cli_nonzero_result(self) -> None:
        with self.assertRaises(typer.Exit) as ctx:
            common._run_cli(lambda: 3, debug=False)
        self.assertEqual(ctx.exception.exit_code, 3)
        common._run_cli(lambda: 0, debug=False)

    def test_ctx_helpers(self) -> None:
        config = BlobpackConfig(ui=UiDefaults(quiet=True))
        ctx = mock.Mock(obj={"app_config": config, "quiet": False})
        self.assertIs(common._ctx_config(ctx), config)
        self.assertTrue(common._ctx_quiet(ctx))
        self.assertIsNone(common._ctx_value(mock.Mock(obj=None), "quiet"))

    def test_safe_filename(self) -> None:
        self.assertEqual(safe_filename("data"), "data")
        self.assertEqual(safe_filename("a/b c"), "a_b_c")
        self.assertEqual(safe_filename(".hidden"), "_.hidden")
        self.assertEqual(safe_filename(""), "_")

    def test_write_binary_fields(self) -> None:
        decoded = decode_multipart(encode_multipart({"json": 1, "../x": b"\x00"}))
        with tempfile.TemporaryDirectory() as tmpdir:
            written = write_binary_fields(decoded, Path(tmpdir) / "out")
            self.assertEqual(list(written), ["../x"])
            self.assertEqual(written["../x"].name, "_.._x.bin")
            self.assertEqual(written["../x"].read_bytes(), b"\x00")

    def test_write_binary_fields_keeps_colliding_names_apart(self) -> None:
        fields = {"a/b": b"\x01", "a_b": b"\x02", "A_B": b"\x03"}
        decoded = decode_multipart(encode_multipart(fields))
        with tempfile.TemporaryDirectory() as tmpdir:
            written = write_binary_fields(decoded, Path(tmpdir))
            self.assertEqual(
                {key: path.name for key, path in written.items()},
                {"a/b": "a_b.bin", "a_b": "a_b-1.bin", "A_B": "A_B-2.bin"},
            )
            self.assertEqual(written["a_b"].read_bytes(), b"\x02")
            self.assertEqual(written["A_B"].read_bytes(), b"\x03")


if __name__ == "__main__":
    unittest.main()
