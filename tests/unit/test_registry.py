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

import asyncio
import unittest

from blobpack.core.errors import DereferenceError
from blobpack.core.models import BinaryObject
from blobpack.registry import BlobRegistry, InMemoryBlobRegistry


class TestInMemoryBlobRegistry(unittest.TestCase):
    def test_create_dereference_release(self) -> None:
        registry = InMemoryBlobRegistry()
        obj = BinaryObject(b"payload")
        url = registry.create_url(obj)
        self.assertTrue(url.startswith("blob:"))
        self.assertIn(url, registry)
        self.assertEqual(len(registry), 1)
        self.assertIs(asyncio.run(registry.dereference(url)), obj)

        registry.release(url)
        self.assertNotIn(url, registry)
        with self.assertRaises(DereferenceError) as ctx:
            asyncio.run(registry.dereference(url))
        self.assertEqual(ctx.exception.url, url)

    def test_release_unknown_is_noop(self) -> None:
        registry = InMemoryBlobRegistry()
        registry.release("blob:missing")
        self.assertEqual(len(registry), 0)

    def test_urls_are_unique(self) -> None:
        registry = InMemoryBlobRegistry(scheme="mem://")
        obj = BinaryObject(b"x")
        urls = {registry.create_url(obj) for _ in range(5)}
        self.assertEqual(len(urls), 5)
        self.assertTrue(all(url.startswith("mem://") for url in urls))

    def test_rejects_non_binary_values(self) -> None:
        with self.assertRaises(ValueError):
            InMemoryBlobRegistry().create_url(b"raw")  # type: ignore[arg-type]

    def test_rejects_empty_scheme(self) -> None:
        with self.assertRaises(ValueError):
            InMemoryBlobRegistry(scheme="")

    def test_satisfies_protocol(self) -> None:
        self.assertIsInstance(InMemoryBlobRegistry(), BlobRegistry)


if __name__ == "__main__":
    unittest.main()
