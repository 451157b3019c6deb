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

"""Config loaders and installers."""

from .installer import (
    CONFIG_PATH_ENV,
    DEFAULT_CONFIG_PATH,
    init_user_config,
    resolve_config_path,
    user_config_path,
)
from .loader import (
    ID_STRATEGIES,
    BlobpackConfig,
    TreeDefaults,
    UiDefaults,
    load_config,
)

__all__ = [
    "BlobpackConfig",
    "CONFIG_PATH_ENV",
    "DEFAULT_CONFIG_PATH",
    "ID_STRATEGIES",
    "TreeDefaults",
    "UiDefaults",
    "init_user_config",
    "load_config",
    "resolve_config_path",
    "user_config_path",
]
