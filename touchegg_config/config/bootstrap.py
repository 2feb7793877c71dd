"""
First-run bootstrap of the user configuration file.

If ~/.config/touchegg/touchegg.conf does not exist it is copied from the
system-wide default installed in /usr/share/touchegg.
"""

import logging
import shutil
from pathlib import Path
from typing import Optional

from ..errors import BootstrapError, MissingDefaultConfigError
from ..models import LoaderSettings
from .paths import get_home_path

logger = logging.getLogger(__name__)


def copy_config_if_not_present(settings: LoaderSettings, home: Optional[Path] = None) -> bool:
    """
    Make sure the user configuration file exists.

    Args:
        settings: Loader settings with the user and system paths
        home: Home directory (resolved with get_home_path() if None)

    Returns:
        True if the default configuration was copied, False if the user
        configuration already existed

    Raises:
        HomeResolutionError: If the home directory cannot be resolved
        MissingDefaultConfigError: If the system-wide default is not installed
        BootstrapError: If the directory or the copy cannot be created
    """
    if home is None:
        home = get_home_path()

    home_config_dir = settings.user_config_dir(home)
    home_config_file = settings.user_config_path(home)

    if home_config_file.exists():
        return False

    usr_config_file = settings.system_config_path()
    if not usr_config_file.exists():
        raise MissingDefaultConfigError(usr_config_file)

    try:
        home_config_dir.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(usr_config_file, home_config_file)
    except OSError as e:
        raise BootstrapError(home_config_file, str(e)) from e

    logger.info(f"Copied default configuration {usr_config_file} to {home_config_file}")
    return True
