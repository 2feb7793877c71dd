"""Home directory resolution."""

import logging
import os
import pwd
from pathlib import Path

from ..errors import HomeResolutionError

logger = logging.getLogger(__name__)


def get_home_path() -> Path:
    """
    Return the home directory of the user running the process.

    $HOME is checked first. It can be unset in service contexts, in which case
    the account database entry of the effective user is used instead.

    Raises:
        HomeResolutionError: If neither source yields a home directory
    """
    home = os.environ.get("HOME")
    if home:
        return Path(home)

    logger.debug("$HOME is not set, falling back to the user account database")
    try:
        user_info = pwd.getpwuid(os.geteuid())
    except KeyError:
        raise HomeResolutionError("getpwuid") from None

    if not user_info.pw_dir:
        raise HomeResolutionError("pw_dir")

    return Path(user_info.pw_dir)
