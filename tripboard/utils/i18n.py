import gettext
import logging
from gettext import gettext as _
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)

DOMAIN = "tripboard"
LOCALE_DIR = Path(__file__).parent.parent / "i18n"


def bind(localedir: Optional[Union[str, Path]] = None) -> str:
    """Point the tripboard text domain at a catalog folder and make it current."""
    folder = str(localedir or LOCALE_DIR)
    gettext.bindtextdomain(DOMAIN, localedir=folder)
    gettext.textdomain(DOMAIN)
    logger.debug(
        _('Loading locale data from "{locale_folder}"').format(locale_folder=folder)
    )
    return folder


bind()
