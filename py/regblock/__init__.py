from __future__ import annotations

import logging

from .enums import *
from .model import *
from .validate import *
from .plan import *
from .address import *
from .target import *
from .mmaptarget import *
from .mapped import *
from .diagnostics import *
from .emit import *
from .compiler import *
from .declare import *


def _init_logger() -> logging.Logger:
    formatter = logging.Formatter('{message}', style='{')
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    logger = logging.getLogger('regblock')
    logger.setLevel(logging.ERROR)
    logger.addHandler(handler)

    return logger


# logging.Logger instance used for log output from regblock
log = _init_logger()
