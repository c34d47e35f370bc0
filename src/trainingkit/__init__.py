"""
trainingkit
~~~~~~~~~~~

Working-day calendar and phase scheduling for training batches.

Sub-packages
------------
calendar   Working-day classification and date arithmetic.
schedule   Chaining training phases into a dated schedule.

Diagnostics are emitted through loguru and are disabled by default, as for
any library.  Turn them on with::

    from loguru import logger
    logger.enable("trainingkit")
"""

from loguru import logger

logger.disable("trainingkit")

__version__ = "0.1.0"
