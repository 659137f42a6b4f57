"""
A gathering of utility functions shared by the converter entry points
"""

# Import packages
from logging import getLogger
from pathlib import Path
import logging

# Establish logger
logger = getLogger(__name__)


# Logger Setup
def setup_logger(settings):
    """initiates logging, sets up logger in the output directory specified

    Parameters
    ----------
    settings : Config_settings
        run settings; ``OUTPUT_ROOT`` receives ``run.log`` and ``args.debug``
        selects the logging level
    """
    # set up root logger
    output_dir = settings.OUTPUT_ROOT
    log_path = Path(output_dir)
    if not Path.is_dir(log_path):
        Path.mkdir(log_path, parents=True)

    # logger level
    if settings.args.debug:
        loglevel = logging.DEBUG
    else:
        loglevel = logging.INFO

    # logger configs
    logging.basicConfig(
        filename=f'{output_dir}/run.log',
        encoding='utf-8',
        filemode='w',
        format='%(asctime)s | %(name)s | %(levelname)s :: %(message)s',
        datefmt='%d-%b-%y %H:%M:%S',
        level=loglevel,
        force=True,
    )
    logging.getLogger('pandas').setLevel(logging.WARNING)
