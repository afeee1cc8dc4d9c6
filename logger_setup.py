# logger_setup.py

import logging
import os

LOGGER_NAME = "heart_tree"


def setup_logging(config: dict) -> logging.Logger:
    """
    Configures the "heart_tree" logger from an already-loaded run config.

    The logger writes to runs/<run_id>/animation.log and, unless the 'logging'
    section sets "console": false, to stderr. It does not propagate, so
    pygame's and numba's own chatter stays out of the run log. Calling it again
    replaces the previous handlers.

    Data Contract:
    - Inputs: config (dict) - Needs 'run_id' and a 'logging' section with
      'level' and 'format'; 'directory' and 'console' are optional.
    - Outputs: The configured logger.
    - Side Effects: Creates the run directory.
    """
    run_id = config['run_id']
    log_config = config['logging']

    log_dir = os.path.join(log_config.get('directory', 'runs'), run_id)
    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.join(log_dir, 'animation.log')

    handlers = [logging.FileHandler(log_file)]
    if log_config.get('console', True):
        handlers.append(logging.StreamHandler())

    formatter = logging.Formatter(log_config['format'])
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(log_config['level'])
    logger.propagate = False
    for old in list(logger.handlers):
        old.close()
        logger.removeHandler(old)
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.info(f"Logging initialized. Run ID: {run_id}. Log file: {log_file}")
    return logger
