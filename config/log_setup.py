"""
Logging setup shared by the Streamlit entry points.
"""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO"):
    """
    Configure root logging once per process.

    Streamlit reruns page scripts on every interaction, so repeated calls
    must not stack handlers.
    """
    root = logging.getLogger()
    if root.handlers:
        root.setLevel(level.upper())
        return
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
