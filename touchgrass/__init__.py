"""
touchgrass - a terminal bible reader built around a drill-down command palette
"""

import hashlib
import logging
import time
from pathlib import Path

__version__ = "2.2.2"


def _generate_build_id():
    """Generate a unique build identifier for version tracking."""
    try:
        mtime = Path(__file__).stat().st_mtime
        build_data = f"{__version__}-{mtime}"
        build_hash = hashlib.md5(build_data.encode()).hexdigest()[:8]
        return f"{__version__}-{build_hash}"
    except OSError as e:
        logging.getLogger(__name__).debug(f"Build ID generation fell back to timestamp: {e}")
        return f"{__version__}-{int(time.time())}"


__build_id__ = _generate_build_id()
