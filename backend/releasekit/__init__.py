import os

__version__ = os.environ.get("RELEASEKIT_VERSION", "") or "0.1.0"
