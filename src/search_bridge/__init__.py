"""search-bridge - validated query construction and response decoding for third-party search APIs"""

__version__ = "0.1.0"
