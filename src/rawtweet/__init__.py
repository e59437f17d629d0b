"""rawtweet.

Send a raw, OAuth 1.0a signed request to the Twitter REST API from a
declarative template file and print the response body.

Public API for scripting the same pipeline the CLI runs.
"""

from rawtweet.cli import main
from rawtweet.runner import run_request

__version__ = "0.1.0"

__all__ = [
    "main",
    "run_request",
]
