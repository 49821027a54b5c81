"""
- HTTP call with clear fallback
Get the secret from random.org's sequence generator (a remote shuffle). If anything
goes wrong (no internet, timeout, bad response), we fall back to the local secure
generator so the game still works.
"""

import logging
from typing import List, Optional

import requests

from .config import load_settings
from .engine import generate_secret
from .types import Secret

logger = logging.getLogger(__name__)

RANDOM_URL = "https://www.random.org/sequences/"

# keep network quick; if it takes too long, we will just fallback
TIMEOUT_SECONDS = 3.0


def fetch_sequence(low: int, high: int) -> List[int]:
    """Every integer in low..high exactly once, in random order."""
    params = {
        "min": low,
        "max": high,
        "col": 1,           # one number per line
        "format": "plain",  # plain text response
        "rnd": "new",       # always generate new numbers
    }
    response = requests.get(RANDOM_URL, params=params, timeout=TIMEOUT_SECONDS)
    response.raise_for_status()

    # The body looks like:
    #   4\n0\n7\n...
    values = [int(line) for line in response.text.splitlines() if line.strip()]

    if sorted(values) != list(range(low, high + 1)):
        raise ValueError(f"random.org returned a malformed sequence for {low}..{high}.")
    return values


def fetch_secret(source: Optional[str] = None) -> Secret:
    """
    random_org: first digit = head of a shuffled 1..9, the other two = head of a
    shuffled 0..9 with that digit removed. Same distribution as generate_secret().
    local: generate_secret() directly.
    """
    if source is None:
        source = load_settings().random_source

    if source != "random_org":
        return generate_secret()

    try:
        first = fetch_sequence(1, 9)[0]
        rest = [d for d in fetch_sequence(0, 9) if d != first]
        return f"{first}{rest[0]}{rest[1]}"
    except (requests.RequestException, ValueError) as exc:
        logger.warning("random.org unavailable (%s); using local generator", exc)
        return generate_secret()
