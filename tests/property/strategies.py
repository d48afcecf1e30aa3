"""
Hypothesis Strategies for Property-Based Testing

Custom strategies for generating identifiers, tokens and timestamps.
"""

import string
from datetime import datetime, timedelta, timezone

from hypothesis import strategies as st

from private_resources.domain.access.guards import EXPIRATION_FORMAT


# =============================================================================
# Identifier Strategies
# =============================================================================

@st.composite
def resource_identifiers(draw) -> str:
    """Generate valid resource identifiers (40 lowercase hex characters)."""
    return draw(st.text(alphabet="0123456789abcdef", min_size=40, max_size=40))


@st.composite
def traversal_identifiers(draw) -> str:
    """Generate identifier-like strings that contain a path component."""
    prefix = draw(st.text(alphabet="0123456789abcdef", max_size=20))
    marker = draw(st.sampled_from(["/", "\\", "\x00", ":", "../", "..\\"]))
    suffix = draw(st.text(alphabet="0123456789abcdef", max_size=20))
    return prefix + marker + suffix


# =============================================================================
# Token Strategies
# =============================================================================

hmac_secrets = st.text(alphabet=string.ascii_letters + string.digits, min_size=1, max_size=64)

context_hashes = st.one_of(st.none(), st.text(alphabet=string.hexdigits, min_size=1, max_size=64))


@st.composite
def expiration_instants(draw) -> datetime:
    """Generate whole-second UTC instants between 2000 and 2200."""
    seconds = draw(st.integers(min_value=0, max_value=200 * 365 * 24 * 3600))
    return datetime(2000, 1, 1, tzinfo=timezone.utc) + timedelta(seconds=seconds)


def format_expiration(instant: datetime) -> str:
    return instant.strftime(EXPIRATION_FORMAT)
