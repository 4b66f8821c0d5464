"""
Runtime support for the mirror node client: errors and URL resolution.
"""

from .errors import *
from .url import EndpointResolver, API_KEY_PLACEHOLDER, range_filter, to_evm_address
