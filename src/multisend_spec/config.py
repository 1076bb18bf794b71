"""Multisend spec configuration constants.

Keep this file aligned with the integer width used by the ledger (`i128`
amounts) and the rate bounds accepted in denom definitions.
"""

# Amounts
AMOUNT_BITS = 128
I128_MIN = -(1 << (AMOUNT_BITS - 1))
I128_MAX = (1 << (AMOUNT_BITS - 1)) - 1

# Rates
MIN_RATE = 0
MAX_RATE = 1

# Fixtures
FIXTURE_FORMAT_VERSION = 1
CHANGES_DIGEST_VERSION = 1
