# --- CONSTANTS ---

# Fixed-point scale used when encoding token amounts (ERC-20 default)
TOKEN_DECIMALS = 18

# Role-management template choices
ACTION_GRANT_ROLE = "Grant Role"
ACTION_REVOKE_ROLE = "Revoke Role"
ROLE_MANAGEMENT_ACTIONS = (ACTION_GRANT_ROLE, ACTION_REVOKE_ROLE)
ROLE_NAMES = ("ADMIN", "MINTER", "PAUSER", "UPGRADER")

# Address pattern accepted from user input (checksum not enforced)
ADDRESS_PATTERN = r"^0x[0-9a-fA-F]{40}$"
# Unsigned decimal integer, used by parameter-change values
UINT_PATTERN = r"^[0-9]+$"
# Optional hex blob, used by contract-upgrade init data
HEX_DATA_PATTERN = r"^0x([0-9a-fA-F]{2})*$"

# Values accepted for boolean fields
BOOLEAN_TRUE_VALUES = ("true", "1", "yes", "on")
BOOLEAN_FALSE_VALUES = ("false", "0", "no", "off")

# Largest value an ABI uint256 word can hold, and its length in decimal digits
UINT256_MAX = 2**256 - 1
UINT256_MAX_DIGITS = 78
