import string
from typing import Optional

from ..const import RSA_MAX_MODULUS_BITS
from .am_errors import InvalidPublicKey

_HEX_DIGITS = frozenset(string.hexdigits)
_MAX_MODULUS_HEX_LENGTH = RSA_MAX_MODULUS_BITS // 4


def bytes_to_int(data: bytes) -> int:
    """Interpret data as a big-endian unsigned integer; empty data is 0"""
    return int.from_bytes(data, byteorder="big") if data else 0


def hex_to_int(text: str) -> int:
    """Parse a hex string with an optional 0x prefix; empty text is 0"""
    if text.startswith(("0x", "0X")):
        text = text[2:]
    if not text:
        return 0
    # int() would also accept signs, underscores and whitespace
    if not _HEX_DIGITS.issuperset(text):
        raise ValueError(f"invalid hex string: {text!r}")
    return int(text, 16)


def int_to_hex(value: int) -> str:
    """Lower-case hex without leading zeros"""
    return format(value, "x")


def mod_pow(base: int, exponent: int, modulus: int) -> int:
    """Return base^exponent (mod modulus) by square-and-multiply"""
    if modulus == 0:
        raise ZeroDivisionError("mod_pow() modulus is zero")
    if exponent < 0:
        raise ValueError("mod_pow() exponent must be non-negative")
    result = 1 % modulus
    base %= modulus
    while exponent > 0:
        if exponent & 1:
            result = (result * base) % modulus
        exponent >>= 1
        base = (base * base) % modulus
    return result


class RSAKey:
    """RSA public key holding the modulus and exponent parsed from hex"""

    def __init__(self):
        self.n: Optional[int] = None  # modulus
        self.e = 0                    # public exponent
        self.block_size = 0           # k, modulus length in bytes

    def set_public(self, N_hex: str, E_hex: str):
        """Set the public key fields N and e from hex strings"""
        if N_hex and N_hex.startswith(("0x", "0X")):
            N_hex = N_hex[2:]
        if not N_hex or not E_hex:
            raise InvalidPublicKey("Invalid RSA public key")
        if len(N_hex) & 1:
            raise InvalidPublicKey("Invalid RSA public key: odd-length modulus")
        # Bound the work done by do_public before parsing anything
        if len(N_hex) > _MAX_MODULUS_HEX_LENGTH or len(E_hex) > _MAX_MODULUS_HEX_LENGTH + 2:
            raise InvalidPublicKey(
                f"Invalid RSA public key: larger than {RSA_MAX_MODULUS_BITS} bits"
            )
        try:
            n = hex_to_int(N_hex)
            e = hex_to_int(E_hex)
        except ValueError as ex:
            raise InvalidPublicKey("Invalid RSA public key") from ex
        if n == 0 or e == 0:
            raise InvalidPublicKey("Invalid RSA public key: zero modulus or exponent")
        if e.bit_length() > n.bit_length():
            raise InvalidPublicKey("Invalid RSA public key: exponent wider than modulus")
        self.n = n
        self.e = e
        self.block_size = len(N_hex) // 2

    def do_public(self, x: int) -> int:
        """Perform raw public operation on x: return x^e (mod n)"""
        if self.n is None:
            raise InvalidPublicKey("RSA public key is not set")
        return mod_pow(x, self.e, self.n)

    def encrypt(self, block: bytes) -> str:
        """Return the RSA encryption of an encoded block as an even-length hex string"""
        c = self.do_public(bytes_to_int(block))
        h = int_to_hex(c)
        # Make sure it's even length
        if (len(h) & 1) == 0:
            return h
        else:
            return "0" + h
