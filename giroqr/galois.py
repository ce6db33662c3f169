#
# GF(256) arithmetic, polynomials over GF(256) and the Reed-Solomon
# encoder used to produce the QR-code error correction codewords.
#

import functools
from .errors import DomainError


class galois_field_256(object):
    """
    There are excellent articles about Galois Fields:
    https://en.wikipedia.org/wiki/Finite_field
    https://zavier-henry.medium.com/an-introductory-walkthrough-for-encoding-qr-codes-5a33e1e882b5
    https://www.thonky.com/qr-code-tutorial/error-correction-coding

    The field uses the reducing polynomial x^8+x^4+x^3+x^2+1 (285) and
    a = 2. Tables are built once and never modified afterwards.
    """
    def __init__(self):
        ex_to_gf = bytearray(256)
        gf_to_ex = bytearray(256)

        for n in range(8):
            ex_to_gf[n] = 1 << n

        # a^8 = a^4 + a^3 + a^2 + 1, hence every later power folds back
        for n in range(8,256):
            ex_to_gf[n] = ex_to_gf[n-4] ^ ex_to_gf[n-5] ^ ex_to_gf[n-6] ^ ex_to_gf[n-8]

        for n in range(255):
            gf_to_ex[ex_to_gf[n]] = n

        self.ex_to_gf = bytes(ex_to_gf)
        self.gf_to_ex = bytes(gf_to_ex)

    #
    def power(self, n : int) -> int:
        """Return 2**n in the field. Any integer is accepted, also negative ones."""
        return self.ex_to_gf[n % 255]

    #
    def log(self, value : int) -> int:
        if (value < 1 or value > 255):
            raise DomainError(f"log({value}) is undefined in GF(256)")

        return self.gf_to_ex[value]

    #
    def mul(self, a : int, b : int) -> int:
        if (a == 0 or b == 0):
            return 0

        return self.power(self.gf_to_ex[a] + self.gf_to_ex[b])

    #
    def div(self, a : int, b : int) -> int:
        if (b == 0):
            raise DomainError("Division by zero in GF(256)")
        if (a == 0):
            return 0

        return self.power(self.gf_to_ex[a] - self.gf_to_ex[b])


# Shared by all encoders, read-only after construction
gf = galois_field_256()


class polynomial(object):
    """
    Polynomial with GF(256) coefficients, highest degree term first.

    Leading zero coefficients are stripped. A non-zero shift appends that
    many zero coefficients i.e. multiplies the polynomial by x**shift.
    Instances are never modified; every operation returns a new one.
    """
    def __init__(self, num, shift : int=0):
        offset = 0

        while (offset < len(num) and num[offset] == 0):
            offset += 1

        self.num = tuple(num[offset:]) + (0,) * shift

    def __len__(self):
        return len(self.num)

    def __getitem__(self, index):
        return self.num[index]

    def __eq__(self, other):
        if (not isinstance(other, polynomial)):
            return NotImplemented

        return self.num == other.num

    def __hash__(self):
        return hash(self.num)

    def __repr__(self):
        return f"polynomial({list(self.num)})"

    #
    def multiply(self, other : "polynomial") -> "polynomial":
        num = [0] * (len(self) + len(other) - 1)

        for i in range(len(self)):
            for j in range(len(other)):
                num[i+j] ^= gf.mul(self.num[i], other.num[j])

        return polynomial(num)

    #
    def mod(self, other : "polynomial") -> "polynomial":
        """Remainder of the long division self / other."""
        if (len(other) == 0):
            raise DomainError("Division by a zero polynomial")

        num = polynomial(self.num).num

        while (len(num) >= len(other)):
            # align the leading terms
            ratio = gf.log(num[0]) - gf.log(other.num[0])
            tmp = list(num)

            for i in range(len(other)):
                if (other.num[i] != 0):
                    tmp[i] ^= gf.power(gf.log(other.num[i]) + ratio)

            num = polynomial(tmp).num

        return polynomial(num)


class generator(object):
    """
    The generator polynomial is created by multiplying
    together a**0x-a**0 through a**0x-a**(n-1), where
    n is the number of error codewords to be generated
    and a = 2

    For more information see:
    https://www.thonky.com/qr-code-tutorial/how-create-generator-polynomial

    """

    @staticmethod
    @functools.lru_cache(maxsize=None)
    def get_by_ecc_codewords(ecw : int) -> polynomial:
        if (ecw < 1 or ecw > 254):
            raise ValueError(f"Unsupported generator size {ecw}")

        poly = polynomial([1])

        for i in range(ecw):
            poly = poly.multiply(polynomial([1, gf.power(i)]))

        return poly


class rs_encoder(object):
    """Reed-Solomon encoder producing the ECC codewords of one block."""

    #
    # data    in an integer coefficient form
    #
    # returns ecc_count ECC codewords in integer coefficient form
    #
    @staticmethod
    def encode(data, ecc_count : int) -> bytearray:
        gen = generator.get_by_ecc_codewords(ecc_count)

        # data * x**ecc_count mod generator
        rem = polynomial(data, ecc_count).mod(gen)

        ecc = bytearray(ecc_count)
        pos = ecc_count - len(rem)

        for n in range(len(rem)):
            ecc[pos+n] = rem[n]

        return ecc
