#
# Handle encoding of phrases into the QR-code data codewords.
#

import logging
from .bitbuffer import bit_buffer
from .errors import CapacityError

log = logging.getLogger(__name__)


class encode(object):
    """
    This class implements encoding of arbitrary phrases in the byte mode.
    Each phrase becomes one segment: mode indicator, character count and
    one octet per character.
    """

    # Modes..
    QR_MODE_BYTE = 0b0100

    # Character count field size of the byte mode for versions 1 to 9
    QR_BYTE_COUNT_BITS = 8
    QR_MAX_PHRASE_LEN = (1 << QR_BYTE_COUNT_BITS) - 1

    QR_TERMINATOR_BITS = 4
    QR_PAD_FIRST = 0b11101100
    QR_PAD_TOGGLE = 0b11111101

    #
    def __init__(self,**kwargs):
        """
        **kwargs:
        ---------
        version : int
            QR-code version between 1 and 9. Larger versions use a wider
            character count field which is not supported.
        """
        self.mode = encode.QR_MODE_BYTE
        self.version = kwargs.get("version", 1)
        self.phrases = []

        if (self.version < 1 or self.version > 9):
            raise ValueError(f"Invalid QR-code version {self.version} for byte mode")

    #
    def add_phrase(self, phrase : str):
        """Queue a phrase as a new byte mode segment.

            Parameters:
            -----------
            phrase : str
                Input phrase. Every character must fit into one octet.

            Raises:
            -------
            TypeError
                If the phrase is not a string.
            ValueError
                If the phrase contains characters outside Latin-1.
            CapacityError
                If the phrase is longer than the character count field allows.
        """
        if (type(phrase) is not str):
            raise TypeError(f"Input phrase must be string got '{type(phrase)}'")

        if (len(phrase) > encode.QR_MAX_PHRASE_LEN):
            raise CapacityError(f"Phrase of {len(phrase)} characters exceeds "
                                f"the byte mode limit of {encode.QR_MAX_PHRASE_LEN}")

        try:
            data = phrase.encode("latin-1")
        except UnicodeEncodeError as e:
            raise ValueError("Illegal characters in the input phrase") from e

        self.phrases.append(data)

    #
    def get_phrases(self) -> list:
        return list(self.phrases)

    #
    def encode_preamble_(self, buf : bit_buffer, length : int):
        buf.put(self.mode, 4)
        buf.put(length, encode.QR_BYTE_COUNT_BITS)

    #
    def encode_with_trailer_(self, buf : bit_buffer, max_len : int) -> bytes:
        """Internal method for adding trailing zeros and padding.

            Parameters:
            -----------
            buf : bit_buffer
                The encoded segments.
            max_len : int
                Maximum length of the encoded phrase (in octets).

            Raises:
            -------
            CapacityError
                If the encoded phrase is longer than maximum codewords allowed by QR-code.

            Return:
            -------
                bytes containing the encoded phrase.
        """
        if (len(buf) > max_len*8):
            raise CapacityError(f"Encoded data of {len(buf)} bits exceeds "
                                f"the capacity of {max_len*8} bits")

        # terminating zeroes, shortened if there is no room for all four
        buf.put(0, min(encode.QR_TERMINATOR_BITS, max_len*8 - len(buf)))

        # align to 8 bits
        while (len(buf) % 8 != 0):
            buf.put_bit(False)

        pad = encode.QR_PAD_FIRST

        while (len(buf) < max_len*8):
            buf.put(pad, 8)
            pad = pad ^ encode.QR_PAD_TOGGLE

        return buf.get_bytes()

    #
    def encode_phrases(self, max_len : int) -> bytes:
        """Serialize all queued phrases into exactly max_len data codewords."""
        buf = bit_buffer()

        for data in self.phrases:
            self.encode_preamble_(buf, len(data))

            for octet in data:
                buf.put(octet, 8)

        log.debug("%d segment(s), %d bits before padding", len(self.phrases), len(buf))

        return self.encode_with_trailer_(buf, max_len)
