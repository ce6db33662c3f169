#
# Append-only bit sequence used to serialize the encoded phrase.
#

class bit_buffer(object):
    """
    Bits are stored MSB first into a bytearray that grows on demand.
    """
    def __init__(self):
        self.buffer = bytearray()
        self.length = 0

    def __len__(self):
        return self.length

    #
    def get(self, index : int) -> bool:
        if (index < 0 or index >= self.length):
            raise IndexError(f"Bit index {index} out of range")

        return (self.buffer[index // 8] >> (7 - index % 8)) & 1 == 1

    #
    def put(self, value : int, length : int):
        # low length bits of value, most significant first
        for n in range(length):
            self.put_bit((value >> (length - n - 1)) & 1 == 1)

    #
    def put_bit(self, bit : bool):
        if (self.length // 8 == len(self.buffer)):
            self.buffer.append(0)

        if (bit):
            self.buffer[self.length // 8] |= 0x80 >> (self.length % 8)

        self.length += 1

    #
    def get_bytes(self) -> bytes:
        return bytes(self.buffer)
