import array


class BitArray(object):
    """ Fixed-length bit vector packed into bytes.
        Bit 0 is the least significant bit of byte 0. """

    BITMASK = [0x01, 0x02, 0x04, 0x08, 0x10, 0x20, 0x40, 0x80]

    def __init__(self, length=0, fill=0):
        if length < 0:
            raise ValueError('Negative length: {}'.format(length))

        fill = 0 if not fill else 255

        self._length = length
        self._array = array.array('B', [fill] * ((length + 7) // 8))

    def __getitem__(self, pos):
        """ Retrieves the bit at a specified position """
        return self.test(*self.locate(pos))

    def __setitem__(self, pos, val):
        """ Sets the bit at a specified position """
        self.assign(*self.locate(pos), val)

    def __len__(self):
        return self._length

    @property
    def length(self):
        """ Length property getter """
        return self._length

    @property
    def byte_length(self):
        """ Byte length property getter """
        return len(self._array)

    def locate(self, pos):
        """ Returns the (byte, bit) address of a position.
            Negative positions count from the end. """
        if pos < 0:
            pos += self._length
        if not 0 <= pos < self._length:
            raise IndexError('Index out of range')
        return pos // 8, pos % 8

    def test(self, byte, bit):
        """ Checks whether the bit at a byte / bit address is set """
        return self._array[byte] & self.BITMASK[bit] != 0

    def assign(self, byte, bit, val):
        """ Sets or clears the bit at a byte / bit address.
            Returns the previous value of the bit. """
        previous = self.test(byte, bit)
        if val:
            self._array[byte] |= self.BITMASK[bit]
        else:
            self._array[byte] &= ~self.BITMASK[bit]
        return previous

    def fill(self, val):
        """ Sets every byte to all ones or all zeros,
            including the unused bits of the last byte """
        fill = 0 if not val else 255
        for b in range(self.byte_length):
            self._array[b] = fill

    def to_int(self):
        """ Folds bytes from the most significant one down """
        value = 0
        for byte in reversed(self._array):
            value = value * 256 + byte
        return value
