import math

import pytest

from namedbits.collections.bitarray import BitArray


def test_get_set_item():
    length = 101
    bitarray = BitArray(length)

    assert bitarray.length == length
    assert bitarray.byte_length == math.ceil(length / 8)

    for i in range(length):
        assert not bitarray[i]
        bitarray[i] = i % 2
        assert bitarray[i] == bool(i % 2)

    for i in range(length):
        assert bitarray[i] == bool(i % 2)
        bitarray[i] = (i + 1) % 2
        assert bitarray[i] == bool((i + 1) % 2)


def test_negative_index():
    bitarray = BitArray(10)

    bitarray[-1] = 1
    assert bitarray[9]
    assert bitarray.locate(-1) == (1, 1)


def test_out_of_range():
    bitarray = BitArray(10)

    with pytest.raises(IndexError):
        bitarray[10]
    with pytest.raises(IndexError):
        bitarray[-11] = 1

    with pytest.raises(ValueError):
        BitArray(-1)


def test_locate():
    bitarray = BitArray(20)

    assert bitarray.locate(0) == (0, 0)
    assert bitarray.locate(7) == (0, 7)
    assert bitarray.locate(8) == (1, 0)
    assert bitarray.locate(19) == (2, 3)


def test_assign_returns_previous():
    bitarray = BitArray(16)

    assert bitarray.assign(1, 2, True) is False
    assert bitarray.assign(1, 2, True) is True
    assert bitarray.test(1, 2)
    assert bitarray.assign(1, 2, False) is True
    assert not bitarray.test(1, 2)


def test_fill():
    bitarray = BitArray(12)
    assert bitarray.to_int() == 0

    bitarray.fill(1)
    # padding bits of the last byte are filled too
    assert bitarray.to_int() == 0xffff

    bitarray.fill(0)
    assert bitarray.to_int() == 0

    assert BitArray(3, fill=1).to_int() == 0xff


def test_to_int():
    bitarray = BitArray(24)
    assert bitarray.to_int() == 0

    bitarray[0] = 1
    bitarray[9] = 1
    bitarray[23] = 1
    assert bitarray.to_int() == 1 + (1 << 9) + (1 << 23)
