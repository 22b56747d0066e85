import collections.abc
import dataclasses
import enum
import logging
import sys

from namedbits.collections.bitarray import BitArray


logger = logging.getLogger(__name__)

# Widest bit count a double-precision float holds exactly,
# floor(log2(2**53 - 1)). Larger fields have no exact number form.
MAX_INTEGER_BITS = sys.float_info.mant_dig


class JsonMode(enum.Enum):
    """ Shape of a bit field inside serialized output """

    ARRAY = 'array'
    NUMBER = 'number'
    STRING_LIST = 'string_list'
    STRING_BIGINT = 'string_bigint'


@dataclasses.dataclass(frozen=True)
class NamedBitsOptions(object):
    """ Options of a bit field, merged by NamedBits.set_options """

    json: JsonMode = JsonMode.STRING_BIGINT


class NamedBits(object):
    """
        Bit field with named bits.
        The order of names is the order of bits: the first name is the
        least significant bit of the numeric forms.

        >>> bits = NamedBits(['read', 'write', 'exec'])
        >>> bits.set('read')
        False
        >>> bits.set('exec')
        False
        >>> str(bits), bits.to_number()
        ('read,exec', 5)
    """

    def __init__(self, names=None, options=None, **kwargs):
        """ :param names: ordered sequence of unique bit names
            :param options: mapping of options, see set_options
            :raises TypeError: names is not a sequence of strings
            :raises ValueError: names is empty or has duplicates """

        if not _is_sequence(names):
            raise TypeError('argument names is not a sequence')

        if len(names) == 0:
            raise ValueError('missing bit names')

        for name in names:
            if not isinstance(name, str):
                raise TypeError('bit name {!r} is not a string'.format(name))

        if len(set(names)) != len(names):
            raise ValueError('duplicate bit names')

        self._names = tuple(names)
        self._options = NamedBitsOptions()
        self.set_options(options, **kwargs)

        self._bits = BitArray(len(self._names))
        self._positions = {name: self._bits.locate(idx)
                           for idx, name in enumerate(self._names)}

        logger.debug('Allocated %d named bits in %d bytes',
                     self._bits.length, self._bits.byte_length)

    @property
    def names(self):
        """ Bit names, in bit order """
        return self._names

    @property
    def options(self):
        return self._options

    @property
    def byte_length(self):
        return self._bits.byte_length

    def set_options(self, options=None, **kwargs):
        """ Merges options into the current ones.
            Omitted keys keep their current value.

            :param options: mapping of option names to values,
                or a NamedBitsOptions record
            :raises TypeError: unknown option name
            :raises ValueError: unknown option value """

        if isinstance(options, NamedBitsOptions):
            options = dataclasses.asdict(options)

        changes = dict(options or {}, **kwargs)
        known = {field.name for field in dataclasses.fields(NamedBitsOptions)}

        for key in changes:
            if key not in known:
                raise TypeError('unknown option: {}'.format(key))

        if 'json' in changes:
            changes['json'] = JsonMode(changes['json'])

        self._options = dataclasses.replace(self._options, **changes)
        logger.debug('Options set to %s', self._options)

    def set(self, name, value=True):
        """ Sets a bit, to True by default.
            Returns the previous value of the bit. """
        byte, bit = self._locate(name)
        return self._bits.assign(byte, bit, value)

    def clear(self, name):
        """ Clears a bit. Returns the previous value of the bit. """
        return self.set(name, False)

    def toggle(self, name):
        """ Inverts a bit. Returns the previous value of the bit. """
        return self.set(name, not self.get(name))

    def get(self, name):
        byte, bit = self._locate(name)
        return self._bits.test(byte, bit)

    def set_all(self):
        """ Sets every bit to True.
            Unnamed bits of the last byte are set as well and show
            in the numeric forms. """
        self._bits.fill(1)

    def clear_all(self):
        self._bits.fill(0)

    def to_array(self):
        """ Returns the names of set bits, in bit order """
        return [name for name in self._names if self.get(name)]

    def to_string(self):
        return ','.join(self.to_array())

    def to_number(self):
        """ Returns the value of the bit field as a number,
            or NaN if the field has more bits than a float holds exactly """
        if len(self._names) > MAX_INTEGER_BITS:
            return float('nan')
        return self._bits.to_int()

    def to_bigint(self):
        return self._bits.to_int()

    def to_json(self):
        """ Returns the serializable form selected by the json option """
        mode = self._options.json

        if mode is JsonMode.NUMBER:
            return self.to_number()
        if mode is JsonMode.ARRAY:
            return self.to_array()
        if mode is JsonMode.STRING_LIST:
            return self.to_string()
        return str(self.to_bigint())

    def __getitem__(self, name):
        """ Proxy for get """
        return self.get(name)

    def __setitem__(self, name, value):
        """ Proxy for set """
        self.set(name, value)

    def __contains__(self, name):
        try:
            return name in self._positions
        except TypeError:
            return False

    def __iter__(self):
        """ Iterates over all bit names, set or not, in bit order """
        return iter(self._names)

    def __len__(self):
        return len(self._names)

    def __int__(self):
        return self.to_bigint()

    def __str__(self):
        return self.to_string()

    def __repr__(self):
        return '{}({!r}, json={!r})'.format(
            type(self).__name__, list(self._names), self._options.json.value)

    def _locate(self, name):
        try:
            return self._positions[name]
        except (KeyError, TypeError):
            raise ValueError('unknown bit name: {!r}'.format(name)) from None


def _is_sequence(value):
    return (isinstance(value, collections.abc.Sequence) and
            not isinstance(value, (str, bytes, bytearray)))
