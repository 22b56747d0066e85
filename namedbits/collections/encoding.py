import json

from namedbits.collections.namedbits import NamedBits


class NamedBitsEncoder(json.JSONEncoder):
    """ JSON encoder that writes bit fields in their configured json mode """

    def default(self, o):
        if isinstance(o, NamedBits):
            return o.to_json()
        return super().default(o)


def dumps(obj, **kwargs):
    """ json.dumps with bit field support """
    kwargs.setdefault('cls', NamedBitsEncoder)
    return json.dumps(obj, **kwargs)
