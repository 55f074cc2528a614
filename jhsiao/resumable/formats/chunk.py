"""Length-prefixed chunks.

Every chunk is an 8-byte little-endian unsigned size followed by that
many bytes of data.
"""
__all__ = ['read_chunk', 'load_pickle', 'dumps', 'Reader', 'PickleReader']
import pickle
import struct

from .. import reader

_SIZE = struct.Struct('<Q')

def dumps(data):
    """Frame data as a chunk."""
    return _SIZE.pack(len(data)) + bytes(data)

def read_chunk(f, maxsize=0):
    """Read one chunk.

    maxsize: int, reject chunks bigger than this, 0 = no limit.
    """
    header = f.read(_SIZE.size)
    if not header:
        raise EOFError('No more chunks')
    if len(header) < _SIZE.size:
        raise EOFError('Truncated chunk header')
    size = _SIZE.unpack(header)[0]
    if maxsize and size > maxsize:
        raise ValueError('Chunk size {} > {}'.format(size, maxsize))
    data = f.read(size)
    if len(data) < size:
        raise EOFError(
            'Truncated chunk: expected {} bytes, got {}'.format(size, len(data)))
    return data

def load_pickle(f, maxsize=0):
    """Read one chunk and unpickle it."""
    return pickle.loads(read_chunk(f, maxsize))

class Reader(reader.Reader):
    parse_chunk = staticmethod(read_chunk)

    def __init__(self, *sources, maxsize=0, **kwargs):
        parse_chunk = self.parse_chunk
        def parse(f):
            return parse_chunk(f, maxsize)
        super(Reader, self).__init__(parse, *sources, **kwargs)

class PickleReader(Reader):
    parse_chunk = staticmethod(load_pickle)
