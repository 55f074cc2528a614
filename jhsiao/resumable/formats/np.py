"""Numpy arrays (np.save format).

The first 6 bytes are a magic string: exactly \\x93NUMPY.

The next 1 byte is an unsigned byte: the major version number of the
file format, e.g. \\x01.

The next 1 byte is an unsigned byte: the minor version number of the
file format, e.g. \\x00.

The next 2 bytes form a little-endian unsigned short int: the length of
the header data HEADER_LEN. (version 2.0+ = 4 bytes)

Next HEADER_LEN bytes = a dict followed by newline and space padding
(descr, fortran_order, shape).  Version 3.0 encodes it as utf-8
instead of latin1.

Then the raw array data, or a pickle for object arrays.
"""
__all__ = ['load', 'dumps', 'Reader']
import ast
import io
import pickle
import struct

import numpy as np

from .. import reader

_MAGIC = b'\x93NUMPY'
_MAGIC_END = len(_MAGIC)
_VERSION = struct.Struct('BB')
_VERSION_END = _MAGIC_END + _VERSION.size

_HLEN1 = struct.Struct('<H')
_HLEN2 = struct.Struct('<L')

def _readexact(f, amt, what):
    data = f.read(amt)
    if len(data) < amt:
        raise EOFError(
            'Truncated {}: expected {} bytes, got {}'.format(what, amt, len(data)))
    return data

def load(f, allow_pickle=False):
    """Read one array written by np.save."""
    prefix = f.read(_VERSION_END)
    if not prefix:
        raise EOFError('No more arrays')
    if len(prefix) < _VERSION_END:
        raise EOFError('Truncated array magic')
    if prefix[:_MAGIC_END] != _MAGIC:
        raise ValueError('Bad array magic: {!r}'.format(prefix[:_MAGIC_END]))
    major, minor = _VERSION.unpack_from(prefix, _MAGIC_END)
    if major == 1:
        size = _HLEN1
        encoding = 'latin1'
    elif major in (2, 3):
        size = _HLEN2
        encoding = 'latin1' if major == 2 else 'utf-8'
    else:
        raise ValueError('Unsupported array format version {}.{}'.format(major, minor))
    length = size.unpack(_readexact(f, size.size, 'array header length'))[0]
    header = ast.literal_eval(
        _readexact(f, length, 'array header').decode(encoding))
    dt = np.lib.format.descr_to_dtype(header['descr'])
    order = 'F' if header['fortran_order'] else 'C'
    if dt.hasobject:
        if not allow_pickle:
            raise ValueError('Object arrays require allow_pickle=True')
        return pickle.load(f)
    array = np.empty(header['shape'], dt, order=order)
    rav = memoryview(array.ravel(order='A').view(np.uint8))
    amt = f.readinto(rav)
    if amt < len(rav):
        raise EOFError(
            'Truncated array data: expected {} bytes, got {}'.format(
                len(rav), amt))
    return array

def dumps(array, allow_pickle=False):
    """Serialize array in np.save format."""
    buf = io.BytesIO()
    np.save(buf, array, allow_pickle=allow_pickle)
    return buf.getvalue()

class Reader(reader.Reader):
    """Read consecutive arrays."""
    def __init__(self, *sources, allow_pickle=False, **kwargs):
        def parse(f):
            return load(f, allow_pickle)
        super(Reader, self).__init__(parse, *sources, **kwargs)
