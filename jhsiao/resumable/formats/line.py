"""Lines.

A final line without a terminator is returned when the stream ends.
"""
__all__ = ['readline', 'Reader']
import codecs
import functools

from .. import reader

def readline(f, end=b'\n', limit=-1):
    """Read one line including its terminator.

    end: bytes, the line terminator.
    limit: int, maximum line length, <0 for no limit.  A longer line is
        returned in pieces.
    """
    if end == b'\n':
        line = f.readline(limit)
    else:
        line = bytearray()
        while not line.endswith(end) and (limit < 0 or len(line) < limit):
            c = f.read(1)
            if not c:
                break
            line += c
        line = bytes(line)
    if not line:
        raise EOFError('No more lines')
    return line

class Reader(reader.Reader):
    """Read lines.

    mode: 'rb' for bytes, 'r' to decode with encoding.

    Text is decoded incrementally so a piece cut by limit may end in
    the middle of a character; the rest is carried to the next piece.
    """
    def __init__(self, *sources, mode='rb', encoding='utf-8', end=b'\n', limit=-1, **kwargs):
        parse = functools.partial(readline, end=end, limit=limit)
        if 'b' not in mode:
            parse = self._decoder(parse, encoding)
        super(Reader, self).__init__(parse, *sources, **kwargs)

    @staticmethod
    def _decoder(parse, encoding):
        decoder = codecs.getincrementaldecoder(encoding)()
        def decoded(f):
            text = ''
            while not text:
                try:
                    data = parse(f)
                except EOFError:
                    decoder.decode(b'', final=True)
                    raise
                text = decoder.decode(data)
            return text
        return decoded
