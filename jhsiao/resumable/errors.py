"""Errors raised by the suspend/resume protocol.

Errors from sources or reading algorithms are not wrapped.  They are
re-raised to whoever started or resumed the read.
"""
__all__ = ['ProtocolError']

class ProtocolError(RuntimeError):
    """The single-flight protocol was misused.

    Raised when starting a read while another is active, resuming a
    stale Suspended, or blocking on the stream outside the worker.
    The handle and any live read are left untouched.
    """
